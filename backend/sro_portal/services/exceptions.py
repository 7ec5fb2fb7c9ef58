"""Domain exceptions that routers translate into HTTP responses."""
from typing import Optional


class FormValidationError(Exception):
    """A submitted activity form failed a section rule.

    Rendered as ``400 {"error": message, "field": field}`` so clients can
    point at the offending input.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field
