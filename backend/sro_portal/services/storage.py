"""Local-disk file store for uploaded PDFs and generated approval slips."""
import logging
import os
import re
from pathlib import Path

from sro_portal.config import settings

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._ -]+")


def safe_name(name: str) -> str:
    """Strip path separators and odd characters from a user-supplied name."""
    cleaned = _UNSAFE.sub("_", os.path.basename(name)).strip(" .")
    return cleaned or "file"


class FileStore:
    """Writes files under ``root/<folder>/`` and hands back public links."""

    def __init__(self, root: str, base_url: str):
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def folder_link(self, folder: str) -> str:
        return f"{self.base_url}/{'/'.join(safe_name(part) for part in folder.split('/'))}"

    def save(self, folder: str, filename: str, content: bytes) -> str:
        parts = [safe_name(part) for part in folder.split("/") if part]
        directory = self.root.joinpath(*parts)
        directory.mkdir(parents=True, exist_ok=True)
        name = safe_name(filename)
        (directory / name).write_bytes(content)
        logger.info("Stored %s (%d bytes) in %s", name, len(content), directory)
        return f"{self.base_url}/{'/'.join(parts + [name])}"


def get_file_store() -> FileStore:
    return FileStore(settings.UPLOAD_DIR, settings.FILE_BASE_URL)
