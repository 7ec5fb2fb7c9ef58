"""Approval slip generation for activities that reached final approval."""
import io
import logging
from datetime import date
from typing import Any, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus.doctemplate import LayoutError
from sqlalchemy.orm import Session

from sro_portal.forms.constants import NOT_APPLICABLE
from sro_portal.forms.validators import campus_today
from sro_portal.models.activity import Activity, ActivityStatus
from sro_portal.services.storage import FileStore
from sro_portal.services.summary_service import academic_year_of, semester_of

logger = logging.getLogger(__name__)

SLIP_TITLE = "OSA-SRO Form 1B: Student Activity Approval Slip"


def _text(value: Optional[Any], default: str = NOT_APPLICABLE) -> str:
    if value is None or value == "":
        return default
    return str(value)


def _yes_no(value: Optional[bool]) -> str:
    return "Yes" if value else "No"


def slip_rows(activity: Activity) -> list[tuple[str, str]]:
    """Label/value pairs printed in the slip's detail table."""
    organization = activity.organization
    account = activity.account
    schedule = activity.schedule[0] if activity.schedule else None

    if schedule:
        activity_date = schedule.start_date.isoformat()
        activity_time = f"{schedule.start_time:%H:%M} - {schedule.end_time:%H:%M}"
    else:
        activity_date = activity_time = NOT_APPLICABLE

    adviser_name = _text(organization.adviser_name if organization else None)
    adviser_email = _text(organization.adviser_email if organization else None)
    return [
        ("Organization", _text(organization.org_name if organization else None)),
        ("Student", _text(account.account_name if account else None)),
        ("Position", _text(activity.student_position)),
        ("Contact", _text(activity.student_contact)),
        ("Activity", _text(activity.activity_name)),
        ("Description", _text(activity.activity_description)),
        ("Date", activity_date),
        ("Time", activity_time),
        ("Venue", _text(activity.venue)),
        ("Venue Approver", _text(activity.venue_approver)),
        ("Off-campus", _yes_no(activity.is_off_campus)),
        ("Charging Fees", _yes_no(activity.charge_fee)),
        (
            "University Partner",
            f"{_yes_no(activity.university_partner)} ({_text(activity.partner_name)})",
        ),
        ("Partner Role", _text(activity.partner_role)),
        (
            "Green Campus Monitor",
            f"{_text(activity.green_monitor_name)} ({_text(activity.green_monitor_contact)})",
        ),
        ("Adviser", f"{adviser_name} ({adviser_email})"),
        ("SRO Remarks", _text(activity.sro_remarks, "None.")),
    ]


def render_slip(activity: Activity, approved_on: date) -> bytes:
    """Build the slip as PDF bytes."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=50,
        leftMargin=50,
        topMargin=50,
        bottomMargin=50,
        title=f"Student Activity Approval Slip {activity.activity_id}",
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        "SlipTitle",
        parent=styles["Heading2"],
        alignment=1,
        spaceAfter=12,
    )
    cell_style = ParagraphStyle("SlipCell", parent=styles["Normal"], fontSize=9, leading=11)
    label_style = ParagraphStyle("SlipLabel", parent=cell_style, fontName="Helvetica-Bold")

    elements = [
        Paragraph(SLIP_TITLE, title_style),
        Paragraph(f"<b>Form Code:</b> {escape(_text(activity.activity_id))}", styles["Normal"]),
        Spacer(1, 10),
    ]

    rows = [
        [Paragraph(escape(label), label_style), Paragraph(escape(value), cell_style)]
        for label, value in slip_rows(activity)
    ]
    table = Table(rows, colWidths=[1.8 * inch, 4.6 * inch])
    table.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("BACKGROUND", (0, 0), (0, -1), colors.HexColor("#f1f5f9")),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#94a3b8")),
                ("TOPPADDING", (0, 0), (-1, -1), 4),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
            ]
        )
    )
    elements.append(table)
    elements.append(Spacer(1, 12))
    elements.append(Paragraph(f"<b>Date Approved:</b> {approved_on.isoformat()}", styles["Normal"]))

    doc.build(elements)
    return buffer.getvalue()


def slip_filename(activity: Activity) -> str:
    org_name = activity.organization.org_name if activity.organization else "Unknown"
    return f"approval_slip_{org_name}_{activity.activity_name}_{activity.activity_id}.pdf"


def generate_approval_slips(db: Session, store: FileStore, today: Optional[date] = None) -> dict[str, Any]:
    """Render and store a slip for every Approved activity that lacks one.

    Slips are filed under ``approval_slips/<academic year>/<semester> Semester``.
    A failure on one activity is reported and does not stop the rest.
    """
    today = today or campus_today()
    pending = (
        db.query(Activity)
        .filter(Activity.final_status == ActivityStatus.approved, Activity.approval_slip_link.is_(None))
        .order_by(Activity.activity_id)
        .all()
    )
    if not pending:
        return {"message": "No approved activities found that need approval slips", "slip_count": 0}

    folder = f"approval_slips/{academic_year_of(today)}/{semester_of(today)} Semester"
    generated = 0
    errors = []
    for activity in pending:
        try:
            content = render_slip(activity, today)
            activity.approval_slip_link = store.save(folder, slip_filename(activity), content)
            generated += 1
        except (OSError, LayoutError) as exc:
            logger.exception("Could not store approval slip for %s", activity.activity_id)
            errors.append({"activity_id": activity.activity_id, "error": str(exc)})
    db.commit()

    logger.info("Generated %d of %d approval slips", generated, len(pending))
    result = {
        "message": f"Successfully generated {generated} approval slips",
        "slip_count": generated,
        "total_activities": len(pending),
    }
    if errors:
        result["errors"] = errors
    return result
