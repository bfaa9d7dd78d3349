"""
Data loader for scheduling service.
Fetches all relevant data from the database and converts to internal types.
"""

from datetime import date, timedelta
from sqlalchemy import select, and_
from sqlalchemy.orm import Session

from staff_scheduler.core.enums import TimeOffStatus
from staff_scheduler.db.models.time_off_requests import TimeOffRequests

from .availability_matrix import AvailabilityMatrix
from .errors import InputError, NotFoundError
from .staff_directory import StaffDirectory
from .template_store import TemplateStore
from .types import (
    AssemblyContext,
    StaffMember,
    TimeOffRequest,
)


def load_staff(db: Session) -> list[StaffMember]:
    """Active staff only; inactive staff never receive new assignments."""
    return [s for s in StaffDirectory(db).list_staff() if s.is_active]


def load_time_off_requests(
    db: Session,
    staff_ids: list[str],
    week_start: date,
) -> list[TimeOffRequest]:
    """Load approved time off requests that overlap with the schedule week."""

    if not staff_ids:
        return []

    week_end = week_start + timedelta(days=6)

    stmt = select(TimeOffRequests).where(
        and_(
            TimeOffRequests.staff_id.in_(staff_ids),
            TimeOffRequests.status == TimeOffStatus.APPROVED,
            TimeOffRequests.start_date <= week_end,
            TimeOffRequests.end_date >= week_start,
        )
    )
    rows = db.execute(stmt).scalars().all()

    return [
        TimeOffRequest(
            staff_id=r.staff_id,
            start_date=r.start_date,
            end_date=r.end_date,
        )
        for r in rows
    ]


def load_assembly_context(db: Session, template_id: str, week_start: date) -> AssemblyContext:
    """
    Load all data needed to assemble a schedule for a template/week.

    Raises:
        InputError: unknown template or week_start not a Monday
    """
    if week_start.weekday() != 0:
        raise InputError(f"week_starting must be a Monday, got {week_start} ({week_start.strftime('%A')})")

    try:
        template = TemplateStore(db).get_template(template_id)
    except NotFoundError as exc:
        raise InputError(f"Unknown template {template_id}") from exc

    staff = load_staff(db)
    staff_ids = [s.id for s in staff]

    return AssemblyContext(
        template=template,
        week_start=week_start,
        staff=staff,
        availability=AvailabilityMatrix(db).list_entries(),
        time_off=load_time_off_requests(db, staff_ids, week_start),
    )
