"""
Schedule generator - main orchestration layer.

This module provides the high-level API for generating schedules,
combining data loading, assembly and persistence into a single flow.
"""

import logging
from datetime import date, datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from .assembler import ScheduleAssembler
from .business_hours import BusinessHours
from .conflict_reporter import ConflictReporter
from .data_loader import load_assembly_context
from .errors import InputError, NotFoundError
from .schedule_store import ScheduleStore
from .template_store import TemplateStore
from .types import AssemblyContext, AssemblyResult, GenerationOutcome


logger = logging.getLogger(__name__)


def parse_week_starting(value: str) -> date:
    """ISO date string aligned to a Monday -> date."""
    try:
        week_start = date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise InputError(f"week_starting must be an ISO date (YYYY-MM-DD), got {value!r}") from exc
    if week_start.weekday() != 0:
        raise InputError(f"week_starting must be a Monday, got {week_start} ({week_start.strftime('%A')})")
    return week_start


def generate_schedule(
    db: Session,
    template_id: str,
    week_starting: str,
    business_hours: BusinessHours,
    clock: Callable[[], datetime] = datetime.now,
) -> GenerationOutcome:
    """
    Generate and persist a Draft schedule for a template and week.

    main entry point for schedule generation. This function:
    1. Loads template, roster, availability and time off
    2. Runs the assembler
    3. Saves the schedule, then its conflicts

    The two writes are committed separately. Callers must not run two
    generations for the same week at once.

    Args:
        db: Database session
        template_id: Template to build from
        week_starting: ISO date of the Monday of the target week
        business_hours: Source of shift start/end times

    Returns:
        GenerationOutcome(schedule_id, conflict_count)

    Raises:
        InputError: unknown template, misaligned week, empty template
    """
    week_start = parse_week_starting(week_starting)
    context = load_assembly_context(db, template_id, week_start)
    result = generate_schedule_from_context(context, business_hours, clock=clock)

    saved = ScheduleStore(db).save_schedule(result.schedule)
    ConflictReporter(db).save_conflicts(saved.schedule_id, result.conflicts)

    logger.info(
        "Schedule %s created from template %s for week %s with %d conflicts",
        saved.schedule_id, template_id, week_start, result.conflict_count,
    )
    return GenerationOutcome(schedule_id=saved.schedule_id, conflict_count=result.conflict_count)


def generate_from_base(
    db: Session,
    week_starting: str,
    business_hours: BusinessHours,
    clock: Callable[[], datetime] = datetime.now,
) -> GenerationOutcome:
    """Generate from whichever template is marked default (create-from-base)."""
    try:
        template = TemplateStore(db).get_default_template()
    except NotFoundError as exc:
        raise InputError("No default template configured; import a base schedule first") from exc
    return generate_schedule(db, template.template_id, week_starting, business_hours, clock=clock)


def generate_schedule_from_context(
    context: AssemblyContext,
    business_hours: BusinessHours,
    schedule_id: Optional[str] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> AssemblyResult:
    """
    Assemble from a pre-loaded context without touching the database.

    Useful for testing or when you want to manipulate the context
    before assembling.
    """
    return ScheduleAssembler(context, business_hours, schedule_id=schedule_id, clock=clock).assemble()
