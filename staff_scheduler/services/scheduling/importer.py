"""
Base schedule import: bootstrap a template and the availability matrix from
a human-filled weekly schedule.

The input is the tabular layout of the base schedule input sheet: a
"<DAY> SCHEDULE" header row opens each day's block, followed by rows of
[position, staff name, shift type, start, end, role, notes] until a row
whose first cell is empty. Parsing is best-effort; anything that cannot be
used is returned in `skipped` instead of raising.
"""

import logging
import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from staff_scheduler.core.enums import (
    DAY_NAMES,
    MANAGER_ROLE,
    AvailabilityFlag,
    ShiftWindow,
)

from .availability_matrix import AvailabilityMatrix
from .template_store import TemplateStore, validate_template
from .types import AvailabilityEntry, Requirement, StaffMember, Template


logger = logging.getLogger(__name__)

DAY_HEADER = re.compile(r"\b(" + "|".join(DAY_NAMES) + r")\s+SCHEDULE\b", re.IGNORECASE)
PLACEHOLDER = re.compile(r"^\[.*\]$")
PARTIAL_SHIFT_TYPES = {"partial", "part", "part-time", "part time", "pt"}

BASE_TEMPLATE_NAME = "Your Personal Base Schedule"


@dataclass(frozen=True)
class ImportedRow:
    row_number: int  # 1-based, as shown in a spreadsheet
    day_of_week: int
    position: str
    staff_id: str
    staff_name: str
    shift_type: str
    role: str


@dataclass(frozen=True)
class SkippedEntry:
    row_number: int
    day_of_week: Optional[int]
    value: str
    reason: str


@dataclass
class BaseScheduleImport:
    template: Template
    availability: list[AvailabilityEntry]
    rows: list[ImportedRow] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)

    @property
    def staff_ids(self) -> list[str]:
        return sorted({r.staff_id for r in self.rows})


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _is_column_header(row: Sequence[Any]) -> bool:
    return _cell(row, 0).lower() == "position" and _cell(row, 1).lower() == "staff member"


def _name_index(staff: list[StaffMember]) -> dict[str, list[StaffMember]]:
    index: dict[str, list[StaffMember]] = defaultdict(list)
    for member in staff:
        names = {member.display_name, member.full_name or ""}
        for name in names:
            if name.strip():
                index[name.strip().casefold()].append(member)
    return index


def _is_partial(shift_type: str) -> bool:
    return shift_type.strip().lower() in PARTIAL_SHIFT_TYPES


def parse_base_schedule(
    rows: Sequence[Sequence[Any]],
    staff: list[StaffMember],
    template_id: str,
    template_name: str = BASE_TEMPLATE_NAME,
) -> BaseScheduleImport:
    """
    Parse the input sheet into a template and an availability matrix.

    Counts per day: rows with role Manager fill manager slots, other rows
    with a partial shift type fill partial slots, the rest full slots.
    Availability is optimistic: AVAILABLE on every day a staff member
    appears, CONDITIONAL (never UNAVAILABLE) on the others.
    """
    names = _name_index(staff)
    imported: list[ImportedRow] = []
    skipped: list[SkippedEntry] = []

    current_day: Optional[int] = None
    for number, row in enumerate(rows, start=1):
        first = _cell(row, 0)
        header = DAY_HEADER.search(first)
        if header:
            current_day = DAY_NAMES.index(header.group(1).capitalize())
            continue
        if current_day is None:
            continue
        if not first:
            current_day = None
            continue
        if _is_column_header(row):
            continue

        name = _cell(row, 1)
        if not name or PLACEHOLDER.match(name):
            skipped.append(SkippedEntry(number, current_day, name, "placeholder"))
            continue

        matches = names.get(name.casefold(), [])
        if not matches:
            skipped.append(SkippedEntry(number, current_day, name, "unknown staff name"))
            continue
        if len({m.id for m in matches}) > 1:
            skipped.append(SkippedEntry(number, current_day, name, "ambiguous staff name"))
            continue

        member = matches[0]
        imported.append(ImportedRow(
            row_number=number,
            day_of_week=current_day,
            position=first,
            staff_id=member.id,
            staff_name=name,
            shift_type=_cell(row, 2),
            role=_cell(row, 5) or member.role,
        ))

    for entry in skipped:
        logger.warning(
            "Base schedule row %d (%s): skipped %r, %s",
            entry.row_number,
            DAY_NAMES[entry.day_of_week] if entry.day_of_week is not None else "-",
            entry.value,
            entry.reason,
        )

    return BaseScheduleImport(
        template=_build_template(imported, template_id, template_name),
        availability=_build_availability(imported),
        rows=imported,
        skipped=skipped,
    )


def _build_template(rows: list[ImportedRow], template_id: str, template_name: str) -> Template:
    counts = {day: {"full": 0, "partial": 0, "manager": 0} for day in range(7)}
    for row in rows:
        if row.role == MANAGER_ROLE:
            counts[row.day_of_week]["manager"] += 1
        elif _is_partial(row.shift_type):
            counts[row.day_of_week]["partial"] += 1
        else:
            counts[row.day_of_week]["full"] += 1

    return Template(
        template_id=template_id,
        name=template_name,
        per_day={
            day: Requirement(full_count=c["full"], partial_count=c["partial"], manager_count=c["manager"])
            for day, c in counts.items()
        },
        notes="Imported from your existing base schedule",
    )


def _build_availability(rows: list[ImportedRow]) -> list[AvailabilityEntry]:
    days_worked: dict[str, set[int]] = defaultdict(set)
    for row in rows:
        days_worked[row.staff_id].add(row.day_of_week)

    entries = []
    for staff_id in sorted(days_worked):
        for day in range(7):
            flag = AvailabilityFlag.AVAILABLE if day in days_worked[staff_id] else AvailabilityFlag.CONDITIONAL
            for window in ShiftWindow:
                entries.append(AvailabilityEntry(staff_id, day, window, flag))
    return entries


def apply_base_schedule_import(db: Session, result: BaseScheduleImport, make_default: bool = True) -> None:
    """Replace the availability matrix, then save the template (optionally as default)."""
    template = result.template
    template.is_default = make_default
    # nothing is written when the availability import is rejected
    validate_template(template)
    AvailabilityMatrix(db).bulk_import(result.availability)
    TemplateStore(db).upsert_template(template)
    logger.info(
        "Base schedule imported into %s: %d assignments, %d staff, %d skipped",
        template.template_id, len(result.rows), len(result.staff_ids), len(result.skipped),
    )
