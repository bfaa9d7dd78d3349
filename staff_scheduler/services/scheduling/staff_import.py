"""
Bulk staff import: add a whole roster, with availability, from one table.

Each row is [full name, display name, role, Mon full, Mon partial, Tue full,
..., Sun partial]; anything after the Sunday cells (hours, notes) is
ignored. Display name defaults to the full name, role to "Floor Staff" and
each availability cell to GREEN. Cells take GREEN / YELLOW / RED or the
flag names themselves.

Like the base schedule import, parsing never raises: rows that cannot be
used, and staff already on the roster, come back in `skipped`.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from sqlalchemy.orm import Session

from staff_scheduler.core.enums import DAY_NAMES, AvailabilityFlag, ShiftWindow

from .importer import PLACEHOLDER, SkippedEntry, _cell
from .staff_directory import StaffDirectory
from .types import AvailabilityEntry, StaffMember


logger = logging.getLogger(__name__)

IMPORT_ROLE = "Floor Staff"
FIRST_FLAG_COLUMN = 3
COLOUR_FLAGS = {
    "GREEN": AvailabilityFlag.AVAILABLE,
    "YELLOW": AvailabilityFlag.CONDITIONAL,
    "RED": AvailabilityFlag.UNAVAILABLE,
}
STAFF_ID = re.compile(r"^S(\d+)$")
DUPLICATE = "already on the roster"


@dataclass
class StaffRosterImport:
    staff: list[StaffMember] = field(default_factory=list)
    availability: list[AvailabilityEntry] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)

    @property
    def duplicates(self) -> list[str]:
        return [s.value for s in self.skipped if s.reason == DUPLICATE]


def parse_flag(value: str) -> Optional[AvailabilityFlag]:
    """GREEN/YELLOW/RED or a flag name -> flag; blank means GREEN, junk None."""
    key = value.strip().upper()
    if not key:
        return AvailabilityFlag.AVAILABLE
    if key in COLOUR_FLAGS:
        return COLOUR_FLAGS[key]
    try:
        return AvailabilityFlag(key)
    except ValueError:
        return None


def _is_noise(first: str) -> bool:
    # blank rows, plus header or instruction text
    lowered = first.lower()
    return not first or lowered == "full name" or "instructions" in lowered or lowered == "add your staff below:"


def _id_allocator(staff: list[StaffMember]):
    taken = {m.id for m in staff}
    numbers = [int(m.group(1)) for m in (STAFF_ID.match(s) for s in taken) if m]
    next_number = max(numbers, default=0) + 1

    def allocate() -> str:
        nonlocal next_number
        while f"S{next_number:03d}" in taken:
            next_number += 1
        staff_id = f"S{next_number:03d}"
        taken.add(staff_id)
        return staff_id

    return allocate


def _row_flags(row: Sequence[Any]) -> list[tuple[int, ShiftWindow, str, Optional[AvailabilityFlag]]]:
    cells = []
    column = FIRST_FLAG_COLUMN
    for day in range(7):
        for window in (ShiftWindow.FULL, ShiftWindow.PARTIAL):
            value = _cell(row, column)
            cells.append((day, window, value, parse_flag(value)))
            column += 1
    return cells


def parse_staff_import(rows: Sequence[Sequence[Any]], staff: list[StaffMember]) -> StaffRosterImport:
    """
    Turn roster rows into new staff members and their availability.

    A row whose full name matches someone already on the roster, or an
    earlier row, is skipped as a duplicate. New staff get the next free
    S### id after the highest numbered one in use.
    """
    known = {(m.full_name or m.display_name).strip().casefold() for m in staff}
    allocate = _id_allocator(staff)
    result = StaffRosterImport()

    for number, row in enumerate(rows, start=1):
        full_name = _cell(row, 0)
        if _is_noise(full_name):
            continue
        if PLACEHOLDER.match(full_name):
            result.skipped.append(SkippedEntry(number, None, full_name, "placeholder"))
            continue
        if full_name.casefold() in known:
            result.skipped.append(SkippedEntry(number, None, full_name, DUPLICATE))
            continue

        cells = _row_flags(row)
        bad = next((c for c in cells if c[3] is None), None)
        if bad is not None:
            day, _, value, _ = bad
            result.skipped.append(SkippedEntry(number, day, full_name, f"unknown availability flag {value!r}"))
            continue

        known.add(full_name.casefold())
        member = StaffMember(
            id=allocate(),
            display_name=_cell(row, 1) or full_name,
            role=_cell(row, 2) or IMPORT_ROLE,
            full_name=full_name,
        )
        result.staff.append(member)
        result.availability.extend(
            AvailabilityEntry(member.id, day, window, flag) for day, window, _, flag in cells
        )

    for entry in result.skipped:
        logger.warning(
            "Staff import row %d (%s): skipped %r, %s",
            entry.row_number,
            DAY_NAMES[entry.day_of_week] if entry.day_of_week is not None else "-",
            entry.value,
            entry.reason,
        )
    return result


def apply_staff_import(db: Session, result: StaffRosterImport) -> list[StaffMember]:
    """Write the parsed roster and its availability in one transaction."""
    members = StaffDirectory(db).bulk_import(result.staff, result.availability)
    logger.info(
        "Staff import: %d added, %d duplicates, %d skipped",
        len(members), len(result.duplicates), len(result.skipped),
    )
    return members
