"""
Availability matrix: per staff, per day, per shift window, a three-state flag.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from staff_scheduler.core.enums import AvailabilityFlag, ShiftWindow
from staff_scheduler.db.models.availability_entries import AvailabilityEntries
from staff_scheduler.db.models.staff_members import StaffMembers

from .availability import DEFAULT_FLAG
from .errors import ReferentialError, ValidationError
from .staff_directory import StaffDirectory
from .types import AvailabilityEntry


logger = logging.getLogger(__name__)


def to_entry(row: AvailabilityEntries) -> AvailabilityEntry:
    return AvailabilityEntry(
        staff_id=row.staff_id,
        day_of_week=row.day_of_week,
        shift_window=row.shift_window,
        flag=row.flag,
    )


def _check_day(day_of_week: int):
    if not 0 <= day_of_week <= 6:
        raise ValidationError(f"day_of_week must be 0-6, got {day_of_week}")


class AvailabilityMatrix:
    def __init__(self, db: Session):
        self.db = db

    def get_availability(self, staff_id: str, day_of_week: int, shift_window: ShiftWindow) -> AvailabilityFlag:
        """Flag for one cell, CONDITIONAL when no entry exists."""
        _check_day(day_of_week)
        stmt = select(AvailabilityEntries.flag).where(
            AvailabilityEntries.staff_id == staff_id,
            AvailabilityEntries.day_of_week == day_of_week,
            AvailabilityEntries.shift_window == shift_window,
        )
        flag = self.db.execute(stmt).scalar_one_or_none()
        return flag if flag is not None else DEFAULT_FLAG

    def list_entries(self, staff_id: Optional[str] = None) -> list[AvailabilityEntry]:
        stmt = select(AvailabilityEntries).order_by(
            AvailabilityEntries.staff_id,
            AvailabilityEntries.day_of_week,
            AvailabilityEntries.shift_window,
        )
        if staff_id is not None:
            stmt = stmt.where(AvailabilityEntries.staff_id == staff_id)
        return [to_entry(r) for r in self.db.execute(stmt).scalars().all()]

    def set_availability(
        self,
        staff_id: str,
        day_of_week: int,
        shift_window: ShiftWindow,
        flag: AvailabilityFlag,
    ) -> AvailabilityEntry:
        _check_day(day_of_week)
        if self.db.get(StaffMembers, staff_id) is None:
            raise ReferentialError(f"Unknown staff id {staff_id}")

        stmt = select(AvailabilityEntries).where(
            AvailabilityEntries.staff_id == staff_id,
            AvailabilityEntries.day_of_week == day_of_week,
            AvailabilityEntries.shift_window == shift_window,
        )
        row = self.db.execute(stmt).scalar_one_or_none()
        if row is None:
            row = AvailabilityEntries(staff_id=staff_id, day_of_week=day_of_week, shift_window=shift_window)
            self.db.add(row)
        row.flag = flag
        self.db.commit()
        return to_entry(row)

    def bulk_import(self, entries: list[AvailabilityEntry]) -> int:
        """
        Replace the whole table. All-or-nothing: any unknown staff id
        rejects the import before anything is written.
        """
        known = StaffDirectory(self.db).known_ids()
        unknown = sorted({e.staff_id for e in entries} - known)
        if unknown:
            raise ReferentialError(f"Availability references unknown staff ids: {', '.join(unknown)}")
        for entry in entries:
            _check_day(entry.day_of_week)

        # one row per cell, last entry for a cell wins
        cells: dict[tuple[str, int, ShiftWindow], AvailabilityEntry] = {}
        for entry in entries:
            cells[(entry.staff_id, entry.day_of_week, entry.shift_window)] = entry

        try:
            self.db.execute(delete(AvailabilityEntries))
            self.db.add_all([
                AvailabilityEntries(
                    staff_id=e.staff_id,
                    day_of_week=e.day_of_week,
                    shift_window=e.shift_window,
                    flag=e.flag,
                )
                for e in cells.values()
            ])
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info("Availability matrix replaced with %d entries", len(cells))
        return len(cells)
