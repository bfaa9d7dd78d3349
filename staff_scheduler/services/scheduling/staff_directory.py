"""
Staff directory: the roster scheduling draws from.
Staff are never deleted, only marked INACTIVE.
"""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from staff_scheduler.core.enums import StaffStatus
from staff_scheduler.db.models.availability_entries import AvailabilityEntries
from staff_scheduler.db.models.staff_members import StaffMembers

from .errors import NotFoundError, ReferentialError, ValidationError
from .types import AvailabilityEntry, StaffMember


logger = logging.getLogger(__name__)


def to_staff_member(row: StaffMembers) -> StaffMember:
    return StaffMember(
        id=row.id,
        display_name=row.display_name,
        role=row.role,
        status=row.status,
        email=row.email,
        full_name=row.full_name,
    )


class StaffDirectory:
    def __init__(self, db: Session):
        self.db = db

    def list_staff(self, include_inactive: bool = False) -> list[StaffMember]:
        stmt = select(StaffMembers).order_by(StaffMembers.display_name, StaffMembers.id)
        if not include_inactive:
            stmt = stmt.where(StaffMembers.status != StaffStatus.INACTIVE)
        return [to_staff_member(r) for r in self.db.execute(stmt).scalars().all()]

    def get_staff(self, staff_id: str) -> StaffMember:
        row = self.db.get(StaffMembers, staff_id)
        if row is None:
            raise NotFoundError(f"Staff member {staff_id} not found")
        return to_staff_member(row)

    def known_ids(self) -> set[str]:
        return set(self.db.execute(select(StaffMembers.id)).scalars().all())

    def _check_member(self, member: StaffMember):
        if not member.id or not member.id.strip():
            raise ValidationError("Staff id must not be empty")
        if not member.display_name or not member.display_name.strip():
            raise ValidationError("Staff display name must not be empty")

    def _write_member(self, member: StaffMember) -> StaffMembers:
        row: Optional[StaffMembers] = self.db.get(StaffMembers, member.id)
        if row is None:
            row = StaffMembers(id=member.id)
            self.db.add(row)
        row.display_name = member.display_name.strip()
        row.full_name = member.full_name
        row.role = member.role
        row.status = member.status
        row.email = member.email
        return row

    def upsert_staff(self, member: StaffMember) -> StaffMember:
        self._check_member(member)
        row = self._write_member(member)
        self.db.commit()
        return to_staff_member(row)

    def bulk_import(self, members: list[StaffMember], availability: list[AvailabilityEntry]) -> list[StaffMember]:
        """
        Upsert a batch of staff and replace their availability cells.
        All-or-nothing: every member and cell is checked before anything is
        written, and a failed write rolls the whole batch back. Availability
        of staff outside the batch is left alone.
        """
        for member in members:
            self._check_member(member)
        ids = {m.id for m in members}
        if len(ids) != len(members):
            raise ValidationError("Staff import lists the same id more than once")
        outside = sorted({e.staff_id for e in availability} - ids)
        if outside:
            raise ReferentialError(f"Availability references staff outside the import: {', '.join(outside)}")
        for entry in availability:
            if not 0 <= entry.day_of_week <= 6:
                raise ValidationError(f"day_of_week must be 0-6, got {entry.day_of_week}")

        try:
            rows = [self._write_member(m) for m in members]
            self.db.flush()
            self.db.execute(delete(AvailabilityEntries).where(AvailabilityEntries.staff_id.in_(ids)))
            cells = {(e.staff_id, e.day_of_week, e.shift_window): e for e in availability}
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

        logger.info("Imported %d staff with %d availability entries", len(rows), len(cells))
        return [to_staff_member(r) for r in rows]

    def deactivate(self, staff_id: str) -> StaffMember:
        row = self.db.get(StaffMembers, staff_id)
        if row is None:
            raise NotFoundError(f"Staff member {staff_id} not found")
        row.status = StaffStatus.INACTIVE
        self.db.commit()
        logger.info("Staff member %s marked inactive", staff_id)
        return to_staff_member(row)
