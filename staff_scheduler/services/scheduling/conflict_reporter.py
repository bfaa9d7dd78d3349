"""
Conflict reporter: persists assembly conflicts for human review.
Records are never deleted; acknowledging only marks them reviewed.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from staff_scheduler.db.models.schedule_conflicts import ScheduleConflicts

from .assembler import sort_conflicts
from .errors import NotFoundError
from .types import ConflictRecord


logger = logging.getLogger(__name__)


def to_conflict(row: ScheduleConflicts) -> ConflictRecord:
    return ConflictRecord(
        schedule_id=row.schedule_id,
        day_of_week=row.day_of_week,
        kind=row.kind,
        detail=row.detail,
        category=row.category,
        staff_id=row.staff_id,
        conflict_id=row.id,
        acknowledged=row.acknowledged,
        acknowledged_at=row.acknowledged_at,
        created_at=row.created_at,
    )


class ConflictReporter:
    def __init__(self, db: Session):
        self.db = db

    def save_conflicts(self, schedule_id: str, conflicts: list[ConflictRecord]) -> list[ConflictRecord]:
        """Append conflicts for a schedule, in day-then-kind order."""
        if not conflicts:
            return []

        next_sequence = self.db.execute(
            select(func.coalesce(func.max(ScheduleConflicts.sequence), -1))
            .where(ScheduleConflicts.schedule_id == schedule_id)
        ).scalar_one() + 1

        rows = [
            ScheduleConflicts(
                schedule_id=schedule_id,
                sequence=next_sequence + offset,
                day_of_week=c.day_of_week,
                kind=c.kind,
                category=c.category,
                staff_id=c.staff_id,
                detail=c.detail,
                severity=c.severity,
                acknowledged=False,
            )
            for offset, c in enumerate(sort_conflicts(conflicts))
        ]
        self.db.add_all(rows)
        self.db.commit()
        logger.info("Conflict report for %s: %d conflicts logged", schedule_id, len(rows))
        return [to_conflict(r) for r in rows]

    def list_conflicts(self, schedule_id: str, include_acknowledged: bool = True) -> list[ConflictRecord]:
        stmt = select(ScheduleConflicts).where(ScheduleConflicts.schedule_id == schedule_id)
        if not include_acknowledged:
            stmt = stmt.where(ScheduleConflicts.acknowledged.is_(False))
        rows = self.db.execute(stmt).scalars().all()
        conflicts = [to_conflict(r) for r in sorted(rows, key=lambda r: r.sequence)]
        # later appends (manual edits) can land on an earlier day
        return sort_conflicts(conflicts)

    def acknowledge(self, conflict_id: int) -> ConflictRecord:
        row = self.db.get(ScheduleConflicts, conflict_id)
        if row is None:
            raise NotFoundError(f"Conflict {conflict_id} not found")
        if not row.acknowledged:
            row.acknowledged = True
            row.acknowledged_at = datetime.now(timezone.utc)
            self.db.commit()
            logger.info("Conflict %s acknowledged", conflict_id)
        return to_conflict(row)
