"""
Schedule persistence: schedules and their ordered assignment rows.
"""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from staff_scheduler.core.enums import ScheduleStatus
from staff_scheduler.db.models.schedules import ScheduleAssignments, Schedules

from .errors import NotFoundError
from .types import Assignment, Schedule


def to_assignment(row: ScheduleAssignments) -> Assignment:
    return Assignment(
        schedule_id=row.schedule_id,
        day_of_week=row.day_of_week,
        staff_id=row.staff_id,
        role=row.role,
        start_time=row.start_time,
        end_time=row.end_time,
        category=row.category,
        assignment_id=row.id,
    )


def to_schedule(row: Schedules) -> Schedule:
    return Schedule(
        schedule_id=row.id,
        template_id=row.template_id,
        week_starting=row.week_starting,
        status=row.status,
        assignments=[to_assignment(a) for a in row.assignments],
        created_at=row.created_at,
    )


def snapshot_assignments(assignments: list[Assignment]) -> list[dict]:
    """JSON-safe copy of assignments, kept on publish."""
    return [
        {
            "staff_id": a.staff_id,
            "day_of_week": a.day_of_week,
            "role": a.role,
            "category": a.category.value,
            "start_time": a.start_time.strftime("%H:%M"),
            "end_time": a.end_time.strftime("%H:%M"),
        }
        for a in assignments
    ]


class ScheduleStore:
    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, schedule_id: str) -> Schedules:
        row = self.db.get(Schedules, schedule_id)
        if row is None:
            raise NotFoundError(f"Schedule {schedule_id} not found")
        return row

    def _free_id(self, schedule_id: str) -> str:
        candidate, suffix = schedule_id, 1
        while self.db.get(Schedules, candidate) is not None:
            candidate = f"{schedule_id}_{suffix}"
            suffix += 1
        return candidate

    def save_schedule(self, schedule: Schedule) -> Schedule:
        """Persist a new schedule. A taken id gets a _1, _2, ... suffix; use the returned id."""
        row = Schedules(
            id=self._free_id(schedule.schedule_id),
            template_id=schedule.template_id,
            week_starting=schedule.week_starting,
            status=schedule.status,
        )
        row.assignments = [
            ScheduleAssignments(
                position=position,
                day_of_week=a.day_of_week,
                staff_id=a.staff_id,
                role=a.role,
                category=a.category,
                start_time=a.start_time,
                end_time=a.end_time,
            )
            for position, a in enumerate(schedule.assignments)
        ]
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return to_schedule(row)

    def get_schedule(self, schedule_id: str) -> Schedule:
        return to_schedule(self._get_row(schedule_id))

    def list_schedules(self, week_starting: Optional[date] = None) -> list[Schedule]:
        stmt = select(Schedules).order_by(Schedules.week_starting, Schedules.id)
        if week_starting is not None:
            stmt = stmt.where(Schedules.week_starting == week_starting)
        return [to_schedule(r) for r in self.db.execute(stmt).scalars().all()]

    def add_assignment(self, assignment: Assignment) -> Assignment:
        row = self._get_row(assignment.schedule_id)
        next_position = self.db.execute(
            select(func.coalesce(func.max(ScheduleAssignments.position), -1))
            .where(ScheduleAssignments.schedule_id == row.id)
        ).scalar_one() + 1
        assignment_row = ScheduleAssignments(
            position=next_position,
            day_of_week=assignment.day_of_week,
            staff_id=assignment.staff_id,
            role=assignment.role,
            category=assignment.category,
            start_time=assignment.start_time,
            end_time=assignment.end_time,
        )
        row.assignments.append(assignment_row)
        self.db.commit()
        self.db.refresh(assignment_row)
        return to_assignment(assignment_row)

    def remove_assignment(self, schedule_id: str, assignment_id: int) -> None:
        row = self._get_row(schedule_id)
        target = next((a for a in row.assignments if a.id == assignment_id), None)
        if target is None:
            raise NotFoundError(f"Assignment {assignment_id} not found in schedule {schedule_id}")
        row.assignments.remove(target)
        self.db.commit()

    def get_published_snapshot(self, schedule_id: str) -> list[dict]:
        return list(self._get_row(schedule_id).published_snapshot or [])

    def set_status(
        self,
        schedule_id: str,
        status: ScheduleStatus,
        snapshot: Optional[list[dict]] = None,
    ) -> Schedule:
        row = self._get_row(schedule_id)
        row.status = status
        if snapshot is not None:
            row.published_snapshot = snapshot
            row.published_at = datetime.now(timezone.utc)
        self.db.commit()
        return to_schedule(row)
