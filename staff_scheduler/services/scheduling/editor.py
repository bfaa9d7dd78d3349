"""
Manual schedule edits while a schedule is Draft, plus publish / reopen.
"""

import logging
from datetime import time
from typing import Optional

from sqlalchemy.orm import Session

from staff_scheduler.core.enums import (
    DAY_NAMES,
    AvailabilityFlag,
    ConflictKind,
    ScheduleStatus,
    ShiftWindow,
    SlotCategory,
)

from .assembler import dominant_window
from .availability_matrix import AvailabilityMatrix
from .business_hours import BusinessHours
from .conflict_reporter import ConflictReporter
from .errors import ScheduleStateError, ValidationError
from .notifications import build_change_notices
from .schedule_store import ScheduleStore, snapshot_assignments
from .staff_directory import StaffDirectory
from .template_store import TemplateStore
from .types import Assignment, ConflictRecord, Requirement, Schedule, ShiftChangeNotice


logger = logging.getLogger(__name__)


def window_for(category: SlotCategory, requirement: Optional[Requirement] = None) -> ShiftWindow:
    """Managers follow the day's dominant window, like assembled schedules do."""
    if category == SlotCategory.MANAGER and requirement is not None:
        return dominant_window(requirement)
    return ShiftWindow.PARTIAL if category == SlotCategory.PARTIAL else ShiftWindow.FULL


class ScheduleEditor:
    def __init__(self, db: Session, business_hours: BusinessHours):
        self.db = db
        self.business_hours = business_hours
        self.schedules = ScheduleStore(db)
        self.directory = StaffDirectory(db)
        self.availability = AvailabilityMatrix(db)
        self.conflicts = ConflictReporter(db)
        self.templates = TemplateStore(db)

    def _get_draft(self, schedule_id: str) -> Schedule:
        schedule = self.schedules.get_schedule(schedule_id)
        if schedule.status != ScheduleStatus.DRAFT:
            raise ScheduleStateError(f"Schedule {schedule_id} is published; reopen it before editing")
        return schedule

    def add_assignment(
        self,
        schedule_id: str,
        staff_id: str,
        day_of_week: int,
        category: SlotCategory,
        start_time: Optional[time] = None,
        end_time: Optional[time] = None,
    ) -> Assignment:
        """
        Add one assignment by hand.

        Overlaps are rejected outright. Assigning someone marked UNAVAILABLE
        is allowed, but records an UNAVAILABLE_ASSIGNED conflict for review.
        """
        if not 0 <= day_of_week <= 6:
            raise ValidationError(f"day_of_week must be 0-6, got {day_of_week}")
        schedule = self._get_draft(schedule_id)
        staff = self.directory.get_staff(staff_id)
        if not staff.is_active:
            raise ValidationError(f"{staff.display_name} is not active and cannot be assigned")

        requirement = self.templates.get_template(schedule.template_id).requirement_for(day_of_week)
        window = window_for(category, requirement)
        if start_time is None or end_time is None:
            profile = self.business_hours.get_shift_profile(day_of_week, window)
            start_time = start_time or profile.start_time
            end_time = end_time or profile.end_time
        if start_time >= end_time:
            raise ValidationError(f"Shift must start before it ends ({start_time:%H:%M}-{end_time:%H:%M})")

        for existing in schedule.assignments_for_staff(staff_id):
            if existing.overlaps(day_of_week, start_time, end_time):
                raise ValidationError(
                    f"{staff.display_name} already works {existing.start_time:%H:%M}-{existing.end_time:%H:%M} "
                    f"on {DAY_NAMES[day_of_week]}"
                )

        assignment = self.schedules.add_assignment(Assignment(
            schedule_id=schedule_id,
            day_of_week=day_of_week,
            staff_id=staff_id,
            role=staff.role,
            start_time=start_time,
            end_time=end_time,
            category=category,
        ))

        flag = self.availability.get_availability(staff_id, day_of_week, window)
        if flag == AvailabilityFlag.UNAVAILABLE:
            self.conflicts.save_conflicts(schedule_id, [ConflictRecord(
                schedule_id=schedule_id,
                day_of_week=day_of_week,
                kind=ConflictKind.UNAVAILABLE_ASSIGNED,
                category=category,
                staff_id=staff_id,
                detail=f"{staff.display_name} assigned on {DAY_NAMES[day_of_week]} but marked unavailable",
            )])
        return assignment

    def remove_assignment(self, schedule_id: str, assignment_id: int) -> None:
        self._get_draft(schedule_id)
        self.schedules.remove_assignment(schedule_id, assignment_id)

    def publish(self, schedule_id: str) -> list[ShiftChangeNotice]:
        """Publish a Draft and describe what changed since the last publish."""
        schedule = self._get_draft(schedule_id)
        previous = self.schedules.get_published_snapshot(schedule_id)
        staff_by_id = {s.id: s for s in self.directory.list_staff(include_inactive=True)}

        notices = build_change_notices(previous, schedule.assignments, staff_by_id, schedule.week_starting)
        self.schedules.set_status(
            schedule_id,
            ScheduleStatus.PUBLISHED,
            snapshot=snapshot_assignments(schedule.assignments),
        )
        logger.info("Schedule %s published, %d change notices", schedule_id, len(notices))
        return notices

    def reopen(self, schedule_id: str) -> Schedule:
        schedule = self.schedules.get_schedule(schedule_id)
        if schedule.status != ScheduleStatus.PUBLISHED:
            raise ScheduleStateError(f"Schedule {schedule_id} is already a draft")
        return self.schedules.set_status(schedule_id, ScheduleStatus.DRAFT)
