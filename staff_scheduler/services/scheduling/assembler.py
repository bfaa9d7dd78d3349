"""
Schedule assembler: template + week -> Draft schedule and conflict list.

Strategy, per day Monday..Sunday:
1. Skip closed days (all-zero requirements)
2. Split eligible staff into a manager pool and a staff pool
3. Fill manager slots, then full-shift slots, then partial-shift slots,
   each scanning AVAILABLE before CONDITIONAL, by display name
4. Record shortfalls and overlap attempts as conflicts instead of failing
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from staff_scheduler.core.enums import (
    CONFLICT_KIND_ORDER,
    DAY_NAMES,
    ConflictKind,
    ShiftWindow,
    SlotCategory,
)

from .availability import (
    build_availability_index,
    is_staff_on_time_off,
    rank_candidates,
)
from .business_hours import BusinessHours
from .errors import InputError
from .types import (
    Assignment,
    AssemblyContext,
    AssemblyResult,
    ConflictRecord,
    Requirement,
    Schedule,
    ShiftProfile,
    StaffMember,
)


logger = logging.getLogger(__name__)

SLOT_LABELS = {
    SlotCategory.MANAGER: "manager",
    SlotCategory.FULL: "full-shift staff",
    SlotCategory.PARTIAL: "partial-shift staff",
}


def make_schedule_id(now: datetime) -> str:
    """Generation timestamp-derived id, e.g. SCH_1759132800000000."""
    return f"SCH_{int(now.timestamp() * 1_000_000)}"


def dominant_window(requirement: Requirement) -> ShiftWindow:
    """Managers work the day's dominant window: FULL unless only partial slots are needed."""
    if requirement.full_count == 0 and requirement.partial_count > 0:
        return ShiftWindow.PARTIAL
    return ShiftWindow.FULL


def sort_conflicts(conflicts: list[ConflictRecord]) -> list[ConflictRecord]:
    """Day-then-kind order; emission order is kept within a (day, kind) group."""
    return sorted(conflicts, key=lambda c: (c.day_of_week, CONFLICT_KIND_ORDER[c.kind]))


def validate_context(context: AssemblyContext) -> None:
    if context.week_start.weekday() != 0:
        raise InputError(
            f"week_starting must be a Monday, got {context.week_start} ({context.week_start.strftime('%A')})"
        )
    if not context.template.per_day:
        raise InputError(f"Template {context.template.template_id} defines no days")


class ScheduleAssembler:
    """
    Fills one week of template slots from the roster.

    Never raises for staffing shortfalls; only structural problems
    (misaligned week, empty template, missing business hours) raise InputError.
    """

    def __init__(
        self,
        context: AssemblyContext,
        business_hours: BusinessHours,
        schedule_id: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.context = context
        self.business_hours = business_hours
        self.schedule_id = schedule_id or make_schedule_id(clock())
        self.assignments: list[Assignment] = []
        self.conflicts: list[ConflictRecord] = []
        self.availability_index = build_availability_index(context.availability)

    def assemble(self) -> AssemblyResult:
        """
        Main assembly method.

        Returns:
            AssemblyResult with a Draft schedule and conflicts in day-then-kind order
        """
        validate_context(self.context)

        for day_of_week in range(7):
            self._assemble_day(day_of_week)

        schedule = Schedule(
            schedule_id=self.schedule_id,
            template_id=self.context.template.template_id,
            week_starting=self.context.week_start,
            assignments=list(self.assignments),
        )
        return AssemblyResult(schedule=schedule, conflicts=sort_conflicts(self.conflicts))

    def _assemble_day(self, day_of_week: int):
        requirement = self.context.template.requirement_for(day_of_week)
        if requirement.is_closed:
            return

        slot_date = self.context.week_start + timedelta(days=day_of_week)
        eligible = self._eligible_staff(slot_date)
        managers = [s for s in eligible if s.is_manager]
        staff = [s for s in eligible if not s.is_manager]

        self._fill_slots(day_of_week, SlotCategory.MANAGER, requirement.manager_count,
                         managers, dominant_window(requirement))
        self._fill_slots(day_of_week, SlotCategory.FULL, requirement.full_count,
                         staff, ShiftWindow.FULL)
        self._fill_slots(day_of_week, SlotCategory.PARTIAL, requirement.partial_count,
                         staff, ShiftWindow.PARTIAL)

    def _eligible_staff(self, slot_date: date) -> list[StaffMember]:
        """Active staff without approved time off on the date."""
        return [
            s for s in self.context.staff
            if s.is_active and not is_staff_on_time_off(s.id, slot_date, self.context.time_off)
        ]

    def _fill_slots(
        self,
        day_of_week: int,
        category: SlotCategory,
        count: int,
        pool: list[StaffMember],
        shift_window: ShiftWindow,
    ):
        if count <= 0:
            return

        profile = self.business_hours.get_shift_profile(day_of_week, shift_window)
        ranked = [staff for staff, _ in rank_candidates(pool, day_of_week, shift_window, self.availability_index)]
        used: set[str] = set()  # filled this category, or rejected as double-booked

        filled = 0
        for _ in range(count):
            candidate = self._next_candidate(ranked, used, day_of_week, category, profile)
            if candidate is None:
                break
            used.add(candidate.id)
            self._add_assignment(candidate, day_of_week, category, profile)
            filled += 1

        missing = count - filled
        for _ in range(missing):
            self.conflicts.append(ConflictRecord(
                schedule_id=self.schedule_id,
                day_of_week=day_of_week,
                kind=ConflictKind.UNDERSTAFFED,
                category=category,
                detail=(
                    f"Need {count} {SLOT_LABELS[category]} on {DAY_NAMES[day_of_week]}, "
                    f"only {filled} available"
                ),
            ))
        if missing:
            logger.debug("%s %s: %d of %d %s slots unfilled", self.schedule_id,
                         DAY_NAMES[day_of_week], missing, count, category.value)

    def _next_candidate(
        self,
        ranked: list[StaffMember],
        used: set[str],
        day_of_week: int,
        category: SlotCategory,
        profile: ShiftProfile,
    ) -> Optional[StaffMember]:
        """
        Pick the next staff member for one slot.

        Staff with nothing booked that day are taken first, in tier order.
        Staff already booked in another slot that day are tried after that:
        an overlapping window is recorded as DOUBLE_BOOKED and skipped.
        """
        booked_today = []
        for staff in ranked:
            if staff.id in used:
                continue
            if self._assignments_for(staff.id, day_of_week):
                booked_today.append(staff)
                continue
            return staff

        for staff in booked_today:
            clash = self._find_overlap(staff.id, day_of_week, profile)
            if clash is None:
                return staff
            used.add(staff.id)
            self.conflicts.append(ConflictRecord(
                schedule_id=self.schedule_id,
                day_of_week=day_of_week,
                kind=ConflictKind.DOUBLE_BOOKED,
                category=category,
                staff_id=staff.id,
                detail=(
                    f"{staff.display_name} already works {clash.start_time:%H:%M}-{clash.end_time:%H:%M} "
                    f"on {DAY_NAMES[day_of_week]}; cannot also take a {SLOT_LABELS[category]} slot "
                    f"{profile.start_time:%H:%M}-{profile.end_time:%H:%M}"
                ),
            ))
        return None

    def _assignments_for(self, staff_id: str, day_of_week: int) -> list[Assignment]:
        return [
            a for a in self.assignments
            if a.staff_id == staff_id and a.day_of_week == day_of_week
        ]

    def _find_overlap(self, staff_id: str, day_of_week: int, profile: ShiftProfile) -> Optional[Assignment]:
        for existing in self._assignments_for(staff_id, day_of_week):
            if existing.overlaps(day_of_week, profile.start_time, profile.end_time):
                return existing
        return None

    def _add_assignment(
        self,
        staff: StaffMember,
        day_of_week: int,
        category: SlotCategory,
        profile: ShiftProfile,
    ):
        self.assignments.append(Assignment(
            schedule_id=self.schedule_id,
            day_of_week=day_of_week,
            staff_id=staff.id,
            role=staff.role,
            start_time=profile.start_time,
            end_time=profile.end_time,
            category=category,
        ))


def assemble_schedule(
    context: AssemblyContext,
    business_hours: BusinessHours,
    schedule_id: Optional[str] = None,
) -> AssemblyResult:
    """Convenience function to assemble a schedule."""
    assembler = ScheduleAssembler(context, business_hours, schedule_id=schedule_id)
    return assembler.assemble()
