"""
Availability checking utilities.
Determines which staff can fill a slot, and in which tier.
"""

from datetime import date

from staff_scheduler.core.enums import AvailabilityFlag, ShiftWindow

from .types import (
    AvailabilityEntry,
    StaffMember,
    TimeOffRequest,
)


DEFAULT_FLAG = AvailabilityFlag.CONDITIONAL

# Lower rank is preferred; UNAVAILABLE is never a candidate
TIER_RANK = {
    AvailabilityFlag.AVAILABLE: 0,
    AvailabilityFlag.CONDITIONAL: 1,
}

AvailabilityIndex = dict[tuple[str, int, ShiftWindow], AvailabilityFlag]


def build_availability_index(entries: list[AvailabilityEntry]) -> AvailabilityIndex:
    """Key entries by (staff_id, day_of_week, shift_window). Later entries win."""
    return {(e.staff_id, e.day_of_week, e.shift_window): e.flag for e in entries}


def get_availability(
    staff_id: str,
    day_of_week: int,
    shift_window: ShiftWindow,
    index: AvailabilityIndex,
) -> AvailabilityFlag:
    """
    Effective flag for one cell of the matrix.

    Missing cells default to CONDITIONAL: absence of data is neither a
    promise nor a refusal.
    """
    return index.get((staff_id, day_of_week, shift_window), DEFAULT_FLAG)


def is_staff_on_time_off(
    staff_id: str,
    day: date,
    time_off_requests: list[TimeOffRequest],
) -> bool:
    """Check if staff member has approved time off covering the day."""
    for req in time_off_requests:
        if req.staff_id == staff_id and req.covers(day):
            return True
    return False


def candidate_sort_key(staff: StaffMember) -> tuple[str, str]:
    # displayName ascending, id breaks exact name ties
    return (staff.display_name, staff.id)


def rank_candidates(
    pool: list[StaffMember],
    day_of_week: int,
    shift_window: ShiftWindow,
    index: AvailabilityIndex,
) -> list[tuple[StaffMember, AvailabilityFlag]]:
    """
    Order a pool for slot filling.

    Returns:
        (staff, flag) tuples: AVAILABLE tier first, then CONDITIONAL, each
        tier by display name. UNAVAILABLE staff are dropped.
    """
    ranked = []
    for staff in pool:
        flag = get_availability(staff.id, day_of_week, shift_window, index)
        if flag == AvailabilityFlag.UNAVAILABLE:
            continue
        ranked.append((staff, flag))

    def sort_key(item: tuple[StaffMember, AvailabilityFlag]) -> tuple[int, str, str]:
        staff, flag = item
        return (TIER_RANK[flag], *candidate_sort_key(staff))

    return sorted(ranked, key=sort_key)
