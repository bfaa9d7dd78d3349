"""
Shift change notices.

The core only describes what changed between two published versions of a
schedule; delivering the message belongs to an external notifier.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta

from staff_scheduler.core.enums import ChangeKind

from .schedule_store import snapshot_assignments
from .types import Assignment, ShiftChangeNotice, StaffMember


SnapshotKey = tuple[str, int, str]


def _key(item: dict) -> SnapshotKey:
    return (item["staff_id"], item["day_of_week"], item["category"])


def _group(snapshot: list[dict]) -> dict[SnapshotKey, list[dict]]:
    groups: dict[SnapshotKey, list[dict]] = defaultdict(list)
    for item in snapshot:
        groups[_key(item)].append(item)
    return groups


def _clock(value: str):
    return datetime.strptime(value, "%H:%M").time()


def _notice(item: dict, change_kind: ChangeKind, staff_by_id: dict[str, StaffMember], week_starting: date) -> ShiftChangeNotice:
    staff = staff_by_id.get(item["staff_id"])
    return ShiftChangeNotice(
        recipient_contact=staff.email if staff else None,
        staff_id=item["staff_id"],
        day_of_week=item["day_of_week"],
        shift_date=week_starting + timedelta(days=item["day_of_week"]),
        start_time=_clock(item["start_time"]),
        end_time=_clock(item["end_time"]),
        position=item["role"],
        change_kind=change_kind,
    )


def build_change_notices(
    previous: list[dict],
    current: list[Assignment],
    staff_by_id: dict[str, StaffMember],
    week_starting: date,
) -> list[ShiftChangeNotice]:
    """
    Compare the last published snapshot with the current assignments.

    Assignments are grouped on (staff, day, slot category), so one person
    can hold several shifts of the same kind on a day. Within a group,
    identical shifts cancel out and the rest are paired in start-time
    order as MODIFIED; any surplus is ADDED or REMOVED. A first publish
    has an empty snapshot, so every assignment comes back as ADDED.
    """
    before = _group(previous)
    after = _group(snapshot_assignments(current))

    notices = []
    for key in set(before) | set(after):
        old = list(before.get(key, []))
        new = []
        for item in after.get(key, []):
            if item in old:
                old.remove(item)
            else:
                new.append(item)
        old.sort(key=lambda item: item["start_time"])
        new.sort(key=lambda item: item["start_time"])

        for item in new[:len(old)]:
            notices.append(_notice(item, ChangeKind.MODIFIED, staff_by_id, week_starting))
        for item in new[len(old):]:
            notices.append(_notice(item, ChangeKind.ADDED, staff_by_id, week_starting))
        for item in old[len(new):]:
            notices.append(_notice(item, ChangeKind.REMOVED, staff_by_id, week_starting))

    return sorted(notices, key=lambda n: (n.day_of_week, n.start_time, n.staff_id, n.change_kind.value))
