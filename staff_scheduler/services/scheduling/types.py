"""
Internal data types for scheduling logic.
decoupled from SQLAlchemy models for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional

from staff_scheduler.core.enums import (
    AvailabilityFlag,
    ChangeKind,
    ConflictKind,
    ConflictSeverity,
    MANAGER_ROLE,
    DEFAULT_ROLE,
    ScheduleStatus,
    ShiftWindow,
    SlotCategory,
    StaffStatus,
    TemplateStatus,
)


@dataclass(frozen=True)
class StaffMember:
    id: str
    display_name: str
    role: str = DEFAULT_ROLE
    status: StaffStatus = StaffStatus.ACTIVE
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def is_manager(self) -> bool:
        return self.role == MANAGER_ROLE

    @property
    def is_active(self) -> bool:
        return self.status == StaffStatus.ACTIVE


@dataclass(frozen=True)
class AvailabilityEntry:
    staff_id: str
    day_of_week: int  # 0-6, Monday first
    shift_window: ShiftWindow
    flag: AvailabilityFlag


@dataclass(frozen=True)
class TimeOffRequest:
    staff_id: str
    start_date: date
    end_date: date  # inclusive

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Requirement:
    full_count: int = 0
    partial_count: int = 0
    manager_count: int = 0

    @property
    def is_closed(self) -> bool:
        """All-zero requirements mean the business is closed that day."""
        return self.full_count == 0 and self.partial_count == 0 and self.manager_count == 0

    def count_for(self, category: SlotCategory) -> int:
        if category == SlotCategory.MANAGER:
            return self.manager_count
        if category == SlotCategory.PARTIAL:
            return self.partial_count
        return self.full_count


CLOSED = Requirement()


@dataclass
class Template:
    template_id: str
    name: str
    per_day: dict[int, Requirement] = field(default_factory=dict)
    status: TemplateStatus = TemplateStatus.ACTIVE
    is_default: bool = False
    notes: Optional[str] = None

    def requirement_for(self, day_of_week: int) -> Requirement:
        """Days missing from the template are closed."""
        return self.per_day.get(day_of_week, CLOSED)


@dataclass(frozen=True)
class ShiftProfile:
    start_time: time
    end_time: time

    @property
    def duration_hours(self) -> float:
        start = datetime.combine(date.min, self.start_time)
        end = datetime.combine(date.min, self.end_time)
        return (end - start).total_seconds() / 3600


def times_overlap(start1: time, end1: time, start2: time, end2: time) -> bool:
    """Check if two [start, end) time ranges overlap (same day)."""
    return start1 < end2 and start2 < end1


@dataclass
class Assignment:
    """One filled slot (proposed or persisted)."""
    schedule_id: str
    day_of_week: int
    staff_id: str
    role: str
    start_time: time
    end_time: time
    category: SlotCategory = SlotCategory.FULL
    assignment_id: Optional[int] = None

    def overlaps(self, day_of_week: int, start_time: time, end_time: time) -> bool:
        if day_of_week != self.day_of_week:
            return False
        return times_overlap(self.start_time, self.end_time, start_time, end_time)

    def slot_date(self, week_starting: date) -> date:
        return week_starting + timedelta(days=self.day_of_week)


@dataclass
class Schedule:
    schedule_id: str
    template_id: str
    week_starting: date  # Monday
    status: ScheduleStatus = ScheduleStatus.DRAFT
    assignments: list[Assignment] = field(default_factory=list)
    created_at: Optional[datetime] = None

    @property
    def week_end(self) -> date:
        """Sunday of the schedule week."""
        return self.week_starting + timedelta(days=6)

    def assignments_for_day(self, day_of_week: int) -> list[Assignment]:
        return [a for a in self.assignments if a.day_of_week == day_of_week]

    def assignments_for_staff(self, staff_id: str) -> list[Assignment]:
        return [a for a in self.assignments if a.staff_id == staff_id]


@dataclass
class ConflictRecord:
    schedule_id: str
    day_of_week: int
    kind: ConflictKind
    detail: str
    category: Optional[SlotCategory] = None
    staff_id: Optional[str] = None
    conflict_id: Optional[int] = None
    acknowledged: bool = False
    acknowledged_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def severity(self) -> ConflictSeverity:
        if self.kind == ConflictKind.UNDERSTAFFED:
            if self.category == SlotCategory.PARTIAL:
                return ConflictSeverity.MEDIUM
            return ConflictSeverity.HIGH
        if self.kind == ConflictKind.DOUBLE_BOOKED:
            return ConflictSeverity.MEDIUM
        if self.kind == ConflictKind.UNAVAILABLE_ASSIGNED:
            return ConflictSeverity.HIGH
        return ConflictSeverity.LOW


@dataclass
class AssemblyContext:
    """All data needed to assemble a schedule for one template/week."""
    template: Template
    week_start: date  # Monday
    staff: list[StaffMember]
    availability: list[AvailabilityEntry]
    time_off: list[TimeOffRequest] = field(default_factory=list)

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)


@dataclass
class AssemblyResult:
    """Output of the assembler: a (possibly partial) Draft schedule plus its conflicts."""
    schedule: Schedule
    conflicts: list[ConflictRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.conflicts

    @property
    def conflict_count(self) -> int:
        return len(self.conflicts)


@dataclass(frozen=True)
class GenerationOutcome:
    schedule_id: str
    conflict_count: int


@dataclass(frozen=True)
class ShiftChangeNotice:
    """What an external notifier needs to tell one staff member about one shift."""
    recipient_contact: Optional[str]
    staff_id: str
    day_of_week: int
    shift_date: date
    start_time: time
    end_time: time
    position: str
    change_kind: ChangeKind
