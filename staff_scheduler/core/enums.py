"""
Enumerations shared by the ORM models, the scheduling types and the API schemas.
"""

from enum import Enum


MANAGER_ROLE = "Manager"
DEFAULT_ROLE = "Staff"

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class StaffStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"


class ShiftWindow(str, Enum):
    FULL = "FULL"
    PARTIAL = "PARTIAL"


class AvailabilityFlag(str, Enum):
    AVAILABLE = "AVAILABLE"      # green
    CONDITIONAL = "CONDITIONAL"  # yellow
    UNAVAILABLE = "UNAVAILABLE"  # red


class TemplateStatus(str, Enum):
    ACTIVE = "ACTIVE"
    RETIRED = "RETIRED"


class ScheduleStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"


class SlotCategory(str, Enum):
    MANAGER = "MANAGER"
    FULL = "FULL"
    PARTIAL = "PARTIAL"


class ConflictKind(str, Enum):
    UNDERSTAFFED = "UNDERSTAFFED"
    DOUBLE_BOOKED = "DOUBLE_BOOKED"
    UNAVAILABLE_ASSIGNED = "UNAVAILABLE_ASSIGNED"


class ConflictSeverity(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class ChangeKind(str, Enum):
    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    REMOVED = "REMOVED"


class TimeOffStatus(str, Enum):
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"
    CANCELLED = "CANCELLED"


class TimeOffReason(str, Enum):
    SICK_LEAVE = "SICK_LEAVE"
    HOLIDAY = "HOLIDAY"
    UNPAID = "UNPAID"
    OTHER = "OTHER"


# Conflicts are listed day-then-kind in this order
CONFLICT_KIND_ORDER = {
    ConflictKind.UNDERSTAFFED: 0,
    ConflictKind.DOUBLE_BOOKED: 1,
    ConflictKind.UNAVAILABLE_ASSIGNED: 2,
}


def parse_day(value: str) -> int:
    """Day name (any case, 3+ letter prefix) -> 0-6, Monday first."""
    key = value.strip().lower()
    for index, name in enumerate(DAY_NAMES):
        if len(key) >= 3 and name.lower().startswith(key):
            return index
    raise ValueError(f"Unknown day of week: {value!r}")
