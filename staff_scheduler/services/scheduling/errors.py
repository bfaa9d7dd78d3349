"""
Error taxonomy for the scheduling service.

Staffing shortfalls are never raised: they come back as ConflictRecords.
"""


class SchedulingError(Exception):
    """Base class for structural scheduling failures."""


class InputError(SchedulingError):
    """Malformed or missing structural input (unknown template, misaligned week, empty template)."""


class ReferentialError(SchedulingError):
    """A reference to staff (or another record) that does not resolve."""


class ValidationError(SchedulingError):
    """A record that fails its own invariants (negative counts, empty names, bad time windows)."""


class NotFoundError(SchedulingError):
    """Lookup by id found nothing."""


class ScheduleStateError(SchedulingError):
    """Operation not allowed in the schedule's current status."""
