"""
Business-hours source: opening times per day and the shift profiles derived from them.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional

from staff_scheduler.core.config import Settings
from staff_scheduler.core.enums import DAY_NAMES, ShiftWindow, parse_day

from .errors import InputError, ValidationError
from .types import ShiftProfile


DEFAULT_PARTIAL_SHIFT_HOURS = 4


def parse_clock(value: str) -> time:
    """'10:00' / '9:30' -> time."""
    try:
        return datetime.strptime(value.strip(), "%H:%M").time()
    except ValueError as exc:
        raise ValidationError(f"Invalid clock time {value!r}, expected HH:MM") from exc


class BusinessHours:
    """
    Opening hours per day of week.

    A FULL shift spans opening to closing; a PARTIAL shift starts at opening
    and lasts `partial_shift_hours`, capped at closing.
    """

    def __init__(
        self,
        opening_hours: dict[int, ShiftProfile],
        partial_shift_hours: int = DEFAULT_PARTIAL_SHIFT_HOURS,
    ):
        for day, profile in opening_hours.items():
            if not 0 <= day <= 6:
                raise ValidationError(f"day_of_week must be 0-6, got {day}")
            if profile.start_time >= profile.end_time:
                raise ValidationError(f"{DAY_NAMES[day]} opens at {profile.start_time} but closes at {profile.end_time}")
        if partial_shift_hours <= 0:
            raise ValidationError("partial_shift_hours must be positive")
        self.opening_hours = dict(opening_hours)
        self.partial_shift_hours = partial_shift_hours

    @classmethod
    def from_settings(cls, settings: Settings) -> "BusinessHours":
        opening_hours = {}
        for name, (start, end) in settings.BUSINESS_HOURS.items():
            opening_hours[parse_day(name)] = ShiftProfile(parse_clock(start), parse_clock(end))
        return cls(opening_hours, settings.PARTIAL_SHIFT_HOURS)

    def is_open(self, day_of_week: int) -> bool:
        return day_of_week in self.opening_hours

    def get_shift_profile(self, day_of_week: int, shift_window: ShiftWindow) -> ShiftProfile:
        opening: Optional[ShiftProfile] = self.opening_hours.get(day_of_week)
        if opening is None:
            raise InputError(f"No business hours configured for {DAY_NAMES[day_of_week]}")

        if shift_window == ShiftWindow.FULL:
            return opening

        start_dt = datetime.combine(date.min, opening.start_time)
        partial_end = (start_dt + timedelta(hours=self.partial_shift_hours)).time()
        # timedelta wrap past midnight lands before opening
        if partial_end <= opening.start_time or partial_end > opening.end_time:
            partial_end = opening.end_time
        return ShiftProfile(opening.start_time, partial_end)
