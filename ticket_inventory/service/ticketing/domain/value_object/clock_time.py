import re
from typing import Self

import attrs

from ticket_inventory.platform.exception.exceptions import DomainError


MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r'^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])?\s*$')


@attrs.frozen(order=True)
class ClockTime:
    """Wall-clock time of day, rendered the way organizers see it (``09:00 PM``)."""

    hour: int = attrs.field(validator=[attrs.validators.instance_of(int), attrs.validators.in_(range(24))])
    minute: int = attrs.field(validator=[attrs.validators.instance_of(int), attrs.validators.in_(range(60))])

    @classmethod
    def parse(cls, value: str | Self) -> Self:
        """
        Parse ``"10:00 PM"``, ``"10:00PM"`` or 24-hour ``"22:00"``.

        Raises:
            DomainError: If the string is not a recognizable clock time.
        """
        if isinstance(value, ClockTime):
            return value
        match = _TIME_PATTERN.match(value or '')
        if not match:
            raise DomainError(f'Invalid time format: {value!r}')

        hour, minute, period = int(match.group(1)), int(match.group(2)), match.group(3)
        if period:
            if not 1 <= hour <= 12:
                raise DomainError(f'Invalid 12-hour time: {value!r}')
            period = period.upper()
            if period == 'PM' and hour < 12:
                hour += 12
            if period == 'AM' and hour == 12:
                hour = 0
        if hour > 23 or minute > 59:
            raise DomainError(f'Invalid time: {value!r}')
        return cls(hour=hour, minute=minute)

    @classmethod
    def from_minutes(cls, minutes: int) -> Self:
        """Build from minutes since midnight, wrapping around the day."""
        minutes %= MINUTES_PER_DAY
        return cls(hour=minutes // 60, minute=minutes % 60)

    @property
    def minutes_since_midnight(self) -> int:
        return self.hour * 60 + self.minute

    def one_hour_before(self) -> 'ClockTime':
        # Hour 0 wraps to 23 rather than to the previous day
        return ClockTime(hour=self.hour - 1 if self.hour > 0 else 23, minute=self.minute)

    def to_24h(self) -> str:
        return f'{self.hour:02d}:{self.minute:02d}'

    def __str__(self) -> str:
        period = 'PM' if self.hour >= 12 else 'AM'
        hour12 = self.hour % 12 or 12
        return f'{hour12:02d}:{self.minute:02d} {period}'


DEFAULT_EVENT_END_TIME = ClockTime(hour=23, minute=59)
