"""Event entity (read-only here, owned by the event editor)."""

import datetime
from typing import Optional

import attrs

from ticket_inventory.service.ticketing.domain.value_object.clock_time import (
    DEFAULT_EVENT_END_TIME,
    ClockTime,
)


@attrs.frozen
class Event:
    id: str
    date: Optional[datetime.date] = None
    end_time: ClockTime = DEFAULT_EVENT_END_TIME
    # Event-wide capacity cap, independent of the per-ticket sum
    capacity_override: Optional[int] = None
