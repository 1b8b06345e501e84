"""Selectable daily start/end times for a ticket's sales window."""

from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime


SLOT_MINUTES = 30
SALE_END_MARGIN_MINUTES = 60


@Logger.io
def generate_time_slots(event_end_time: ClockTime) -> tuple[ClockTime, ...]:
    """
    Half-hour slots from 00:00 up to, but not including, one hour before the event ends.

    Never empty: when the event ends before 01:00 nothing precedes the bound,
    so the bound itself (wrapped onto the clock) is the only slot.
    """
    bound = event_end_time.minutes_since_midnight - SALE_END_MARGIN_MINUTES
    slots = tuple(
        ClockTime.from_minutes(minutes) for minutes in range(0, max(bound, 0), SLOT_MINUTES)
    )
    if not slots:
        return (ClockTime.from_minutes(bound),)
    return slots
