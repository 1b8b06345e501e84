import pytest

from ticket_inventory.service.ticketing.domain.time_slot_generator import generate_time_slots
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime


@pytest.mark.unit
class TestGenerateTimeSlots:
    def test_event_ending_at_six_pm(self) -> None:
        """
        Given: Event ends at 06:00 PM
        Then: Slots run every 30 minutes from 12:00 AM, the last one at 04:30 PM
        """
        slots = generate_time_slots(ClockTime(hour=18, minute=0))

        assert slots[0] == ClockTime(hour=0, minute=0)
        assert slots[-1] == ClockTime(hour=16, minute=30)
        assert len(slots) == 34

    def test_every_slot_is_before_the_sale_end_bound(self) -> None:
        end = ClockTime(hour=20, minute=15)
        bound = end.minutes_since_midnight - 60

        slots = generate_time_slots(end)

        assert all(slot.minutes_since_midnight < bound for slot in slots)
        assert all(slot.minute in (0, 30) for slot in slots)
        assert list(slots) == sorted(slots)

    @pytest.mark.parametrize(
        'end, expected',
        [
            (ClockTime(hour=1, minute=0), ClockTime(hour=0, minute=0)),
            (ClockTime(hour=0, minute=30), ClockTime(hour=23, minute=30)),
        ],
    )
    def test_early_event_end_yields_single_wrapped_slot(
        self, end: ClockTime, expected: ClockTime
    ) -> None:
        assert generate_time_slots(end) == (expected,)

    def test_default_event_end(self) -> None:
        slots = generate_time_slots(ClockTime(hour=23, minute=59))

        assert slots[-1] == ClockTime(hour=22, minute=30)
