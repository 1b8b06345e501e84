import pytest

from ticket_inventory.platform.exception.exceptions import DomainError
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime


@pytest.mark.unit
class TestClockTime:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('10:00 PM', ClockTime(hour=22, minute=0)),
            ('10:00PM', ClockTime(hour=22, minute=0)),
            ('22:00', ClockTime(hour=22, minute=0)),
            ('12:30 AM', ClockTime(hour=0, minute=30)),
            ('12:15 PM', ClockTime(hour=12, minute=15)),
            ('09:05 am', ClockTime(hour=9, minute=5)),
        ],
    )
    def test_parse_accepts_12_and_24_hour_forms(self, raw: str, expected: ClockTime) -> None:
        assert ClockTime.parse(raw) == expected

    @pytest.mark.parametrize('raw', ['', 'noon', '25:00', '13:00 PM', '10:75', '0:00 AM'])
    def test_parse_rejects_garbage(self, raw: str) -> None:
        with pytest.raises(DomainError):
            ClockTime.parse(raw)

    def test_renders_zero_padded_12_hour(self) -> None:
        assert str(ClockTime(hour=21, minute=0)) == '09:00 PM'
        assert str(ClockTime(hour=0, minute=30)) == '12:30 AM'
        assert str(ClockTime(hour=12, minute=0)) == '12:00 PM'

    def test_from_minutes_wraps_around_the_day(self) -> None:
        assert ClockTime.from_minutes(-30) == ClockTime(hour=23, minute=30)
        assert ClockTime.from_minutes(24 * 60 + 90) == ClockTime(hour=1, minute=30)

    def test_one_hour_before_wraps_midnight_to_23(self) -> None:
        assert ClockTime(hour=18, minute=45).one_hour_before() == ClockTime(hour=17, minute=45)
        assert ClockTime(hour=0, minute=15).one_hour_before() == ClockTime(hour=23, minute=15)

    def test_ordering(self) -> None:
        assert ClockTime(hour=8, minute=30) < ClockTime(hour=9, minute=0)
