"""
Test Configuration

Environment setup MUST happen before any ticket_inventory import: settings and
the loguru sinks are built at import time.
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Point settings at test values before application modules load."""
    os.environ['DEBUG'] = 'true'
    os.environ['LOG_TO_FILE'] = 'false'
    os.environ.setdefault('DEPLOY_ENV', 'test')
    os.environ['TICKETING_API_BASE_URL'] = 'http://ticketing.test'
    os.environ['PERSISTENCE_TIMEOUT_SECONDS'] = '5'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


_early_setup_test_environment()


import datetime  # noqa: E402
from collections.abc import Callable  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import Mock  # noqa: E402

import pytest  # noqa: E402

from ticket_inventory.service.ticketing.app.interface.i_notifier import INotifier  # noqa: E402
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event  # noqa: E402
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket  # noqa: E402
from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType  # noqa: E402
from ticket_inventory.service.ticketing.domain.value_object.clock_time import (  # noqa: E402
    ClockTime,
)


EVENT_ID = 'evt-1'
EVENT_DATE = datetime.date(2025, 6, 1)
TODAY = datetime.date(2025, 5, 1)


@pytest.fixture
def event() -> Event:
    """Event on 2025-06-01 ending at 06:00 PM."""
    return Event(id=EVENT_ID, date=EVENT_DATE, end_time=ClockTime(hour=18, minute=0))


@pytest.fixture
def make_ticket() -> Callable[..., Ticket]:
    def _make(**overrides: Any) -> Ticket:
        fields: dict[str, Any] = {
            'id': 't1',
            'name': 'General Admission',
            'type': TicketType.FREE,
            'capacity': 50,
            'sale_start': datetime.date(2025, 5, 1),
            'sale_end': datetime.date(2025, 5, 31),
            'start_time': ClockTime(hour=8, minute=0),
            'end_time': ClockTime(hour=17, minute=0),
        }
        fields.update(overrides)
        return Ticket(**fields)

    return _make


@pytest.fixture
def mock_notifier() -> Mock:
    return Mock(spec=INotifier)
