"""
Unit tests for HttpTicketPersistence

The REST API is replaced by an httpx.MockTransport; requests are asserted on
path, method and camelCase body, responses on the mapped domain objects and
exceptions.
"""

import datetime
from collections.abc import Callable
from decimal import Decimal

import httpx
import orjson
import pytest

from ticket_inventory.platform.exception.exceptions import (
    DomainError,
    NotFoundError,
    UnavailableError,
)
from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft
from ticket_inventory.service.ticketing.driven_adapter.http_ticket_persistence import (
    HttpTicketPersistence,
)


BASE_URL = 'http://ticketing.test'

TICKET_JSON = {
    '_id': 't1',
    'name': 'VIP',
    'type': 'Paid',
    'capacity': 40,
    'price': 25.5,
    'saleStart': '2025-05-01T00:00:00.000Z',
    'saleEnd': '2025-05-31',
    'startTime': '08:00 AM',
    'endTime': '05:00 PM',
    'minPerOrder': 1,
    'maxPerOrder': 4,
    'sold': 3,
}


def _persistence(handler: Callable[[httpx.Request], httpx.Response]) -> HttpTicketPersistence:
    client = httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return HttpTicketPersistence(base_url=BASE_URL, client=client)


@pytest.mark.unit
class TestHttpTicketPersistence:
    @pytest.mark.asyncio
    async def test_get_event_unwraps_event_envelope(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == 'GET'
            assert request.url.path == '/api/events/evt-1'
            return httpx.Response(
                200,
                json={
                    'event': {
                        'id': 'evt-1',
                        'date': '2025-06-01T00:00:00.000Z',
                        'endTime': '06:00 PM',
                        'totalCapacity': 300,
                    }
                },
            )

        event = await _persistence(handler).get_event(event_id='evt-1')

        assert event.id == 'evt-1'
        assert event.date == datetime.date(2025, 6, 1)
        assert event.end_time == ClockTime(hour=18, minute=0)
        assert event.capacity_override == 300

    @pytest.mark.asyncio
    async def test_get_event_defaults_end_time(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={'id': 'evt-1'})

        event = await _persistence(handler).get_event(event_id='evt-1')

        assert event.date is None
        assert event.end_time == ClockTime(hour=23, minute=59)

    @pytest.mark.asyncio
    async def test_get_tickets_maps_wire_tickets(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == '/api/events/evt-1/tickets'
            return httpx.Response(200, json={'tickets': [TICKET_JSON], 'totalCapacity': 40})

        listing = await _persistence(handler).get_tickets(event_id='evt-1')

        assert listing.total_capacity == 40
        ticket = listing.tickets[0]
        assert ticket.id == 't1'
        assert ticket.type == TicketType.PAID
        assert ticket.price == Decimal('25.5')
        assert ticket.sale_start == datetime.date(2025, 5, 1)
        assert ticket.end_time == ClockTime(hour=17, minute=0)
        assert ticket.sold == 3

    @pytest.mark.asyncio
    async def test_create_ticket_posts_camel_case_body(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured['method'] = request.method
            captured['path'] = request.url.path
            captured['body'] = orjson.loads(request.content)
            return httpx.Response(201, json={'ticket': TICKET_JSON})

        draft = TicketDraft(
            name=' VIP ',
            type=TicketType.PAID,
            capacity=40,
            price=Decimal('25.5'),
            sale_start=datetime.date(2025, 5, 1),
            sale_end=datetime.date(2025, 5, 31),
            max_per_order=4,
        )

        ticket = await _persistence(handler).create_ticket(
            event_id='evt-1', data=draft.to_payload()
        )

        assert ticket.id == 't1'
        assert captured['method'] == 'POST'
        assert captured['path'] == '/api/events/evt-1/tickets'
        assert captured['body'] == {
            'name': 'VIP',
            'type': 'Paid',
            'capacity': 40,
            'price': 25.5,
            'saleStart': '2025-05-01',
            'saleEnd': '2025-05-31',
            'startTime': '08:00 AM',
            'endTime': '05:00 PM',
            'minPerOrder': 1,
            'maxPerOrder': 4,
        }

    @pytest.mark.asyncio
    async def test_update_event_capacity(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured['method'] = request.method
            captured['body'] = orjson.loads(request.content)
            return httpx.Response(200, json={'message': 'ok'})

        await _persistence(handler).update_event_capacity(event_id='evt-1', total_capacity=250)

        assert captured == {'method': 'PUT', 'body': {'totalCapacity': 250}}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'status, error_type',
        [
            (404, NotFoundError),
            (400, DomainError),
            (409, DomainError),
            (422, DomainError),
            (500, UnavailableError),
            (503, UnavailableError),
        ],
    )
    async def test_status_mapping(self, status: int, error_type: type) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status, json={'message': 'Nope'})

        with pytest.raises(error_type, match='Nope'):
            await _persistence(handler).delete_ticket(event_id='evt-1', ticket_id='t1')

    @pytest.mark.asyncio
    async def test_transport_error_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError('connection refused', request=request)

        with pytest.raises(UnavailableError):
            await _persistence(handler).get_tickets(event_id='evt-1')

    @pytest.mark.asyncio
    async def test_malformed_ticket_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(201, json={'ticket': {'name': 'no id'}})

        with pytest.raises(UnavailableError, match='Malformed'):
            await _persistence(handler).create_ticket(
                event_id='evt-1',
                data=TicketDraft(
                    name='x',
                    sale_start=datetime.date(2025, 5, 1),
                    sale_end=datetime.date(2025, 5, 2),
                ).to_payload(),
            )

    @pytest.mark.asyncio
    async def test_non_json_success_body_is_unavailable(self) -> None:
        """
        Given: a proxy answers 200 with an HTML page
        When: create_ticket
        Then: UnavailableError, not a decode error
        """

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b'<html>proxy</html>')

        with pytest.raises(UnavailableError, match='Malformed'):
            await _persistence(handler).create_ticket(
                event_id='evt-1',
                data=TicketDraft(
                    name='x',
                    sale_start=datetime.date(2025, 5, 1),
                    sale_end=datetime.date(2025, 5, 2),
                ).to_payload(),
            )

    @pytest.mark.asyncio
    async def test_non_object_ticket_payload_is_unavailable(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[TICKET_JSON])

        with pytest.raises(UnavailableError, match='expected an object'):
            await _persistence(handler).update_ticket(
                event_id='evt-1',
                ticket_id='t1',
                data=TicketDraft(
                    name='x',
                    sale_start=datetime.date(2025, 5, 1),
                    sale_end=datetime.date(2025, 5, 2),
                ).to_payload(),
            )

    @pytest.mark.asyncio
    async def test_price_is_sent_as_exact_decimal(self) -> None:
        captured: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured['content'] = request.content
            return httpx.Response(201, json={'ticket': TICKET_JSON})

        draft = TicketDraft(
            name='Early Bird',
            type=TicketType.PAID,
            price=Decimal('19.99'),
            sale_start=datetime.date(2025, 5, 1),
            sale_end=datetime.date(2025, 5, 31),
        )

        await _persistence(handler).create_ticket(event_id='evt-1', data=draft.to_payload())

        assert b'"price":19.99' in captured['content']
        assert orjson.loads(captured['content'])['price'] == 19.99
