"""
HTTP Ticket Persistence

ITicketPersistence over the ticketing REST API.

Status mapping:
- 404            -> NotFoundError
- 400, 409, 422  -> DomainError (the server's "message" when it sends one)
- 5xx, transport -> UnavailableError
"""

from typing import Any, Optional

import httpx
import orjson
from pydantic import ValidationError as PydanticValidationError

from ticket_inventory.platform.exception.exceptions import (
    DomainError,
    NotFoundError,
    UnavailableError,
)
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.dto.ticket_listing import TicketListing
from ticket_inventory.service.ticketing.app.interface.i_ticket_persistence import (
    ITicketPersistence,
)
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.driven_adapter.ticket_api_schema import (
    EventWire,
    TicketListWire,
    TicketWire,
    TicketWriteRequest,
)


_CLIENT_ERROR_STATUSES = frozenset({400, 409, 422})


class HttpTicketPersistence(ITicketPersistence):
    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip('/')
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={'Content-Type': 'application/json'},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, body: Optional[dict[str, Any]] = None) -> Any:
        content = orjson.dumps(body) if body is not None else None
        try:
            response = await self._client.request(method, path, content=content)
        except httpx.HTTPError as e:
            Logger.base.error(f'❌ [HTTP] {method} {path} failed: {e!r}')
            raise UnavailableError(f'Ticketing service unreachable: {e}') from e

        if response.is_success:
            if not response.content:
                return None
            try:
                return orjson.loads(response.content)
            except orjson.JSONDecodeError as e:
                Logger.base.error(f'❌ [HTTP] {method} {path} returned a non-JSON body')
                raise UnavailableError('Malformed response from ticketing service') from e

        message = self._error_message(response)
        Logger.base.warning(f'⚠️ [HTTP] {method} {path} -> {response.status_code}: {message}')
        if response.status_code == 404:
            raise NotFoundError(message)
        if response.status_code in _CLIENT_ERROR_STATUSES:
            raise DomainError(message, status_code=response.status_code)
        raise UnavailableError(message)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = orjson.loads(response.content)
        except orjson.JSONDecodeError:
            payload = None
        if isinstance(payload, dict) and payload.get('message'):
            return str(payload['message'])
        return f'Ticketing service responded with {response.status_code}'

    @staticmethod
    def _parse(model: type, data: Any) -> Any:
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            raise UnavailableError(f'Malformed response from ticketing service: {e}') from e

    @staticmethod
    def _ticket_body(payload: Any) -> Any:
        if not isinstance(payload, dict):
            raise UnavailableError('Malformed response from ticketing service: expected an object')
        return payload.get('ticket')

    @Logger.io
    async def get_event(self, *, event_id: str) -> Event:
        data = await self._request('GET', f'/api/events/{event_id}')
        if isinstance(data, dict) and isinstance(data.get('event'), dict):
            data = data['event']
        if not data:
            raise NotFoundError('Event not found')
        return self._parse(EventWire, data).to_entity()

    @Logger.io
    async def get_tickets(self, *, event_id: str) -> TicketListing:
        data = await self._request('GET', f'/api/events/{event_id}/tickets')
        return self._parse(TicketListWire, data or {}).to_listing()

    @Logger.io
    async def create_ticket(self, *, event_id: str, data: dict[str, Any]) -> Ticket:
        body = TicketWriteRequest.from_payload(data).to_json_dict()
        payload = await self._request('POST', f'/api/events/{event_id}/tickets', body)
        return self._parse(TicketWire, self._ticket_body(payload)).to_entity()

    @Logger.io
    async def update_ticket(self, *, event_id: str, ticket_id: str, data: dict[str, Any]) -> Ticket:
        body = TicketWriteRequest.from_payload(data).to_json_dict()
        payload = await self._request('PUT', f'/api/events/{event_id}/tickets/{ticket_id}', body)
        return self._parse(TicketWire, self._ticket_body(payload)).to_entity()

    @Logger.io
    async def delete_ticket(self, *, event_id: str, ticket_id: str) -> None:
        await self._request('DELETE', f'/api/events/{event_id}/tickets/{ticket_id}')

    @Logger.io
    async def update_event_capacity(self, *, event_id: str, total_capacity: int) -> None:
        await self._request('PUT', f'/api/events/{event_id}', {'totalCapacity': total_capacity})
