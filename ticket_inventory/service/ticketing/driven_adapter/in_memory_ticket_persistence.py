from typing import Any, Optional

import attrs
import uuid_utils

from ticket_inventory.platform.exception.exceptions import DomainError, NotFoundError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.dto.ticket_listing import TicketListing
from ticket_inventory.service.ticketing.app.interface.i_ticket_persistence import (
    ITicketPersistence,
)
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket


class InMemoryTicketPersistence(ITicketPersistence):
    """
    Process-local stand-in for the ticketing service.

    Used for demos and tests; behaves like the HTTP adapter from the manager's
    point of view (same exceptions, server-assigned ids, server-owned ``sold``).
    """

    def __init__(self, *, events: Optional[list[Event]] = None) -> None:
        self._events: dict[str, Event] = {event.id: event for event in events or []}
        self._tickets: dict[str, dict[str, Ticket]] = {event_id: {} for event_id in self._events}

    def seed_ticket(self, event_id: str, ticket: Ticket) -> None:
        self._require_event(event_id)
        self._tickets[event_id][ticket.id] = ticket

    def _require_event(self, event_id: str) -> Event:
        event = self._events.get(event_id)
        if event is None:
            raise NotFoundError('Event not found')
        return event

    def _require_ticket(self, event_id: str, ticket_id: str) -> Ticket:
        self._require_event(event_id)
        ticket = self._tickets[event_id].get(ticket_id)
        if ticket is None:
            raise NotFoundError('Ticket not found')
        return ticket

    async def get_event(self, *, event_id: str) -> Event:
        return self._require_event(event_id)

    async def get_tickets(self, *, event_id: str) -> TicketListing:
        self._require_event(event_id)
        tickets = tuple(self._tickets[event_id].values())
        return TicketListing(
            tickets=tickets, total_capacity=sum(ticket.capacity for ticket in tickets)
        )

    @Logger.io
    async def create_ticket(self, *, event_id: str, data: dict[str, Any]) -> Ticket:
        self._require_event(event_id)
        ticket = Ticket(id=str(uuid_utils.uuid7()), sold=0, **data)
        self._tickets[event_id][ticket.id] = ticket
        return ticket

    @Logger.io
    async def update_ticket(self, *, event_id: str, ticket_id: str, data: dict[str, Any]) -> Ticket:
        current = self._require_ticket(event_id, ticket_id)
        updated = attrs.evolve(current, **data)
        if updated.capacity < updated.sold:
            raise DomainError('Capacity cannot be less than tickets already sold', 422)
        self._tickets[event_id][ticket_id] = updated
        return updated

    @Logger.io
    async def delete_ticket(self, *, event_id: str, ticket_id: str) -> None:
        self._require_ticket(event_id, ticket_id)
        del self._tickets[event_id][ticket_id]

    @Logger.io
    async def update_event_capacity(self, *, event_id: str, total_capacity: int) -> None:
        event = self._require_event(event_id)
        self._events[event_id] = attrs.evolve(event, capacity_override=total_capacity)
