"""
Ticket Persistence Interface

The ticketing service as seen by the manager: load an event and its tickets,
and create/update/delete tickets one at a time.

Implementations raise:
- NotFoundError: the event or ticket does not exist
- DomainError: the service rejected the payload
- UnavailableError: the service could not be reached
"""

from abc import ABC, abstractmethod
from typing import Any

from ticket_inventory.service.ticketing.app.dto.ticket_listing import TicketListing
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket


class ITicketPersistence(ABC):
    @abstractmethod
    async def get_event(self, *, event_id: str) -> Event:
        """Return the event, or raise NotFoundError."""
        pass

    @abstractmethod
    async def get_tickets(self, *, event_id: str) -> TicketListing:
        """Return every ticket of the event with the service's capacity total."""
        pass

    @abstractmethod
    async def create_ticket(self, *, event_id: str, data: dict[str, Any]) -> Ticket:
        """
        Create a ticket.

        Args:
            event_id: Owning event
            data: Ticket fields minus id and sold (see TicketDraft.to_payload)

        Returns:
            The created ticket, with its id
        """
        pass

    @abstractmethod
    async def update_ticket(self, *, event_id: str, ticket_id: str, data: dict[str, Any]) -> Ticket:
        """Apply a partial update and return the stored ticket."""
        pass

    @abstractmethod
    async def delete_ticket(self, *, event_id: str, ticket_id: str) -> None:
        pass

    @abstractmethod
    async def update_event_capacity(self, *, event_id: str, total_capacity: int) -> None:
        """Set the event-wide capacity cap."""
        pass
