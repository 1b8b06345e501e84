"""Ticket listing DTO."""

import attrs

from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket


@attrs.frozen
class TicketListing:
    """
    Tickets of one event as returned by the ticketing service.

    total_capacity is the service's own sum; the manager seeds its ledger from
    the tickets themselves and only uses this figure as a cross-check.
    """

    tickets: tuple[Ticket, ...] = ()
    total_capacity: int = 0
