"""Running total of ticket capacities for one event."""

from collections.abc import Iterable

import attrs

from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket


@attrs.frozen
class CapacityLedger:
    """
    Aggregate capacity maintained by signed deltas.

    Seeded once from the loaded tickets; afterwards only ``apply`` moves it,
    and only once the matching persistence call has succeeded.
    """

    total: int = 0

    @classmethod
    def from_tickets(cls, tickets: Iterable[Ticket]) -> 'CapacityLedger':
        return cls(total=sum(ticket.capacity for ticket in tickets))

    def apply(self, delta: int) -> 'CapacityLedger':
        return CapacityLedger(total=self.total + delta)


def delta_for_create(created: Ticket) -> int:
    return created.capacity


def delta_for_update(before: Ticket, after: Ticket) -> int:
    return after.capacity - before.capacity


def delta_for_delete(removed: Ticket) -> int:
    return -removed.capacity
