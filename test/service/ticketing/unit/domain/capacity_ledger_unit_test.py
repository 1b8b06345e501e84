from collections.abc import Callable

import pytest

from ticket_inventory.service.ticketing.domain.capacity_ledger import (
    CapacityLedger,
    delta_for_create,
    delta_for_delete,
    delta_for_update,
)
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket


@pytest.mark.unit
class TestCapacityLedger:
    def test_seeded_from_ticket_list(self, make_ticket: Callable[..., Ticket]) -> None:
        tickets = [make_ticket(id='a', capacity=100), make_ticket(id='b', capacity=25)]

        assert CapacityLedger.from_tickets(tickets).total == 125
        assert CapacityLedger.from_tickets([]).total == 0

    def test_apply_returns_new_ledger(self) -> None:
        ledger = CapacityLedger(total=100)

        moved = ledger.apply(50)

        assert moved.total == 150
        assert ledger.total == 100

    def test_create_update_delete_deltas_track_the_sum(
        self, make_ticket: Callable[..., Ticket]
    ) -> None:
        """
        Given: An empty event
        When: A 100-seat ticket is created, grown to 150, then deleted
        Then: The ledger equals the ticket sum after every step
        """
        created = make_ticket(id='a', capacity=100)
        grown = make_ticket(id='a', capacity=150)

        ledger = CapacityLedger().apply(delta_for_create(created))
        assert ledger.total == 100

        ledger = ledger.apply(delta_for_update(created, grown))
        assert ledger.total == 150

        ledger = ledger.apply(delta_for_delete(grown))
        assert ledger.total == 0

    def test_shrinking_update_is_negative(self, make_ticket: Callable[..., Ticket]) -> None:
        before = make_ticket(capacity=80)
        after = make_ticket(capacity=30)

        assert delta_for_update(before, after) == -50
