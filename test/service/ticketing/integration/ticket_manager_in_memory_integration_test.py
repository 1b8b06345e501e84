"""
TicketManager against the in-memory ticketing service

Walks the organizer flow end to end (add, edit, delete, capacity override) and
checks after every step that the ledger equals the sum of the listed tickets.
"""

import datetime
from unittest.mock import Mock

import pytest

from ticket_inventory.service.ticketing.app.ticket_manager import TicketManager
from ticket_inventory.service.ticketing.app.ticket_repository import TicketRepository
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.enum.dialog_kind import DialogKind
from ticket_inventory.service.ticketing.driven_adapter.in_memory_ticket_persistence import (
    InMemoryTicketPersistence,
)


def _assert_ledger_consistent(manager: TicketManager) -> None:
    assert manager.total_capacity == sum(ticket.capacity for ticket in manager.tickets)


@pytest.mark.integration
class TestTicketManagerInMemoryFlow:
    @pytest.mark.asyncio
    async def test_organizer_flow(self, event: Event, mock_notifier: Mock) -> None:
        # Arrange
        persistence = InMemoryTicketPersistence(events=[event])
        manager = TicketManager(
            repository=TicketRepository(persistence=persistence, timeout=1.0),
            notifier=mock_notifier,
            today=lambda: datetime.date(2025, 5, 1),
        )
        await manager.initialize('evt-1')
        assert manager.total_capacity == 0

        # Add two tickets
        manager.open_add()
        manager.update_draft(name='General', capacity=100)
        general = await manager.add_ticket()
        _assert_ledger_consistent(manager)

        manager.open_add()
        manager.update_draft(name='VIP', type='Paid', price='49.99', capacity=20)
        vip = await manager.add_ticket()
        _assert_ledger_consistent(manager)
        assert manager.total_capacity == 120

        # Edit the first one
        manager.open_edit(general)
        manager.update_draft(capacity=150)
        await manager.update_ticket()
        _assert_ledger_consistent(manager)
        assert manager.total_capacity == 170

        # Delete the second one
        manager.open_delete(vip)
        await manager.delete_ticket()
        _assert_ledger_consistent(manager)
        assert manager.total_capacity == 150

        # Event-wide cap
        manager.open_capacity()
        manager.set_capacity_input(140)
        await manager.update_capacity()

        # Assert
        assert manager.event.capacity_override == 140
        assert manager.total_capacity == 150
        assert manager.dialog == DialogKind.NONE
        assert [t.name for t in manager.tickets] == ['General']

        reloaded = await persistence.get_tickets(event_id='evt-1')
        assert reloaded.total_capacity == manager.total_capacity
