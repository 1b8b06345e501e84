"""
Ticket Manager State

Everything the manager owns, as one immutable value. The transitions below
keep the ticket collection and the capacity ledger moving together: a ticket
is never added, replaced or removed without applying the matching delta.
"""

from typing import Optional

import attrs

from ticket_inventory.service.ticketing.domain.capacity_ledger import (
    CapacityLedger,
    delta_for_create,
    delta_for_delete,
    delta_for_update,
)
from ticket_inventory.service.ticketing.domain.dialog_calendar_coordinator import (
    CLOSED,
    DialogCalendarState,
)
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.ticket_tab import TicketTab
from ticket_inventory.service.ticketing.domain.sales_window_validator import AdjustmentNotice
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft


@attrs.frozen
class TicketManagerState:
    event_id: Optional[str] = None
    event: Optional[Event] = None
    tickets: tuple[Ticket, ...] = ()
    ledger: CapacityLedger = CapacityLedger()
    time_slots: tuple[ClockTime, ...] = ()
    loading: bool = False
    error: Optional[str] = None
    is_submitting: bool = False
    draft: TicketDraft = TicketDraft()
    dialogs: DialogCalendarState = CLOSED
    # Notices from the most recent reconcile
    notices: tuple[AdjustmentNotice, ...] = ()
    # field name -> message, from the last failed submit
    field_errors: dict[str, str] = attrs.field(factory=dict)
    active_tab: TicketTab = TicketTab.ADMISSION
    # Staged value of the event-wide capacity dialog
    capacity_input: Optional[int] = None

    @property
    def total_sold(self) -> int:
        return sum(ticket.sold for ticket in self.tickets)

    def find_ticket(self, ticket_id: str) -> Optional[Ticket]:
        return next((ticket for ticket in self.tickets if ticket.id == ticket_id), None)


def with_loaded(
    state: TicketManagerState,
    *,
    event: Event,
    tickets: tuple[Ticket, ...],
    time_slots: tuple[ClockTime, ...],
) -> TicketManagerState:
    return attrs.evolve(
        state,
        event=event,
        tickets=tickets,
        ledger=CapacityLedger.from_tickets(tickets),
        time_slots=time_slots,
        loading=False,
        error=None,
    )


def with_load_failed(state: TicketManagerState, message: str) -> TicketManagerState:
    return attrs.evolve(
        state,
        event=None,
        tickets=(),
        ledger=CapacityLedger(),
        time_slots=(),
        loading=False,
        error=message,
    )


def with_ticket_added(state: TicketManagerState, created: Ticket) -> TicketManagerState:
    return attrs.evolve(
        state,
        tickets=state.tickets + (created,),
        ledger=state.ledger.apply(delta_for_create(created)),
    )


def with_ticket_replaced(
    state: TicketManagerState, before: Ticket, after: Ticket
) -> TicketManagerState:
    return attrs.evolve(
        state,
        tickets=tuple(after if ticket.id == before.id else ticket for ticket in state.tickets),
        ledger=state.ledger.apply(delta_for_update(before, after)),
    )


def with_ticket_removed(state: TicketManagerState, removed: Ticket) -> TicketManagerState:
    return attrs.evolve(
        state,
        tickets=tuple(ticket for ticket in state.tickets if ticket.id != removed.id),
        ledger=state.ledger.apply(delta_for_delete(removed)),
    )
