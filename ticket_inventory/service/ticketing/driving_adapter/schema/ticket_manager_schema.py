import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from ticket_inventory.service.ticketing.app.ticket_manager_state import TicketManagerState
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.sales_window_validator import AdjustmentNotice
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft


class TicketView(BaseModel):
    id: str
    name: str
    type: str
    capacity: int
    price: Optional[Decimal] = None
    sale_start: datetime.date
    sale_end: datetime.date
    start_time: str  # 'hh:mm AM'
    end_time: str
    min_per_order: int
    max_per_order: int
    sold: int
    remaining: int

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketView':
        return cls(
            id=ticket.id,
            name=ticket.name,
            type=ticket.type.value,
            capacity=ticket.capacity,
            price=ticket.price,
            sale_start=ticket.sale_start,
            sale_end=ticket.sale_end,
            start_time=str(ticket.start_time),
            end_time=str(ticket.end_time),
            min_per_order=ticket.min_per_order,
            max_per_order=ticket.max_per_order,
            sold=ticket.sold,
            remaining=ticket.remaining,
        )


class DraftView(BaseModel):
    name: str
    type: str
    capacity: int
    price: Optional[Decimal] = None
    sale_start: Optional[datetime.date] = None
    sale_end: Optional[datetime.date] = None
    start_time: str
    end_time: str
    min_per_order: int
    max_per_order: int

    @classmethod
    def from_draft(cls, draft: TicketDraft) -> 'DraftView':
        return cls(
            name=draft.name,
            type=draft.type.value,
            capacity=draft.capacity,
            price=draft.price,
            sale_start=draft.sale_start,
            sale_end=draft.sale_end,
            start_time=str(draft.start_time),
            end_time=str(draft.end_time),
            min_per_order=draft.min_per_order,
            max_per_order=draft.max_per_order,
        )


class EventView(BaseModel):
    id: str
    date: Optional[datetime.date] = None
    end_time: str
    capacity_override: Optional[int] = None

    @classmethod
    def from_entity(cls, event: Event) -> 'EventView':
        return cls(
            id=event.id,
            date=event.date,
            end_time=str(event.end_time),
            capacity_override=event.capacity_override,
        )


class NoticeView(BaseModel):
    kind: str
    message: str
    previous: str
    adjusted: str

    @classmethod
    def from_notice(cls, notice: AdjustmentNotice) -> 'NoticeView':
        return cls(
            kind=notice.kind.value,
            message=notice.message,
            previous=notice.previous,
            adjusted=notice.adjusted,
        )


class TicketManagerSnapshot(BaseModel):
    """Read-only projection of the manager for a UI layer."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            'example': {
                'tickets': [],
                'total_capacity': 0,
                'total_sold': 0,
                'event': {
                    'id': 'evt-1',
                    'date': '2025-06-01',
                    'end_time': '06:00 PM',
                    'capacity_override': None,
                },
                'loading': False,
                'error': None,
                'is_submitting': False,
                'dialog': 'none',
                'calendar': 'none',
                'target_ticket': None,
                'time_slots': ['12:00 AM', '12:30 AM'],
                'notices': [],
                'field_errors': {},
                'active_tab': 'admission',
                'capacity_input': None,
            }
        },
    )

    tickets: List[TicketView]
    total_capacity: int
    total_sold: int
    event: Optional[EventView] = None
    loading: bool
    error: Optional[str] = None
    is_submitting: bool
    draft: DraftView
    dialog: str
    calendar: str
    target_ticket: Optional[TicketView] = None
    time_slots: List[str]
    notices: List[NoticeView]
    field_errors: Dict[str, str]
    active_tab: str
    capacity_input: Optional[int] = None

    @classmethod
    def from_state(cls, state: TicketManagerState) -> 'TicketManagerSnapshot':
        target = state.dialogs.target
        return cls(
            tickets=[TicketView.from_entity(ticket) for ticket in state.tickets],
            total_capacity=state.ledger.total,
            total_sold=state.total_sold,
            event=EventView.from_entity(state.event) if state.event else None,
            loading=state.loading,
            error=state.error,
            is_submitting=state.is_submitting,
            draft=DraftView.from_draft(state.draft),
            dialog=state.dialogs.dialog.value,
            calendar=state.dialogs.calendar.value,
            target_ticket=TicketView.from_entity(target) if target else None,
            time_slots=[str(slot) for slot in state.time_slots],
            notices=[NoticeView.from_notice(notice) for notice in state.notices],
            field_errors=dict(state.field_errors),
            active_tab=state.active_tab.value,
            capacity_input=state.capacity_input,
        )
