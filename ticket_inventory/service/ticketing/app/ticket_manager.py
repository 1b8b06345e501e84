"""
Ticket Manager

Facade the organizer's ticket screen talks to. Owns one TicketManagerState and
replaces it wholesale on every transition.

Flow:
1. initialize: load event + tickets, seed ledger, time slots and the add draft
2. open a dialog: add/edit seed the draft and reconcile it against the event
3. update_draft: edit the single in-flight draft
4. submit: reconcile again, validate, persist, then apply the result and close

Submissions are serialized by is_submitting: while one is in flight every
other submit is ignored. Local state only changes after a call succeeds.
"""

import datetime
from collections.abc import Callable
from typing import Any, Optional

import attrs

from ticket_inventory.platform.exception.exceptions import (
    InvalidWindowError,
    LoadError,
    PersistenceError,
    ValidationError,
)
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.interface.i_notifier import INotifier
from ticket_inventory.service.ticketing.app.ticket_manager_state import (
    TicketManagerState,
    with_load_failed,
    with_loaded,
    with_ticket_added,
    with_ticket_removed,
    with_ticket_replaced,
)
from ticket_inventory.service.ticketing.app.ticket_repository import TicketRepository
from ticket_inventory.service.ticketing.domain import dialog_calendar_coordinator as coordinator
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.dialog_kind import CalendarKind, DialogKind
from ticket_inventory.service.ticketing.domain.enum.ticket_tab import TicketTab
from ticket_inventory.service.ticketing.domain.sales_window_validator import (
    AdjustmentNotice,
    clamp_sale_start,
    is_date_after_event,
    is_end_date_disabled,
    is_start_date_disabled,
    reconcile,
)
from ticket_inventory.service.ticketing.domain.ticket_draft_form import (
    draft_from_ticket,
    new_draft_for_add,
    update_draft_fields,
    validate_draft_for_submit,
)
from ticket_inventory.service.ticketing.domain.time_slot_generator import generate_time_slots
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft
from ticket_inventory.service.ticketing.driving_adapter.schema.ticket_manager_schema import (
    TicketManagerSnapshot,
)


class TicketManager:
    def __init__(
        self,
        *,
        repository: TicketRepository,
        notifier: INotifier,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.repository = repository
        self.notifier = notifier
        self._today = today
        self._state = TicketManagerState()

    # ============================== Read side ==============================

    @property
    def state(self) -> TicketManagerState:
        return self._state

    @property
    def tickets(self) -> tuple[Ticket, ...]:
        return self._state.tickets

    @property
    def total_capacity(self) -> int:
        return self._state.ledger.total

    @property
    def total_sold(self) -> int:
        return self._state.total_sold

    @property
    def event(self) -> Optional[Event]:
        return self._state.event

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> Optional[str]:
        return self._state.error

    @property
    def is_submitting(self) -> bool:
        return self._state.is_submitting

    @property
    def draft(self) -> TicketDraft:
        return self._state.draft

    @property
    def dialog(self) -> DialogKind:
        return self._state.dialogs.dialog

    @property
    def calendar(self) -> CalendarKind:
        return self._state.dialogs.calendar

    @property
    def target_ticket(self) -> Optional[Ticket]:
        return self._state.dialogs.target

    @property
    def time_slots(self) -> tuple[ClockTime, ...]:
        return self._state.time_slots

    @property
    def notices(self) -> tuple[AdjustmentNotice, ...]:
        return self._state.notices

    @property
    def field_errors(self) -> dict[str, str]:
        return dict(self._state.field_errors)

    @property
    def active_tab(self) -> TicketTab:
        return self._state.active_tab

    @property
    def capacity_input(self) -> Optional[int]:
        return self._state.capacity_input

    def is_date_after_event(self, day: datetime.date) -> bool:
        return is_date_after_event(day, self._state.event)

    def is_start_date_disabled(self, day: datetime.date) -> bool:
        return is_start_date_disabled(day, self._state.event, self._state.draft.sale_end)

    def is_end_date_disabled(self, day: datetime.date) -> bool:
        return is_end_date_disabled(day, self._state.event)

    def snapshot(self) -> TicketManagerSnapshot:
        return TicketManagerSnapshot.from_state(self._state)

    # ============================== Loading ==============================

    @Logger.io
    async def initialize(
        self,
        event_id: str,
        mark_step_completed: Optional[Callable[[str], Any]] = None,
    ) -> None:
        """
        Load the event and its tickets and seed everything derived from them.

        A failed load leaves the manager in an error state with no tickets;
        nothing is raised to the caller.
        """
        if not event_id:
            self._state = with_load_failed(self._state, 'Event ID is required')
            self.notifier.error('Event ID is required')
            return

        self._state = attrs.evolve(self._state, event_id=event_id, loading=True, error=None)
        try:
            event, listing = await self.repository.load(event_id=event_id)
        except LoadError as e:
            Logger.base.error(f'❌ [INIT] Failed to load event {event_id}: {e.message}')
            self._state = with_load_failed(self._state, e.message)
            self.notifier.error(e.message)
            return

        self._state = with_loaded(
            self._state,
            event=event,
            tickets=tuple(listing.tickets),
            time_slots=generate_time_slots(event.end_time),
        )
        self._state = attrs.evolve(
            self._state, draft=new_draft_for_add(event, today=self._today())
        )

        if listing.total_capacity != self._state.ledger.total:
            Logger.base.warning(
                f'⚠️ [INIT] Service reports total capacity {listing.total_capacity}, '
                f'ticket list sums to {self._state.ledger.total}'
            )

        Logger.base.info(
            f'✅ [INIT] Loaded {len(self._state.tickets)} tickets for event {event_id} '
            f'(capacity={self._state.ledger.total})'
        )

        if self._state.tickets and mark_step_completed is not None:
            mark_step_completed('tickets')

    # ============================== Dialogs ==============================

    def open_add(self) -> None:
        draft = new_draft_for_add(self._state.event, today=self._today())
        dialogs = coordinator.open_add(self._state.dialogs)
        self._open_with_draft(draft, dialogs, adjustments=())

    def open_edit(self, ticket: Ticket) -> None:
        draft = draft_from_ticket(ticket)
        adjustments: tuple[AdjustmentNotice, ...] = ()
        if self._state.event is not None:
            clamped = clamp_sale_start(draft, self._state.event)
            draft, adjustments = clamped.draft, clamped.adjustments
        dialogs = coordinator.open_edit(self._state.dialogs, ticket)
        self._open_with_draft(draft, dialogs, adjustments=adjustments)

    def open_delete(self, ticket: Ticket) -> None:
        self._state = attrs.evolve(
            self._state,
            dialogs=coordinator.open_delete(self._state.dialogs, ticket),
            field_errors={},
        )

    def open_capacity(self) -> None:
        event = self._state.event
        staged = (
            event.capacity_override
            if event is not None and event.capacity_override is not None
            else self._state.ledger.total
        )
        self._state = attrs.evolve(
            self._state,
            dialogs=coordinator.open_capacity(self._state.dialogs),
            capacity_input=staged,
            field_errors={},
        )

    def close_all(self) -> None:
        self._state = attrs.evolve(
            self._state,
            dialogs=coordinator.close_all(self._state.dialogs),
            field_errors={},
        )

    def set_calendar(self, kind: CalendarKind) -> None:
        self._state = attrs.evolve(
            self._state, dialogs=coordinator.set_calendar(self._state.dialogs, kind)
        )

    def set_active_tab(self, tab: TicketTab | str) -> None:
        self._state = attrs.evolve(self._state, active_tab=TicketTab(tab))

    def set_capacity_input(self, value: Optional[int]) -> None:
        self._state = attrs.evolve(self._state, capacity_input=value)

    def update_draft(self, **fields: Any) -> bool:
        """
        Replace draft fields. An unparseable value leaves the draft unchanged
        and is recorded under its field name.
        """
        try:
            draft = update_draft_fields(self._state.draft, **fields)
        except ValidationError as e:
            errors = dict(self._state.field_errors)
            errors[e.field or 'form'] = e.message
            self._state = attrs.evolve(self._state, field_errors=errors)
            return False

        errors = {k: v for k, v in self._state.field_errors.items() if k not in fields}
        self._state = attrs.evolve(self._state, draft=draft, field_errors=errors)
        return True

    def _open_with_draft(
        self,
        draft: TicketDraft,
        dialogs: coordinator.DialogCalendarState,
        *,
        adjustments: tuple[AdjustmentNotice, ...],
    ) -> None:
        # The dialog opens even when the window is inverted; submit rejects it
        if self._state.event is not None:
            try:
                result = reconcile(draft, self._state.event)
                draft = result.draft
                adjustments = adjustments + result.adjustments
            except InvalidWindowError as e:
                self.notifier.error(e.message)

        self._state = attrs.evolve(self._state, draft=draft, dialogs=dialogs, field_errors={})
        self._publish_notices(adjustments)

    def _publish_notices(self, adjustments: tuple[AdjustmentNotice, ...]) -> None:
        self._state = attrs.evolve(self._state, notices=adjustments)
        for notice in adjustments:
            Logger.base.info(f'📝 [RECONCILE] {notice.message}: {notice.previous} -> {notice.adjusted}')
            self.notifier.info(notice.message)

    # ============================== Submissions ==============================

    def _can_submit(self, tag: str) -> bool:
        if self._state.is_submitting:
            Logger.base.warning(f'⚠️ [{tag}] Ignored: another submission is in flight')
            return False
        if self._state.event_id is None or self._state.event is None:
            Logger.base.warning(f'⚠️ [{tag}] Ignored: no event loaded')
            self.notifier.error('Event is not loaded')
            return False
        return True

    def _prepare_submit(self) -> Optional[TicketDraft]:
        """Reconcile and validate the draft; on failure record the field error and return None."""
        try:
            result = reconcile(self._state.draft, self._state.event)
            self._state = attrs.evolve(self._state, draft=result.draft)
            self._publish_notices(result.adjustments)
            validate_draft_for_submit(result.draft)
        except ValidationError as e:
            self._state = attrs.evolve(self._state, field_errors={e.field or 'form': e.message})
            self.notifier.error(e.message)
            return None

        self._state = attrs.evolve(self._state, field_errors={})
        return result.draft

    def _set_submitting(self, value: bool) -> None:
        self._state = attrs.evolve(self._state, is_submitting=value)

    @Logger.io
    async def add_ticket(self) -> Optional[Ticket]:
        if not self._can_submit('ADD_TICKET'):
            return None
        if self._state.dialogs.dialog != DialogKind.ADD:
            Logger.base.warning('⚠️ [ADD_TICKET] Ignored: add dialog is not open')
            return None
        draft = self._prepare_submit()
        if draft is None:
            return None

        self._set_submitting(True)
        try:
            created = await self.repository.create(event_id=self._state.event_id, draft=draft)
        except PersistenceError as e:
            Logger.base.error(f'❌ [ADD_TICKET] {e.message}')
            self.notifier.error('Failed to create ticket')
            return None
        finally:
            self._set_submitting(False)

        self._state = with_ticket_added(self._state, created)
        self._state = attrs.evolve(
            self._state,
            dialogs=coordinator.close_all(self._state.dialogs),
            draft=new_draft_for_add(self._state.event, today=self._today()),
        )
        Logger.base.info(f'✅ [ADD_TICKET] Created ticket {created.id} (capacity={created.capacity})')
        self.notifier.success('Ticket created successfully')
        return created

    @Logger.io
    async def update_ticket(self) -> Optional[Ticket]:
        if not self._can_submit('UPDATE_TICKET'):
            return None
        target = self._state.dialogs.target
        if self._state.dialogs.dialog != DialogKind.EDIT or target is None:
            Logger.base.warning('⚠️ [UPDATE_TICKET] Ignored: no ticket is being edited')
            return None
        draft = self._prepare_submit()
        if draft is None:
            return None

        self._set_submitting(True)
        try:
            updated = await self.repository.update(
                event_id=self._state.event_id, ticket_id=target.id, draft=draft
            )
        except PersistenceError as e:
            Logger.base.error(f'❌ [UPDATE_TICKET] {e.message}')
            self.notifier.error('Failed to update ticket')
            return None
        finally:
            self._set_submitting(False)

        before = self._state.find_ticket(target.id) or target
        self._state = with_ticket_replaced(self._state, before, updated)
        self._state = attrs.evolve(self._state, dialogs=coordinator.close_all(self._state.dialogs))
        Logger.base.info(
            f'✅ [UPDATE_TICKET] Updated ticket {updated.id} '
            f'(capacity {before.capacity} -> {updated.capacity})'
        )
        self.notifier.success('Ticket updated successfully')
        return updated

    @Logger.io
    async def delete_ticket(self) -> bool:
        if not self._can_submit('DELETE_TICKET'):
            return False
        target = self._state.dialogs.target
        if self._state.dialogs.dialog != DialogKind.DELETE or target is None:
            Logger.base.warning('⚠️ [DELETE_TICKET] Ignored: no ticket selected for deletion')
            return False

        self._set_submitting(True)
        try:
            await self.repository.delete(event_id=self._state.event_id, ticket_id=target.id)
        except PersistenceError as e:
            Logger.base.error(f'❌ [DELETE_TICKET] {e.message}')
            self.notifier.error('Failed to delete ticket')
            return False
        finally:
            self._set_submitting(False)

        removed = self._state.find_ticket(target.id) or target
        self._state = with_ticket_removed(self._state, removed)
        self._state = attrs.evolve(self._state, dialogs=coordinator.close_all(self._state.dialogs))
        Logger.base.info(f'✅ [DELETE_TICKET] Deleted ticket {removed.id}')
        self.notifier.success('Ticket deleted successfully')
        return True

    @Logger.io
    async def update_capacity(self) -> bool:
        """
        Persist the staged event-wide capacity cap.

        The cap is stored on the event; the per-ticket ledger is left alone.
        """
        if not self._can_submit('UPDATE_CAPACITY'):
            return False

        value = self._state.capacity_input
        message = None
        if value is None:
            message = 'Capacity is required'
        elif isinstance(value, bool) or not isinstance(value, int):
            message = 'Capacity must be a whole number'
        elif value < 0:
            message = 'Capacity cannot be negative'
        elif value < self._state.total_sold:
            message = f'Capacity cannot be less than tickets already sold ({self._state.total_sold})'
        if message is not None:
            self._state = attrs.evolve(self._state, field_errors={'capacity': message})
            self.notifier.error(message)
            return False

        self._set_submitting(True)
        try:
            refreshed = await self.repository.update_event_capacity(
                event_id=self._state.event_id, total_capacity=value
            )
        except PersistenceError as e:
            Logger.base.error(f'❌ [UPDATE_CAPACITY] {e.message}')
            self.notifier.error('Failed to update capacity')
            return False
        finally:
            self._set_submitting(False)

        event = refreshed or attrs.evolve(self._state.event, capacity_override=value)
        self._state = attrs.evolve(
            self._state,
            event=event,
            dialogs=coordinator.close_all(self._state.dialogs),
            field_errors={},
        )
        Logger.base.info(f'✅ [UPDATE_CAPACITY] Event {event.id} capacity set to {value}')
        self.notifier.success('Capacity updated successfully')
        return True

    def cancel_pending(self) -> bool:
        """Abort the in-flight submission; it fails like any other persistence error."""
        cancelled = self.repository.cancel_pending()
        if cancelled:
            Logger.base.info('🛑 [CANCEL] Pending request cancelled')
        return cancelled
