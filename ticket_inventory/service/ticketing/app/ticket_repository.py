"""
Ticket Repository

Boundary between the manager and the ticketing service:
- Runs every call under one cancel scope (optional deadline, explicit cancel)
- Maps service failures to LoadError (initial load) or PersistenceError (writes)
- Never touches manager state; reconciling results is the caller's job
"""

from collections.abc import Awaitable, Callable
import math
from typing import Optional, TypeVar

import anyio

from ticket_inventory.platform.exception.exceptions import (
    CustomBaseError,
    LoadError,
    NotFoundError,
    PersistenceError,
)
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.dto.ticket_listing import TicketListing
from ticket_inventory.service.ticketing.app.interface.i_ticket_persistence import (
    ITicketPersistence,
)
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft


_T = TypeVar('_T')


class TicketRepository:
    def __init__(self, *, persistence: ITicketPersistence, timeout: Optional[float] = None) -> None:
        self.persistence = persistence
        self.timeout = timeout
        self._cancel_scope: Optional[anyio.CancelScope] = None
        self._cancel_requested = False

    @property
    def has_pending_call(self) -> bool:
        return self._cancel_scope is not None

    def cancel_pending(self) -> bool:
        """Abort the in-flight call, if any. Returns whether there was one."""
        if self._cancel_scope is None:
            return False
        self._cancel_requested = True
        self._cancel_scope.cancel()
        return True

    async def _call(self, operation: str, call: Callable[[], Awaitable[_T]]) -> _T:
        deadline = anyio.current_time() + self.timeout if self.timeout is not None else math.inf
        self._cancel_requested = False
        with anyio.CancelScope(deadline=deadline) as scope:
            self._cancel_scope = scope
            try:
                return await call()
            except CustomBaseError as e:
                raise PersistenceError(f'Failed to {operation}: {e.message}', cause=e) from e
            except Exception as e:
                Logger.base.error(f'❌ [REPOSITORY] {operation} failed unexpectedly: {e!r}')
                raise PersistenceError(f'Failed to {operation}: {e}') from e
            finally:
                self._cancel_scope = None

        # Only reached when the scope swallowed a cancellation
        reason = 'was cancelled' if self._cancel_requested else 'timed out'
        Logger.base.warning(f'⚠️ [REPOSITORY] {operation} {reason}')
        raise PersistenceError(f'Request to {operation} {reason}')

    @Logger.io
    async def load(self, *, event_id: str) -> tuple[Event, TicketListing]:
        """
        Load the event and its tickets.

        Raises:
            LoadError: If either could not be fetched.
        """
        try:
            event = await self._call(
                'load event', lambda: self.persistence.get_event(event_id=event_id)
            )
            listing = await self._call(
                'load tickets', lambda: self.persistence.get_tickets(event_id=event_id)
            )
        except PersistenceError as e:
            if isinstance(e.cause, NotFoundError):
                raise LoadError('Event not found') from e
            raise LoadError(e.message) from e
        return event, listing

    @Logger.io
    async def create(self, *, event_id: str, draft: TicketDraft) -> Ticket:
        return await self._call(
            'create ticket',
            lambda: self.persistence.create_ticket(event_id=event_id, data=draft.to_payload()),
        )

    @Logger.io
    async def update(self, *, event_id: str, ticket_id: str, draft: TicketDraft) -> Ticket:
        return await self._call(
            'update ticket',
            lambda: self.persistence.update_ticket(
                event_id=event_id, ticket_id=ticket_id, data=draft.to_payload()
            ),
        )

    @Logger.io
    async def delete(self, *, event_id: str, ticket_id: str) -> None:
        await self._call(
            'delete ticket',
            lambda: self.persistence.delete_ticket(event_id=event_id, ticket_id=ticket_id),
        )

    @Logger.io
    async def update_event_capacity(
        self, *, event_id: str, total_capacity: int
    ) -> Optional[Event]:
        """
        Persist the event-wide capacity cap and return the re-fetched event.

        Returns None when the cap was stored but the event could not be re-fetched.
        """
        await self._call(
            'update capacity',
            lambda: self.persistence.update_event_capacity(
                event_id=event_id, total_capacity=total_capacity
            ),
        )
        try:
            return await self._call(
                'reload event', lambda: self.persistence.get_event(event_id=event_id)
            )
        except PersistenceError as e:
            Logger.base.warning(f'⚠️ [REPOSITORY] Capacity stored but {e.message}')
            return None
