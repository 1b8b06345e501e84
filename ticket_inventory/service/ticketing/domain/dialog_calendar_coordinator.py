"""
Dialog / calendar coordinator

Two-axis exclusive selection: at most one modal dialog and at most one date
picker are open at a time. Every transition is a pure function returning a new
state; the calendar axis is reset whenever the dialog axis changes, so
(NONE, NONE) is both the initial state and where every finished action ends.
"""

from typing import Optional

import attrs

from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.dialog_kind import CalendarKind, DialogKind


@attrs.frozen
class DialogCalendarState:
    dialog: DialogKind = DialogKind.NONE
    calendar: CalendarKind = CalendarKind.NONE
    # Ticket being edited or deleted
    target: Optional[Ticket] = None

    @property
    def is_closed(self) -> bool:
        return self.dialog == DialogKind.NONE and self.calendar == CalendarKind.NONE


CLOSED = DialogCalendarState()


def open_add(state: DialogCalendarState) -> DialogCalendarState:
    return DialogCalendarState(dialog=DialogKind.ADD)


def open_edit(state: DialogCalendarState, ticket: Ticket) -> DialogCalendarState:
    return DialogCalendarState(dialog=DialogKind.EDIT, target=ticket)


def open_delete(state: DialogCalendarState, ticket: Ticket) -> DialogCalendarState:
    return DialogCalendarState(dialog=DialogKind.DELETE, target=ticket)


def open_capacity(state: DialogCalendarState) -> DialogCalendarState:
    return DialogCalendarState(dialog=DialogKind.CAPACITY)


def close_all(state: DialogCalendarState) -> DialogCalendarState:
    return CLOSED


def set_calendar(state: DialogCalendarState, kind: CalendarKind) -> DialogCalendarState:
    # Date pickers only live inside a dialog
    if state.dialog == DialogKind.NONE:
        return state
    # Clicking the open picker's trigger again closes it
    if kind == state.calendar:
        return attrs.evolve(state, calendar=CalendarKind.NONE)
    return attrs.evolve(state, calendar=kind)
