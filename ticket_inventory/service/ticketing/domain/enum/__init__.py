"""Ticketing Domain Enums"""

from ticket_inventory.service.ticketing.domain.enum.dialog_kind import CalendarKind, DialogKind
from ticket_inventory.service.ticketing.domain.enum.ticket_tab import TicketTab
from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType

__all__ = ['CalendarKind', 'DialogKind', 'TicketTab', 'TicketType']
