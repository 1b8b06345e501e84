"""Ticketing Domain Value Objects"""

from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft

__all__ = ['ClockTime', 'TicketDraft']
