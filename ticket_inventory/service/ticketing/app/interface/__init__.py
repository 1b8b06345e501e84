"""Application layer ports"""

from ticket_inventory.service.ticketing.app.interface.i_notifier import INotifier
from ticket_inventory.service.ticketing.app.interface.i_ticket_persistence import (
    ITicketPersistence,
)

__all__ = ['INotifier', 'ITicketPersistence']
