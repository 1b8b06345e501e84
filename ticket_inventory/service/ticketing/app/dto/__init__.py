"""Application layer DTOs"""

from ticket_inventory.service.ticketing.app.dto.ticket_listing import TicketListing

__all__ = ['TicketListing']
