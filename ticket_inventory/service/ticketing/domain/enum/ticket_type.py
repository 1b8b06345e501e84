from enum import StrEnum


class TicketType(StrEnum):
    FREE = 'Free'
    PAID = 'Paid'
    DONATION = 'Donation'
