import datetime
from decimal import Decimal
from typing import Any, Optional

import attrs

from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime


@attrs.frozen
class TicketDraft:
    """
    Editable staging copy of a ticket's fields (everything except id and sold).

    Dates stay optional because the organizer may clear a date picker while
    editing; submit-time validation rejects a draft without both sale dates.
    """

    name: str = ''
    type: TicketType = TicketType.FREE
    capacity: int = 100
    price: Optional[Decimal] = None
    sale_start: Optional[datetime.date] = None
    sale_end: Optional[datetime.date] = None
    start_time: ClockTime = ClockTime(hour=8, minute=0)
    end_time: ClockTime = ClockTime(hour=17, minute=0)
    min_per_order: int = 1
    max_per_order: int = 10

    def to_payload(self) -> dict[str, Any]:
        """Fields sent to the ticketing service; Free tickets never carry a price."""
        return {
            'name': self.name.strip(),
            'type': self.type,
            'capacity': self.capacity,
            'price': None if self.type == TicketType.FREE else self.price,
            'sale_start': self.sale_start,
            'sale_end': self.sale_end,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'min_per_order': self.min_per_order,
            'max_per_order': self.max_per_order,
        }
