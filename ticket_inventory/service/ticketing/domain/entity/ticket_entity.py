from datetime import date
from decimal import Decimal
from typing import Optional

import attrs

from ticket_inventory.platform.exception.exceptions import DomainError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime


@Logger.io
def validate_non_negative(instance, attribute, value):
    if value < 0:
        raise DomainError(f'{attribute.name} cannot be negative')


@Logger.io
def validate_positive(instance, attribute, value):
    if value < 1:
        raise DomainError(f'{attribute.name} must be at least 1')


@attrs.frozen
class Ticket:
    """A sellable admission type as persisted by the ticketing service."""

    id: str
    name: str
    type: TicketType = attrs.field(validator=attrs.validators.instance_of(TicketType))
    capacity: int = attrs.field(validator=[attrs.validators.instance_of(int), validate_non_negative])
    sale_start: date
    sale_end: date
    start_time: ClockTime
    end_time: ClockTime
    price: Optional[Decimal] = None
    min_per_order: int = attrs.field(default=1, validator=validate_positive)
    max_per_order: int = attrs.field(default=10, validator=validate_positive)
    sold: int = attrs.field(default=0, validator=validate_non_negative)

    @property
    def remaining(self) -> int:
        return max(self.capacity - self.sold, 0)
