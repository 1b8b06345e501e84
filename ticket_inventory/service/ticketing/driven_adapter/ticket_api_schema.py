"""camelCase JSON shapes of the ticketing REST API."""

import datetime
from decimal import Decimal
from typing import Any, List, Optional

import orjson
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ticket_inventory.service.ticketing.app.dto.ticket_listing import TicketListing
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType
from ticket_inventory.service.ticketing.domain.value_object.clock_time import (
    DEFAULT_EVENT_END_TIME,
    ClockTime,
)


def _date_part(value: Any) -> Any:
    # The API sends plain dates as well as full ISO timestamps
    if isinstance(value, str) and 'T' in value:
        return value.split('T', 1)[0]
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TicketWire(_CamelModel):
    id: str = Field(validation_alias=AliasChoices('id', '_id'))
    name: str
    type: TicketType
    capacity: int
    price: Optional[Decimal] = None
    sale_start: datetime.date
    sale_end: datetime.date
    start_time: str
    end_time: str
    min_per_order: Optional[int] = None
    max_per_order: Optional[int] = None
    sold: int = 0

    @field_validator('sale_start', 'sale_end', mode='before')
    @classmethod
    def strip_time(cls, value: Any) -> Any:
        return _date_part(value)

    def to_entity(self) -> Ticket:
        return Ticket(
            id=self.id,
            name=self.name,
            type=self.type,
            capacity=self.capacity,
            price=None if self.type == TicketType.FREE else self.price,
            sale_start=self.sale_start,
            sale_end=self.sale_end,
            start_time=ClockTime.parse(self.start_time),
            end_time=ClockTime.parse(self.end_time),
            min_per_order=self.min_per_order or 1,
            max_per_order=self.max_per_order or 10,
            sold=self.sold,
        )


class TicketListWire(_CamelModel):
    tickets: List[TicketWire] = []
    total_capacity: int = 0

    def to_listing(self) -> TicketListing:
        return TicketListing(
            tickets=tuple(ticket.to_entity() for ticket in self.tickets),
            total_capacity=self.total_capacity,
        )


class EventWire(_CamelModel):
    id: str = Field(validation_alias=AliasChoices('id', '_id'))
    date: Optional[datetime.date] = None
    end_time: Optional[str] = None
    total_capacity: Optional[int] = None

    @field_validator('date', mode='before')
    @classmethod
    def strip_time(cls, value: Any) -> Any:
        return _date_part(value)

    def to_entity(self) -> Event:
        return Event(
            id=self.id,
            date=self.date,
            end_time=ClockTime.parse(self.end_time) if self.end_time else DEFAULT_EVENT_END_TIME,
            capacity_override=self.total_capacity,
        )


class TicketWriteRequest(_CamelModel):
    """Body of POST/PUT ticket requests."""

    name: str
    type: TicketType
    capacity: int
    price: Optional[Decimal] = None
    sale_start: Optional[datetime.date] = None
    sale_end: Optional[datetime.date] = None
    start_time: str
    end_time: str
    min_per_order: int
    max_per_order: int

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> 'TicketWriteRequest':
        return cls(
            name=data['name'],
            type=data['type'],
            capacity=data['capacity'],
            price=data.get('price'),
            sale_start=data.get('sale_start'),
            sale_end=data.get('sale_end'),
            start_time=str(data['start_time']),
            end_time=str(data['end_time']),
            min_per_order=data['min_per_order'],
            max_per_order=data['max_per_order'],
        )

    def to_json_dict(self) -> dict[str, Any]:
        """Dump for orjson, writing the price as an exact JSON number."""
        body = self.model_dump(mode='json', by_alias=True)
        if self.price is not None:
            body['price'] = orjson.Fragment(str(self.price))
        return body
