"""
Ticket draft form

Builds the single in-flight draft for the add and edit flows and checks it
before submit. Opening "add" always starts from fresh defaults; opening "edit"
always starts from the selected ticket, so the two flows never leak fields
into each other.
"""

import datetime
from decimal import Decimal
from typing import Any

import attrs

from ticket_inventory.platform.exception.exceptions import DomainError, ValidationError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.ticket_type import TicketType
from ticket_inventory.service.ticketing.domain.value_object.clock_time import ClockTime
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft


DEFAULT_SALE_WINDOW_DAYS = 30
DEFAULT_SALE_END_TIME = ClockTime(hour=17, minute=0)

EDITABLE_FIELDS = frozenset(attrs.fields_dict(TicketDraft))


@Logger.io
def new_draft_for_add(event: Event | None, *, today: datetime.date) -> TicketDraft:
    """Fresh defaults: sell from today until the event day, closing an hour before it ends."""
    if event is not None and event.date is not None:
        sale_end = event.date
        end_time = event.end_time.one_hour_before()
        sale_start = min(today, event.date)
    else:
        sale_end = today + datetime.timedelta(days=DEFAULT_SALE_WINDOW_DAYS)
        end_time = DEFAULT_SALE_END_TIME
        sale_start = today

    return TicketDraft(sale_start=sale_start, sale_end=sale_end, end_time=end_time)


@Logger.io
def draft_from_ticket(ticket: Ticket) -> TicketDraft:
    return TicketDraft(
        name=ticket.name,
        type=ticket.type,
        capacity=ticket.capacity,
        price=ticket.price,
        sale_start=ticket.sale_start,
        sale_end=ticket.sale_end,
        start_time=ticket.start_time,
        end_time=ticket.end_time,
        min_per_order=ticket.min_per_order or 1,
        max_per_order=ticket.max_per_order or 10,
    )


_WHOLE_NUMBER_FIELDS = {
    'capacity': 'Capacity',
    'min_per_order': 'Minimum per order',
    'max_per_order': 'Maximum per order',
}


def _parse_whole_number(field: str, value: Any) -> int:
    label = _WHOLE_NUMBER_FIELDS[field]
    if isinstance(value, bool) or value is None:
        raise ValidationError(f'{label} must be a whole number', field=field)
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValidationError(f'{label} must be a whole number', field=field) from e
    if isinstance(value, float) and number != value:
        raise ValidationError(f'{label} must be a whole number', field=field)
    return number


def _parse_sale_date(field: str, value: Any) -> datetime.date | None:
    # Cleared dates are reported as missing on submit
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        try:
            return datetime.date.fromisoformat(value.strip().split('T')[0])
        except ValueError as e:
            raise ValidationError(f'Invalid {field.replace("_", " ")} date', field=field) from e
    raise ValidationError(f'Invalid {field.replace("_", " ")} date', field=field)


@Logger.io
def update_draft_fields(draft: TicketDraft, **changes: Any) -> TicketDraft:
    """
    Return a copy of the draft with the given fields replaced.

    Clock times may be passed as strings, sale dates as ISO strings, counts as
    anything int() accepts and prices as anything Decimal accepts.

    Raises:
        ValidationError: For an unknown field or an unparseable value.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        field = sorted(unknown)[0]
        raise ValidationError(f'Unknown ticket field: {field}', field=field)

    if 'name' in changes and changes['name'] is not None and not isinstance(changes['name'], str):
        raise ValidationError('Ticket name must be text', field='name')

    for field in _WHOLE_NUMBER_FIELDS:
        if field in changes:
            changes[field] = _parse_whole_number(field, changes[field])

    for field in ('sale_start', 'sale_end'):
        if field in changes:
            changes[field] = _parse_sale_date(field, changes[field])

    for field in ('start_time', 'end_time'):
        if field in changes:
            try:
                changes[field] = ClockTime.parse(changes[field])
            except (DomainError, TypeError) as e:
                raise ValidationError(f'Invalid {field.replace("_", " ")}', field=field) from e

    if 'type' in changes:
        try:
            changes['type'] = TicketType(changes['type'])
        except ValueError as e:
            raise ValidationError('Ticket type must be Free, Paid or Donation', field='type') from e

    if changes.get('price') is not None:
        price = changes['price']
        if isinstance(price, bool):
            raise ValidationError('Price must be a number', field='price')
        try:
            price = price if isinstance(price, Decimal) else Decimal(str(price))
        except ArithmeticError as e:
            raise ValidationError('Price must be a number', field='price') from e
        if not price.is_finite():
            raise ValidationError('Price must be a number', field='price')
        changes['price'] = price

    return attrs.evolve(draft, **changes)


@Logger.io
def validate_draft_for_submit(draft: TicketDraft) -> None:
    """
    Required fields and ticket invariants, checked before any network call.

    Raises:
        ValidationError: On the first offending field.
    """
    if not draft.name or not draft.name.strip():
        raise ValidationError('Ticket name is required', field='name')

    if draft.sale_start is None or draft.sale_end is None:
        raise ValidationError(
            'Sale start and end dates are required',
            field='sale_start' if draft.sale_start is None else 'sale_end',
        )

    if draft.capacity < 0:
        raise ValidationError('Capacity cannot be negative', field='capacity')

    if draft.min_per_order < 1:
        raise ValidationError('Minimum per order must be at least 1', field='min_per_order')

    if draft.max_per_order < draft.min_per_order:
        raise ValidationError(
            'Maximum per order cannot be less than minimum per order', field='max_per_order'
        )

    if draft.type == TicketType.PAID and draft.price is None:
        raise ValidationError('Paid tickets require a price', field='price')

    if draft.type != TicketType.FREE and draft.price is not None and draft.price < 0:
        raise ValidationError('Price cannot be negative', field='price')
