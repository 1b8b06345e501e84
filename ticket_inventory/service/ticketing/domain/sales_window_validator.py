"""
Sales Window Validator

Keeps a ticket's sale window inside the life of its event:
- the sale may not end after the event date
- on the event day it must end at least an hour before the event ends
- the window may only be narrowed toward the event, never widened

Narrowing is applied silently and reported back as AdjustmentNotice values;
an inverted window (start after end) is a hard failure.
"""

import datetime
from enum import StrEnum
from typing import Optional

import attrs

from ticket_inventory.platform.exception.exceptions import InvalidWindowError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.value_object.ticket_draft import TicketDraft


class AdjustmentKind(StrEnum):
    SALE_START_CLAMPED = 'sale_start_clamped'
    SALE_END_CLAMPED = 'sale_end_clamped'
    END_TIME_NARROWED = 'end_time_narrowed'


@attrs.frozen
class AdjustmentNotice:
    kind: AdjustmentKind
    message: str
    previous: str
    adjusted: str


@attrs.frozen
class ReconcileResult:
    draft: TicketDraft
    adjustments: tuple[AdjustmentNotice, ...] = ()


@Logger.io
def reconcile(draft: TicketDraft, event: Event) -> ReconcileResult:
    """
    Narrow the draft's sale window to what is sellable for the event.

    Rules, in order:
    1. sale_end after the event date is clamped to the event date.
    2. On the event day, an end time within an hour of the event's end
       (compared by hour) becomes one hour before the event's end.
    3. sale_start after sale_end raises InvalidWindowError.

    Rules whose dates are missing are skipped; required-field checks happen
    at submit time.
    """
    adjustments: list[AdjustmentNotice] = []

    if event.date is not None and draft.sale_end is not None:
        if draft.sale_end > event.date:
            adjustments.append(
                AdjustmentNotice(
                    kind=AdjustmentKind.SALE_END_CLAMPED,
                    message='Adjusting sale end date to match event date',
                    previous=draft.sale_end.isoformat(),
                    adjusted=event.date.isoformat(),
                )
            )
            draft = attrs.evolve(draft, sale_end=event.date)

        if draft.sale_end == event.date and draft.end_time.hour >= event.end_time.hour - 1:
            narrowed = event.end_time.one_hour_before()
            if narrowed != draft.end_time:
                adjustments.append(
                    AdjustmentNotice(
                        kind=AdjustmentKind.END_TIME_NARROWED,
                        message='Adjusting sale end time to 1 hour before event',
                        previous=str(draft.end_time),
                        adjusted=str(narrowed),
                    )
                )
                draft = attrs.evolve(draft, end_time=narrowed)

    if (
        draft.sale_start is not None
        and draft.sale_end is not None
        and draft.sale_start > draft.sale_end
    ):
        raise InvalidWindowError()

    return ReconcileResult(draft=draft, adjustments=tuple(adjustments))


@Logger.io
def clamp_sale_start(draft: TicketDraft, event: Event) -> ReconcileResult:
    """Pull a sale start that lies after the event back onto the event date."""
    if event.date is None or draft.sale_start is None or draft.sale_start <= event.date:
        return ReconcileResult(draft=draft)
    notice = AdjustmentNotice(
        kind=AdjustmentKind.SALE_START_CLAMPED,
        message='Adjusting sale start date to match event date',
        previous=draft.sale_start.isoformat(),
        adjusted=event.date.isoformat(),
    )
    return ReconcileResult(draft=attrs.evolve(draft, sale_start=event.date), adjustments=(notice,))


# Date-picker predicates


def is_date_after_event(day: datetime.date, event: Optional[Event]) -> bool:
    if event is None or event.date is None:
        return False
    return day > event.date


def is_end_date_disabled(day: datetime.date, event: Optional[Event]) -> bool:
    return is_date_after_event(day, event)


def is_start_date_disabled(
    day: datetime.date, event: Optional[Event], sale_end: Optional[datetime.date]
) -> bool:
    """A start date is off-limits after the event, or on/after the day before the sale end."""
    if is_date_after_event(day, event):
        return True
    if sale_end is not None and day >= sale_end - datetime.timedelta(days=1):
        return True
    return False
