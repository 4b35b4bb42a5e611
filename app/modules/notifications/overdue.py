# app/modules/notifications/overdue.py
"""
Overdue-payment reminders derived from bookings.

Reminders are rebuilt from scratch on every refresh and never persisted, so
the read flag only lives as long as the list that carries it.
"""
from datetime import datetime, date, time, timezone
from typing import Iterable, List, Optional, Union
import math

from app.config.settings import settings
from app.shared.formatting import format_amount
from .schemas import BookingRead, OverdueMessage

SECONDS_PER_DAY = 24 * 60 * 60

def _as_utc(value: Union[date, datetime]) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

def days_overdue(end_date: Union[date, datetime], now: datetime) -> int:
    """Whole days past end_date, rounded up"""
    elapsed = (_as_utc(now) - _as_utc(end_date)).total_seconds()
    return math.ceil(elapsed / SECONDS_PER_DAY)

def derive_overdue_messages(
    bookings: Iterable[BookingRead],
    now: Optional[datetime] = None,
    template: Optional[str] = None
) -> List[OverdueMessage]:
    now = now or datetime.now(timezone.utc)
    template = template or settings.overdue_message_template

    messages = []
    for booking in bookings:
        if booking.end_date is None:
            continue

        diff_days = days_overdue(booking.end_date, now)
        if diff_days <= 0:
            continue

        messages.append(OverdueMessage(
            id=f"overdue-{booking.id}",
            message=template.format(
                booking_code=booking.code_booking,
                days_overdue=diff_days,
                amount=format_amount(booking.remaining_payments)
            ),
            created_at=booking.end_date,
            is_read=False,
            type="overdue",
            amount=booking.remaining_payments,
            days_overdue=diff_days
        ))

    return messages

def mark_as_read(messages: List[OverdueMessage], message_id: str) -> List[OverdueMessage]:
    return [
        msg.model_copy(update={"is_read": True}) if msg.id == message_id else msg
        for msg in messages
    ]

def unread_count(messages: Iterable[OverdueMessage]) -> int:
    return sum(1 for msg in messages if not msg.is_read)
