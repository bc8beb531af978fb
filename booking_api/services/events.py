"""
booking_api/services/events.py

Booking side effects: a notification row for the business owner's dashboard
and an event pushed to Redis for external delivery (mail, push, n8n, …).

Both are best-effort: a failure is logged and never fails the booking.
"""

import json
import time
import logging

from redis import Redis
from sqlalchemy.orm import Session

from ..models.generated import Notifications, Reservations

logger = logging.getLogger(__name__)

EVENTS_QUEUE = "events:p2p"


def emit_event(redis: Redis | None, event_type: str, payload: dict) -> bool:
    """
    Emit a p2p event (instant delivery).

    Pushed to Redis list `events:p2p` for the consumer loop.
    Returns False when the event was not delivered to the queue.
    """
    if redis is None:
        logger.debug(f"Redis not configured, event {event_type} not emitted")
        return False

    event = {
        "type": event_type,
        **payload,
        "ts": int(time.time()),
    }
    try:
        redis.rpush(EVENTS_QUEUE, json.dumps(event))
        logger.info(f"Event emitted: {event_type} → {EVENTS_QUEUE}")
        return True
    except Exception as e:
        logger.error(f"Failed to emit event {event_type}: {e}")
        return False


def booking_message(reservation: Reservations, staff_name: str | None) -> str:
    date_str = reservation.reservation_date
    parts = reservation.reservation_date.split("-")
    if len(parts) == 3:
        date_str = f"{parts[2]}.{parts[1]}.{parts[0]}"
    message = (
        f"{reservation.customer_name} hat einen Termin für {reservation.party_size} "
        f"Person(en) am {date_str} um {reservation.reservation_time} Uhr gebucht."
    )
    if staff_name:
        message += f" Mitarbeiter: {staff_name}."
    return message


def record_booking_notification(
    db: Session,
    reservation: Reservations,
    staff_name: str | None = None,
) -> bool:
    """
    Add the "new booking" notification inside a savepoint.

    The reservation and the notification are committed together by the
    caller; if the notification insert fails only the savepoint is rolled back.
    """
    try:
        with db.begin_nested():
            db.add(Notifications(
                tenant_id=reservation.tenant_id,
                title="Neue Reservierung",
                message=booking_message(reservation, staff_name),
                type="info",
                link="/portal/reservations",
            ))
        return True
    except Exception as e:
        logger.error(f"Failed to record notification for reservation {reservation.id}: {e}")
        return False


def reservation_event_payload(reservation: Reservations, staff_name: str | None) -> dict:
    return {
        "tenant_id": reservation.tenant_id,
        "reservation_id": reservation.id,
        "customer_name": reservation.customer_name,
        "reservation_date": reservation.reservation_date,
        "reservation_time": reservation.reservation_time,
        "end_time": reservation.end_time,
        "staff_member_id": reservation.staff_member_id,
        "staff_member_name": staff_name,
        "status": reservation.status,
        "source": reservation.source,
    }
