# booking_api/services/messages.py
"""
Human-readable (German) answers for the voice agent.
"""

from .scheduling.timeutils import format_date_de
from .scheduling.types import AvailabilityResult, BlockReason

_REASONS = {
    BlockReason.CLOSED_DAY: "an diesem Tag ist geschlossen",
    BlockReason.STAFF_OFF: "außerhalb der Arbeitszeit",
    BlockReason.EXCEPTION: "Mitarbeiter ist freigestellt",
    BlockReason.RESERVATION_CONFLICT: "bereits belegt",
}


def _with_staff(staff_name: str | None) -> str:
    return f" bei {staff_name}" if staff_name else ""


def availability_message(result: AvailabilityResult, staff_name: str | None = None) -> str:
    candidate = result.candidate
    when = f"{format_date_de(candidate.date)} um {candidate.time} Uhr"
    if result.available:
        return f"Der Termin am {when} ist verfügbar{_with_staff(staff_name)}."
    reason = _REASONS.get(result.block_reason, "nicht verfügbar")
    return f"Der Termin am {when} ist leider nicht verfügbar{_with_staff(staff_name)} ({reason})."


def slots_message(count: int, staff_name: str | None = None) -> str:
    if count:
        return f"{count} freie Termine{_with_staff(staff_name)}"
    return f"Keine freien Termine{_with_staff(staff_name)}"


def booked_message(result: AvailabilityResult, staff_name: str | None = None) -> str:
    candidate = result.candidate
    return (
        f"Der Termin am {format_date_de(candidate.date)} um {candidate.time} Uhr "
        f"wurde{_with_staff(staff_name)} gebucht."
    )
