from datetime import date

import pytest

from booking_api.errors import StaffNotFoundError, ValidationError
from booking_api.models.generated import Reservations, Tenants
from booking_api.services.scheduling import AvailabilityEvaluator, BlockReason, CandidateInterval
from booking_api.services.scheduling.reservation_index import ReservationIndex
from booking_api.services.scheduling.resolver import ScheduleResolver
from booking_api.services.scheduling.types import Weekday

TUESDAY = date(2026, 10, 20)
WEDNESDAY = date(2026, 10, 21)
SUNDAY = date(2026, 10, 25)
LISA, TOM, ANNA, PAUL = 1, 2, 3, 4


@pytest.fixture
def evaluator(db):
    return AvailabilityEvaluator(db, tenant_id=1)


def check(evaluator, target_date, time, duration=None, employee=None):
    staff = evaluator.resolve_staff(employee)
    return evaluator.check(evaluator.build_candidate(target_date, time, duration, staff))


# ── Roster ───────────────────────────────────────────────────────────────

def test_active_staff_in_display_order(db):
    names = ScheduleResolver(db, 1).roster_names()
    assert names == ["Lisa Maier", "Tom Becker", "Anna Schmidt"]


@pytest.mark.parametrize("name", ["Lisa Maier", "lisa maier", "  LISA  ", "maier"])
def test_find_staff_exact_or_unique_partial(db, name):
    assert ScheduleResolver(db, 1).find_staff(name).id == LISA


@pytest.mark.parametrize("name", ["Zoe", "er", "Paul Alt"])
def test_find_staff_unknown_ambiguous_or_inactive(db, name):
    with pytest.raises(StaffNotFoundError) as exc_info:
        ScheduleResolver(db, 1).find_staff(name)
    assert exc_info.value.available_employees == ["Lisa Maier", "Tom Becker", "Anna Schmidt"]
    assert exc_info.value.to_dict()["error"] == "EMPLOYEE_NOT_FOUND"


def test_roster_is_tenant_scoped(db):
    assert ScheduleResolver(db, 2).roster_names() == ["Lisa"]


def test_working_windows_tell_off_from_unconfigured(db):
    resolver = ScheduleResolver(db, 1)
    windows, configured = resolver.working_windows(Weekday.TUESDAY, [LISA, ANNA])
    assert windows[LISA].start == 540 and windows[LISA].end == 1020
    assert windows[ANNA] is None
    assert configured == {LISA, ANNA}

    windows, configured = resolver.working_windows(Weekday.SUNDAY, [LISA])
    assert windows[LISA] is None
    assert configured == set()


def test_closed_weekday(db):
    resolver = ScheduleResolver(db, 1)
    assert resolver.is_weekday_closed(Weekday.SUNDAY)
    assert not resolver.is_weekday_closed(Weekday.MONDAY)
    assert not ScheduleResolver(db, 2).is_weekday_closed(Weekday.SUNDAY)


def test_exception_lookup(db):
    resolver = ScheduleResolver(db, 1)
    assert resolver.is_exception_blocking(LISA, WEDNESDAY, 780, 810)
    assert not resolver.is_exception_blocking(LISA, WEDNESDAY, 840, 900)
    assert not resolver.is_exception_blocking(TOM, WEDNESDAY, 780, 810)


def test_opening_window_tenant_override(db):
    resolver = ScheduleResolver(db, 1)
    assert (resolver.opening_window().start, resolver.opening_window().end) == (540, 1080)

    tenant = db.get(Tenants, 1)
    tenant.opening_time = "08:00"
    db.commit()
    assert resolver.opening_window().start == 480


@pytest.mark.parametrize("opening, closing", [("8 Uhr", "18:00"), ("18:00", "09:00"), ("09:00", "25:00")])
def test_invalid_tenant_opening_hours_fall_back_to_default(db, opening, closing):
    tenant = db.get(Tenants, 1)
    tenant.opening_time = opening
    tenant.closing_time = closing
    db.commit()

    window = ScheduleResolver(db, 1).opening_window()
    assert (window.start, window.end) == (540, 1080)


def test_tenant_may_close_at_midnight(db):
    tenant = db.get(Tenants, 1)
    tenant.closing_time = "24:00"
    db.commit()
    assert ScheduleResolver(db, 1).opening_window().end == 1440


# ── Reservation index ────────────────────────────────────────────────────

def test_index_excludes_cancelled_and_defaults_end(db):
    intervals = ReservationIndex(db, 1).reservations_for(TUESDAY)
    assert [(r.reservation_id, r.start, r.end) for r in intervals] == [
        (1, 600, 660),
        (2, 840, 900),
    ]


def test_index_filters_by_staff(db):
    intervals = ReservationIndex(db, 1).reservations_for(TUESDAY, staff_id=TOM)
    assert [r.reservation_id for r in intervals] == [2]


def test_index_skips_unreadable_rows(db):
    db.add(Reservations(tenant_id=1, customer_name="Kaputt", reservation_date="2026-10-20",
                        reservation_time="morgens", status="confirmed", staff_member_id=LISA))
    db.commit()
    ids = [r.reservation_id for r in ReservationIndex(db, 1).reservations_for(TUESDAY)]
    assert ids == [1, 2]


def test_index_end_before_start_uses_default_duration(db):
    db.add(Reservations(id=20, tenant_id=1, customer_name="Rück Wärts", reservation_date="2026-10-22",
                        reservation_time="12:00", end_time="11:00", status="confirmed"))
    db.commit()
    [interval] = ReservationIndex(db, 1).reservations_for(date(2026, 10, 22))
    assert (interval.start, interval.end) == (720, 780)


# ── Availability ─────────────────────────────────────────────────────────

def test_staff_slot_taken(evaluator):
    result = check(evaluator, TUESDAY, "10:30", 30, "Lisa")
    assert not result.available
    assert result.block_reason is BlockReason.RESERVATION_CONFLICT
    assert [c.reservation_id for c in result.conflicts] == [1]


def test_staff_slot_free(evaluator):
    result = check(evaluator, TUESDAY, "11:00", 30, "Lisa")
    assert result.available
    assert result.block_reason is BlockReason.NONE


def test_closed_day(evaluator):
    assert check(evaluator, SUNDAY, "10:00", employee="Lisa").block_reason is BlockReason.CLOSED_DAY
    assert check(evaluator, SUNDAY, "10:00").block_reason is BlockReason.CLOSED_DAY


def test_outside_shift(evaluator):
    assert check(evaluator, TUESDAY, "17:00", 30, "Lisa").block_reason is BlockReason.STAFF_OFF
    assert check(evaluator, TUESDAY, "16:30", 60, "Lisa").block_reason is BlockReason.STAFF_OFF
    assert check(evaluator, TUESDAY, "11:00", 30, "Anna").block_reason is BlockReason.STAFF_OFF


def test_shift_exception(evaluator):
    assert check(evaluator, WEDNESDAY, "12:30", 30, "Lisa").block_reason is BlockReason.EXCEPTION
    assert check(evaluator, WEDNESDAY, "14:00", 30, "Lisa").available


def test_reservation_without_end_time_occupies_default_duration(evaluator):
    assert check(evaluator, TUESDAY, "14:30", 30, "Tom").block_reason is BlockReason.RESERVATION_CONFLICT
    assert check(evaluator, TUESDAY, "15:00", 30, "Tom").available


def test_cancelled_reservation_frees_its_slot(evaluator):
    assert check(evaluator, TUESDAY, "15:00", 60, "Lisa").available


def test_without_staff_checks_whole_day(evaluator):
    # Tom's reservation blocks a request without staff
    assert check(evaluator, TUESDAY, "14:00", 30).block_reason is BlockReason.RESERVATION_CONFLICT
    assert check(evaluator, TUESDAY, "12:00", 30).available
    # outside every shift, yet no staff rule applies
    assert check(evaluator, TUESDAY, "20:00", 30).available


def test_other_tenant_reservations_are_invisible(evaluator):
    # tenant 2 has a reservation at 11:00
    assert check(evaluator, TUESDAY, "11:00", 60, "Lisa").available


def test_default_duration_is_applied(evaluator):
    candidate = evaluator.build_candidate(TUESDAY, "11:00")
    assert candidate.duration == 60
    assert candidate.end == 720


def test_check_is_repeatable(evaluator, db):
    first = check(evaluator, TUESDAY, "10:00", 60, "Lisa")
    second = check(AvailabilityEvaluator(db, 1), TUESDAY, "10:00", 60, "Lisa")
    assert first.block_reason is second.block_reason
    assert first.conflicts == second.conflicts


def test_unknown_staff_raises(evaluator):
    with pytest.raises(StaffNotFoundError):
        check(evaluator, TUESDAY, "10:00", employee="Zoe")


def test_inactive_staff_id_raises(evaluator):
    with pytest.raises(StaffNotFoundError):
        evaluator.check(CandidateInterval(TUESDAY, 600, 60, PAUL))


@pytest.mark.parametrize("time, duration", [("23:30", 60), ("23:01", 60), ("10:00", 0), ("10:00", -15)])
def test_invalid_candidates(evaluator, time, duration):
    with pytest.raises(ValidationError):
        evaluator.build_candidate(TUESDAY, time, duration)


def test_latest_valid_candidate_ends_at_midnight(evaluator):
    assert evaluator.build_candidate(TUESDAY, "23:00", 60).end == 1440
