from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from booking_api.database import get_db
from booking_api.main import app
from booking_api.models.generated import (
    Base,
    ClosedDays,
    Products,
    Reservations,
    ShiftExceptions,
    StaffMembers,
    StaffShifts,
    TenantApiKeys,
    Tenants,
)
from booking_api.redis_client import get_redis
from booking_api.services.scheduling import get_booking_locks
from booking_api.services.scheduling.locks import LocalBookingLocks

API_KEY = "test-key"
OTHER_KEY = "other-key"
INACTIVE_KEY = "inactive-key"

TUESDAY = date(2026, 10, 20)
WEDNESDAY = date(2026, 10, 21)
SUNDAY = date(2026, 10, 25)

LISA, TOM, ANNA, PAUL = 1, 2, 3, 4


def seed(db):
    """
    Tenant 1 ("Salon Test"):
        Lisa Maier   Mon-Sat 09:00-17:00, off 21.10. 12:00-14:00
        Tom Becker   Mon-Sat 09:00-18:00
        Anna Schmidt Mon-Sat 09:00-18:00 except Tuesday (is_working = 0)
        Paul Alt     inactive
        Sunday closed

    Reservations on Tuesday 20.10.2026:
        1  Lisa 10:00-11:00 confirmed
        2  Tom  14:00 without end time (pending)
        3  Lisa 15:00-16:00 cancelled
    """
    db.add_all([
        Tenants(id=1, name="Salon Test", status="active"),
        Tenants(id=2, name="Other Salon", status="active"),
        Tenants(id=3, name="Closed Salon", status="suspended"),
    ])
    db.flush()
    db.add_all([
        TenantApiKeys(tenant_id=1, api_key=API_KEY),
        TenantApiKeys(tenant_id=2, api_key=OTHER_KEY),
        TenantApiKeys(tenant_id=3, api_key=INACTIVE_KEY),
        ClosedDays(tenant_id=1, weekday=0),
        StaffMembers(id=LISA, tenant_id=1, name="Lisa Maier", color="#ef4444", sort_order=1),
        StaffMembers(id=TOM, tenant_id=1, name="Tom Becker", color="#22c55e", sort_order=2),
        StaffMembers(id=ANNA, tenant_id=1, name="Anna Schmidt", color="#3b82f6", sort_order=3),
        StaffMembers(id=PAUL, tenant_id=1, name="Paul Alt", is_active=0, sort_order=4),
        StaffMembers(id=10, tenant_id=2, name="Lisa", sort_order=1),
    ])
    db.flush()

    for weekday in range(1, 7):
        db.add_all([
            StaffShifts(tenant_id=1, staff_member_id=LISA, day_of_week=weekday,
                        start_time="09:00", end_time="17:00"),
            StaffShifts(tenant_id=1, staff_member_id=TOM, day_of_week=weekday,
                        start_time="09:00", end_time="18:00"),
            StaffShifts(tenant_id=1, staff_member_id=ANNA, day_of_week=weekday,
                        start_time="09:00", end_time="18:00", is_working=0 if weekday == 2 else 1),
            StaffShifts(tenant_id=2, staff_member_id=10, day_of_week=weekday,
                        start_time="09:00", end_time="18:00"),
        ])

    db.add_all([
        ShiftExceptions(tenant_id=1, staff_member_id=LISA, exception_date="2026-10-21",
                        start_time="12:00", end_time="14:00", reason="Arzttermin"),
        Products(id=1, tenant_id=1, name="Haarschnitt", price=35.0, duration_minutes=30),
        Products(id=2, tenant_id=1, name="Färben", price=80.0, duration_minutes=90),
        Products(id=3, tenant_id=1, name="Dauerwelle", price=60.0, duration_minutes=60, is_active=0),
        Reservations(id=1, tenant_id=1, customer_name="Max Mustermann",
                     reservation_date="2026-10-20", reservation_time="10:00", end_time="11:00",
                     status="confirmed", staff_member_id=LISA),
        Reservations(id=2, tenant_id=1, customer_name="Erika Muster",
                     reservation_date="2026-10-20", reservation_time="14:00",
                     status="pending", staff_member_id=TOM),
        Reservations(id=3, tenant_id=1, customer_name="Storno Kunde",
                     reservation_date="2026-10-20", reservation_time="15:00", end_time="16:00",
                     status="cancelled", staff_member_id=LISA),
        Reservations(id=10, tenant_id=2, customer_name="Fremd Kunde",
                     reservation_date="2026-10-20", reservation_time="11:00", end_time="12:00",
                     status="confirmed", staff_member_id=10),
    ])
    db.commit()


@pytest.fixture
def session_factory(tmp_path):
    # file database: the booking race test needs one connection per thread
    engine = create_engine(
        f"sqlite:///{tmp_path / 'booking.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = factory()
    seed(db)
    db.close()

    yield factory
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def locks():
    return LocalBookingLocks(timeout=5.0)


@pytest.fixture
def client(session_factory, locks):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_booking_locks] = lambda: locks
    app.dependency_overrides[get_redis] = lambda: None

    with TestClient(app) as test_client:
        test_client.headers.update({"x-api-key": API_KEY})
        yield test_client

    app.dependency_overrides.clear()
