from booking_api.models.generated import Tenants

BOOKING = {
    "customer_name": "Jana Neu",
    "reservation_date": "20.10.2026",
    "reservation_time": "11:00",
    "employee": "Lisa",
}


# ── Auth ─────────────────────────────────────────────────────────────────

def test_missing_api_key(client):
    del client.headers["x-api-key"]
    response = client.get("/staff")
    assert response.status_code == 401
    assert response.json()["error"] == "MISSING_API_KEY"


def test_invalid_api_key(client):
    response = client.get("/staff", headers={"x-api-key": "nope"})
    assert response.status_code == 401
    assert response.json()["code"] == "INVALID_API_KEY"


def test_inactive_tenant(client):
    response = client.get("/staff", headers={"x-api-key": "inactive-key"})
    assert response.status_code == 403
    assert response.json()["error"] == "ACCOUNT_INACTIVE"


def test_health_needs_no_key(client):
    del client.headers["x-api-key"]
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] is True


# ── /check ───────────────────────────────────────────────────────────────

def test_check_available(client):
    response = client.get("/check", params={"date": "20.10.2026", "time": "11:00", "employee": "lisa"})
    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert body["block_reason"] == "NONE"
    assert body["default_duration_minutes"] == 60
    assert body["requested"] == {
        "date": "2026-10-20",
        "display_date": "Dienstag, 20.10.2026",
        "time": "11:00",
        "end_time": "12:00",
        "duration": 60,
        "employee": "Lisa Maier",
        "employee_id": 1,
    }
    assert "alternatives" not in body
    assert "verfügbar" in body["message"]


def test_check_taken_slot_is_a_normal_answer(client):
    response = client.get(
        "/check",
        params={"date": "20.10.2026", "time": "10:30", "employee": "Lisa", "duration": 30},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["available"] is False
    assert body["block_reason"] == "RESERVATION_CONFLICT"
    assert body["conflicting_reservations"] == [{
        "id": 1,
        "customer": "Max M.",
        "staff_member_id": 1,
        "start_time": "10:00",
        "time_range": "10:00-11:00",
    }]
    assert body["alternatives"]["same_day_times"] == ["11:00", "09:30", "11:30", "09:00", "12:00"]
    assert body["alternatives"]["same_time_employees"] == ["Tom Becker"]
    assert body["alternatives"]["next_days"][0] == {
        "date": "2026-10-21",
        "display_date": "21.10.2026",
        "time": "10:30",
    }


def test_check_until_midnight(client):
    response = client.get("/check", params={"date": "20.10.2026", "time": "23:00"})
    assert response.status_code == 200
    body = response.json()
    assert body["available"] is True
    assert body["requested"]["end_time"] == "24:00"


def test_check_with_invalid_tenant_opening_hours(client, db):
    tenant = db.get(Tenants, 1)
    tenant.opening_time = "8 Uhr"
    db.commit()

    response = client.get(
        "/check",
        params={"date": "20.10.2026", "time": "10:30", "employee": "Lisa", "duration": 30},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["block_reason"] == "RESERVATION_CONFLICT"
    assert body["alternatives"]["same_day_times"][0] == "11:00"


def test_check_closed_day(client):
    response = client.get("/check", params={"date": "2026-10-25", "time": "10:00"})
    assert response.status_code == 200
    assert response.json()["block_reason"] == "CLOSED_DAY"


def test_check_unknown_employee(client):
    response = client.get("/check", params={"date": "20.10.2026", "time": "10:00", "employee": "Zoe"})
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "EMPLOYEE_NOT_FOUND"
    assert body["available_employees"] == ["Lisa Maier", "Tom Becker", "Anna Schmidt"]


def test_check_malformed_input(client):
    for params in (
        {"date": "20/10/2026", "time": "10:00"},
        {"date": "20.10.2026", "time": "25:00"},
        {"date": "20.10.2026", "time": "23:30"},
        {"date": "20.10.2026", "time": "10:00", "duration": 0},
    ):
        response = client.get("/check", params=params)
        assert response.status_code == 400, params
        assert response.json()["error"] == "VALIDATION_ERROR"


def test_check_missing_parameter(client):
    response = client.get("/check", params={"date": "20.10.2026"})
    assert response.status_code == 400
    assert response.json()["fields"] == ["time"]


# ── /slots, /grid, /staff ────────────────────────────────────────────────

def test_free_slots(client):
    response = client.get("/slots", params={"date": "20.10.2026", "employee": "Lisa"})
    assert response.status_code == 200
    body = response.json()
    assert body["employee"] == "Lisa Maier"
    assert body["total_slots"] == 12
    assert body["available_slots"][:2] == ["09:00", "11:00"]
    assert body["closed_day"] is False


def test_free_slots_on_closed_day(client):
    body = client.get("/slots", params={"date": "25.10.2026"}).json()
    assert body["closed_day"] is True
    assert body["available_slots"] == []
    assert body["message"] == "Keine freien Termine"


def test_grid(client):
    response = client.get("/grid", params={"date": "20.10.2026"})
    assert response.status_code == 200
    body = response.json()
    assert [row["name"] for row in body["staff"]] == ["Lisa Maier", "Tom Becker", "Anna Schmidt"]
    lisa = body["staff"][0]
    assert lisa["shift"] == {"start": "09:00", "end": "17:00"}
    assert lisa["slots"][4] == {
        "time": "10:00",
        "available": False,
        "block_reason": "RESERVATION_CONFLICT",
        "customer_name": "Max Mustermann",
        "reservation_id": 1,
    }


def test_staff_roster_per_tenant(client):
    staff = client.get("/staff").json()
    assert [s["name"] for s in staff] == ["Lisa Maier", "Tom Becker", "Anna Schmidt"]
    assert staff[0] == {"id": 1, "name": "Lisa Maier", "color": "#ef4444", "sort_order": 1}

    other = client.get("/staff", headers={"x-api-key": "other-key"}).json()
    assert [s["name"] for s in other] == ["Lisa"]


# ── /reservations ────────────────────────────────────────────────────────

def test_book(client):
    response = client.post("/reservations", json={**BOOKING, "product_name": "Haarschnitt"})
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True and body["booked"] is True
    assert body["staff_member"] == "Lisa Maier"
    assert body["reservation"]["end_time"] == "11:30"
    assert body["reservation"]["price_paid"] == 35.0
    assert body["reservation"]["status"] == "confirmed"
    assert body["reservation_id"] == body["reservation"]["id"]

    check = client.get("/check", params={"date": "20.10.2026", "time": "11:00", "employee": "Lisa"})
    assert check.json()["available"] is False


def test_book_via_patch(client):
    response = client.patch("/reservations", json=BOOKING)
    assert response.status_code == 201


def test_book_taken_slot(client):
    response = client.post("/reservations", json={**BOOKING, "reservation_time": "10:30", "duration": 30})
    assert response.status_code == 409
    body = response.json()
    assert body["error"] == "TIME_SLOT_OCCUPIED"
    assert body["booked"] is False
    assert body["alternatives"]["same_time_employees"] == ["Tom Becker"]
    assert body["conflicting_reservations"][0]["id"] == 1


def test_book_missing_fields(client):
    response = client.post("/reservations", json={"customer_name": "Jana Neu"})
    assert response.status_code == 400
    assert response.json()["fields"] == ["reservation_date", "reservation_time"]


def test_book_unknown_product(client):
    response = client.post("/reservations", json={**BOOKING, "product_name": "Glatze"})
    assert response.status_code == 400
    assert response.json()["available_products"] == ["Haarschnitt", "Färben"]


def test_book_unknown_employee(client):
    response = client.post("/reservations", json={**BOOKING, "employee": "Zoe"})
    assert response.status_code == 404
    assert response.json()["error"] == "EMPLOYEE_NOT_FOUND"


def test_list_reservations(client):
    body = client.get("/reservations", params={"date": "20.10.2026"}).json()
    assert [(r["id"], r["time_range"], r["status"]) for r in body] == [
        (1, "10:00-11:00", "confirmed"),
        (2, "14:00-15:00", "pending"),
    ]

    tom = client.get("/reservations", params={"date": "20.10.2026", "employee": "Tom"}).json()
    assert [r["id"] for r in tom] == [2]


def test_update_status(client):
    response = client.patch("/reservations/2/status", json={"status": "confirmed"})
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"


def test_update_status_invalid_transition(client):
    response = client.patch("/reservations/3/status", json={"status": "confirmed"})
    assert response.status_code == 400
    assert response.json()["current_status"] == "cancelled"


def test_update_status_unknown_value(client):
    response = client.patch("/reservations/2/status", json={"status": "done"})
    assert response.status_code == 400
    assert response.json()["fields"] == ["status"]


def test_update_status_not_found(client):
    response = client.patch("/reservations/10/status", json={"status": "cancelled"})
    assert response.status_code == 404
    assert response.json()["error"] == "RESERVATION_NOT_FOUND"
