from __future__ import annotations

import importlib
from datetime import timedelta, timezone

import pytest

from timetrack.container import build_container
from timetrack.main import create_app


@pytest.fixture
def app(records_repo, clock, scheduler):
    settings = importlib.import_module("config.testing")
    container = build_container(settings=settings, records_repo=records_repo, scheduler=scheduler, clock=clock)
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["employee_id"] = "emp-1"
        sess["role"] = "staff"
    return client


def test_requires_login(app):
    resp = app.test_client().get("/api/clock/status")

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_clock_cycle_over_http(client, clock, records_repo):
    resp = client.post("/api/clock/in", json={"latitude": 1.5, "longitude": 2.25})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["timer"]["status"] == "active"
    assert body["timer"]["location"] == "1.50000, 2.25000"

    clock.advance(60)
    resp = client.post("/api/breaks/start", json={"type": "Lunch"})
    assert resp.get_json()["timer"]["status"] == "break"

    clock.advance(60)
    resp = client.post("/api/breaks/end")
    assert resp.get_json()["timer"]["status"] == "active"

    clock.advance(3600)
    client.get("/api/clock/status")
    resp = client.post("/api/clock/out")
    record = resp.get_json()["record"]
    assert resp.status_code == 200
    assert record["work_time"] == "1h 1m"
    assert record["break_time"] == "0h 1m"
    assert record["breaks"][0]["type"] == "Lunch"

    status = client.get("/api/clock/status").get_json()
    assert status["timer"]["status"] == "inactive"

    history = client.get("/api/records").get_json()["records"]
    assert [r["record_id"] for r in history] == [record["record_id"]]


def test_status_reports_elapsed_display(client, clock, scheduler):
    client.post("/api/clock/in", json={})
    clock.advance(5400)
    scheduler.run_pending()

    timer = client.get("/api/clock/status").get_json()["timer"]
    assert timer["elapsed_work_seconds"] == 5400
    assert timer["elapsed_display"] == "01:30"


def test_location_error_is_reported_but_shift_runs(client):
    resp = client.post("/api/clock/in", json={"location_error": "permission_denied"})
    body = resp.get_json()

    assert resp.status_code == 200
    assert body["timer"]["status"] == "active"
    assert "Location access denied" in body["message"]


def test_invalid_transitions_are_400(client):
    assert client.post("/api/breaks/start", json={"type": "Lunch"}).status_code == 400
    assert client.post("/api/clock/out").status_code == 400

    client.post("/api/clock/in", json={})
    assert client.post("/api/breaks/start", json={"type": "Nap"}).status_code == 400
    assert client.post("/api/breaks/start", json={"type": "Lunch"}).status_code == 200

    resp = client.post("/api/breaks/start", json={"type": "Salah"})
    assert resp.status_code == 400
    assert "already on Lunch break" in resp.get_json()["message"]


def test_bad_manual_time_is_400(client):
    resp = client.post("/api/clock/in", json={"manual_time": "yesterday"})

    assert resp.status_code == 400


def test_manual_time_backdates(client, fixed_now, clock):
    clock.advance(120)
    resp = client.post("/api/clock/in", json={"manual_time": fixed_now.isoformat()})

    assert resp.get_json()["timer"]["clock_in_time"] == fixed_now.isoformat()


def test_manual_time_with_utc_offset_is_converted_to_local(client, fixed_now, clock):
    clock.advance(120)
    resp = client.post("/api/clock/in", json={"manual_time": fixed_now.astimezone(timezone.utc).isoformat()})

    assert resp.status_code == 200
    assert resp.get_json()["timer"]["clock_in_time"] == fixed_now.isoformat()


def test_manual_time_with_z_suffix_is_accepted(client, fixed_now, clock):
    clock.advance(120)
    stamp = fixed_now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    resp = client.post("/api/clock/in", json={"manual_time": stamp})

    assert resp.status_code == 200
    assert resp.get_json()["timer"]["clock_in_time"] == fixed_now.isoformat()


def test_future_manual_time_is_checked_against_app_clock(client, fixed_now):
    ahead = fixed_now + timedelta(minutes=5)

    assert client.post("/api/clock/in", json={"manual_time": ahead.isoformat()}).status_code == 400
    resp = client.post("/api/clock/in", json={"manual_time": ahead.astimezone(timezone.utc).isoformat()})
    assert resp.status_code == 400
    assert client.get("/api/clock/status").get_json()["timer"]["status"] == "inactive"


def test_persistence_failure_is_503_with_record(client, records_repo, clock):
    client.post("/api/clock/in", json={})
    clock.advance(60)
    records_repo.fail_with = RuntimeError("db down")

    resp = client.post("/api/clock/out")

    assert resp.status_code == 503
    assert resp.get_json()["record"]["work_time"] == "0h 1m"


def test_break_types(client):
    types = client.get("/api/breaks/types").get_json()["types"]

    assert types == ["Salah", "Meeting", "Lunch", "Breakfast", "Break"]


def test_csv_export_is_admin_only(client, clock):
    client.post("/api/clock/in", json={})
    clock.advance(3600)
    client.post("/api/clock/out")

    assert client.get("/api/records.csv").status_code == 403

    with client.session_transaction() as sess:
        sess["role"] = "admin"
    resp = client.get("/api/records.csv")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    assert text.splitlines()[0].startswith('"Employee Name","Employee ID"')
    assert '"emp-1"' in text
    assert '"1.00"' in text


def test_csv_export_uses_employee_name_from_session(client, clock):
    with client.session_transaction() as sess:
        sess["name"] = "Alice Tran"
    client.post("/api/clock/in", json={})
    clock.advance(1800)
    client.post("/api/clock/out")

    with client.session_transaction() as sess:
        sess["employee_id"] = "admin-1"
        sess["role"] = "admin"
        sess["name"] = "Boss"
    text = client.get("/api/records.csv").data.decode("utf-8-sig")

    row = text.splitlines()[1]
    assert row.startswith('"Alice Tran","emp-1"')
