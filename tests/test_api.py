from datetime import date, time

import pytest

from src.labor_time.labor_time.core.logging_config import reset_logging
from src.labor_time.labor_time.main import create_app

MONDAY = date(2025, 3, 3)


@pytest.fixture
def client(world, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    world.add_schedule(1, entry=time(8, 0), exit=time(17, 0), tolerance=10, weekdays=range(1, 6))
    world.add_employee(7, "Ana", site_id=1)
    world.assign(7, 1, date(2025, 1, 1))
    world.day(7, MONDAY, (8, 25), (17, 40))

    app = create_app(container=world.services())
    app.config["TESTING"] = True
    yield app.test_client()
    reset_logging()


def test_day_endpoint(client):
    resp = client.get("/api/attendance/7/days/2025-03-03")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["employee_id"] == 7
    assert body["classification"] == "LATE_COMPENSATED"
    assert body["net_overtime_minutes"] == 15


def test_day_endpoint_rejects_bad_date(client):
    resp = client.get("/api/attendance/7/days/03-03-2025")

    assert resp.status_code == 400
    assert "date" in resp.get_json()["error"]


def test_day_endpoint_rejects_bad_employee_id(client):
    assert client.get("/api/attendance/abc/days/2025-03-03").status_code == 400


def test_period_endpoint(client):
    resp = client.get("/api/attendance/7/period?from=2025-03-03&to=2025-03-07")

    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["days"]) == 5
    assert body["late_days"] == 1
    assert body["compensated_days"] == 1
    assert body["inferred_absences"] == ["2025-03-04", "2025-03-05", "2025-03-06", "2025-03-07"]


def test_period_endpoint_inverted_range_is_400(client):
    resp = client.get("/api/attendance/7/period?from=2025-03-07&to=2025-03-03")

    assert resp.status_code == 400


def test_period_endpoint_requires_both_dates(client):
    assert client.get("/api/attendance/7/period?from=2025-03-03").status_code == 400


def test_dashboard_metrics_endpoint(client):
    resp = client.get("/api/dashboard/metrics?date=2025-03-03&site_id=1")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["present"] == 1
    assert body["late"] == 1
    assert body["top_latecomers"][0]["full_name"] == "Ana"


def test_dashboard_metrics_rejects_bad_site(client):
    assert client.get("/api/dashboard/metrics?date=2025-03-03&site_id=x").status_code == 400


def test_monthly_summary_endpoint(client):
    resp = client.get("/api/dashboard/monthly-summary/7?year=2025&month=3")

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["period"] == "March 2025"
    assert body["tardiness_count"] == 1
    assert body["overtime"] == "00:15"


def test_monthly_summary_unknown_employee_is_404(client):
    assert client.get("/api/dashboard/monthly-summary/99?year=2025&month=3").status_code == 404
