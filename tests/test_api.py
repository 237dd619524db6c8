from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.dayflow.dayflow.container import build_services
from src.dayflow.dayflow.core.enums import NotificationType
from src.dayflow.dayflow.main import create_app
from src.dayflow.dayflow.notifications.model import Notification


class InMemoryAttendance:
    def __init__(self):
        self.rows = {}

    def list_all(self):
        return list(self.rows.values())

    def upsert(self, record):
        self.rows[(record.employee_id, record.work_date)] = record


class InMemoryNotifications:
    def __init__(self):
        self.stored = []

    def load(self):
        return list(self.stored)

    def save(self, queue):
        self.stored = list(queue)


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture()
def clock():
    return FakeClock(datetime(2024, 1, 4, 8, 0, tzinfo=timezone.utc))


@pytest.fixture()
def client(monkeypatch, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(
        attendance_repo=InMemoryAttendance(),
        notifications_repo=InMemoryNotifications(),
        clock=clock,
    )
    app = create_app(container)
    app.config["TESTING"] = True
    return app.test_client()


def test_check_in_flow(client, clock):
    assert client.get("/api/attendance/emp-1/session").get_json()["isCheckedIn"] is False

    res = client.post("/api/attendance/emp-1/check-in")
    assert res.status_code == 200
    assert res.get_json()["record"]["checkIn"] == "2024-01-04T08:00:00Z"

    again = client.post("/api/attendance/emp-1/check-in")
    assert again.status_code == 409
    assert again.get_json()["success"] is False

    clock.now = datetime(2024, 1, 4, 9, 10, tzinfo=timezone.utc)
    session = client.get("/api/attendance/emp-1/session").get_json()
    assert session["isCheckedIn"] is True
    assert session["elapsedLabel"] == "1h 10m"

    out = client.post("/api/attendance/emp-1/check-out")
    assert out.status_code == 200
    assert out.get_json()["record"]["totalHours"] == pytest.approx(1.17)


def test_check_out_without_check_in_conflicts(client):
    assert client.post("/api/attendance/emp-1/check-out").status_code == 409


def test_presence_and_history(client):
    assert client.get("/api/attendance/emp-1/presence").get_json()["status"] == "offline"

    res = client.post("/api/attendance/emp-1/presence", json=[{"startDate": "2024-01-01", "endDate": "2024-01-05"}])
    assert res.get_json()["status"] == "on-leave"

    bad = client.post("/api/attendance/emp-1/presence", json=[{"startDate": "nope"}])
    assert bad.status_code == 400

    rows = client.get("/api/attendance/emp-1/history?days=7").get_json()
    assert len(rows) == 7
    assert rows[0]["date"] == "2024-01-04"


def test_notification_lifecycle(client):
    created = client.post(
        "/api/notifications",
        json={"type": "task_assigned", "title": "New task", "message": "You got a task", "taskId": "T1", "priority": "high"},
    )
    assert created.status_code == 201
    nid = created.get_json()["notification"]["id"]

    listing = client.get("/api/notifications").get_json()
    assert listing["unreadCount"] == 1
    assert listing["notifications"][0]["relativeTime"] == "just now"

    after_read = client.post(f"/api/notifications/{nid}/read").get_json()
    assert after_read["unreadCount"] == 0

    assert client.post("/api/notifications/missing/read").status_code == 200

    after_delete = client.delete(f"/api/notifications/{nid}").get_json()
    assert after_delete["notifications"] == []


def test_invalid_notification_is_rejected(client):
    res = client.post("/api/notifications", json={"type": "nope", "title": "x", "message": "y"})
    assert res.status_code == 400


def test_sweep_endpoint(client):
    tasks = [
        {"id": "T1", "title": "Report", "status": "PENDING", "dueDate": "2024-01-01"},
        {"id": "T2", "title": "Review", "status": "COMPLETED", "dueDate": "2024-01-01"},
    ]
    first = client.post("/api/notifications/sweep", json=tasks).get_json()
    assert [n["message"] for n in first["added"]] == ['"Report" is overdue by 3 days']

    second = client.post("/api/notifications/sweep", json=tasks).get_json()
    assert second["added"] == []

    assert client.post("/api/notifications/sweep", json={"id": "T1"}).status_code == 400


def test_unparseable_stored_timestamp_does_not_break_listing(monkeypatch, clock):
    monkeypatch.setenv("APP_ENV", "testing")
    notifications = InMemoryNotifications()
    notifications.stored = [
        Notification(id="old", type=NotificationType.USER_CREATED, title="t", message="m", timestamp="garbage")
    ]
    container = build_services(attendance_repo=InMemoryAttendance(), notifications_repo=notifications, clock=clock)
    client = create_app(container).test_client()

    res = client.get("/api/notifications")
    assert res.status_code == 200
    assert res.get_json()["notifications"][0]["relativeTime"] == "Invalid Date"
    assert client.post("/api/notifications/old/read").status_code == 200


def test_history_days_is_bounded(client):
    res = client.get("/api/attendance/emp-1/history?days=800000")
    assert res.status_code == 200
    assert len(res.get_json()) == 366


@pytest.mark.parametrize("body", [[1], "text", 5, None])
def test_non_object_notification_body_is_rejected(client, body):
    assert client.post("/api/notifications", json=body).status_code == 400
