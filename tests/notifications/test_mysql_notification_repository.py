from __future__ import annotations

import json

import mysql.connector
import pytest

from src.dayflow.dayflow.core.enums import NotificationType, Priority
from src.dayflow.dayflow.core.exceptions import PersistenceWarning
from src.dayflow.dayflow.notifications.model import Notification
from src.dayflow.dayflow.notifications.mysql_notification_repository import MySQLNotificationRepository


class FakeCursor:
    def __init__(self, row=None, error=None):
        self._row = row
        self._error = error
        self.executed = []

    def execute(self, sql, params=None):
        if self._error:
            raise self._error
        self.executed.append((sql, params))

    def fetchone(self):
        return self._row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.cursor = cursor
        self.last = None

    def connect(self):
        self.last = FakeConnection(self.cursor)
        return self.last


def stored(*items) -> dict:
    return {"payload": json.dumps(list(items))}


def entry(**overrides) -> dict:
    data = {
        "id": "n1",
        "type": "task_assigned",
        "title": "New task",
        "message": "You got a task",
        "timestamp": "2024-01-04T08:00:00Z",
        "read": False,
        "taskId": "T1",
        "userId": None,
        "priority": "high",
    }
    data.update(overrides)
    return data


def repo_with(row=None, error=None, key="dayflow-notifications"):
    factory = FakeConnFactory(FakeCursor(row=row, error=error))
    return MySQLNotificationRepository(factory, storage_key=key), factory


def test_load_decodes_stored_queue():
    repo, factory = repo_with(stored(entry(), entry(id="n2", read=True, priority=None)))
    queue = repo.load()

    assert [n.id for n in queue] == ["n1", "n2"]
    assert queue[0].type == NotificationType.TASK_ASSIGNED
    assert queue[0].priority == Priority.HIGH
    assert queue[1].read is True
    assert factory.cursor.executed[0][1] == ("dayflow-notifications",)


def test_load_missing_row_is_empty():
    repo, _ = repo_with(None)
    assert repo.load() == []


def test_bad_entries_are_skipped_and_the_rest_kept(caplog):
    repo, _ = repo_with(
        stored(
            entry(),
            entry(id="n2", type="task_reminder"),
            entry(id="n3", priority="urgent"),
            {"type": "task_comment", "timestamp": "2024-01-04T08:00:00Z"},
            entry(id="n5", timestamp="garbage"),
            42,
            entry(id="n7", type="task_comment"),
        )
    )
    with caplog.at_level("WARNING"):
        queue = repo.load()

    assert [n.id for n in queue] == ["n1", "n7"]
    assert "task_reminder" in caplog.text


def test_corrupted_blob_loads_empty(caplog):
    repo, _ = repo_with({"payload": "{not json"})
    with caplog.at_level("WARNING"):
        assert repo.load() == []
    assert "unreadable" in caplog.text


def test_non_list_blob_loads_empty():
    repo, _ = repo_with({"payload": json.dumps({"id": "n1"})})
    assert repo.load() == []


def test_save_writes_whole_queue_as_one_blob():
    repo, factory = repo_with()
    queue = [
        Notification(
            id="n1",
            type=NotificationType.TASK_OVERDUE,
            title="Task Overdue",
            message='"Report" is overdue by 3 days',
            timestamp="2024-01-04T10:00:00Z",
            task_id="T1",
            priority=Priority.HIGH,
        )
    ]
    repo.save(queue)

    sql, params = factory.cursor.executed[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params[0] == "dayflow-notifications"
    assert json.loads(params[1]) == [queue[0].to_dict()]
    assert factory.last.committed is True

    reloaded, _ = repo_with({"payload": params[1]})
    assert reloaded.load() == queue


def test_driver_errors_become_persistence_warnings():
    repo, factory = repo_with(error=mysql.connector.Error("connection lost"))
    with pytest.raises(PersistenceWarning):
        repo.load()
    with pytest.raises(PersistenceWarning):
        repo.save([])
    assert factory.last.rolled_back is True
