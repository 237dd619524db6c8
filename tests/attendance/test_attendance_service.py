from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Sequence

import pytest

from src.dayflow.dayflow.attendance.model import AttendanceRecord
from src.dayflow.dayflow.attendance.service import AttendanceService
from src.dayflow.dayflow.core.exceptions import PersistenceWarning, ValidationError

UTC = timezone.utc


class InMemoryAttendance:
    def __init__(self, records: Sequence[AttendanceRecord] = ()):
        self._by_key: dict[tuple[str, date], AttendanceRecord] = {
            (r.employee_id, r.work_date): r for r in records
        }
        self.writes = 0

    def list_all(self):
        return list(self._by_key.values())

    def upsert(self, record: AttendanceRecord) -> None:
        self.writes += 1
        self._by_key[(record.employee_id, record.work_date)] = record


class BrokenAttendance(InMemoryAttendance):
    def upsert(self, record: AttendanceRecord) -> None:
        raise PersistenceWarning("disk full")


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_check_in_and_out_are_written_through():
    repo = InMemoryAttendance()
    clock = FakeClock(datetime(2024, 1, 4, 8, 0, tzinfo=UTC))
    svc = AttendanceService(repo, clock=clock)

    svc.check_in("emp-1")
    clock.now = datetime(2024, 1, 4, 9, 45, tzinfo=UTC)
    assert svc.get_session("emp-1").elapsed_label == "1h 45m"

    svc.check_out("emp-1")
    stored = repo.list_all()[0]
    assert stored.check_out == clock.now
    assert stored.total_hours == 1.75
    assert repo.writes == 2


def test_duplicate_check_in_is_reported_and_not_written():
    repo = InMemoryAttendance()
    svc = AttendanceService(repo, clock=FakeClock(datetime(2024, 1, 4, 8, 0, tzinfo=UTC)))
    svc.check_in("emp-1")

    with pytest.raises(ValidationError):
        svc.check_in("emp-1")
    assert repo.writes == 1


def test_loads_existing_records_at_startup():
    existing = AttendanceRecord(
        employee_id="emp-1",
        work_date=date(2024, 1, 4),
        check_in=datetime(2024, 1, 4, 7, 30),
    )
    svc = AttendanceService(
        InMemoryAttendance([existing]),
        clock=FakeClock(datetime(2024, 1, 4, 8, 0, tzinfo=UTC)),
    )
    session = svc.get_session("emp-1")
    assert session.is_checked_in is True
    assert session.elapsed_label == "30m"


def test_persistence_failure_keeps_in_memory_state(caplog):
    svc = AttendanceService(BrokenAttendance(), clock=FakeClock(datetime(2024, 1, 4, 8, 0, tzinfo=UTC)))

    with caplog.at_level("WARNING"):
        record = svc.check_in("emp-1")

    assert record.check_in is not None
    assert svc.get_today_record("emp-1") == record
    assert "kept in memory only" in caplog.text


def test_history_uses_clock_day():
    svc = AttendanceService(InMemoryAttendance(), clock=FakeClock(datetime(2024, 1, 4, 8, 0, tzinfo=UTC)))
    rows = svc.get_history("emp-1", days=5)
    assert len(rows) == 5
    assert rows[0].work_date == date(2024, 1, 4)
