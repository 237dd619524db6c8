from __future__ import annotations

from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    """Record store: hands out the full record set and accepts single-row upserts."""

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def upsert(self, record: AttendanceRecord) -> None:
        """Insert or replace the row keyed by (employee_id, work_date)."""

        raise NotImplementedError
