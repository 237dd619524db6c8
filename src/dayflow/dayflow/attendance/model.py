from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, PresenceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day."""

    employee_id: str
    work_date: date
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None
    status: AttendanceStatus = AttendanceStatus.PRESENT
    total_hours: Optional[float] = None


@dataclass(frozen=True)
class AttendanceSession:
    """Derived view of today's record, recomputed on every read."""

    is_checked_in: bool
    check_in_time: Optional[datetime]
    elapsed_label: str
    is_checked_out: bool = False
    check_out_time: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveSpan:
    """Approved leave, inclusive on both ends."""

    employee_id: str
    start_date: date
    end_date: date

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class PresenceInfo:
    status: PresenceStatus
    label: str
    checked_in_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model for the attendance history list."""

    work_date: date
    day_of_week: str
    check_in: str
    check_out: str
    total_hours: str
    status: str
