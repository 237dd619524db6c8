"""Pure derivations over an attendance record set.

Nothing here reads the wall clock or mutates its inputs: callers pass ``now`` and
get back new tuples.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence, Tuple

from ..common.datetime_utils import as_utc, calendar_day
from ..core.constants import DEFAULT_ABSENT_CUTOFF_HOUR, DEFAULT_HISTORY_DAYS, MAX_HISTORY_DAYS
from ..core.enums import AttendanceStatus, PresenceStatus
from ..core.exceptions import ValidationError
from .model import AttendanceHistoryRow, AttendanceRecord, AttendanceSession, LeaveSpan, PresenceInfo


def find_record(records: Iterable[AttendanceRecord], employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
    for record in records:
        if record.employee_id == employee_id and record.work_date == work_date:
            return record
    return None


def format_elapsed(delta: timedelta) -> str:
    minutes_total = max(0, int(delta.total_seconds() // 60))
    hours, minutes = divmod(minutes_total, 60)
    if hours >= 1:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_total_hours(hours: Optional[float]) -> str:
    if not hours:
        return "--"
    whole = int(hours)
    minutes = int(round((hours - whole) * 60))
    if minutes == 60:
        whole, minutes = whole + 1, 0
    return f"{whole}h {minutes}m"


def derive_session(records: Iterable[AttendanceRecord], employee_id: str, now: datetime) -> AttendanceSession:
    record = find_record(records, employee_id, calendar_day(now))
    if not record or record.check_in is None:
        return AttendanceSession(is_checked_in=False, check_in_time=None, elapsed_label="")

    if record.check_out is not None:
        return AttendanceSession(
            is_checked_in=False,
            check_in_time=record.check_in,
            elapsed_label="",
            is_checked_out=True,
            check_out_time=record.check_out,
        )

    return AttendanceSession(
        is_checked_in=True,
        check_in_time=record.check_in,
        elapsed_label=format_elapsed(as_utc(now) - as_utc(record.check_in)),
    )


def _replace_record(
    records: Sequence[AttendanceRecord], old: Optional[AttendanceRecord], new: AttendanceRecord
) -> Tuple[AttendanceRecord, ...]:
    if old is None:
        return tuple(records) + (new,)
    return tuple(new if r is old else r for r in records)


def check_in(
    records: Sequence[AttendanceRecord], employee_id: str, now: datetime
) -> Tuple[Tuple[AttendanceRecord, ...], AttendanceRecord]:
    today = calendar_day(now)
    existing = find_record(records, employee_id, today)
    if existing and existing.check_in is not None:
        raise ValidationError("Already checked in today")

    if existing:
        record = replace(existing, check_in=now, status=AttendanceStatus.PRESENT)
    else:
        record = AttendanceRecord(employee_id=employee_id, work_date=today, check_in=now)
    return _replace_record(records, existing, record), record


def check_out(
    records: Sequence[AttendanceRecord], employee_id: str, now: datetime
) -> Tuple[Tuple[AttendanceRecord, ...], AttendanceRecord]:
    existing = find_record(records, employee_id, calendar_day(now))
    if not existing or existing.check_in is None:
        raise ValidationError("You have not checked in today")
    if existing.check_out is not None:
        raise ValidationError("Already checked out today")

    worked = as_utc(now) - as_utc(existing.check_in)
    if worked < timedelta(0):
        raise ValidationError("Check-out time is earlier than check-in time")

    record = replace(existing, check_out=now, total_hours=round(worked.total_seconds() / 3600, 2))
    return _replace_record(records, existing, record), record


def presence_status(
    records: Iterable[AttendanceRecord],
    employee_id: str,
    now: datetime,
    *,
    leaves: Iterable[LeaveSpan] = (),
    absent_cutoff_hour: int = DEFAULT_ABSENT_CUTOFF_HOUR,
) -> PresenceInfo:
    today = calendar_day(now)
    if any(leave.employee_id == employee_id and leave.covers(today) for leave in leaves):
        return PresenceInfo(status=PresenceStatus.ON_LEAVE, label="On Leave")

    record = find_record(records, employee_id, today)
    if record and record.check_in is not None:
        if record.check_out is not None:
            return PresenceInfo(status=PresenceStatus.CHECKED_OUT, label="Checked Out", checked_in_at=record.check_in)
        return PresenceInfo(status=PresenceStatus.ACTIVE, label="Active", checked_in_at=record.check_in)

    if as_utc(now).hour >= absent_cutoff_hour:
        return PresenceInfo(status=PresenceStatus.ABSENT, label="Absent")
    return PresenceInfo(status=PresenceStatus.OFFLINE, label="Offline")


def recent_history(
    records: Iterable[AttendanceRecord],
    employee_id: str,
    today: date,
    *,
    days: int = DEFAULT_HISTORY_DAYS,
) -> list[AttendanceHistoryRow]:
    by_day = {r.work_date: r for r in records if r.employee_id == employee_id}
    rows = []
    for offset in range(min(max(0, days), MAX_HISTORY_DAYS)):
        day = today - timedelta(days=offset)
        record = by_day.get(day)
        if day.weekday() >= 5 and record is None:
            status = "WEEKEND"
        else:
            status = record.status.value if record else "none"
        rows.append(
            AttendanceHistoryRow(
                work_date=day,
                day_of_week=day.strftime("%a"),
                check_in=record.check_in.strftime("%I:%M %p") if record and record.check_in else "--",
                check_out=record.check_out.strftime("%I:%M %p") if record and record.check_out else "--",
                total_hours=format_total_hours(record.total_hours if record else None),
                status=status,
            )
        )
    return rows
