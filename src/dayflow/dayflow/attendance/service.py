from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Iterable, Optional

from ..common.datetime_utils import calendar_day, now_utc
from ..core.constants import DEFAULT_ABSENT_CUTOFF_HOUR, DEFAULT_HISTORY_DAYS
from ..core.exceptions import PersistenceWarning
from . import session as rules
from .model import AttendanceRecord, AttendanceSession, LeaveSpan, PresenceInfo
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use case: check in/out and read today's session.

    Holds the record set in memory, loaded once at construction. Mutations are
    serialized with a lock and written through to the repository on a best-effort basis.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
        absent_cutoff_hour: int = DEFAULT_ABSENT_CUTOFF_HOUR,
    ):
        self._attendance = attendance
        self._clock = clock
        self._absent_cutoff_hour = int(absent_cutoff_hour)
        self._lock = threading.Lock()
        try:
            self._records: tuple[AttendanceRecord, ...] = tuple(attendance.list_all())
        except PersistenceWarning as e:
            logger.warning("Starting with an empty attendance set: %s", e)
            self._records = ()

    def _persist(self, record: AttendanceRecord) -> None:
        try:
            self._attendance.upsert(record)
        except PersistenceWarning as e:
            logger.warning("Attendance change kept in memory only: %s", e)

    def check_in(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        with self._lock:
            now = now or self._clock()
            self._records, record = rules.check_in(self._records, employee_id, now)
            self._persist(record)
        logger.info("Employee %s checked in at %s", employee_id, now.isoformat())
        return record

    def check_out(self, employee_id: str, *, now: Optional[datetime] = None) -> AttendanceRecord:
        with self._lock:
            now = now or self._clock()
            self._records, record = rules.check_out(self._records, employee_id, now)
            self._persist(record)
        logger.info("Employee %s checked out after %s hours", employee_id, record.total_hours)
        return record

    def get_session(self, employee_id: str) -> AttendanceSession:
        return rules.derive_session(self._records, employee_id, self._clock())

    def get_today_record(self, employee_id: str) -> Optional[AttendanceRecord]:
        return rules.find_record(self._records, employee_id, calendar_day(self._clock()))

    def get_presence(self, employee_id: str, *, leaves: Iterable[LeaveSpan] = ()) -> PresenceInfo:
        return rules.presence_status(
            self._records,
            employee_id,
            self._clock(),
            leaves=leaves,
            absent_cutoff_hour=self._absent_cutoff_hour,
        )

    def get_history(self, employee_id: str, *, days: int = DEFAULT_HISTORY_DAYS):
        return rules.recent_history(self._records, employee_id, calendar_day(self._clock()), days=days)
