from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

import mysql.connector

from ..common.datetime_utils import as_utc
from ..core.enums import AttendanceStatus
from ..core.exceptions import PersistenceWarning
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    # MySQL DATETIME has no zone; values are stored as naive UTC.
    return as_utc(value).replace(tzinfo=None) if value is not None else None


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[AttendanceRecord]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT employee_id, work_date, check_in_time, check_out_time, status, total_hours
                    FROM attendance_records
                    ORDER BY work_date, employee_id
                    """
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            raise PersistenceWarning(f"Could not load attendance records: {e}") from e

        return [
            AttendanceRecord(
                employee_id=str(r["employee_id"]),
                work_date=r["work_date"],
                check_in=r.get("check_in_time"),
                check_out=r.get("check_out_time"),
                status=AttendanceStatus(r["status"]),
                total_hours=float(r["total_hours"]) if r.get("total_hours") is not None else None,
            )
            for r in rows
        ]

    def upsert(self, record: AttendanceRecord) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, check_in_time, check_out_time, status, total_hours)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE
                        check_in_time=VALUES(check_in_time),
                        check_out_time=VALUES(check_out_time),
                        status=VALUES(status),
                        total_hours=VALUES(total_hours)
                    """,
                    (
                        record.employee_id,
                        record.work_date,
                        _naive_utc(record.check_in),
                        _naive_utc(record.check_out),
                        record.status.value,
                        record.total_hours,
                    ),
                )
        except mysql.connector.Error as e:
            raise PersistenceWarning(f"Could not save attendance for {record.employee_id}: {e}") from e
