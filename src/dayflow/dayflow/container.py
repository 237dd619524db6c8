from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import now_utc
from .core.constants import DEFAULT_ABSENT_CUTOFF_HOUR, MAX_NOTIFICATIONS, NOTIFICATION_STORAGE_KEY
from .database.connection import DBConfig, DatabaseConnection
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.repository import NotificationRepository
from .notifications.service import NotificationService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: AttendanceRepository
    notifications_repo: NotificationRepository

    attendance_service: AttendanceService
    notification_service: NotificationService


def build_services(
    *,
    attendance_repo: AttendanceRepository,
    notifications_repo: NotificationRepository,
    conn: Optional[DatabaseConnection] = None,
    clock: Callable[[], datetime] = now_utc,
    max_notifications: int = MAX_NOTIFICATIONS,
    absent_cutoff_hour: int = DEFAULT_ABSENT_CUTOFF_HOUR,
) -> Container:
    attendance_service = AttendanceService(attendance_repo, clock=clock, absent_cutoff_hour=absent_cutoff_hour)
    notification_service = NotificationService(notifications_repo, clock=clock, cap=max_notifications)

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        notifications_repo=notifications_repo,
        attendance_service=attendance_service,
        notification_service=notification_service,
    )


def build_container(
    *,
    db_config: dict,
    storage_key: str = NOTIFICATION_STORAGE_KEY,
    max_notifications: int = MAX_NOTIFICATIONS,
    absent_cutoff_hour: int = DEFAULT_ABSENT_CUTOFF_HOUR,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        attendance_repo=MySQLAttendanceRepository(conn),
        notifications_repo=MySQLNotificationRepository(conn, storage_key=storage_key),
        conn=conn,
        max_notifications=max_notifications,
        absent_cutoff_hour=absent_cutoff_hour,
    )
