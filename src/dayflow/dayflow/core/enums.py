from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Day status stored on an attendance record."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    HALF_DAY = "HALF_DAY"
    LEAVE = "LEAVE"


class PresenceStatus(str, Enum):
    """Live status badge for an employee on the current day."""

    ON_LEAVE = "on-leave"
    ACTIVE = "active"
    CHECKED_OUT = "checked-out"
    ABSENT = "absent"
    OFFLINE = "offline"


class NotificationType(str, Enum):
    TASK_ASSIGNED = "task_assigned"
    TASK_STATUS_CHANGED = "task_status_changed"
    TASK_COMMENT = "task_comment"
    TASK_OVERDUE = "task_overdue"
    USER_CREATED = "user_created"
    TASK_DUE_SOON = "task_due_soon"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(str, Enum):
    """Task states as reported by the task tracker."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
