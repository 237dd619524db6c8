from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import require_choice, require_non_empty
from ..core.enums import NotificationType, Priority


@dataclass(frozen=True)
class NotificationDraft:
    """What callers supply; id, timestamp and read flag are assigned on add."""

    type: NotificationType
    title: str
    message: str
    task_id: Optional[str] = None
    user_id: Optional[str] = None
    priority: Optional[Priority] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "NotificationDraft":
        priority = data.get("priority")
        return cls(
            type=require_choice(data.get("type"), NotificationType, "type"),
            title=require_non_empty(data.get("title", ""), "title"),
            message=require_non_empty(data.get("message", ""), "message"),
            task_id=_opt_str(data.get("taskId", data.get("task_id"))),
            user_id=_opt_str(data.get("userId", data.get("user_id"))),
            priority=require_choice(priority, Priority, "priority") if priority else None,
        )


@dataclass(frozen=True)
class Notification:
    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: str
    read: bool = False
    task_id: Optional[str] = None
    user_id: Optional[str] = None
    priority: Optional[Priority] = None

    def to_dict(self) -> dict:
        """Camel-cased payload, the shape the web client and the stored blob use."""

        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "timestamp": self.timestamp,
            "read": self.read,
            "taskId": self.task_id,
            "userId": self.user_id,
            "priority": self.priority.value if self.priority else None,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Notification":
        priority = data.get("priority")
        timestamp = str(data["timestamp"])
        parse_iso_datetime(timestamp)
        return cls(
            id=str(data["id"]),
            type=NotificationType(data["type"]),
            title=str(data.get("title", "")),
            message=str(data.get("message", "")),
            timestamp=timestamp,
            read=bool(data.get("read", False)),
            task_id=_opt_str(data.get("taskId")),
            user_id=_opt_str(data.get("userId")),
            priority=Priority(priority) if priority else None,
        )


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None or value == "" else str(value)
