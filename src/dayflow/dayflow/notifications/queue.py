"""Pure transformations of the notification queue.

The queue is newest-first. Every function returns a new tuple and leaves its
input untouched; unknown ids are ignored rather than reported.
"""

from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Tuple

from ..common.datetime_utils import to_iso
from ..core.constants import MAX_NOTIFICATIONS
from .model import Notification, NotificationDraft

Queue = Tuple[Notification, ...]


def _new_id() -> str:
    return str(uuid.uuid4())


def add_notification(
    queue: Iterable[Notification],
    draft: NotificationDraft,
    *,
    now: datetime,
    id_factory: Callable[[], str] = _new_id,
    cap: int = MAX_NOTIFICATIONS,
) -> Queue:
    notification = Notification(
        id=id_factory(),
        type=draft.type,
        title=draft.title,
        message=draft.message,
        timestamp=to_iso(now),
        read=False,
        task_id=draft.task_id,
        user_id=draft.user_id,
        priority=draft.priority,
    )
    return ((notification,) + tuple(queue))[:cap]


def mark_read(queue: Iterable[Notification], notification_id: str) -> Queue:
    return tuple(
        replace(n, read=True) if n.id == notification_id and not n.read else n
        for n in queue
    )


def mark_all_read(queue: Iterable[Notification]) -> Queue:
    return tuple(n if n.read else replace(n, read=True) for n in queue)


def remove(queue: Iterable[Notification], notification_id: str) -> Queue:
    return tuple(n for n in queue if n.id != notification_id)


def clear_all(queue: Iterable[Notification]) -> Queue:
    return ()


def unread_count(queue: Iterable[Notification]) -> int:
    return sum(1 for n in queue if not n.read)
