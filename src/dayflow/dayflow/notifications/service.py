from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from ..common.datetime_utils import now_utc
from ..core.constants import MAX_NOTIFICATIONS
from ..core.exceptions import PersistenceWarning
from ..tasks.model import Task
from . import queue as ops
from .humanize import relative_time
from .model import Notification, NotificationDraft
from .reconciler import reconcile_overdue
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    """Process-wide notification queue.

    The persisted queue is loaded once at construction; every mutation replaces the
    in-memory tuple under a lock and then writes the full queue back. A failed
    write is logged and does not undo the mutation.
    """

    def __init__(
        self,
        notifications: NotificationRepository,
        *,
        clock: Callable[[], datetime] = now_utc,
        cap: int = MAX_NOTIFICATIONS,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._repo = notifications
        self._clock = clock
        self._cap = int(cap)
        self._id_factory = id_factory
        self._lock = threading.Lock()
        try:
            loaded = tuple(notifications.load())
        except PersistenceWarning as e:
            logger.warning("Starting with an empty notification queue: %s", e)
            loaded = ()
        self._queue: ops.Queue = loaded[: self._cap]

    @property
    def notifications(self) -> ops.Queue:
        return self._queue

    def unread_count(self) -> int:
        return ops.unread_count(self._queue)

    def relative_time(self, notification: Notification) -> str:
        return relative_time(notification.timestamp, self._clock())

    def _apply(self, transform: Callable[[ops.Queue], ops.Queue]) -> ops.Queue:
        with self._lock:
            self._queue = transform(self._queue)
            try:
                self._repo.save(self._queue)
            except PersistenceWarning as e:
                logger.warning("Notification queue kept in memory only: %s", e)
            return self._queue

    def _add_to(self, queue: ops.Queue, draft: NotificationDraft) -> ops.Queue:
        kwargs = {"cap": self._cap}
        if self._id_factory is not None:
            kwargs["id_factory"] = self._id_factory
        return ops.add_notification(queue, draft, now=self._clock(), **kwargs)

    def add(self, draft: NotificationDraft) -> Notification:
        return self._apply(lambda q: self._add_to(q, draft))[0]

    def mark_read(self, notification_id: str) -> ops.Queue:
        return self._apply(lambda q: ops.mark_read(q, notification_id))

    def mark_all_read(self) -> ops.Queue:
        return self._apply(ops.mark_all_read)

    def remove(self, notification_id: str) -> ops.Queue:
        return self._apply(lambda q: ops.remove(q, notification_id))

    def clear_all(self) -> ops.Queue:
        return self._apply(ops.clear_all)

    def run_sweep(self, tasks: Iterable[Task]) -> List[Notification]:
        """Reconcile the task list and add whatever the sweep produces."""

        tasks = list(tasks)
        added: List[Notification] = []

        def sweep(queue: ops.Queue) -> ops.Queue:
            for draft in reconcile_overdue(tasks, queue, self._clock()):
                queue = self._add_to(queue, draft)
                added.append(queue[0])
            return queue

        if tasks:
            self._apply(sweep)
        logger.info("Sweep over %d tasks added %d notifications", len(tasks), len(added))
        return added
