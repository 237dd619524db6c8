"""Overdue / due-soon sweep over the task list.

Duplicates are suppressed per UTC calendar day with explicit composite keys
``(type, task_id, day)``. Notifications with no task id never produce a key, so
they cannot shadow an unrelated task.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, List, Set, Tuple

from ..common.datetime_utils import calendar_day, parse_iso_datetime
from ..core.constants import DUE_SOON_WINDOW_DAYS
from ..core.enums import NotificationType, Priority
from ..tasks.model import Task
from .model import Notification, NotificationDraft

DedupKey = Tuple[NotificationType, str, date]

SWEEP_TYPES = (NotificationType.TASK_OVERDUE, NotificationType.TASK_DUE_SOON)


def notified_keys(queue: Iterable[Notification]) -> Set[DedupKey]:
    keys: Set[DedupKey] = set()
    for n in queue:
        if n.type not in SWEEP_TYPES or not n.task_id:
            continue
        try:
            day = calendar_day(parse_iso_datetime(n.timestamp))
        except ValueError:
            continue
        keys.add((n.type, n.task_id, day))
    return keys


def overdue_draft(task: Task, days_overdue: int) -> NotificationDraft:
    plural = "s" if days_overdue > 1 else ""
    return NotificationDraft(
        type=NotificationType.TASK_OVERDUE,
        title="Task Overdue",
        message=f'"{task.title}" is overdue by {days_overdue} day{plural}',
        task_id=task.task_id,
        priority=Priority.HIGH,
    )


def due_soon_draft(task: Task) -> NotificationDraft:
    return NotificationDraft(
        type=NotificationType.TASK_DUE_SOON,
        title="Due Soon",
        message=f'"{task.title}" is due today',
        task_id=task.task_id,
        priority=Priority.MEDIUM,
    )


def reconcile_overdue(tasks: Iterable[Task], queue: Iterable[Notification], now: datetime) -> List[NotificationDraft]:
    today = calendar_day(now)
    due_soon_end = today + timedelta(days=DUE_SOON_WINDOW_DAYS)
    already = notified_keys(queue)

    drafts: List[NotificationDraft] = []
    for task in tasks:
        if task.due_date is None or task.is_completed:
            continue

        if task.due_date < today:
            if (NotificationType.TASK_OVERDUE, task.task_id, today) not in already:
                drafts.append(overdue_draft(task, (today - task.due_date).days))
        elif task.due_date < due_soon_end:
            if (NotificationType.TASK_DUE_SOON, task.task_id, today) not in already:
                drafts.append(due_soon_draft(task))
    return drafts
