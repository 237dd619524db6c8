from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_due_date
from ..common.validators import require_non_empty
from ..core.enums import TaskStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Task:
    """Read-only view of a tracked task; owned by the task tracker, never mutated here."""

    task_id: str
    title: str
    status: str
    due_date: Optional[date] = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Task":
        raw_id = data.get("id")
        due = data.get("dueDate", data.get("due_date"))
        try:
            due_date = parse_due_date(due) if due else None
        except ValueError:
            raise ValidationError(f"Invalid due date: {due!r}") from None
        return cls(
            task_id=require_non_empty("" if raw_id is None else str(raw_id), "Task id"),
            title=str(data.get("title", "")),
            status=str(data.get("status", "")).upper(),
            due_date=due_date,
        )
