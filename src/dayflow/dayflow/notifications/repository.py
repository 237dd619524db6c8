from __future__ import annotations

from typing import Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    """Stores the whole queue as one blob; reads and writes are never partial."""

    def load(self) -> Sequence[Notification]:
        raise NotImplementedError

    def save(self, queue: Sequence[Notification]) -> None:
        raise NotImplementedError
