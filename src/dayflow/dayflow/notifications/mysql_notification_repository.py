from __future__ import annotations

import json
import logging
from typing import Sequence

import mysql.connector

from ..core.constants import NOTIFICATION_STORAGE_KEY
from ..core.exceptions import PersistenceWarning
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, storage_key: str = NOTIFICATION_STORAGE_KEY):
        self._conn_factory = conn_factory
        self._storage_key = storage_key

    def load(self) -> Sequence[Notification]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT payload FROM notification_queues WHERE storage_key=%s",
                    (self._storage_key,),
                )
                row = fetchone(cur)
        except mysql.connector.Error as e:
            raise PersistenceWarning(f"Could not load notifications: {e}") from e

        if not row:
            return []
        try:
            items = json.loads(row["payload"])
        except (ValueError, TypeError) as e:
            logger.warning("Discarding unreadable notification payload for %s: %s", self._storage_key, e)
            return []
        if not isinstance(items, list):
            logger.warning("Notification payload for %s is not a list", self._storage_key)
            return []

        queue = []
        for position, item in enumerate(items):
            try:
                queue.append(Notification.from_dict(item))
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning("Skipping notification #%d in %s: %s", position, self._storage_key, e)
        return queue

    def save(self, queue: Sequence[Notification]) -> None:
        payload = json.dumps([n.to_dict() for n in queue])
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO notification_queues(storage_key, payload)
                    VALUES(%s,%s)
                    ON DUPLICATE KEY UPDATE payload=VALUES(payload)
                    """,
                    (self._storage_key, payload),
                )
        except mysql.connector.Error as e:
            raise PersistenceWarning(f"Could not save notifications: {e}") from e
