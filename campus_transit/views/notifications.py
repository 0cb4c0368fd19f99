"""Notification list with read tracking."""

from __future__ import annotations

from dataclasses import replace
import logging

from campus_transit.data.backend_client import BackendClient, BackendClientError
from campus_transit.data.change_feed import ChangeFeed, TableSubscription
from campus_transit.data.records import Notification

logger = logging.getLogger(__name__)

NOTIFICATIONS_TABLE = "notifications"
NOTIFICATION_LIMIT = 50


class NotificationCenter:
    """Newest notifications first, re-fetched on every table change."""

    def __init__(self, client: BackendClient, feed: ChangeFeed) -> None:
        self._client = client
        self._feed = feed
        self._subscription: TableSubscription | None = None
        self.notifications: list[Notification] = []
        self.loaded = False

    def mount(self) -> None:
        self.refresh()
        self._subscription = self._feed.subscribe(NOTIFICATIONS_TABLE)

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    def refresh(self) -> None:
        try:
            rows = self._client.select(
                NOTIFICATIONS_TABLE,
                order="created_at",
                descending=True,
                limit=NOTIFICATION_LIMIT,
            )
        except BackendClientError as exc:
            logger.warning("Error fetching notifications: %s", exc)
            rows = []
        self.notifications = [Notification.from_row(row) for row in rows]
        self.loaded = True

    def refresh_if_changed(self) -> bool:
        if self._subscription is None or not self._subscription.drain():
            return False
        self.refresh()
        return True

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self.notifications if not item.is_read)

    def mark_read(self, notification_id: str) -> bool:
        """Mark an unread notification read; returns False when nothing changed.

        The local list flips first and is not rolled back if the backend
        update fails.
        """
        index = next(
            (i for i, item in enumerate(self.notifications) if item.id == notification_id),
            None,
        )
        if index is None or self.notifications[index].is_read:
            return False

        self.notifications[index] = replace(self.notifications[index], is_read=True)
        try:
            self._client.update(NOTIFICATIONS_TABLE, {"is_read": True}, {"id": notification_id})
        except BackendClientError as exc:
            logger.warning("Error marking notification %s as read: %s", notification_id, exc)
        return True


__all__ = ["NotificationCenter", "NOTIFICATIONS_TABLE", "NOTIFICATION_LIMIT"]
