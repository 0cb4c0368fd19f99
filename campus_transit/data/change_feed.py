"""Per-table change subscriptions backed by a polling thread."""

from __future__ import annotations

from dataclasses import dataclass
import hashlib
import json
import logging
import queue
import threading
import time

from campus_transit.data.backend_client import BackendClient, BackendClientError

logger = logging.getLogger(__name__)

# Column that orders each watched table newest-first.
ORDER_COLUMNS = {
    "bus_tracking": "timestamp",
    "notifications": "created_at",
}
DIGEST_WINDOW = 50


@dataclass(frozen=True)
class ChangeEvent:
    """Signal that a table changed; carries no row diff."""

    table: str
    detected_at: float


class TableSubscription:
    """One open change subscription for a single table.

    A background thread compares a digest of the table's newest rows and row
    count between polls and queues a ``ChangeEvent`` whenever it moves. The
    owner drains the queue from its own refresh routine.
    """

    def __init__(
        self,
        client: BackendClient,
        table: str,
        order_column: str,
        poll_interval_seconds: float,
        window: int = DIGEST_WINDOW,
    ) -> None:
        self._client = client
        self._table = table
        self._order_column = order_column
        self._poll_interval_seconds = poll_interval_seconds
        self._window = window
        self._events: queue.Queue[ChangeEvent] = queue.Queue()
        self._last_digest: str | None = None
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def table(self) -> str:
        return self._table

    @property
    def active(self) -> bool:
        return self._thread is not None and not self._stop_event.is_set()

    def start(self) -> None:
        """Start the background polling thread."""
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run_loop, name=f"changes-{self._table}", daemon=True
        )
        self._thread.start()
        logger.debug("Subscribed to %s changes", self._table)

    def unsubscribe(self) -> None:
        """Stop polling and discard any undelivered events."""
        self._stop_event.set()
        self.drain()
        logger.debug("Unsubscribed from %s changes", self._table)

    def drain(self) -> list[ChangeEvent]:
        """Return and clear all queued change events."""
        events: list[ChangeEvent] = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                return events

    def _run_loop(self) -> None:
        while not self._stop_event.is_set():
            self._poll_once()
            self._stop_event.wait(timeout=self._poll_interval_seconds)

    def _poll_once(self) -> ChangeEvent | None:
        try:
            digest = self._fetch_digest()
        except BackendClientError as exc:
            logger.warning("Change poll for %s failed: %s", self._table, exc)
            return None

        previous, self._last_digest = self._last_digest, digest
        if previous is None or previous == digest or self._stop_event.is_set():
            return None
        event = ChangeEvent(table=self._table, detected_at=time.time())
        self._events.put(event)
        # unsubscribe() may have drained between the check above and the put
        if self._stop_event.is_set():
            self.drain()
            return None
        return event

    def _fetch_digest(self) -> str:
        rows = self._client.select(
            self._table,
            order=self._order_column,
            descending=True,
            limit=self._window,
        )
        total = self._client.count(self._table)
        payload = json.dumps({"count": total, "rows": rows}, sort_keys=True, default=str)
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class ChangeFeed:
    """Factory for table subscriptions sharing one client and poll interval."""

    def __init__(self, client: BackendClient, poll_interval_seconds: float) -> None:
        self._client = client
        self._poll_interval_seconds = poll_interval_seconds

    def subscribe(self, table: str) -> TableSubscription:
        """Open and start a subscription for ``table``."""
        if table not in ORDER_COLUMNS:
            raise ValueError(f"No change feed for table '{table}'")
        subscription = TableSubscription(
            self._client,
            table,
            ORDER_COLUMNS[table],
            self._poll_interval_seconds,
        )
        subscription.start()
        return subscription


__all__ = ["ChangeEvent", "ChangeFeed", "TableSubscription", "ORDER_COLUMNS"]
