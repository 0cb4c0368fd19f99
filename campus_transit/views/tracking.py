"""Live bus tracking for every active route."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from campus_transit.data.backend_client import BackendClient, BackendClientError
from campus_transit.data.change_feed import ChangeFeed, TableSubscription
from campus_transit.data.records import Route, TrackingSample
from campus_transit.views.directory import RouteDirectory

logger = logging.getLogger(__name__)

TRACKING_TABLE = "bus_tracking"


@dataclass(frozen=True)
class RouteTracking:
    """A route paired with its most recent tracking sample, if any."""

    route: Route
    tracking: TrackingSample | None


class TrackingViewer:
    """Latest position per active route, re-fetched on every table change."""

    def __init__(self, client: BackendClient, directory: RouteDirectory, feed: ChangeFeed) -> None:
        self._client = client
        self._directory = directory
        self._feed = feed
        self._subscription: TableSubscription | None = None
        self.routes: list[RouteTracking] = []
        self.selected_route_id: str | None = None
        self.loaded = False

    def mount(self) -> None:
        self.refresh()
        self._subscription = self._feed.subscribe(TRACKING_TABLE)

    def unmount(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    def refresh(self) -> None:
        """Re-fetch every active route and its latest sample."""
        self.routes = [
            RouteTracking(route=route, tracking=self._latest_sample(route.id))
            for route in self._directory.active_routes()
        ]
        self.loaded = True

    def refresh_if_changed(self) -> bool:
        """Drain queued change events; one full refresh covers all of them."""
        if self._subscription is None or not self._subscription.drain():
            return False
        self.refresh()
        return True

    def select_route(self, route_id: str | None) -> None:
        self.selected_route_id = route_id or None

    @property
    def selected(self) -> RouteTracking | None:
        for item in self.routes:
            if item.route.id == self.selected_route_id:
                return item
        return None

    def _latest_sample(self, route_id: str) -> TrackingSample | None:
        try:
            row = self._client.select_one(
                TRACKING_TABLE,
                filters={"route_id": route_id},
                order="timestamp",
                descending=True,
            )
        except BackendClientError as exc:
            logger.warning("Error fetching tracking for route %s: %s", route_id, exc)
            return None
        return TrackingSample.from_row(row) if row else None


__all__ = ["RouteTracking", "TrackingViewer", "TRACKING_TABLE"]
