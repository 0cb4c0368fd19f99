"""Read-only route and stop directory."""

from __future__ import annotations

import logging

from campus_transit.data.backend_client import BackendClient, BackendClientError
from campus_transit.data.records import Route, Stop
from campus_transit.logic.schedule import order_stops

logger = logging.getLogger(__name__)


class RouteDirectory:
    """Active routes and their ordered stops."""

    def __init__(self, client: BackendClient) -> None:
        self._client = client

    def active_routes(self) -> list[Route]:
        """Active routes ordered by route code; empty on failure."""
        try:
            rows = self._client.select(
                "bus_routes", filters={"is_active": True}, order="route_code"
            )
        except BackendClientError as exc:
            logger.warning("Error fetching routes: %s", exc)
            return []
        return [Route.from_row(row) for row in rows]

    def stops_for(self, route_id: str) -> list[Stop]:
        """Stops of a route in stop_order; empty on failure."""
        try:
            rows = self._client.select(
                "bus_stops", filters={"route_id": route_id}, order="stop_order"
            )
        except BackendClientError as exc:
            logger.warning("Error fetching stops for route %s: %s", route_id, exc)
            return []
        return order_stops(Stop.from_row(row) for row in rows)


__all__ = ["RouteDirectory"]
