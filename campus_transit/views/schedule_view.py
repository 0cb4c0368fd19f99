"""Weekly schedule and stop list for one route."""

from __future__ import annotations

import logging

from campus_transit.data.backend_client import BackendClient, BackendClientError
from campus_transit.data.records import Route, ScheduleEntry, Stop
from campus_transit.logic.schedule import group_by_day, sort_schedule_entries
from campus_transit.views.directory import RouteDirectory

logger = logging.getLogger(__name__)


class ScheduleViewer:
    """Schedule screen: route choice, sorted weekly entries, ordered stops."""

    def __init__(self, client: BackendClient, directory: RouteDirectory) -> None:
        self._client = client
        self._directory = directory
        self.routes: list[Route] = []
        self.selected_route_id = ""
        self.schedules: list[ScheduleEntry] = []
        self.stops: list[Stop] = []
        self.loaded = False

    def mount(self) -> None:
        self.routes = self._directory.active_routes()
        self.loaded = True
        if self.routes:
            self.select_route(self.routes[0].id)

    def unmount(self) -> None:
        pass

    def select_route(self, route_id: str) -> None:
        if not route_id:
            return
        self.selected_route_id = route_id
        self.schedules = self._fetch_schedules(route_id)
        self.stops = self._directory.stops_for(route_id)

    @property
    def selected_route(self) -> Route | None:
        return next((route for route in self.routes if route.id == self.selected_route_id), None)

    @property
    def days(self) -> list[tuple[str, list[ScheduleEntry]]]:
        return group_by_day(self.schedules)

    def _fetch_schedules(self, route_id: str) -> list[ScheduleEntry]:
        try:
            rows = self._client.select(
                "schedules", filters={"route_id": route_id, "is_active": True}
            )
        except BackendClientError as exc:
            logger.warning("Error fetching schedules for route %s: %s", route_id, exc)
            return []
        return sort_schedule_entries(ScheduleEntry.from_row(row) for row in rows)


__all__ = ["ScheduleViewer"]
