"""Administrator console: overview counts, registration review, broadcasts."""

from __future__ import annotations

from dataclasses import dataclass
import logging

from campus_transit.data.backend_client import BackendClient, BackendClientError
from campus_transit.data.records import (
    APPROVED,
    NOTIFICATION_TYPES,
    PENDING,
    REJECTED,
    RegistrationSummary,
    Route,
)
from campus_transit.views.directory import RouteDirectory
from campus_transit.views.registration import ERROR, SUCCESS, Banner

logger = logging.getLogger(__name__)

TABS = ("overview", "registrations", "notifications")
RECENT_REGISTRATION_LIMIT = 20
REGISTRATION_COLUMNS = (
    "id,registration_date,status,semester,"
    "students(full_name,email),"
    "bus_routes(route_name,route_code),"
    "bus_stops(stop_name)"
)
NOTIFICATION_SENT_MESSAGE = "Notification sent successfully!"


@dataclass(frozen=True)
class DashboardStats:
    """Overview counts; each one comes from its own query."""

    total_students: int = 0
    total_routes: int = 0
    pending_registrations: int = 0
    active_routes: int = 0


@dataclass(frozen=True)
class NotificationDraft:
    """Compose form for a broadcast notification."""

    title: str = ""
    message: str = ""
    type: str = "general"
    route_id: str = ""


class AdminConsole:
    """Admin screen state shared by the three tabs."""

    def __init__(self, client: BackendClient, directory: RouteDirectory) -> None:
        self._client = client
        self._directory = directory
        self.tab = TABS[0]
        self.stats = DashboardStats()
        self.registrations: list[RegistrationSummary] = []
        self.routes: list[Route] = []
        self.draft = NotificationDraft()
        self.banner: Banner | None = None
        self.loaded = False

    def mount(self) -> None:
        self.load()
        self.routes = self._directory.active_routes()

    def unmount(self) -> None:
        pass

    def select_tab(self, tab: str) -> None:
        if tab in TABS:
            self.tab = tab

    def load(self) -> None:
        """Fetch the overview counts and the recent registrations."""
        self.stats = DashboardStats(
            total_students=self._count("students"),
            total_routes=self._count("bus_routes"),
            pending_registrations=self._count("student_registrations", {"status": PENDING}),
            active_routes=self._count("bus_routes", {"is_active": True}),
        )
        self.registrations = self._recent_registrations()
        self.loaded = True

    def set_registration_status(self, registration_id: str, status: str) -> bool:
        """Approve or reject a pending registration, then reload the dashboard.

        Only rows still pending are updated; returns whether a row changed.
        """
        if status not in (APPROVED, REJECTED):
            raise ValueError(f"Unsupported registration status: {status}")
        try:
            updated = self._client.update(
                "student_registrations",
                {"status": status},
                {"id": registration_id, "status": PENDING},
            )
        except BackendClientError as exc:
            logger.warning("Error updating registration %s: %s", registration_id, exc)
            updated = []
        else:
            logger.info("Registration %s set to %s", registration_id, status)
        self.load()
        return bool(updated)

    def send_notification(self, draft: NotificationDraft) -> Banner:
        """Insert a broadcast notification (no target student)."""
        self.draft = draft
        if not draft.title.strip() or not draft.message.strip():
            self.banner = Banner(ERROR, "Title and message are required")
            return self.banner
        if draft.type not in NOTIFICATION_TYPES:
            self.banner = Banner(ERROR, f"Unknown notification type: {draft.type}")
            return self.banner

        try:
            self._client.insert(
                "notifications",
                {
                    "title": draft.title,
                    "message": draft.message,
                    "type": draft.type,
                    "route_id": draft.route_id or None,
                    "student_id": None,
                },
            )
        except BackendClientError as exc:
            logger.warning("Error sending notification: %s", exc)
            self.banner = Banner(ERROR, str(exc))
            return self.banner

        logger.info("Notification sent: %s", draft.title)
        self.draft = NotificationDraft()
        self.banner = Banner(SUCCESS, NOTIFICATION_SENT_MESSAGE)
        return self.banner

    def take_banner(self) -> Banner | None:
        banner, self.banner = self.banner, None
        return banner

    def _count(self, table: str, filters: dict[str, object] | None = None) -> int:
        try:
            return self._client.count(table, filters)
        except BackendClientError as exc:
            logger.warning("Error counting %s: %s", table, exc)
            return 0

    def _recent_registrations(self) -> list[RegistrationSummary]:
        try:
            rows = self._client.select(
                "student_registrations",
                columns=REGISTRATION_COLUMNS,
                order="registration_date",
                descending=True,
                limit=RECENT_REGISTRATION_LIMIT,
            )
        except BackendClientError as exc:
            logger.warning("Error fetching registrations: %s", exc)
            return []
        return [RegistrationSummary.from_row(row) for row in rows]


__all__ = [
    "AdminConsole",
    "DashboardStats",
    "NotificationDraft",
    "TABS",
    "RECENT_REGISTRATION_LIMIT",
    "NOTIFICATION_SENT_MESSAGE",
]
