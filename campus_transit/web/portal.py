"""Screen selector: keeps exactly one screen component mounted."""

from __future__ import annotations

import logging
from typing import Any, Callable

from campus_transit.data.backend_client import BackendClient
from campus_transit.data.change_feed import ChangeFeed
from campus_transit.views import (
    AdminConsole,
    NotificationCenter,
    RegistrationSubmitter,
    RouteDirectory,
    ScheduleViewer,
    TrackingViewer,
)

logger = logging.getLogger(__name__)

HOME = "home"
SCREENS = ("home", "register", "tracking", "schedule", "notifications", "admin")


class Portal:
    """Top-level view selector.

    Switching screens unmounts the current component, which closes any change
    subscription it holds, and mounts a fresh one for the new screen.
    """

    def __init__(self, client: BackendClient, feed: ChangeFeed, default_semester: str) -> None:
        directory = RouteDirectory(client)
        self._factories: dict[str, Callable[[], Any]] = {
            "register": lambda: RegistrationSubmitter(client, directory, default_semester),
            "tracking": lambda: TrackingViewer(client, directory, feed),
            "schedule": lambda: ScheduleViewer(client, directory),
            "notifications": lambda: NotificationCenter(client, feed),
            "admin": lambda: AdminConsole(client, directory),
        }
        self.current = HOME
        self.component: Any = None

    def select(self, screen: str) -> Any:
        """Make ``screen`` the mounted screen and return its component."""
        if screen not in SCREENS:
            raise KeyError(screen)
        if screen == self.current:
            return self.component

        self.close()
        self.current = screen
        factory = self._factories.get(screen)
        if factory is not None:
            self.component = factory()
            self.component.mount()
        logger.debug("Screen changed to %s", screen)
        return self.component

    def close(self) -> None:
        """Unmount the current component and return to the home screen."""
        if self.component is not None:
            self.component.unmount()
        self.component = None
        self.current = HOME


__all__ = ["Portal", "SCREENS", "HOME"]
