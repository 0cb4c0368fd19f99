"""Screen components of the portal."""

from campus_transit.views.admin import AdminConsole
from campus_transit.views.directory import RouteDirectory
from campus_transit.views.notifications import NotificationCenter
from campus_transit.views.registration import RegistrationSubmitter
from campus_transit.views.schedule_view import ScheduleViewer
from campus_transit.views.tracking import TrackingViewer

__all__ = [
    "AdminConsole",
    "NotificationCenter",
    "RegistrationSubmitter",
    "RouteDirectory",
    "ScheduleViewer",
    "TrackingViewer",
]
