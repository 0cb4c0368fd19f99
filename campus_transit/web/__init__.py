"""Web front-end: screen selector, HTML pages and HTTP server."""

from campus_transit.web.portal import Portal
from campus_transit.web.server import PortalServer, run_server

__all__ = ["Portal", "PortalServer", "run_server"]
