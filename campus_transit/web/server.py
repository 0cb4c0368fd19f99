"""HTTP front-end for the portal screens."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, HTTPServer
import logging
from typing import Any
from urllib.parse import parse_qs, urlsplit

from campus_transit.views.admin import NotificationDraft
from campus_transit.views.registration import RegistrationForm
from campus_transit.web import pages
from campus_transit.web.portal import Portal

logger = logging.getLogger(__name__)

SCREEN_PATHS = {
    "/": "home",
    "/register": "register",
    "/tracking": "tracking",
    "/schedule": "schedule",
    "/notifications": "notifications",
    "/admin": "admin",
}


def _first(values: dict[str, list[str]], key: str, default: str = "") -> str:
    items = values.get(key)
    return items[0].strip() if items else default


def _registration_form(values: dict[str, list[str]]) -> RegistrationForm:
    return RegistrationForm(
        full_name=_first(values, "full_name"),
        email=_first(values, "email"),
        phone=_first(values, "phone"),
        address=_first(values, "address"),
        route_id=_first(values, "route_id"),
        stop_id=_first(values, "stop_id"),
        semester=_first(values, "semester"),
    )


def _notification_draft(values: dict[str, list[str]]) -> NotificationDraft:
    return NotificationDraft(
        title=_first(values, "title"),
        message=_first(values, "message"),
        type=_first(values, "type", "general"),
        route_id=_first(values, "route_id"),
    )


class PortalServer(HTTPServer):
    """HTTP server carrying the portal its handlers render."""

    def __init__(self, address: tuple[str, int], portal: Portal) -> None:
        super().__init__(address, PortalHandler)
        self.portal = portal

    def server_close(self) -> None:
        self.portal.close()
        super().server_close()


class PortalHandler(BaseHTTPRequestHandler):
    server: PortalServer

    def do_GET(self) -> None:
        parts = urlsplit(self.path)
        query = parse_qs(parts.query)
        screen = SCREEN_PATHS.get(parts.path)
        if screen is None:
            self._send_html(pages.render_not_found(parts.path), status=404)
            return

        portal = self.server.portal
        component = portal.select(screen)
        if screen == "home":
            self._send_html(pages.render_home())
        elif screen == "register":
            self._send_html(pages.render_register(component))
        elif screen == "tracking":
            component.refresh_if_changed()
            if "route" in query:
                component.select_route(_first(query, "route"))
            self._send_html(pages.render_tracking(component))
        elif screen == "schedule":
            route_id = _first(query, "route")
            if route_id and route_id != component.selected_route_id:
                component.select_route(route_id)
            self._send_html(pages.render_schedule(component))
        elif screen == "notifications":
            component.refresh_if_changed()
            self._send_html(pages.render_notifications(component))
        else:
            component.select_tab(_first(query, "tab", component.tab))
            self._send_html(pages.render_admin(component))

    def do_POST(self) -> None:
        path = urlsplit(self.path).path
        length = self._content_length()
        if length is None:
            self.send_error(400, "Invalid Content-Length")
            return
        values = self._read_form(length)
        portal = self.server.portal

        if path == "/register/route":
            component = portal.select("register")
            component.select_route(_registration_form(values))
            self._send_html(pages.render_register(component))
        elif path == "/register":
            component = portal.select("register")
            component.submit(_registration_form(values))
            self._send_html(pages.render_register(component))
        elif path == "/notifications/read":
            component = portal.select("notifications")
            component.mark_read(_first(values, "id"))
            self._redirect("/notifications")
        elif path == "/admin/registrations/status":
            component = portal.select("admin")
            status = _first(values, "status")
            try:
                component.set_registration_status(_first(values, "id"), status)
            except ValueError as exc:
                self.send_error(400, str(exc))
                return
            self._redirect("/admin?tab=registrations")
        elif path == "/admin/notifications":
            component = portal.select("admin")
            component.select_tab("notifications")
            component.send_notification(_notification_draft(values))
            self._send_html(pages.render_admin(component))
        else:
            self._send_html(pages.render_not_found(path), status=404)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def _content_length(self) -> int | None:
        """Declared body size, or None when the header is not a non-negative integer."""
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            return None
        return length if length >= 0 else None

    def _read_form(self, length: int) -> dict[str, list[str]]:
        raw = self.rfile.read(length).decode("utf-8", errors="replace") if length else ""
        return parse_qs(raw, keep_blank_values=True)

    def _send_html(self, html: str, status: int = 200) -> None:
        body = html.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _redirect(self, location: str) -> None:
        self.send_response(303)
        self.send_header("Location", location)
        self.send_header("Content-Length", "0")
        self.end_headers()


def run_server(portal: Portal, host: str, port: int) -> None:
    """Serve the portal until interrupted."""
    server = PortalServer((host, port), portal)
    logger.info("Serving campus transit portal on http://%s:%s", host, port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        server.server_close()


__all__ = ["PortalHandler", "PortalServer", "run_server", "SCREEN_PATHS"]
