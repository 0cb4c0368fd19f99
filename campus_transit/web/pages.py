"""HTML rendering for each portal screen."""

from __future__ import annotations

from datetime import datetime
from html import escape

from campus_transit.data.records import NOTIFICATION_TYPES
from campus_transit.logic.formatting import day_label, format_clock, time_ago, time_since
from campus_transit.views.admin import TABS, AdminConsole
from campus_transit.views.notifications import NotificationCenter
from campus_transit.views.registration import Banner, RegistrationSubmitter
from campus_transit.views.schedule_view import ScheduleViewer
from campus_transit.views.tracking import TrackingViewer

LIVE_REFRESH_SECONDS = 10

NAV_ITEMS = (
    ("register", "/register", "Register"),
    ("tracking", "/tracking", "Track"),
    ("schedule", "/schedule", "Schedule"),
    ("notifications", "/notifications", "Notifications"),
    ("admin", "/admin", "Admin"),
)

STYLE = """
      body { font-family: sans-serif; margin: 0; background: #f5f7fa; color: #222; }
      nav { background: #fff; padding: 12px 24px; box-shadow: 0 1px 4px #ccc; }
      nav a { margin-right: 16px; text-decoration: none; color: #333; }
      nav a.current { color: #fff; background: #2563eb; padding: 4px 10px; border-radius: 6px; }
      main { max-width: 960px; margin: 24px auto; padding: 0 16px; }
      .banner-success { background: #e7f7ec; color: #166534; padding: 12px; }
      .banner-error { background: #fdecec; color: #991b1b; padding: 12px; }
      .unread { background: #eef4ff; }
      table { border-collapse: collapse; width: 100%; }
      td, th { text-align: left; padding: 6px 8px; border-bottom: 1px solid #e5e7eb; }
"""


def _e(value: object) -> str:
    return escape(str(value), quote=True)


def render_page(current: str, title: str, body: str, refresh_seconds: int | None = None) -> str:
    """Wrap a screen body with the document head and the top navigation bar."""
    home_css = ' class="current"' if current == "home" else ""
    links = [f'<a href="/"{home_css}>Campus Transport</a>']
    for screen, href, label in NAV_ITEMS:
        css = ' class="current"' if screen == current else ""
        links.append(f'<a href="{href}"{css}>{label}</a>')
    refresh = (
        f'\n    <meta http-equiv="refresh" content="{refresh_seconds}">' if refresh_seconds else ""
    )
    return f"""<!doctype html>
<html>
  <head>
    <meta charset="utf-8">{refresh}
    <style>{STYLE}    </style>
    <title>{_e(title)}</title>
  </head>
  <body>
    <nav>{" ".join(links)}</nav>
    <main>
{body}
    </main>
  </body>
</html>"""


def render_banner(banner: Banner | None) -> str:
    if banner is None:
        return ""
    return f'<div class="banner-{_e(banner.kind)}">{_e(banner.text)}</div>'


def render_home() -> str:
    cards = "\n".join(
        f'<li><a href="{href}">{label}</a></li>' for _, href, label in NAV_ITEMS
    )
    body = f"""<h1>College Transportation System</h1>
<p>Smart bus management for students and administrators.</p>
<ul>
{cards}
</ul>"""
    return render_page("home", "College Transportation System", body)


def _input(name: str, label: str, value: str, kind: str = "text") -> str:
    return (
        f'<p><label>{label}<br><input type="{kind}" name="{name}" '
        f'value="{_e(value)}" required></label></p>'
    )


def render_register(submitter: RegistrationSubmitter) -> str:
    form = submitter.form
    route_options = ['<option value="">Choose a route</option>']
    for route in submitter.routes:
        selected = " selected" if route.id == form.route_id else ""
        route_options.append(
            f'<option value="{_e(route.id)}"{selected}>{_e(route.route_code)} - '
            f"{_e(route.route_name)} (Capacity: {route.capacity})</option>"
        )
    stop_choices = []
    for stop in submitter.stops:
        checked = " checked" if stop.id == form.stop_id else ""
        stop_choices.append(
            f'<p><label><input type="radio" name="stop_id" value="{_e(stop.id)}"{checked} required> '
            f"{_e(stop.stop_name)} (ETA: {_e(stop.estimated_time)})</label></p>"
        )
    stops_html = "\n".join(stop_choices)
    if stops_html:
        stops_html = f"<fieldset><legend>Select Stop</legend>\n{stops_html}\n</fieldset>"
    body = f"""<h2>Bus Registration</h2>
{render_banner(submitter.take_banner())}
<form method="post" action="/register">
{_input("full_name", "Full Name", form.full_name)}
{_input("email", "Email", form.email, "email")}
{_input("phone", "Phone", form.phone, "tel")}
<p><label>Address<br><textarea name="address" rows="3" required>{_e(form.address)}</textarea></label></p>
<p><label>Select Route<br>
<select name="route_id" required
 onchange="this.form.action='/register/route'; this.form.submit()">
{"".join(route_options)}
</select></label>
<button type="submit" formaction="/register/route" formnovalidate>Load stops</button></p>
{stops_html}
{_input("semester", "Semester", form.semester)}
<p><button type="submit">Submit Registration</button></p>
</form>"""
    return render_page("register", "Bus Registration", body)


def render_tracking(viewer: TrackingViewer, now: datetime | None = None) -> str:
    if not viewer.loaded:
        return render_page("tracking", "Real-Time Bus Tracking", "<p>Loading...</p>", LIVE_REFRESH_SECONDS)

    items = []
    for item in viewer.routes:
        status = "active" if item.tracking else "no data"
        updated = (
            f" &middot; Updated {_e(time_since(item.tracking.timestamp, now))}" if item.tracking else ""
        )
        items.append(
            f'<li><a href="/tracking?route={_e(item.route.id)}">{_e(item.route.route_code)}</a> '
            f"{_e(item.route.route_name)} [{status}]{updated}</li>"
        )

    selected = viewer.selected
    if selected is None:
        detail = "<p>Select a route to view tracking details</p>"
    elif selected.tracking is None:
        detail = (
            f"<h3>{_e(selected.route.route_code)} - {_e(selected.route.route_name)}</h3>"
            "<p>No tracking data available for this route</p>"
            "<p>The bus may not be active at this time</p>"
        )
    else:
        sample = selected.tracking
        rows = [
            ("Position", f"{sample.latitude:.6f}, {sample.longitude:.6f}"),
            ("Speed", f"{sample.speed:.1f} km/h"),
            ("Heading", f"{sample.heading:.0f}&deg;"),
        ]
        if sample.driver_name:
            rows.append(("Driver", _e(sample.driver_name)))
        if sample.bus_number:
            rows.append(("Bus Number", _e(sample.bus_number)))
        rows.append(("Last Updated", _e(time_since(sample.timestamp, now))))
        table = "\n".join(f"<tr><th>{label}</th><td>{value}</td></tr>" for label, value in rows)
        detail = (
            f"<h3>{_e(selected.route.route_code)} - {_e(selected.route.route_name)}</h3>"
            f"<p>Live Tracking Active</p>\n<table>\n{table}\n</table>"
        )

    body = f"""<h2>Real-Time Bus Tracking</h2>
<h3>Active Routes</h3>
<ul>
{chr(10).join(items)}
</ul>
{detail}"""
    return render_page("tracking", "Real-Time Bus Tracking", body, LIVE_REFRESH_SECONDS)


def render_schedule(viewer: ScheduleViewer) -> str:
    options = "".join(
        f'<option value="{_e(route.id)}"{" selected" if route.id == viewer.selected_route_id else ""}>'
        f"{_e(route.route_code)} - {_e(route.route_name)}</option>"
        for route in viewer.routes
    )
    chooser = f"""<form method="get" action="/schedule">
<label>Select Route <select name="route" onchange="this.form.submit()">{options}</select></label>
<noscript><button type="submit">Show</button></noscript>
</form>"""

    if viewer.selected_route is None:
        return render_page("schedule", "Bus Schedules", f"<h2>Bus Schedules</h2>\n{chooser}")

    days = viewer.days
    if days:
        blocks = []
        for day, entries in days:
            lines = "".join(
                f"<li>Departs: {_e(format_clock(entry.departure_time))} &rarr; "
                f"Arrives: {_e(format_clock(entry.arrival_time))}</li>"
                for entry in entries
            )
            blocks.append(f"<h4>{_e(day_label(day))}</h4><ul>{lines}</ul>")
        schedule_html = "\n".join(blocks)
    else:
        schedule_html = "<p>No schedules available for this route</p>"

    if viewer.stops:
        stops_html = "<ol>" + "".join(
            f"<li>{_e(stop.stop_name)} (ETA: {_e(format_clock(stop.estimated_time))})</li>"
            for stop in viewer.stops
        ) + "</ol>"
    else:
        stops_html = "<p>No stops configured for this route</p>"

    body = f"""<h2>Bus Schedules</h2>
{chooser}
<h3>Weekly Schedule</h3>
{schedule_html}
<h3>Bus Stops</h3>
{stops_html}"""
    return render_page("schedule", "Bus Schedules", body)


def render_notifications(center: NotificationCenter, now: datetime | None = None) -> str:
    header = "<h2>Notifications</h2>"
    if center.unread_count:
        header += f"\n<p>{center.unread_count} unread</p>"

    if not center.notifications:
        body = (
            f"{header}\n<p>No notifications yet</p>"
            "<p>You'll see updates about your bus routes here</p>"
        )
        return render_page("notifications", "Notifications", body, LIVE_REFRESH_SECONDS)

    items = []
    for item in center.notifications:
        if item.is_read:
            marker = ""
            css = ""
        else:
            marker = (
                '<form method="post" action="/notifications/read" style="display:inline">'
                f'<input type="hidden" name="id" value="{_e(item.id)}">'
                "<button type=\"submit\">New &middot; mark read</button></form>"
            )
            css = ' class="unread"'
        items.append(
            f"<li{css}><strong>{_e(item.title)}</strong> "
            f"<small>{_e(time_ago(item.created_at, now))}</small>"
            f"<p>{_e(item.message)}</p>"
            f"<small>{_e(item.type.upper())}</small> {marker}</li>"
        )
    body = f"{header}\n<ul>\n" + "\n".join(items) + "\n</ul>"
    return render_page("notifications", "Notifications", body, LIVE_REFRESH_SECONDS)


def _admin_overview(console: AdminConsole) -> str:
    stats = console.stats
    return f"""<table>
<tr><th>Total Students</th><td>{stats.total_students}</td></tr>
<tr><th>Active Routes</th><td>{stats.active_routes}</td></tr>
<tr><th>Pending Registrations</th><td>{stats.pending_registrations}</td></tr>
<tr><th>Total Routes</th><td>{stats.total_routes}</td></tr>
</table>"""


def _admin_registrations(console: AdminConsole) -> str:
    if not console.registrations:
        return "<h3>Student Registrations</h3>\n<p>No registrations found</p>"
    rows = []
    for reg in console.registrations:
        actions = ""
        if reg.is_pending:
            actions = "".join(
                '<form method="post" action="/admin/registrations/status" style="display:inline">'
                f'<input type="hidden" name="id" value="{_e(reg.id)}">'
                f'<input type="hidden" name="status" value="{status}">'
                f'<button type="submit">{label}</button></form>'
                for status, label in (("approved", "Approve"), ("rejected", "Reject"))
            )
        rows.append(
            f"<tr><td>{_e(reg.student_name)}<br><small>{_e(reg.student_email)}</small></td>"
            f"<td>{_e(reg.route_code)}<br><small>{_e(reg.route_name)}</small></td>"
            f"<td>{_e(reg.stop_name)}</td><td>{_e(reg.semester)}</td>"
            f"<td>{_e(reg.status)}</td><td>{actions}</td></tr>"
        )
    return (
        "<h3>Student Registrations</h3>\n<table>\n"
        "<tr><th>Student</th><th>Route</th><th>Stop</th><th>Semester</th>"
        "<th>Status</th><th>Actions</th></tr>\n" + "\n".join(rows) + "\n</table>"
    )


def _admin_compose(console: AdminConsole) -> str:
    draft = console.draft
    type_options = "".join(
        f'<option value="{kind}"{" selected" if kind == draft.type else ""}>{kind.capitalize()}</option>'
        for kind in NOTIFICATION_TYPES
    )
    route_options = '<option value="">All Routes</option>' + "".join(
        f'<option value="{_e(route.id)}"{" selected" if route.id == draft.route_id else ""}>'
        f"{_e(route.route_code)} - {_e(route.route_name)}</option>"
        for route in console.routes
    )
    return f"""<h3>Send Notification</h3>
{render_banner(console.take_banner())}
<form method="post" action="/admin/notifications">
<p><label>Title<br><input type="text" name="title" value="{_e(draft.title)}" required></label></p>
<p><label>Message<br><textarea name="message" rows="4" required>{_e(draft.message)}</textarea></label></p>
<p><label>Type <select name="type">{type_options}</select></label>
<label>Route (Optional) <select name="route_id">{route_options}</select></label></p>
<p><button type="submit">Send Notification</button></p>
</form>"""


def render_admin(console: AdminConsole) -> str:
    tabs = " | ".join(
        f"<strong>{tab.capitalize()}</strong>" if tab == console.tab
        else f'<a href="/admin?tab={tab}">{tab.capitalize()}</a>'
        for tab in TABS
    )
    sections = {
        "overview": _admin_overview,
        "registrations": _admin_registrations,
        "notifications": _admin_compose,
    }
    body = f"""<h1>Admin Dashboard</h1>
<p>Manage the College Transportation System</p>
<p>{tabs}</p>
{sections[console.tab](console)}"""
    return render_page("admin", "Admin Dashboard", body)


def render_not_found(path: str) -> str:
    return render_page("", "Not Found", f"<h2>Not Found</h2><p>No page at {_e(path)}</p>")


__all__ = [
    "render_page",
    "render_home",
    "render_register",
    "render_tracking",
    "render_schedule",
    "render_notifications",
    "render_admin",
    "render_not_found",
    "LIVE_REFRESH_SECONDS",
]
