from __future__ import annotations

import pytest

from campus_transit.views.admin import (
    NOTIFICATION_SENT_MESSAGE,
    RECENT_REGISTRATION_LIMIT,
    AdminConsole,
    NotificationDraft,
)
from campus_transit.views.directory import RouteDirectory
from campus_transit.views.registration import ERROR, SUCCESS
from campus_transit.web import pages


def _registration(index: int, status: str = "pending") -> dict:
    return {
        "id": f"reg{index}",
        "student_id": "stu1",
        "route_id": "r1",
        "stop_id": "s1",
        "semester": "Fall 2025",
        "status": status,
        "registration_date": f"2025-08-{index:02d}T10:00:00+00:00",
    }


@pytest.fixture()
def console(backend) -> AdminConsole:
    backend.tables["students"] = [
        {"id": "stu1", "email": "asha@college.edu", "full_name": "Asha Rao"},
        {"id": "stu2", "email": "ben@college.edu", "full_name": "Ben Ito"},
    ]
    backend.tables["student_registrations"] = [
        _registration(1),
        _registration(2, "approved"),
        _registration(3),
    ]
    admin = AdminConsole(backend, RouteDirectory(backend))
    admin.mount()
    return admin


def test_overview_counts(console: AdminConsole) -> None:
    assert console.stats.total_students == 2
    assert console.stats.total_routes == 3
    assert console.stats.active_routes == 2
    assert console.stats.pending_registrations == 2


def test_failed_count_shows_zero(backend) -> None:
    backend.fail("count", "students")
    admin = AdminConsole(backend, RouteDirectory(backend))

    admin.load()

    assert admin.stats.total_students == 0
    assert admin.stats.total_routes == 3


def test_recent_registrations_joined_newest_first(console: AdminConsole) -> None:
    assert [reg.id for reg in console.registrations] == ["reg3", "reg2", "reg1"]
    first = console.registrations[0]
    assert first.student_name == "Asha Rao"
    assert first.route_code == "R1"
    assert first.stop_name == "Main Gate"


def test_recent_registrations_limited(backend) -> None:
    backend.tables["student_registrations"] = [_registration(i) for i in range(1, 26)]
    admin = AdminConsole(backend, RouteDirectory(backend))

    admin.load()

    assert len(admin.registrations) == RECENT_REGISTRATION_LIMIT


def test_approve_pending_registration(console: AdminConsole, backend) -> None:
    assert console.set_registration_status("reg1", "approved") is True

    row = next(r for r in backend.tables["student_registrations"] if r["id"] == "reg1")
    assert row["status"] == "approved"
    summary = next(reg for reg in console.registrations if reg.id == "reg1")
    assert not summary.is_pending
    assert console.stats.pending_registrations == 1


def test_status_change_only_applies_to_pending_rows(console: AdminConsole, backend) -> None:
    assert console.set_registration_status("reg2", "rejected") is False

    row = next(r for r in backend.tables["student_registrations"] if r["id"] == "reg2")
    assert row["status"] == "approved"


def test_unknown_status_rejected(console: AdminConsole) -> None:
    with pytest.raises(ValueError):
        console.set_registration_status("reg1", "pending")


def test_send_broadcast_notification(console: AdminConsole, backend) -> None:
    banner = console.send_notification(
        NotificationDraft(title="Delay", message="Route 1 is 10 minutes late", type="delay", route_id="r1")
    )

    assert banner.kind == SUCCESS
    assert banner.text == NOTIFICATION_SENT_MESSAGE
    assert console.draft == NotificationDraft()
    stored = backend.tables["notifications"][0]
    assert stored["student_id"] is None
    assert stored["route_id"] == "r1"
    assert stored["type"] == "delay"


def test_empty_route_scope_means_all_routes(console: AdminConsole, backend) -> None:
    console.send_notification(NotificationDraft(title="Holiday", message="No service Monday"))

    stored = backend.tables["notifications"][0]
    assert stored["route_id"] is None
    assert stored["type"] == "general"


def test_send_failure_keeps_draft(console: AdminConsole, backend) -> None:
    backend.fail("insert", "notifications", "permission denied for table notifications")
    draft = NotificationDraft(title="Delay", message="Late")

    banner = console.send_notification(draft)

    assert banner.kind == ERROR
    assert banner.text == "permission denied for table notifications"
    assert console.draft == draft


def test_select_tab_ignores_unknown(console: AdminConsole) -> None:
    console.select_tab("registrations")
    console.select_tab("billing")

    assert console.tab == "registrations"


def test_sent_banner_shows_once_across_tab_switches(console: AdminConsole) -> None:
    console.select_tab("notifications")
    console.send_notification(NotificationDraft(title="Holiday", message="No service Monday"))
    assert NOTIFICATION_SENT_MESSAGE in pages.render_admin(console)

    console.select_tab("overview")
    pages.render_admin(console)
    console.select_tab("notifications")

    assert NOTIFICATION_SENT_MESSAGE not in pages.render_admin(console)
