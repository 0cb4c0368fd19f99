from __future__ import annotations

from unittest.mock import MagicMock

from campus_transit.data.change_feed import ChangeEvent
from campus_transit.views.notifications import NOTIFICATION_LIMIT, NotificationCenter


def _row(index: int, is_read: bool = False) -> dict:
    return {
        "id": f"n{index}",
        "title": f"Notice {index}",
        "message": "Bus running late",
        "type": "delay",
        "is_read": is_read,
        "created_at": f"2025-09-01T08:{index:02d}:00+00:00",
    }


def _center(backend):
    feed = MagicMock()
    subscription = MagicMock()
    subscription.drain.return_value = []
    feed.subscribe.return_value = subscription
    return NotificationCenter(backend, feed), feed, subscription


def test_mount_lists_newest_first_up_to_limit(backend) -> None:
    backend.tables["notifications"] = [_row(i) for i in range(55)]
    center, feed, _ = _center(backend)

    center.mount()

    feed.subscribe.assert_called_once_with("notifications")
    assert len(center.notifications) == NOTIFICATION_LIMIT
    assert center.notifications[0].id == "n54"
    assert center.notifications[-1].id == "n5"


def test_mark_unread_flips_locally_and_updates_backend(backend) -> None:
    backend.tables["notifications"] = [_row(1), _row(2)]
    center, _, _ = _center(backend)
    center.mount()

    assert center.mark_read("n1") is True

    assert center.unread_count == 1
    assert next(n for n in center.notifications if n.id == "n1").is_read
    assert backend.tables["notifications"][0]["is_read"] is True


def test_mark_read_twice_is_a_noop(backend) -> None:
    backend.tables["notifications"] = [_row(1, is_read=True)]
    center, _, _ = _center(backend)
    center.mount()
    backend.calls.clear()

    assert center.mark_read("n1") is False

    assert center.notifications[0].is_read
    assert backend.calls == []


def test_mark_read_failure_keeps_local_flip(backend) -> None:
    backend.tables["notifications"] = [_row(1)]
    backend.fail("update", "notifications")
    center, _, _ = _center(backend)
    center.mount()

    assert center.mark_read("n1") is True

    assert center.notifications[0].is_read
    assert backend.tables["notifications"][0]["is_read"] is False


def test_change_event_refetches(backend) -> None:
    backend.tables["notifications"] = [_row(1)]
    center, _, subscription = _center(backend)
    center.mount()

    backend.tables["notifications"].append(_row(2))
    subscription.drain.return_value = [ChangeEvent("notifications", 1.0), ChangeEvent("notifications", 2.0)]

    assert center.refresh_if_changed() is True
    assert [n.id for n in center.notifications] == ["n2", "n1"]


def test_fetch_failure_defaults_to_empty(backend) -> None:
    backend.fail("select", "notifications")
    center, _, _ = _center(backend)

    center.mount()

    assert center.notifications == []
    assert center.unread_count == 0


def test_unmount_unsubscribes(backend) -> None:
    center, _, subscription = _center(backend)
    center.mount()

    center.unmount()

    subscription.unsubscribe.assert_called_once()
    assert not center.subscribed
