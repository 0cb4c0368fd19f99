"""Weekly schedule ordering and stop sequencing."""

from __future__ import annotations

from collections.abc import Iterable

from campus_transit.data.records import ScheduleEntry, Stop

DAYS_ORDER = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def day_index(day: str) -> int:
    """Monday-first weekday index; unknown names sort after Sunday."""
    try:
        return DAYS_ORDER.index(day.lower())
    except ValueError:
        return len(DAYS_ORDER)


def sort_schedule_entries(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    """Order entries by weekday, then by departure time string."""
    return sorted(entries, key=lambda entry: (day_index(entry.day_of_week), entry.departure_time))


def group_by_day(entries: Iterable[ScheduleEntry]) -> list[tuple[str, list[ScheduleEntry]]]:
    """Group sorted entries per weekday, skipping days with no entries."""
    ordered = sort_schedule_entries(entries)
    groups: list[tuple[str, list[ScheduleEntry]]] = []
    for day in DAYS_ORDER:
        day_entries = [entry for entry in ordered if entry.day_of_week.lower() == day]
        if day_entries:
            groups.append((day, day_entries))
    return groups


def order_stops(stops: Iterable[Stop]) -> list[Stop]:
    return sorted(stops, key=lambda stop: stop.stop_order)


__all__ = ["DAYS_ORDER", "day_index", "sort_schedule_entries", "group_by_day", "order_stops"]
