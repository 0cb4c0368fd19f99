"""Row types for the backend tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"

NOTIFICATION_TYPES = ("general", "arrival", "delay", "reroute")


def _float(value: Any) -> float | None:
    return float(value) if value is not None else None


@dataclass(frozen=True)
class Route:
    """Bus route with its display fields."""

    id: str
    route_name: str
    route_code: str
    description: str = ""
    capacity: int = 0
    is_active: bool = True

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Route:
        return cls(
            id=str(row["id"]),
            route_name=row.get("route_name") or "",
            route_code=row.get("route_code") or "",
            description=row.get("description") or "",
            capacity=int(row.get("capacity") or 0),
            is_active=bool(row.get("is_active", True)),
        )


@dataclass(frozen=True)
class Stop:
    """Stop on a route; ``stop_order`` gives its position."""

    id: str
    route_id: str
    stop_name: str
    stop_order: int
    estimated_time: str
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Stop:
        return cls(
            id=str(row["id"]),
            route_id=str(row.get("route_id") or ""),
            stop_name=row.get("stop_name") or "",
            stop_order=int(row.get("stop_order") or 0),
            estimated_time=row.get("estimated_time") or "",
            latitude=_float(row.get("latitude")),
            longitude=_float(row.get("longitude")),
        )


@dataclass(frozen=True)
class TrackingSample:
    """One telemetry reading for a route."""

    id: str
    route_id: str
    latitude: float
    longitude: float
    speed: float
    heading: float
    timestamp: str
    driver_name: str | None = None
    bus_number: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> TrackingSample:
        return cls(
            id=str(row["id"]),
            route_id=str(row.get("route_id") or ""),
            latitude=float(row.get("latitude") or 0.0),
            longitude=float(row.get("longitude") or 0.0),
            speed=float(row.get("speed") or 0.0),
            heading=float(row.get("heading") or 0.0),
            timestamp=row.get("timestamp") or "",
            driver_name=row.get("driver_name"),
            bus_number=row.get("bus_number"),
        )


@dataclass(frozen=True)
class ScheduleEntry:
    """Scheduled departure/arrival pair on a weekday."""

    id: str
    route_id: str
    day_of_week: str
    departure_time: str
    arrival_time: str
    is_active: bool = True

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> ScheduleEntry:
        return cls(
            id=str(row["id"]),
            route_id=str(row.get("route_id") or ""),
            day_of_week=(row.get("day_of_week") or "").lower(),
            departure_time=row.get("departure_time") or "",
            arrival_time=row.get("arrival_time") or "",
            is_active=bool(row.get("is_active", True)),
        )


@dataclass(frozen=True)
class Notification:
    """Broadcast or route-scoped message with a read flag."""

    id: str
    title: str
    message: str
    type: str
    is_read: bool
    created_at: str
    route_id: str | None = None
    student_id: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Notification:
        return cls(
            id=str(row["id"]),
            title=row.get("title") or "",
            message=row.get("message") or "",
            type=row.get("type") or "general",
            is_read=bool(row.get("is_read", False)),
            created_at=row.get("created_at") or "",
            route_id=row.get("route_id"),
            student_id=row.get("student_id"),
        )


@dataclass(frozen=True)
class RegistrationSummary:
    """Registration joined with student, route and stop display fields."""

    id: str
    status: str
    semester: str
    registration_date: str
    student_name: str
    student_email: str
    route_code: str
    route_name: str
    stop_name: str

    @property
    def is_pending(self) -> bool:
        return self.status == PENDING

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> RegistrationSummary:
        student = row.get("students") or {}
        route = row.get("bus_routes") or {}
        stop = row.get("bus_stops") or {}
        return cls(
            id=str(row["id"]),
            status=row.get("status") or PENDING,
            semester=row.get("semester") or "",
            registration_date=row.get("registration_date") or "",
            student_name=student.get("full_name") or "",
            student_email=student.get("email") or "",
            route_code=route.get("route_code") or "",
            route_name=route.get("route_name") or "",
            stop_name=stop.get("stop_name") or "",
        )


__all__ = [
    "PENDING",
    "APPROVED",
    "REJECTED",
    "NOTIFICATION_TYPES",
    "Route",
    "Stop",
    "TrackingSample",
    "ScheduleEntry",
    "Notification",
    "RegistrationSummary",
]
