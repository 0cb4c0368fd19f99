from __future__ import annotations

import copy
import itertools
from typing import Any

import pytest

from campus_transit.data.backend_client import BackendClientError


class FakeBackend:
    """In-memory stand-in for BackendClient with equality filters only."""

    def __init__(self, tables: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], str] = {}
        self._ids = itertools.count(1)

    def fail(self, method: str, table: str, message: str = "boom") -> None:
        self.failures[(method, table)] = message

    def _check(self, method: str, table: str) -> None:
        self.calls.append((method, table))
        if (method, table) in self.failures:
            raise BackendClientError(self.failures[(method, table)])

    def _matching(self, table: str, filters: dict[str, Any] | None) -> list[dict[str, Any]]:
        rows = self.tables.setdefault(table, [])
        return [
            row for row in rows
            if all(row.get(key) == value for key, value in (filters or {}).items())
        ]

    def _embed(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        if table != "student_registrations":
            return row
        embedded = dict(row)
        for key, target in (
            ("student_id", "students"),
            ("route_id", "bus_routes"),
            ("stop_id", "bus_stops"),
        ):
            match = next(
                (r for r in self.tables.get(target, []) if r["id"] == row.get(key)), None
            )
            embedded[target] = match
        return embedded

    def select(self, table, columns="*", filters=None, order=None, descending=False, limit=None):
        self._check("select", table)
        rows = self._matching(table, filters)
        if order:
            rows = sorted(rows, key=lambda row: row.get(order), reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [self._embed(table, copy.deepcopy(row)) for row in rows]

    def select_one(self, table, columns="*", filters=None, order=None, descending=False):
        rows = self.select(table, columns, filters, order=order, descending=descending, limit=1)
        return rows[0] if rows else None

    def insert(self, table, row):
        self._check("insert", table)
        stored = {"id": f"{table}-{next(self._ids)}", **row}
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    def update(self, table, values, filters):
        self._check("update", table)
        rows = self._matching(table, filters)
        for row in rows:
            row.update(values)
        return [dict(row) for row in rows]

    def count(self, table, filters=None):
        self._check("count", table)
        return len(self._matching(table, filters))


ROUTES = [
    {"id": "r2", "route_name": "North Loop", "route_code": "R2", "capacity": 40, "is_active": True},
    {"id": "r1", "route_name": "City Center", "route_code": "R1", "capacity": 50, "is_active": True},
    {"id": "r3", "route_name": "Old Depot", "route_code": "R3", "capacity": 30, "is_active": False},
]

STOPS = [
    {"id": "s2", "route_id": "r1", "stop_name": "Library", "stop_order": 3, "estimated_time": "08:10:00"},
    {"id": "s1", "route_id": "r1", "stop_name": "Main Gate", "stop_order": 1, "estimated_time": "07:55:00"},
    {"id": "s3", "route_id": "r2", "stop_name": "Market", "stop_order": 1, "estimated_time": "08:00:00"},
]


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend({"bus_routes": ROUTES, "bus_stops": STOPS})
