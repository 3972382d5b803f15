"""
Shared fixtures: in-memory stand-ins for Postgres so tests never need a DB.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

import main
from core import db
from schools.dependencies import get_ranking_strategy, get_repository
from schools.ranking import ServiceSideRanking, StoreSideRanking, rank_records
from schools.repository import SchoolRepository


class FakeDatabase:
    """Records every call; returns canned rows."""

    def __init__(self, dsn: str = "postgresql://fake/db", **kwargs: Any) -> None:
        self.dsn = dsn
        self.kwargs = kwargs
        self.calls: list[tuple[str, str, tuple]] = []
        self.rows: list[dict[str, Any]] = []
        self.connected = False
        self.closed = False

    async def connect(self) -> None:
        self.connected = True

    async def close(self) -> None:
        self.closed = True

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        self.calls.append(("fetch_one", sql, args))
        return self.rows[0] if self.rows else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        self.calls.append(("fetch_all", sql, args))
        return list(self.rows)

    async def execute(self, sql: str, *args: Any) -> None:
        self.calls.append(("execute", sql, args))


class InMemorySchoolRepository(SchoolRepository):
    def __init__(self) -> None:
        super().__init__(FakeDatabase())
        self.schools: list[dict[str, Any]] = []
        self.calls: list[str] = []
        self.fail = False

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if self.fail:
            raise db.StoreError(f"{op} failed: connection refused")

    async def ensure_schema(self) -> None:
        self._check("ensure_schema")

    async def insert(self, *, name: str, address: str, latitude: float, longitude: float) -> int:
        self._check("insert")
        school_id = len(self.schools) + 1
        self.schools.append(
            {
                "id": school_id,
                "name": name,
                "address": address,
                "latitude": latitude,
                "longitude": longitude,
            }
        )
        return school_id

    async def query_all(self) -> list[dict[str, Any]]:
        self._check("query_all")
        return [dict(s) for s in self.schools]

    async def query_ranked(self, latitude: float, longitude: float) -> list[dict[str, Any]]:
        self._check("query_ranked")
        return rank_records(latitude, longitude, [dict(s) for s in self.schools])


SAMPLE_SCHOOLS = [
    ("Stuyvesant High School", "345 Chambers St, New York", 40.7178, -74.0138),
    ("Eton College", "Windsor SL4 6DW, UK", 51.4920, -0.6089),
    ("Lycee Henri-IV", "23 Rue Clovis, Paris", 48.8462, 2.3477),
    ("Sydney Grammar School", "College St, Sydney", -33.8731, 151.2110),
    ("Boston Latin School", "78 Avenue Louis Pasteur, Boston", 42.3378, -71.1027),
]


@pytest.fixture
def repository() -> InMemorySchoolRepository:
    return InMemorySchoolRepository()


@pytest.fixture
def seeded_repository(repository: InMemorySchoolRepository) -> InMemorySchoolRepository:
    for i, (name, address, lat, lon) in enumerate(SAMPLE_SCHOOLS, start=1):
        repository.schools.append(
            {"id": i, "name": name, "address": address, "latitude": lat, "longitude": lon}
        )
    return repository


@pytest.fixture(params=[StoreSideRanking, ServiceSideRanking], ids=["store", "service"])
def strategy(request):
    return request.param()


def _client_for(repository, strategy) -> TestClient:
    app = main.create_app()
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_ranking_strategy] = lambda: strategy
    # Not used as a context manager, so the lifespan (real Postgres) never runs.
    return TestClient(app)


@pytest.fixture
def client(repository, strategy) -> TestClient:
    return _client_for(repository, strategy)


@pytest.fixture
def seeded_client(seeded_repository, strategy) -> TestClient:
    return _client_for(seeded_repository, strategy)
