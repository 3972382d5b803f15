"""
Proximity ranking.

Two interchangeable strategies answer the same question ("every school,
nearest first, with `distance` in km"):

- `StoreSideRanking` pushes the Haversine formula into SQL so Postgres
  computes and sorts. Better for large tables.
- `ServiceSideRanking` fetches raw rows and ranks them in-process with
  `rank_records`. Better for small tables or stores without trig functions.

The active one is picked by the RANKING_STRATEGY setting.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol

from .geo import haversine_km
from .repository import SchoolRepository


def rank_records(
    latitude: float,
    longitude: float,
    records: Iterable[dict[str, Any]],
) -> list[dict[str, Any]]:
    ranked = [
        {
            **record,
            "distance": haversine_km(
                latitude,
                longitude,
                float(record["latitude"]),
                float(record["longitude"]),
            ),
        }
        for record in records
    ]
    ranked.sort(key=lambda r: r["distance"])
    return ranked


class RankingStrategy(Protocol):
    name: str

    async def rank(
        self,
        repository: SchoolRepository,
        latitude: float,
        longitude: float,
    ) -> list[dict[str, Any]]: ...


class StoreSideRanking:
    name = "store"

    async def rank(
        self,
        repository: SchoolRepository,
        latitude: float,
        longitude: float,
    ) -> list[dict[str, Any]]:
        return await repository.query_ranked(latitude, longitude)


class ServiceSideRanking:
    name = "service"

    async def rank(
        self,
        repository: SchoolRepository,
        latitude: float,
        longitude: float,
    ) -> list[dict[str, Any]]:
        records = await repository.query_all()
        return rank_records(latitude, longitude, records)


STRATEGIES: dict[str, type] = {
    StoreSideRanking.name: StoreSideRanking,
    ServiceSideRanking.name: ServiceSideRanking,
}


def get_strategy(name: str) -> RankingStrategy:
    key = (name or "").strip().lower()
    try:
        return STRATEGIES[key]()
    except KeyError:
        raise RuntimeError(
            f"Unknown RANKING_STRATEGY '{name}'. Allowed: {sorted(STRATEGIES)}"
        ) from None
