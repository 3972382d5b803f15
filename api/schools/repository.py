"""
School persistence (raw SQL).

All values, including query coordinates, are bound as asyncpg parameters.
"""

from __future__ import annotations

from typing import Any

from core import db

from .geo import EARTH_RADIUS_KM

SCHOOL_COLUMNS = ("id", "name", "address", "latitude", "longitude")


class SchoolRepository:
    def __init__(self, database: db.Database) -> None:
        self.database = database

    async def ensure_schema(self) -> None:
        await self.database.execute(
            """
            CREATE TABLE IF NOT EXISTS schools (
              id BIGINT GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
              name TEXT NOT NULL,
              address TEXT NOT NULL,
              latitude DOUBLE PRECISION NOT NULL CHECK (latitude BETWEEN -90 AND 90),
              longitude DOUBLE PRECISION NOT NULL CHECK (longitude BETWEEN -180 AND 180)
            )
            """
        )

    async def insert(self, *, name: str, address: str, latitude: float, longitude: float) -> int:
        row = await self.database.fetch_one(
            """
            INSERT INTO schools (name, address, latitude, longitude)
            VALUES ($1, $2, $3, $4)
            RETURNING id
            """,
            name,
            address,
            latitude,
            longitude,
        )
        if row is None:
            raise db.StoreError("Insert returned no id.")
        return int(row["id"])

    async def query_all(self) -> list[dict[str, Any]]:
        return await self.database.fetch_all(
            """
            SELECT id, name, address, latitude, longitude
            FROM schools
            ORDER BY id ASC
            """
        )

    async def query_ranked(self, latitude: float, longitude: float) -> list[dict[str, Any]]:
        """
        Haversine distance (km) computed and ordered inside Postgres.

        `a` is clamped to 1.0 so antipodal points cannot yield sqrt of a
        negative number.
        """
        return await self.database.fetch_all(
            """
            SELECT
              s.id,
              s.name,
              s.address,
              s.latitude,
              s.longitude,
              ($3::float8 * 2 * atan2(sqrt(h.a), sqrt(1 - h.a)))::float8 AS distance
            FROM schools s
            CROSS JOIN LATERAL (
              SELECT LEAST(
                1.0::float8,
                power(sin(radians(s.latitude - $1::float8) / 2), 2)
                + cos(radians($1::float8)) * cos(radians(s.latitude))
                  * power(sin(radians(s.longitude - $2::float8) / 2), 2)
              ) AS a
            ) h
            ORDER BY distance ASC
            """,
            latitude,
            longitude,
            EARTH_RADIUS_KM,
        )
