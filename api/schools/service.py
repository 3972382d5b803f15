"""
School business logic.

Inputs reaching this layer are already validated. Store failures are logged
and surfaced as a generic 500; there is no retry and no partial result.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from core import db

from . import schemas
from .ranking import RankingStrategy
from .repository import SchoolRepository

logger = logging.getLogger(__name__)


def _store_failure(op: str, detail: str) -> HTTPException:
    logger.exception("store_failure op=%s", op)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


async def add_school(repository: SchoolRepository, payload: schemas.AddSchoolRequest) -> int:
    try:
        school_id = await repository.insert(
            name=payload.name,
            address=payload.address,
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
    except db.StoreError as exc:
        raise _store_failure("insert", "Failed to add school") from exc

    logger.info("school_added id=%s", school_id)
    return school_id


async def list_schools_by_proximity(
    repository: SchoolRepository,
    strategy: RankingStrategy,
    *,
    latitude: float,
    longitude: float,
) -> list[dict[str, Any]]:
    try:
        return await strategy.rank(repository, latitude, longitude)
    except db.StoreError as exc:
        raise _store_failure(f"rank_{strategy.name}", "Failed to fetch schools") from exc


async def list_all_schools(repository: SchoolRepository) -> list[dict[str, Any]]:
    try:
        return await repository.query_all()
    except db.StoreError as exc:
        raise _store_failure("query_all", "Internal Server Error") from exc
