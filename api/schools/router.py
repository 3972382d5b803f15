"""
School API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from . import schemas, service
from .dependencies import get_ranking_strategy, get_repository
from .ranking import RankingStrategy
from .repository import SchoolRepository

router = APIRouter()


@router.post("/addSchool", status_code=status.HTTP_201_CREATED)
async def add_school(
    request: schemas.AddSchoolRequest,
    repository: SchoolRepository = Depends(get_repository),
) -> dict:
    school_id = await service.add_school(repository, request)
    return {"message": "School added successfully", "schoolId": school_id}


@router.get("/listSchools")
async def list_schools(
    latitude: float = Query(
        ...,
        ge=schemas.MIN_LATITUDE,
        le=schemas.MAX_LATITUDE,
        allow_inf_nan=False,
    ),
    longitude: float = Query(
        ...,
        ge=schemas.MIN_LONGITUDE,
        le=schemas.MAX_LONGITUDE,
        allow_inf_nan=False,
    ),
    repository: SchoolRepository = Depends(get_repository),
    strategy: RankingStrategy = Depends(get_ranking_strategy),
) -> list[dict]:
    """
    Every school, nearest first, each with `distance` in km.
    """
    return await service.list_schools_by_proximity(
        repository,
        strategy,
        latitude=latitude,
        longitude=longitude,
    )


@router.get("/listSchoolsById")
async def list_schools_by_id(
    repository: SchoolRepository = Depends(get_repository),
) -> list[dict]:
    return await service.list_all_schools(repository)
