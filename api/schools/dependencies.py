"""
Dependency providers for school routes.

Both objects are built once in the app lifespan and live on `app.state`.
"""

from __future__ import annotations

from fastapi import Request

from .ranking import RankingStrategy
from .repository import SchoolRepository


def get_repository(request: Request) -> SchoolRepository:
    return request.app.state.school_repository


def get_ranking_strategy(request: Request) -> RankingStrategy:
    return request.app.state.ranking_strategy
