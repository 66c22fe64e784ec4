from fastapi import APIRouter, Depends, Query
from fastapi_cache.decorator import cache
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_db
from app.config import get_settings
from app.models import CompetitionStage
from app.schemas.common import ServiceResponse
from app.schemas.navigation import CategoryOption, SeasonOption, SportOption, StandingsNavigation
from app.schemas.standings import StandingsData, StandingsFilters, StandingsResponse
from app.services import standings as standings_service

router = APIRouter(prefix="/standings", tags=["standings"])
settings = get_settings()


def standings_filters(
    season_id: int | None = Query(default=None, gt=0),
    sport_id: int | None = Query(default=None, gt=0),
    sport_category_id: int | None = Query(default=None, gt=0),
    stage_id: int | None = Query(default=None, gt=0, description="Takes precedence over every other filter"),
    competition_stage: CompetitionStage | None = Query(default=None),
) -> StandingsFilters:
    return StandingsFilters(
        season_id=season_id,
        sport_id=sport_id,
        sport_category_id=sport_category_id,
        stage_id=stage_id,
        competition_stage=competition_stage,
    )


@router.get("", response_model=ServiceResponse[StandingsResponse])
@cache(expire=settings.standings_cache_ttl_seconds)
async def get_standings(
    filters: StandingsFilters = Depends(standings_filters),
    db: AsyncSession = Depends(get_db),
):
    """
    Standings for a partial selection.

    Missing season defaults to the current one (else the most recently
    ended); missing competition stage defaults to the group stage. The
    result is a group table or a bracket, tagged by ``format``.
    """
    return await standings_service.get_standings(db, filters)


@router.get("/navigation", response_model=ServiceResponse[StandingsNavigation])
@cache(expire=settings.navigation_cache_ttl_seconds)
async def get_standings_navigation(
    filters: StandingsFilters = Depends(standings_filters),
    db: AsyncSession = Depends(get_db),
):
    """Selectable seasons, sports, categories and stages for the filters."""
    return await standings_service.get_standings_navigation(db, filters)


@router.get("/stages/{stage_id}", response_model=ServiceResponse[StandingsData])
@cache(expire=settings.standings_cache_ttl_seconds)
async def get_stage_standings(stage_id: int, db: AsyncSession = Depends(get_db)):
    return await standings_service.get_stage_standings(db, stage_id)


@router.get("/seasons", response_model=ServiceResponse[list[SeasonOption]])
@cache(expire=settings.navigation_cache_ttl_seconds)
async def get_available_seasons(db: AsyncSession = Depends(get_db)):
    return await standings_service.get_available_seasons(db)


@router.get("/seasons/{season_id}/sports", response_model=ServiceResponse[list[SportOption]])
@cache(expire=settings.navigation_cache_ttl_seconds)
async def get_available_sports(season_id: int, db: AsyncSession = Depends(get_db)):
    return await standings_service.get_available_sports(db, season_id)


@router.get(
    "/seasons/{season_id}/sports/{sport_id}/categories",
    response_model=ServiceResponse[list[CategoryOption]],
)
@cache(expire=settings.navigation_cache_ttl_seconds)
async def get_available_categories(
    season_id: int, sport_id: int, db: AsyncSession = Depends(get_db)
):
    return await standings_service.get_available_categories(db, season_id, sport_id)
