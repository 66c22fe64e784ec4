"""Standings service boundary.

Every public function returns a ``ServiceResponse`` envelope. Typed
standings errors and data-source failures are turned into failure
envelopes here and never propagate to the caller.
"""

import functools
import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import CompetitionStage, SportsSeasonsStage
from app.schemas.common import ServiceResponse
from app.schemas.navigation import CategoryOption, SeasonOption, SportOption, StandingsNavigation
from app.schemas.standings import (
    BracketStandings,
    GroupStageStandings,
    StandingsData,
    StandingsFilters,
    StandingsResponse,
)
from app.services import filter_resolver
from app.services.bracket import build_bracket_standings, calculate_bracket_standings
from app.services.errors import DataSourceUnavailable, StandingsError
from app.services.group_table import build_group_table, calculate_group_stage_standings
from app.services.stages import load_stage

logger = logging.getLogger(__name__)


def _enveloped(func):
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> ServiceResponse:
        try:
            data = await func(*args, **kwargs)
        except StandingsError as e:
            logger.debug("%s failed: %s (%s)", func.__name__, e.code, e.message)
            return ServiceResponse(success=False, error=e.code, detail=e.message)
        except (SQLAlchemyError, OSError) as e:
            # Driver messages carry SQL text; they stay in the log
            logger.exception("%s: data source failure", func.__name__)
            return ServiceResponse(
                success=False,
                error=DataSourceUnavailable.code,
                detail=type(e).__name__,
            )
        return ServiceResponse(success=True, data=data)

    return wrapper


async def _build_stage_standings(db: AsyncSession, stage: SportsSeasonsStage) -> StandingsData:
    if stage.competition_stage == CompetitionStage.group_stage:
        return await build_group_table(db, stage)
    return await build_bracket_standings(db, stage)


@_enveloped
async def get_standings(
    db: AsyncSession,
    filters: StandingsFilters,
    now: datetime | None = None,
) -> StandingsResponse:
    """Resolve the filters and build the matching standings view."""
    stage = await filter_resolver.resolve_stage(db, filters, now=now)
    return StandingsResponse(
        selection=filter_resolver.selection_from_stage(stage),
        standings=await _build_stage_standings(db, stage),
    )


@_enveloped
async def get_standings_navigation(
    db: AsyncSession,
    filters: StandingsFilters,
    now: datetime | None = None,
) -> StandingsNavigation:
    return await filter_resolver.navigation(db, filters, now=now)


@_enveloped
async def get_stage_standings(db: AsyncSession, stage_id: int) -> StandingsData:
    """Group table or bracket, depending on the stage's competition stage."""
    stage = await load_stage(db, stage_id)
    return await _build_stage_standings(db, stage)


@_enveloped
async def get_group_stage_standings(db: AsyncSession, stage_id: int) -> GroupStageStandings:
    return await calculate_group_stage_standings(db, stage_id)


@_enveloped
async def get_bracket_standings(db: AsyncSession, stage_id: int) -> BracketStandings:
    return await calculate_bracket_standings(db, stage_id)


@_enveloped
async def get_available_seasons(db: AsyncSession, now: datetime | None = None) -> list[SeasonOption]:
    return await filter_resolver.list_available_seasons(db, now)


@_enveloped
async def get_available_sports(db: AsyncSession, season_id: int) -> list[SportOption]:
    return await filter_resolver.list_available_sports(db, season_id)


@_enveloped
async def get_available_categories(
    db: AsyncSession, season_id: int, sport_id: int
) -> list[CategoryOption]:
    return await filter_resolver.list_available_categories(db, season_id, sport_id)
