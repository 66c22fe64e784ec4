"""Resolve partial standings filters to a concrete stage, and list what can be selected."""

import logging
from datetime import datetime

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import get_settings
from app.models import CompetitionStage, Season, Sport, SportCategory, SportsSeasonsStage
from app.schemas.navigation import (
    CategoryOption,
    SeasonOption,
    SportOption,
    StageOption,
    StandingsNavigation,
)
from app.schemas.standings import ResolvedSelection, StandingsFilters
from app.services.errors import AmbiguousSelection, NoSeasonAvailable, StageNotFound
from app.services.stages import load_stage
from app.utils.sports import format_category_name, format_season_name
from app.utils.timestamps import ensure_utc, utcnow

logger = logging.getLogger(__name__)


def default_competition_stage() -> CompetitionStage:
    """Competition stage assumed when a request names none (configurable)."""
    return get_settings().default_competition_stage


# ──────────────────────────────────────────
#  Season defaults
# ──────────────────────────────────────────


async def find_current_season(db: AsyncSession, now: datetime) -> Season | None:
    """Season bracketing ``now``; the latest-starting one if several overlap."""
    result = await db.execute(
        select(Season)
        .where(Season.start_at <= now, Season.end_at >= now)
        .order_by(Season.start_at.desc(), Season.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def find_latest_ended_season(db: AsyncSession, now: datetime) -> Season | None:
    result = await db.execute(
        select(Season)
        .where(Season.end_at < now)
        .order_by(Season.end_at.desc(), Season.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def resolve_default_season_id(db: AsyncSession, now: datetime | None = None) -> int:
    """Current season, else the most recently ended one.

    Raises NoSeasonAvailable when only future seasons (or none) exist.
    """
    now = now or utcnow()
    season = await find_current_season(db, now)
    if season is None:
        season = await find_latest_ended_season(db, now)
        if season is not None:
            logger.debug("No current season at %s, falling back to ended season %s", now, season.id)
    if season is None:
        raise NoSeasonAvailable("No current or previously ended season")
    return season.id


# ──────────────────────────────────────────
#  Resolution
# ──────────────────────────────────────────


def selection_from_stage(stage: SportsSeasonsStage) -> ResolvedSelection:
    return ResolvedSelection(
        season_id=stage.season_id,
        sport_id=stage.category.sport_id,
        sport_category_id=stage.sport_category_id,
        stage_id=stage.id,
        competition_stage=stage.competition_stage,
        stage_name=stage.name,
    )


async def _single_category_for_sport(db: AsyncSession, season_id: int, sport_id: int) -> int:
    result = await db.execute(
        select(SportCategory.id)
        .join(SportsSeasonsStage, SportsSeasonsStage.sport_category_id == SportCategory.id)
        .where(
            SportCategory.sport_id == sport_id,
            SportsSeasonsStage.season_id == season_id,
        )
        .distinct()
        .order_by(SportCategory.id)
    )
    category_ids = list(result.scalars().all())
    if not category_ids:
        raise StageNotFound(f"No stages for sport {sport_id} in season {season_id}")
    if len(category_ids) > 1:
        raise AmbiguousSelection(
            f"Sport {sport_id} has {len(category_ids)} categories in season {season_id}; "
            "a sport category is required"
        )
    return category_ids[0]


async def resolve_stage(
    db: AsyncSession,
    filters: StandingsFilters,
    now: datetime | None = None,
) -> SportsSeasonsStage:
    """Turn partial filters into one persisted stage.

    ``stage_id`` takes precedence; any other field sent with it is ignored.
    Otherwise season defaults to the current one, category must be given or
    be the only one of the given sport, and competition stage defaults to
    the configured policy.
    """
    if filters.stage_id is not None:
        return await load_stage(db, filters.stage_id)

    season_id = filters.season_id
    if season_id is None:
        season_id = await resolve_default_season_id(db, now)

    category_id = filters.sport_category_id
    if category_id is None:
        if filters.sport_id is None:
            raise AmbiguousSelection("A sport or sport category is required for standings")
        category_id = await _single_category_for_sport(db, season_id, filters.sport_id)

    competition_stage = filters.competition_stage or default_competition_stage()

    query = (
        select(SportsSeasonsStage)
        .join(SportsSeasonsStage.category)
        .where(
            SportsSeasonsStage.sport_category_id == category_id,
            SportsSeasonsStage.season_id == season_id,
            SportsSeasonsStage.competition_stage == competition_stage,
        )
    )
    if filters.sport_id is not None:
        query = query.where(SportCategory.sport_id == filters.sport_id)
    query = (
        query.options(selectinload(SportsSeasonsStage.category))
        .order_by(SportsSeasonsStage.order_index, SportsSeasonsStage.id)
        .limit(1)
    )

    result = await db.execute(query)
    stage = result.scalar_one_or_none()
    if stage is None:
        raise StageNotFound(
            f"No {competition_stage.value} stage for category {category_id} in season {season_id}"
        )
    logger.debug(
        "Resolved filters %s to stage %s (season=%s, category=%s)",
        filters.model_dump(exclude_none=True), stage.id, season_id, category_id,
    )
    return stage


async def resolve(
    db: AsyncSession,
    filters: StandingsFilters,
    now: datetime | None = None,
) -> ResolvedSelection:
    stage = await resolve_stage(db, filters, now=now)
    return selection_from_stage(stage)


# ──────────────────────────────────────────
#  Navigation
# ──────────────────────────────────────────


def _season_option(season: Season, now: datetime) -> SeasonOption:
    start_at = ensure_utc(season.start_at)
    end_at = ensure_utc(season.end_at)
    return SeasonOption(
        id=season.id,
        name=format_season_name(start_at, end_at),
        start_at=start_at,
        end_at=end_at,
        is_current=start_at <= ensure_utc(now) <= end_at,
    )


def _category_option(category: SportCategory) -> CategoryOption:
    return CategoryOption(
        id=category.id,
        sport_id=category.sport_id,
        division=category.division,
        levels=category.levels,
        display_name=format_category_name(category.division, category.levels),
    )


async def list_available_seasons(db: AsyncSession, now: datetime | None = None) -> list[SeasonOption]:
    """Seasons with at least one stage, newest first."""
    now = now or utcnow()
    has_stage = exists(
        select(SportsSeasonsStage.id).where(SportsSeasonsStage.season_id == Season.id)
    )
    result = await db.execute(
        select(Season).where(has_stage).order_by(Season.start_at.desc(), Season.id.desc())
    )
    return [_season_option(s, now) for s in result.scalars().all()]


async def list_available_sports(db: AsyncSession, season_id: int) -> list[SportOption]:
    """Sports with at least one stage in the season."""
    has_stage = exists(
        select(SportsSeasonsStage.id)
        .join(SportCategory, SportsSeasonsStage.sport_category_id == SportCategory.id)
        .where(
            SportCategory.sport_id == Sport.id,
            SportsSeasonsStage.season_id == season_id,
        )
    )
    result = await db.execute(select(Sport).where(has_stage).order_by(Sport.name, Sport.id))
    return [SportOption.model_validate(s) for s in result.scalars().all()]


async def list_available_categories(
    db: AsyncSession, season_id: int, sport_id: int | None = None
) -> list[CategoryOption]:
    """Categories with at least one stage in the season, optionally for one sport."""
    has_stage = exists(
        select(SportsSeasonsStage.id).where(
            SportsSeasonsStage.sport_category_id == SportCategory.id,
            SportsSeasonsStage.season_id == season_id,
        )
    )
    query = select(SportCategory).where(has_stage)
    if sport_id is not None:
        query = query.where(SportCategory.sport_id == sport_id)
    result = await db.execute(query.order_by(SportCategory.sport_id, SportCategory.id))
    return [_category_option(c) for c in result.scalars().all()]


async def list_available_stages(
    db: AsyncSession, season_id: int, sport_category_id: int
) -> list[StageOption]:
    result = await db.execute(
        select(SportsSeasonsStage)
        .where(
            SportsSeasonsStage.season_id == season_id,
            SportsSeasonsStage.sport_category_id == sport_category_id,
        )
        .order_by(SportsSeasonsStage.order_index, SportsSeasonsStage.id)
    )
    return [
        StageOption(
            id=s.id,
            name=s.name,
            competition_stage=s.competition_stage,
            order=s.order_index,
        )
        for s in result.scalars().all()
    ]


async def navigation(
    db: AsyncSession,
    filters: StandingsFilters,
    now: datetime | None = None,
) -> StandingsNavigation:
    """Selectable seasons, sports, categories and stages for the given filters.

    Works with any subset of filters. A missing season falls back to the
    default season; when none exists the dependent lists are empty.
    Only an unknown ``stage_id`` is an error.
    """
    now = now or utcnow()
    season_id = filters.season_id
    sport_id = filters.sport_id
    category_id = filters.sport_category_id

    if filters.stage_id is not None:
        stage = await load_stage(db, filters.stage_id)
        season_id = stage.season_id
        sport_id = stage.category.sport_id
        category_id = stage.sport_category_id
    else:
        if season_id is None:
            try:
                season_id = await resolve_default_season_id(db, now)
            except NoSeasonAvailable:
                logger.debug("Navigation requested with no season available")
        if category_id is not None and sport_id is None:
            category = await db.get(SportCategory, category_id)
            if category is not None:
                sport_id = category.sport_id

    navigation_data = StandingsNavigation(
        season_id=season_id,
        sport_id=sport_id,
        sport_category_id=category_id,
        available_seasons=await list_available_seasons(db, now),
    )
    if season_id is None:
        return navigation_data

    navigation_data.available_sports = await list_available_sports(db, season_id)
    navigation_data.available_categories = await list_available_categories(db, season_id, sport_id)
    if category_id is not None:
        navigation_data.available_stages = await list_available_stages(db, season_id, category_id)
    return navigation_data
