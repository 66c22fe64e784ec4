"""Stage and match loading shared by the resolver and both aggregators."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Match, MatchParticipant, SchoolsTeam, SportsSeasonsStage
from app.schemas.standings import StageSummary
from app.services.errors import StageNotFound
from app.utils.sports import format_competition_stage


async def load_stage(db: AsyncSession, stage_id: int) -> SportsSeasonsStage:
    """Load a stage with its category, or raise StageNotFound."""
    result = await db.execute(
        select(SportsSeasonsStage)
        .where(SportsSeasonsStage.id == stage_id)
        .options(selectinload(SportsSeasonsStage.category))
    )
    stage = result.scalar_one_or_none()
    if stage is None:
        raise StageNotFound(f"Stage {stage_id} not found", stage_id=stage_id)
    return stage


async def load_stage_matches(db: AsyncSession, stage_id: int) -> list[Match]:
    """All matches of a stage with participants, teams and schools.

    Ordered by schedule (unscheduled last), then id.
    """
    result = await db.execute(
        select(Match)
        .where(Match.stage_id == stage_id)
        .options(
            selectinload(Match.participants)
            .selectinload(MatchParticipant.team)
            .selectinload(SchoolsTeam.school)
        )
        .order_by(Match.scheduled_at.is_(None), Match.scheduled_at, Match.id)
    )
    return list(result.scalars().all())


async def load_stage_roster(db: AsyncSession, stage: SportsSeasonsStage) -> list[SchoolsTeam]:
    """Active teams registered for the stage's season and category."""
    result = await db.execute(
        select(SchoolsTeam)
        .where(
            SchoolsTeam.season_id == stage.season_id,
            SchoolsTeam.sport_category_id == stage.sport_category_id,
            SchoolsTeam.is_active.is_(True),
        )
        .options(selectinload(SchoolsTeam.school))
        .order_by(SchoolsTeam.id)
    )
    return list(result.scalars().all())


def build_stage_summary(stage: SportsSeasonsStage) -> StageSummary:
    return StageSummary(
        id=stage.id,
        name=stage.name,
        competition_stage=stage.competition_stage,
        competition_stage_label=format_competition_stage(stage.competition_stage),
        order=stage.order_index,
    )
