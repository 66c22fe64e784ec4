"""Group-stage standings: win/loss table computed from match results."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Match, SchoolsTeam, SportsSeasonsStage
from app.schemas.standings import GroupStageStandings, GroupStanding, TeamStanding
from app.services.stages import (
    build_stage_summary,
    load_stage,
    load_stage_matches,
    load_stage_roster,
)
from app.services.tiebreakers import (
    HeadToHead,
    TeamRecord,
    find_unresolved_ties,
    rank_records,
)
from app.utils.match_status import is_match_decided

logger = logging.getLogger(__name__)


def _ensure_record(
    records: dict[int, TeamRecord], team_id: int, team: SchoolsTeam | None
) -> TeamRecord:
    record = records.get(team_id)
    if record is not None:
        return record

    school = team.school if team else None
    record = TeamRecord(
        team_id=team_id,
        team_name=team.name if team else f"Team {team_id}",
        school_id=school.id if school else None,
        school_name=school.name if school else None,
        school_abbreviation=school.abbreviation if school else None,
        school_logo_url=school.logo_url if school else None,
    )
    records[team_id] = record
    return record


def accumulate_records(
    roster: list[SchoolsTeam], matches: list[Match]
) -> tuple[dict[int, TeamRecord], HeadToHead]:
    """Build per-team totals from decided matches.

    Every roster team and every team named in a participant row gets a
    record, even without a decided match. A win needs a score strictly
    greater than every other participant's; any other decided result is a
    loss. A loss level with the best opponent score also counts as a draw.
    Points against is the sum of the opponents' scores.
    """
    records: dict[int, TeamRecord] = {}
    results = HeadToHead()

    for team in roster:
        _ensure_record(records, team.id, team)

    for match in matches:
        participants = match.participants
        for participant in participants:
            _ensure_record(records, participant.team_id, participant.team)

        if len(participants) == 1:
            logger.warning(
                "Match %s in stage %s has a single participant; no opponent yet",
                match.id, match.stage_id,
            )
        if not is_match_decided(match):
            continue

        for participant in participants:
            opponents = [p for p in participants if p is not participant]
            own_score = participant.match_score
            record = records[participant.team_id]
            record.matches_played += 1
            record.points_for += own_score
            record.points_against += sum(p.match_score for p in opponents)

            best_opponent = max(p.match_score for p in opponents)
            if own_score > best_opponent:
                record.wins += 1
                for opponent in opponents:
                    results.record_win(participant.team_id, opponent.team_id)
            else:
                record.losses += 1
                if own_score == best_opponent:
                    record.draws += 1

    return records, results


def _team_standing(position: int, record: TeamRecord) -> TeamStanding:
    return TeamStanding(
        position=position,
        team_id=record.team_id,
        team_name=record.team_name,
        school_id=record.school_id,
        school_name=record.school_name,
        school_abbreviation=record.school_abbreviation,
        school_logo_url=record.school_logo_url,
        matches_played=record.matches_played,
        wins=record.wins,
        losses=record.losses,
        draws=record.draws,
        points_for=record.points_for,
        points_against=record.points_against,
        point_differential=record.point_differential,
    )


async def build_group_table(db: AsyncSession, stage: SportsSeasonsStage) -> GroupStageStandings:
    matches = await load_stage_matches(db, stage.id)
    roster = await load_stage_roster(db, stage)

    records, results = accumulate_records(roster, matches)
    ranked = rank_records(list(records.values()), results)
    unresolved_ties = find_unresolved_ties(ranked)
    if unresolved_ties:
        logger.info(
            "Stage %s has multi-team ties without a head-to-head rule: %s",
            stage.id, unresolved_ties,
        )

    teams = [_team_standing(position, record) for position, record in enumerate(ranked, 1)]
    return GroupStageStandings(
        stage=build_stage_summary(stage),
        groups=[GroupStanding(teams=teams)],
        unresolved_ties=unresolved_ties,
    )


async def calculate_group_stage_standings(db: AsyncSession, stage_id: int) -> GroupStageStandings:
    """Ranked table for a stage. Raises StageNotFound for unknown stages."""
    stage = await load_stage(db, stage_id)
    return await build_group_table(db, stage)
