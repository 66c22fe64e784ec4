from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from app.models import CompetitionStage, MatchStatus


class StandingsFilters(BaseModel):
    """Partial selection. Every field is optional; ``stage_id`` wins over the rest."""
    season_id: int | None = Field(default=None, gt=0)
    sport_id: int | None = Field(default=None, gt=0)
    sport_category_id: int | None = Field(default=None, gt=0)
    stage_id: int | None = Field(default=None, gt=0)
    competition_stage: CompetitionStage | None = None


class ResolvedSelection(BaseModel):
    season_id: int
    sport_id: int
    sport_category_id: int
    stage_id: int
    competition_stage: CompetitionStage
    stage_name: str | None = None


class StageSummary(BaseModel):
    id: int
    name: str | None = None
    competition_stage: CompetitionStage
    competition_stage_label: str
    order: int = 0


# ──────────────────────────────────────────
#  Group stage (table)
# ──────────────────────────────────────────


class TeamStanding(BaseModel):
    position: int
    team_id: int
    team_name: str
    school_id: int | None = None
    school_name: str | None = None
    school_abbreviation: str | None = None
    school_logo_url: str | None = None

    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0  # level results; already included in losses
    points_for: int = 0
    points_against: int = 0
    point_differential: int = 0


class GroupStanding(BaseModel):
    group_name: str | None = None  # single group per stage for now
    teams: list[TeamStanding]


class GroupStageStandings(BaseModel):
    format: Literal["group_table"] = "group_table"
    stage: StageSummary
    groups: list[GroupStanding]
    # Team id groups (3+ teams) level on wins and differential; ordered by
    # points scored and name without a head-to-head rule.
    unresolved_ties: list[list[int]] = []


# ──────────────────────────────────────────
#  Elimination stages (bracket)
# ──────────────────────────────────────────


class BracketTeam(BaseModel):
    team_id: int
    team_name: str
    school_name: str | None = None
    school_abbreviation: str | None = None
    school_logo_url: str | None = None


class BracketSlot(BaseModel):
    team: BracketTeam | None = None  # None = TBD
    score: int | None = None
    source_match_id: int | None = None  # feeder match whose winner fills this slot


class BracketNode(BaseModel):
    match_id: int
    match_name: str | None = None
    round: int
    position: int
    match_status: MatchStatus
    scheduled_at: datetime | None = None
    venue: str | None = None
    state: Literal["decided", "pending", "unresolved"]
    slot1: BracketSlot
    slot2: BracketSlot
    winner: BracketTeam | None = None
    winner_slot: int | None = None
    parent_match_id: int | None = None
    parent_slot: int | None = None


class UnresolvedMatch(BaseModel):
    """An elimination match that finished level. Surfaced, never broken."""
    match_id: int
    round: int
    position: int
    reason: str
    scores: list[int | None] = []


class BracketRound(BaseModel):
    round: int
    match_ids: list[int]


class BracketStandings(BaseModel):
    format: Literal["bracket"] = "bracket"
    stage: StageSummary
    rounds: list[BracketRound]
    nodes: list[BracketNode]
    root_match_ids: list[int] = []
    unresolved_matches: list[UnresolvedMatch] = []


StandingsData = Annotated[
    Union[GroupStageStandings, BracketStandings],
    Field(discriminator="format"),
]


class StandingsResponse(BaseModel):
    selection: ResolvedSelection
    standings: StandingsData
