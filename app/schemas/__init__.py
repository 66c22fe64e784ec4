from app.schemas.common import ServiceResponse
from app.schemas.navigation import (
    CategoryOption,
    SeasonOption,
    SportOption,
    StageOption,
    StandingsNavigation,
)
from app.schemas.standings import (
    BracketNode,
    BracketRound,
    BracketSlot,
    BracketStandings,
    BracketTeam,
    GroupStageStandings,
    GroupStanding,
    ResolvedSelection,
    StageSummary,
    StandingsData,
    StandingsFilters,
    StandingsResponse,
    TeamStanding,
    UnresolvedMatch,
)

__all__ = [
    "ServiceResponse",
    "CategoryOption",
    "SeasonOption",
    "SportOption",
    "StageOption",
    "StandingsNavigation",
    "BracketNode",
    "BracketRound",
    "BracketSlot",
    "BracketStandings",
    "BracketTeam",
    "GroupStageStandings",
    "GroupStanding",
    "ResolvedSelection",
    "StageSummary",
    "StandingsData",
    "StandingsFilters",
    "StandingsResponse",
    "TeamStanding",
    "UnresolvedMatch",
]
