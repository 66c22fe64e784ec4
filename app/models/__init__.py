from app.models.season import Season
from app.models.sport import Sport, SportCategory, SportDivision, SportLevel
from app.models.stage import SportsSeasonsStage, CompetitionStage
from app.models.school import School, SchoolsTeam
from app.models.match import Match, MatchParticipant, MatchStatus

__all__ = [
    "Season",
    "Sport",
    "SportCategory",
    "SportDivision",
    "SportLevel",
    "SportsSeasonsStage",
    "CompetitionStage",
    "School",
    "SchoolsTeam",
    "Match",
    "MatchParticipant",
    "MatchStatus",
]
