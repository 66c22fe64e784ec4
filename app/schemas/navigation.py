from datetime import datetime

from pydantic import BaseModel

from app.models import CompetitionStage, SportDivision, SportLevel


class SeasonOption(BaseModel):
    id: int
    name: str
    start_at: datetime
    end_at: datetime
    is_current: bool = False


class SportOption(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True


class CategoryOption(BaseModel):
    id: int
    sport_id: int
    division: SportDivision
    levels: SportLevel
    display_name: str


class StageOption(BaseModel):
    id: int
    name: str | None = None
    competition_stage: CompetitionStage
    order: int = 0


class StandingsNavigation(BaseModel):
    """Selectable values for the standings dropdowns.

    Every list only holds values that lead to at least one stage row.
    ``season_id`` / ``sport_id`` / ``sport_category_id`` echo the context
    the dependent lists were computed for.
    """
    season_id: int | None = None
    sport_id: int | None = None
    sport_category_id: int | None = None
    available_seasons: list[SeasonOption] = []
    available_sports: list[SportOption] = []
    available_categories: list[CategoryOption] = []
    available_stages: list[StageOption] = []
