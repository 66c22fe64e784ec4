"""Display helpers for sport categories, competition stages and seasons."""

import enum
from datetime import datetime
from typing import Any


class CompetitionStage(str, enum.Enum):
    """Competition phase. Decides whether standings are a table or a bracket.

    Must stay importable without the ORM: app.config depends on it.
    """
    group_stage = "group_stage"
    playins = "playins"
    playoffs = "playoffs"
    finals = "finals"


DIVISION_LABELS = {
    "men": "Men's",
    "women": "Women's",
    "mixed": "Mixed",
}

LEVEL_LABELS = {
    "elementary": "Elementary",
    "high_school": "High School",
    "college": "College",
}

COMPETITION_STAGE_LABELS = {
    "group_stage": "Group Stage",
    "playins": "Play-ins",
    "playoffs": "Playoffs",
    "finals": "Finals",
}


def _enum_value(value: Any) -> str:
    return getattr(value, "value", value)


def format_division(division: Any) -> str:
    """Format a division: "men" -> "Men's". Unknown values pass through."""
    key = _enum_value(division)
    return DIVISION_LABELS.get(key, key)


def format_level(level: Any) -> str:
    """Format a level: "high_school" -> "High School". Unknown values pass through."""
    key = _enum_value(level)
    return LEVEL_LABELS.get(key, key)


def format_category_name(division: Any, level: Any) -> str:
    """
    Format a sport category label.

    Args:
        division: Division (men, women, mixed), plain string or enum member
        level: Level (elementary, high_school, college), plain string or enum member

    Returns:
        Label such as "Men's Elementary" or "Mixed College"
    """
    return f"{format_division(division)} {format_level(level)}"


def format_competition_stage(stage: Any) -> str:
    key = _enum_value(stage)
    return COMPETITION_STAGE_LABELS.get(key, key)


def format_season_name(start_at: datetime, end_at: datetime) -> str:
    """Season label from its bounds: 2024-08-01 .. 2025-03-31 -> "2024-2025"."""
    return f"{start_at.year}-{end_at.year}"
