"""Utility functions."""

from app.utils.sports import (
    format_category_name,
    format_competition_stage,
    format_division,
    format_level,
    format_season_name,
)
from app.utils.timestamps import ensure_utc, utcnow

__all__ = [
    "format_category_name",
    "format_competition_stage",
    "format_division",
    "format_level",
    "format_season_name",
    "ensure_utc",
    "utcnow",
]
