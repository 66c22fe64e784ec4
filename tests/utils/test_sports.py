from datetime import datetime, timedelta, timezone

from app.models import CompetitionStage, SportDivision, SportLevel
from app.utils.sports import (
    format_category_name,
    format_competition_stage,
    format_division,
    format_level,
    format_season_name,
)
from app.utils.timestamps import ensure_utc


class TestCategoryNames:
    def test_enum_members(self):
        assert format_category_name(SportDivision.men, SportLevel.college) == "Men's College"
        assert format_category_name(SportDivision.mixed, SportLevel.high_school) == "Mixed High School"

    def test_plain_strings(self):
        assert format_category_name("women", "elementary") == "Women's Elementary"

    def test_unknown_values_pass_through(self):
        assert format_division("coed") == "coed"
        assert format_level("junior_varsity") == "junior_varsity"


def test_format_competition_stage():
    assert format_competition_stage(CompetitionStage.playins) == "Play-ins"
    assert format_competition_stage("group_stage") == "Group Stage"


def test_format_season_name_uses_both_years():
    start = datetime(2024, 8, 1, tzinfo=timezone.utc)
    end = datetime(2025, 3, 31, tzinfo=timezone.utc)
    assert format_season_name(start, end) == "2024-2025"


class TestEnsureUtc:
    def test_naive_is_treated_as_utc(self):
        value = ensure_utc(datetime(2025, 1, 1, 12, 0))
        assert value.tzinfo == timezone.utc
        assert value.hour == 12

    def test_aware_is_converted(self):
        value = ensure_utc(datetime(2025, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=5))))
        assert value.hour == 7
