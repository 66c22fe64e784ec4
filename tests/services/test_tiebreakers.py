from app.services.tiebreakers import (
    HeadToHead,
    TeamRecord,
    by_has_played,
    by_head_to_head,
    by_point_differential,
    by_points_for,
    by_team_id,
    by_team_name,
    by_wins,
    find_unresolved_ties,
    rank_records,
)


def _record(team_id, name, wins=0, losses=0, points_for=0, points_against=0):
    return TeamRecord(
        team_id=team_id,
        team_name=name,
        matches_played=wins + losses,
        wins=wins,
        losses=losses,
        points_for=points_for,
        points_against=points_against,
    )


class TestComparators:
    def test_more_wins_ranks_first(self):
        a = _record(1, "A", wins=3, losses=1)
        b = _record(2, "B", wins=1, losses=3)
        assert by_wins(a, b) < 0
        assert by_wins(b, a) > 0

    def test_equal_wins_is_neutral(self):
        assert by_wins(_record(1, "A", wins=2), _record(2, "B", wins=2)) == 0

    def test_higher_differential_ranks_first(self):
        a = _record(1, "A", points_for=50, points_against=40)
        b = _record(2, "B", points_for=60, points_against=58)
        assert by_point_differential(a, b) < 0

    def test_team_that_played_ranks_before_team_that_did_not(self):
        played = _record(1, "Zulu", wins=0, losses=1, points_for=5, points_against=5)
        idle = _record(2, "Alpha")
        assert by_has_played(played, idle) < 0
        assert by_has_played(idle, idle) == 0

    def test_points_for(self):
        assert by_points_for(_record(1, "A", points_for=70), _record(2, "B", points_for=65)) < 0

    def test_team_name_is_case_insensitive_first(self):
        assert by_team_name(_record(1, "alpha"), _record(2, "Bravo")) < 0
        assert by_team_name(_record(1, "Bravo"), _record(2, "alpha")) > 0

    def test_team_name_exact_order_breaks_case_only_difference(self):
        assert by_team_name(_record(1, "Alpha"), _record(2, "alpha")) < 0

    def test_team_id(self):
        assert by_team_id(_record(1, "A"), _record(2, "A")) < 0


class TestHeadToHead:
    def test_applies_only_to_two_team_ties(self):
        results = HeadToHead()
        results.record_win(2, 1)
        a, b = _record(1, "A"), _record(2, "B")

        assert by_head_to_head(results, {1: 2, 2: 2})(a, b) > 0
        assert by_head_to_head(results, {1: 2, 2: 2})(b, a) < 0
        assert by_head_to_head(results, {1: 3, 2: 3})(a, b) == 0

    def test_split_series_is_neutral(self):
        results = HeadToHead()
        results.record_win(1, 2)
        results.record_win(2, 1)
        assert results.balance(1, 2) == 0
        assert by_head_to_head(results, {1: 2, 2: 2})(_record(1, "A"), _record(2, "B")) == 0


class TestRankRecords:
    def test_head_to_head_beats_points_for(self):
        # Level on wins and differential; B won the meeting, A scored more overall
        a = _record(1, "A", wins=1, losses=1, points_for=90, points_against=90)
        b = _record(2, "B", wins=1, losses=1, points_for=80, points_against=80)
        results = HeadToHead()
        results.record_win(2, 1)

        ranked = rank_records([a, b], results)
        assert [r.team_id for r in ranked] == [2, 1]

    def test_without_head_to_head_points_for_decides(self):
        a = _record(1, "A", wins=1, losses=1, points_for=90, points_against=90)
        b = _record(2, "B", wins=1, losses=1, points_for=80, points_against=80)
        assert [r.team_id for r in rank_records([b, a])] == [1, 2]

    def test_order_is_total_and_input_independent(self):
        records = [
            _record(3, "Same"),
            _record(1, "Same"),
            _record(2, "same"),
            _record(4, "Other", wins=1, points_for=10, points_against=5),
        ]
        first = [r.team_id for r in rank_records(records)]
        second = [r.team_id for r in rank_records(list(reversed(records)))]
        assert first == second == [4, 1, 3, 2]


class TestUnresolvedTies:
    def test_three_way_tie_is_reported(self):
        records = [
            _record(1, "A", wins=1, losses=1, points_for=20, points_against=20),
            _record(2, "B", wins=1, losses=1, points_for=18, points_against=18),
            _record(3, "C", wins=1, losses=1, points_for=15, points_against=15),
        ]
        assert find_unresolved_ties(records) == [[1, 2, 3]]

    def test_two_team_ties_and_idle_teams_are_not_reported(self):
        records = [
            _record(1, "A", wins=1, losses=1, points_for=20, points_against=20),
            _record(2, "B", wins=1, losses=1, points_for=18, points_against=18),
            _record(3, "C"),
            _record(4, "D"),
            _record(5, "E"),
        ]
        assert find_unresolved_ties(records) == []
