"""Group-stage ranking as an ordered chain of comparators.

A comparator returns a negative number when ``a`` ranks above ``b``, a
positive number when it ranks below, and 0 when its criterion does not
separate the two. The chain is evaluated in order and stops at the first
non-zero answer:

1. wins (desc)
2. point differential (desc)
3. teams with a completed match before teams without one
4. head-to-head, only when exactly two teams are level on 1-3
5. points scored (desc)
6. team name (asc)
7. team id (asc)

The last criterion makes the order total.
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Callable


@dataclass
class TeamRecord:
    """Running totals for one team in one stage."""
    team_id: int
    team_name: str
    school_id: int | None = None
    school_name: str | None = None
    school_abbreviation: str | None = None
    school_logo_url: str | None = None
    matches_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0  # level results, also counted in losses
    points_for: int = 0
    points_against: int = 0

    @property
    def point_differential(self) -> int:
        return self.points_for - self.points_against

    @property
    def has_played(self) -> bool:
        return self.matches_played > 0


@dataclass
class HeadToHead:
    """Wins of one team over another, keyed by (winner_id, loser_id)."""
    wins: dict[tuple[int, int], int] = field(default_factory=dict)

    def record_win(self, winner_id: int, loser_id: int) -> None:
        key = (winner_id, loser_id)
        self.wins[key] = self.wins.get(key, 0) + 1

    def balance(self, team_id: int, opponent_id: int) -> int:
        """Wins of ``team_id`` over ``opponent_id`` minus the reverse."""
        return self.wins.get((team_id, opponent_id), 0) - self.wins.get((opponent_id, team_id), 0)


Comparator = Callable[[TeamRecord, TeamRecord], int]


def _higher_first(a, b) -> int:
    return (b > a) - (b < a)


def _lower_first(a, b) -> int:
    return (a > b) - (a < b)


def by_wins(a: TeamRecord, b: TeamRecord) -> int:
    return _higher_first(a.wins, b.wins)


def by_point_differential(a: TeamRecord, b: TeamRecord) -> int:
    return _higher_first(a.point_differential, b.point_differential)


def by_has_played(a: TeamRecord, b: TeamRecord) -> int:
    return _higher_first(a.has_played, b.has_played)


def by_points_for(a: TeamRecord, b: TeamRecord) -> int:
    return _higher_first(a.points_for, b.points_for)


def by_team_name(a: TeamRecord, b: TeamRecord) -> int:
    return _lower_first(a.team_name.casefold(), b.team_name.casefold()) or _lower_first(
        a.team_name, b.team_name
    )


def by_team_id(a: TeamRecord, b: TeamRecord) -> int:
    return _lower_first(a.team_id, b.team_id)


def tie_key(record: TeamRecord) -> tuple[int, int, bool]:
    """Values compared before head-to-head. Equal keys form a tie group."""
    return (record.wins, record.point_differential, record.has_played)


def by_head_to_head(results: HeadToHead, tie_sizes: dict[int, int]) -> Comparator:
    """Head-to-head between the two members of a two-team tie group.

    ``tie_sizes`` maps team id to the size of its tie group. Larger groups
    are left to the following criteria.
    """
    def compare(a: TeamRecord, b: TeamRecord) -> int:
        if tie_sizes.get(a.team_id) != 2 or tie_sizes.get(b.team_id) != 2:
            return 0
        return -results.balance(a.team_id, b.team_id)

    return compare


def build_chain(records: list[TeamRecord], results: HeadToHead) -> list[Comparator]:
    group_sizes = Counter(tie_key(r) for r in records)
    tie_sizes = {r.team_id: group_sizes[tie_key(r)] for r in records}
    return [
        by_wins,
        by_point_differential,
        by_has_played,
        by_head_to_head(results, tie_sizes),
        by_points_for,
        by_team_name,
        by_team_id,
    ]


def chain_comparator(chain: list[Comparator]) -> Comparator:
    def compare(a: TeamRecord, b: TeamRecord) -> int:
        for comparator in chain:
            outcome = comparator(a, b)
            if outcome:
                return outcome
        return 0

    return compare


def rank_records(records: list[TeamRecord], results: HeadToHead | None = None) -> list[TeamRecord]:
    """Order records best first."""
    chain = build_chain(records, results or HeadToHead())
    return sorted(records, key=cmp_to_key(chain_comparator(chain)))


def find_unresolved_ties(records: list[TeamRecord]) -> list[list[int]]:
    """Team id groups of three or more teams that played and are level on tie_key.

    Their order comes from points scored and name, not from a head-to-head
    rule. Ids keep the order of ``records``.
    """
    groups: dict[tuple[int, int, bool], list[int]] = defaultdict(list)
    for record in records:
        if record.has_played:
            groups[tie_key(record)].append(record.team_id)
    return [team_ids for team_ids in groups.values() if len(team_ids) >= 3]
