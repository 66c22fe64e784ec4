"""Elimination-stage standings: bracket tree with winner propagation.

The bracket is an arena of nodes keyed by match id. The match at
(round r, position p) feeds the match at (r + 1, p // 2); even positions
fill slot 1 and odd positions slot 2. Rounds are resolved in ascending
order so a feeder's winner is known before its parent is filled.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Match, MatchParticipant, SportsSeasonsStage
from app.schemas.standings import (
    BracketNode,
    BracketRound,
    BracketSlot,
    BracketStandings,
    BracketTeam,
    UnresolvedMatch,
)
from app.services.stages import build_stage_summary, load_stage, load_stage_matches
from app.utils.match_status import UNDECIDABLE_STATUSES

logger = logging.getLogger(__name__)

SLOTS = (1, 2)


@dataclass
class _Node:
    match: Match
    round: int
    position: int
    parent_id: int | None = None
    parent_slot: int | None = None
    feeders: dict[int, int] = field(default_factory=dict)  # slot -> feeder match id
    slots: dict[int, BracketSlot] = field(
        default_factory=lambda: {slot: BracketSlot() for slot in SLOTS}
    )
    state: str = "pending"
    winner_slot: int | None = None

    @property
    def winner(self) -> BracketTeam | None:
        if self.winner_slot is None:
            return None
        return self.slots[self.winner_slot].team


@dataclass
class BracketLayout:
    nodes: dict[int, _Node]
    rounds: dict[int, list[int]]  # round -> match ids by position
    unresolved: list[UnresolvedMatch]


def _bracket_team(participant: MatchParticipant) -> BracketTeam:
    team = participant.team
    school = team.school if team else None
    return BracketTeam(
        team_id=participant.team_id,
        team_name=team.name if team else f"Team {participant.team_id}",
        school_name=school.name if school else None,
        school_abbreviation=school.abbreviation if school else None,
        school_logo_url=school.logo_url if school else None,
    )


def _next_free_position(taken: dict[tuple[int, int], int], round_number: int, start: int) -> int:
    position = start
    while (round_number, position) in taken:
        position += 1
    return position


def _place_nodes(matches: list[Match]) -> tuple[dict[int, _Node], dict[tuple[int, int], int]]:
    nodes: dict[int, _Node] = {}
    taken: dict[tuple[int, int], int] = {}
    unplaced: list[Match] = []

    for match in matches:
        round_number, position = match.bracket_round, match.bracket_position
        if round_number is None or position is None or round_number < 1 or position < 0:
            unplaced.append(match)
            continue
        if (round_number, position) in taken:
            moved_to = _next_free_position(taken, round_number, position)
            logger.warning(
                "Match %s: bracket position (%s, %s) already used by match %s; moved to %s",
                match.id, round_number, position, taken[(round_number, position)], moved_to,
            )
            position = moved_to
        taken[(round_number, position)] = match.id
        nodes[match.id] = _Node(match=match, round=round_number, position=position)

    if unplaced:
        logger.warning(
            "Stage %s has %s bracket matches without round/position; appended to round 1",
            unplaced[0].stage_id, len(unplaced),
        )
    for match in unplaced:
        position = _next_free_position(taken, 1, 0)
        taken[(1, position)] = match.id
        nodes[match.id] = _Node(match=match, round=1, position=position)

    return nodes, taken


def _link_nodes(nodes: dict[int, _Node], taken: dict[tuple[int, int], int]) -> None:
    for node in nodes.values():
        parent_id = taken.get((node.round + 1, node.position // 2))
        if parent_id is None:
            continue
        node.parent_id = parent_id
        node.parent_slot = 1 + node.position % 2
        nodes[parent_id].feeders[node.parent_slot] = node.match.id


def _fill_slots(node: _Node, nodes: dict[int, _Node]) -> None:
    """Feeder winners take their slot; the match's own participants fill the rest.

    Participants fill slots without a feeder first, then feeder slots
    whose feeder is still undecided. An unfilled slot stays TBD.
    """
    placed: set[int] = set()
    for slot, feeder_id in node.feeders.items():
        node.slots[slot].source_match_id = feeder_id
        feeder_winner = nodes[feeder_id].winner
        if feeder_winner is not None and feeder_winner.team_id not in placed:
            node.slots[slot].team = feeder_winner
            placed.add(feeder_winner.team_id)

    participants = node.match.participants
    remaining = [p for p in participants if p.team_id not in placed]
    free_slots = [s for s in SLOTS if node.slots[s].team is None and s not in node.feeders]
    free_slots += [s for s in SLOTS if node.slots[s].team is None and s in node.feeders]
    if len(remaining) > len(free_slots):
        logger.warning(
            "Match %s has more participants than open bracket slots; extra ignored",
            node.match.id,
        )
    for slot, participant in zip(free_slots, remaining):
        node.slots[slot].team = _bracket_team(participant)

    scores = {p.team_id: p.match_score for p in participants}
    for slot in node.slots.values():
        if slot.team is not None:
            slot.score = scores.get(slot.team.team_id)


def _decide(node: _Node, unresolved: list[UnresolvedMatch]) -> None:
    """Set the winner, or leave the node pending / flag a tie. Never guesses."""
    slot1, slot2 = node.slots[1], node.slots[2]
    if (
        node.match.status in UNDECIDABLE_STATUSES
        or slot1.team is None
        or slot2.team is None
        or slot1.score is None
        or slot2.score is None
    ):
        node.state = "pending"
        return

    if slot1.score > slot2.score:
        node.state, node.winner_slot = "decided", 1
    elif slot2.score > slot1.score:
        node.state, node.winner_slot = "decided", 2
    else:
        node.state = "unresolved"
        logger.warning(
            "Elimination match %s finished level %s-%s; winner left unresolved",
            node.match.id, slot1.score, slot2.score,
        )
        unresolved.append(
            UnresolvedMatch(
                match_id=node.match.id,
                round=node.round,
                position=node.position,
                reason="tied_score",
                scores=[slot1.score, slot2.score],
            )
        )


def build_bracket(matches: list[Match]) -> BracketLayout:
    """Arrange a stage's matches into a bracket and propagate winners."""
    nodes, taken = _place_nodes(matches)
    _link_nodes(nodes, taken)

    rounds: dict[int, list[int]] = {}
    for (round_number, position), match_id in sorted(taken.items()):
        rounds.setdefault(round_number, []).append(match_id)

    unresolved: list[UnresolvedMatch] = []
    for round_number in sorted(rounds):
        for match_id in rounds[round_number]:
            node = nodes[match_id]
            _fill_slots(node, nodes)
            _decide(node, unresolved)

    return BracketLayout(nodes=nodes, rounds=rounds, unresolved=unresolved)


def _bracket_node(node: _Node) -> BracketNode:
    match = node.match
    return BracketNode(
        match_id=match.id,
        match_name=match.name,
        round=node.round,
        position=node.position,
        match_status=match.status,
        scheduled_at=match.scheduled_at,
        venue=match.venue,
        state=node.state,
        slot1=node.slots[1],
        slot2=node.slots[2],
        winner=node.winner,
        winner_slot=node.winner_slot,
        parent_match_id=node.parent_id,
        parent_slot=node.parent_slot,
    )


async def build_bracket_standings(db: AsyncSession, stage: SportsSeasonsStage) -> BracketStandings:
    matches = await load_stage_matches(db, stage.id)
    layout = build_bracket(matches)

    ordered_ids = [match_id for round_number in sorted(layout.rounds) for match_id in layout.rounds[round_number]]
    roots = sorted(
        (node for node in layout.nodes.values() if node.parent_id is None),
        key=lambda node: (-node.round, node.position),
    )
    return BracketStandings(
        stage=build_stage_summary(stage),
        rounds=[
            BracketRound(round=round_number, match_ids=match_ids)
            for round_number, match_ids in sorted(layout.rounds.items())
        ],
        nodes=[_bracket_node(layout.nodes[match_id]) for match_id in ordered_ids],
        root_match_ids=[node.match.id for node in roots],
        unresolved_matches=layout.unresolved,
    )


async def calculate_bracket_standings(db: AsyncSession, stage_id: int) -> BracketStandings:
    """Bracket for a stage. Raises StageNotFound for unknown stages."""
    stage = await load_stage(db, stage_id)
    return await build_bracket_standings(db, stage)
