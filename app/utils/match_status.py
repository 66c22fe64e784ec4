"""Shared match result helpers."""

from app.models.match import Match, MatchStatus

# A live score is provisional and a canceled match has no result.
UNDECIDABLE_STATUSES = frozenset({MatchStatus.ongoing, MatchStatus.canceled})


def is_match_decided(match: Match) -> bool:
    """Whether a match has a final result.

    True when the match has at least two participants, every participant
    score is recorded, and the match is neither live nor canceled.
    A single participant means the opponent is not known yet.
    """
    if match.status in UNDECIDABLE_STATUSES:
        return False
    participants = match.participants
    if len(participants) < 2:
        return False
    return all(p.match_score is not None for p in participants)
