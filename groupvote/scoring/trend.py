"""Short-term voting momentum."""

from datetime import datetime, timezone

from groupvote.models import Vote

UP = "up"
DOWN = "down"
STEADY = "steady"

TREND_WINDOW = 5
MIN_VOTES_FOR_TREND = 3
TREND_MARGIN = 2

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def detect_trend(votes: list[Vote]) -> str:
    """Look at the TREND_WINDOW most recent votes for momentum.

    Votes without a timestamp sort as the oldest. Fewer than
    MIN_VOTES_FOR_TREND votes is always steady; otherwise likes or dislikes
    must lead by TREND_MARGIN.
    """
    recent = sorted(
        votes, key=lambda v: v.timestamp or _OLDEST, reverse=True
    )[:TREND_WINDOW]
    if len(recent) < MIN_VOTES_FOR_TREND:
        return STEADY

    recent_likes = sum(1 for v in recent if v.is_like)
    recent_dislikes = len(recent) - recent_likes
    if recent_likes >= recent_dislikes + TREND_MARGIN:
        return UP
    if recent_dislikes >= recent_likes + TREND_MARGIN:
        return DOWN
    return STEADY
