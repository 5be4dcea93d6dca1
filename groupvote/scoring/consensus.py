"""Consensus labels and badges."""

from groupvote.models import RankedMeta
from groupvote.scoring.aggregate import round_half_up

STRONG = "strong"
MODERATE = "moderate"
MIXED = "mixed"
LOW = "low"

# (minimum like ratio, label), checked top-down
CONSENSUS_BANDS: list[tuple[float, str]] = [
    (0.8, STRONG),
    (0.6, MODERATE),
    (0.4, MIXED),
]

UNANIMOUS = "unanimous"
GROUP_FAVORITE = "group_favorite"
CONTESTED = "contested"
TOP_CHOICE = "top_choice"

MIN_VOTES_FOR_FAVORITE = 3
MIN_VOTES_FOR_CONTESTED = 5
CONTESTED_RATIO_RANGE = (0.45, 0.55)
CONTESTED_MIN_ENGAGEMENT = 10
CONTESTED_MIN_DISCUSSION = 5


def classify_consensus(like_ratio: float, total_votes: int) -> str:
    """Label how aligned the group is. No votes is always "low"."""
    if total_votes <= 0:
        return LOW
    for minimum, label in CONSENSUS_BANDS:
        if like_ratio >= minimum:
            return label
    return LOW


def assign_badge(
    meta: RankedMeta,
    consensus_threshold: float,
    engagement: int,
    discussion_count: int,
) -> str | None:
    """Pick at most one badge for a candidate.

    Rules are evaluated in order and a later match replaces an earlier one:
    group_favorite, then unanimous, then contested. The top_choice fallback
    is applied after sorting, see groupvote.ranking.
    """
    total = meta.total_votes
    badge = None

    if total >= MIN_VOTES_FOR_FAVORITE and meta.like_ratio >= consensus_threshold:
        badge = GROUP_FAVORITE
    if total >= MIN_VOTES_FOR_FAVORITE and meta.dislikes == 0:
        badge = UNANIMOUS

    low, high = CONTESTED_RATIO_RANGE
    if (
        total >= MIN_VOTES_FOR_CONTESTED
        and low <= meta.like_ratio <= high
        and (engagement >= CONTESTED_MIN_ENGAGEMENT
             or discussion_count >= CONTESTED_MIN_DISCUSSION)
    ):
        badge = CONTESTED

    return badge


def approval_percent(like_ratio: float) -> int:
    return round_half_up(like_ratio * 100)
