"""Weighted vote aggregation and composite scoring for one candidate."""

import math
from datetime import datetime
from operator import attrgetter

from groupvote.models import (
    ANONYMOUS_NAME,
    UNKNOWN_NAME,
    Candidate,
    GroupConfig,
    Member,
    RankedMeta,
    Vote,
    VoteBreakdown,
    VoteEvent,
    VoterInfo,
)
from groupvote.scoring.reasons import tally_reasons
from groupvote.scoring.weights import resolve_weight

ENGAGEMENT_DIVISOR = 50
ENGAGEMENT_CAP = 1.5

RECENCY_MAX_BOOST = 0.5
RECENCY_WINDOW_DAYS = 14
DISLIKE_RECENCY_FACTOR = 0.5

SECONDS_PER_DAY = 24 * 60 * 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def engagement_boost(candidate: Candidate) -> float:
    """Bonus from comments, saves and shares, capped at ENGAGEMENT_CAP."""
    return min(ENGAGEMENT_CAP, candidate.engagement / ENGAGEMENT_DIVISOR)


def recency_boost(votes: list[Vote], now: datetime) -> float:
    """Time-decayed bonus favouring recent likes.

    Each timestamped vote contributes RECENCY_MAX_BOOST decayed linearly to 0
    over RECENCY_WINDOW_DAYS: added in full for a like, half of it subtracted
    for a dislike. Votes without a timestamp contribute nothing and votes
    dated in the future count as brand new.
    """
    boost = 0.0
    for vote in votes:
        if vote.timestamp is None:
            continue
        age_days = max(0.0, (now - vote.timestamp).total_seconds() / SECONDS_PER_DAY)
        decayed = max(0.0, 1 - min(age_days / RECENCY_WINDOW_DAYS, 1)) * RECENCY_MAX_BOOST
        boost += decayed if vote.is_like else -decayed * DISLIKE_RECENCY_FACTOR
    return boost


def _voter_info(
    vote: Vote, weight: float, member: Member | None, hidden: bool, now: datetime
) -> VoterInfo:
    timestamp = vote.timestamp or now
    if hidden:
        return VoterInfo(
            user_id=None,
            name=ANONYMOUS_NAME,
            avatar="",
            timestamp=timestamp,
            weight=weight,
            reason=vote.reason,
        )
    return VoterInfo(
        user_id=vote.voter_id,
        name=member.name if member is not None else UNKNOWN_NAME,
        avatar=member.avatar if member is not None else "",
        timestamp=timestamp,
        weight=weight,
        is_verified=member.is_verified if member is not None else False,
        reason=vote.reason,
    )


def build_breakdown(
    votes: list[Vote],
    weights: list[float],
    group: GroupConfig,
    members: dict[str, Member],
    now: datetime,
) -> VoteBreakdown:
    """Assemble voter lists, abstentions, reason tallies and the vote timeline.

    Votes without a timestamp are shown as cast at `now`. Voter lists and the
    timeline are most-recent-first. Abstentions are member ids (in membership
    order) with no vote on this candidate.
    """
    hide_all = group.vote_visibility == "anonymous"
    likers: list[VoterInfo] = []
    dislikers: list[VoterInfo] = []
    timeline: list[VoteEvent] = []

    for vote, weight in zip(votes, weights):
        hidden = hide_all or vote.is_anonymous
        info = _voter_info(vote, weight, members.get(vote.voter_id), hidden, now)
        (likers if vote.is_like else dislikers).append(info)
        timeline.append(VoteEvent(
            user_id=info.user_id,
            candidate_id=vote.candidate_id,
            choice=vote.choice,
            timestamp=info.timestamp,
            reason=vote.reason,
        ))

    voter_ids = {vote.voter_id for vote in votes}
    abstentions = [user_id for user_id in members if user_id not in voter_ids]

    by_time = attrgetter("timestamp")
    return VoteBreakdown(
        like_voters=sorted(likers, key=by_time, reverse=True),
        dislike_voters=sorted(dislikers, key=by_time, reverse=True),
        abstentions=abstentions,
        reasons=tally_reasons(votes),
        timeline=sorted(timeline, key=by_time, reverse=True),
    )


def aggregate_votes(
    candidate: Candidate,
    votes: list[Vote],
    group: GroupConfig,
    members: dict[str, Member],
    now: datetime,
) -> RankedMeta:
    """Sum weighted votes for one candidate and compute its composite score.

    Args:
        candidate: The candidate being scored
        votes: All votes referencing this candidate
        group: Group settings
        members: Group members keyed by user id
        now: Reference time for recency decay

    Returns:
        RankedMeta with counts, boosts, composite score and vote breakdown
        filled in. Consensus, badge, trend and rank are left at defaults.
    """
    weighted_likes = 0.0
    weighted_dislikes = 0.0
    authority_applied = False
    weights: list[float] = []

    for vote in votes:
        weight, adjusted = resolve_weight(vote, members.get(vote.voter_id), group)
        authority_applied = authority_applied or adjusted
        weights.append(weight)
        if vote.is_like:
            weighted_likes += weight
        else:
            weighted_dislikes += weight

    likes = max(0, round_half_up(weighted_likes))
    dislikes = max(0, round_half_up(weighted_dislikes))
    total = likes + dislikes
    like_ratio = likes / total if total > 0 else 0.0
    net_score = likes - dislikes

    engagement = engagement_boost(candidate)
    recency = recency_boost(votes, now)
    distance = 0.0  # reserved for location-aware scoring

    return RankedMeta(
        candidate_id=candidate.id,
        net_score=net_score,
        likes=likes,
        dislikes=dislikes,
        like_ratio=like_ratio,
        engagement_boost=engagement,
        recency_boost=recency,
        distance_boost=distance,
        composite_score=net_score + engagement + recency + distance,
        authority_applied=authority_applied,
        vote_details=build_breakdown(votes, weights, group, members, now),
    )
