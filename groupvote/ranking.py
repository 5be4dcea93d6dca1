"""Orchestrator: score every candidate, sort, rank and badge."""

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from groupvote.models import Candidate, GroupConfig, RankedMeta, RankedResult, Vote, parse_timestamp
from groupvote.scoring.aggregate import aggregate_votes, round_half_up
from groupvote.scoring.consensus import (
    LOW,
    TOP_CHOICE,
    approval_percent,
    assign_badge,
    classify_consensus,
)
from groupvote.scoring.trend import detect_trend

logger = logging.getLogger(__name__)


@dataclass
class RankingOptions:
    """Per-call settings for compute_rankings.

    Attributes:
        member_count: Denominator for turnout; defaults to the membership size
        group_config: Group membership and settings; defaults to an empty group
        discussion_counts: Discussion message count per candidate id
        now: Reference time for recency decay; defaults to the current time
    """
    member_count: int | None = None
    group_config: GroupConfig | None = None
    discussion_counts: dict[str, int] = field(default_factory=dict)
    now: datetime | None = None


def compute_rankings(
    candidates: list[Candidate],
    votes: list[Vote],
    options: RankingOptions | None = None,
) -> list[RankedResult]:
    """Rank candidates by composite score.

    Returns one RankedResult per candidate, best first, with ranks 1..N. Ties
    keep input order. Never raises: if anything goes wrong the error is logged
    and a zeroed ranking in input order is returned instead.
    """
    if not isinstance(candidates, Iterable):
        candidates = []
    try:
        candidates = list(candidates)
        return _compute_rankings(candidates, votes, options or RankingOptions())
    except Exception:
        logger.exception("Error computing rankings; falling back to input order")
        return fallback_rankings(candidates if isinstance(candidates, list) else [])


def _compute_rankings(
    candidates: list[Candidate], votes: list[Vote], options: RankingOptions
) -> list[RankedResult]:
    group = options.group_config or GroupConfig()
    now = parse_timestamp(options.now) or datetime.now(timezone.utc)
    members = group.member_index()
    member_count = options.member_count if options.member_count is not None else len(members)

    votes_by_candidate: dict[str, list[Vote]] = defaultdict(list)
    for vote in votes:
        votes_by_candidate[vote.candidate_id].append(vote)

    results = []
    for candidate in candidates:
        candidate_votes = votes_by_candidate.get(candidate.id, [])
        discussion_count = options.discussion_counts.get(candidate.id, 0)

        meta = aggregate_votes(candidate, candidate_votes, group, members, now)
        meta.consensus = classify_consensus(meta.like_ratio, meta.total_votes)
        meta.badge = assign_badge(
            meta, group.consensus_threshold, candidate.engagement, discussion_count
        )
        meta.trend = detect_trend(candidate_votes)
        meta.approval_percent = approval_percent(meta.like_ratio)
        meta.discussion_count = discussion_count

        voted = len({v.voter_id for v in candidate_votes})
        if member_count > 0:
            meta.turnout_percent = min(100, round_half_up(voted / member_count * 100))

        results.append(RankedResult(candidate=candidate, meta=meta))

    # sorted() is stable with reverse=True, so ties keep input order
    ranked = sorted(results, key=lambda r: r.meta.composite_score, reverse=True)
    for index, result in enumerate(ranked):
        result.meta.rank = index + 1
    if ranked and ranked[0].meta.badge is None:
        ranked[0].meta.badge = TOP_CHOICE

    logger.debug("Computed rankings for %d candidates", len(ranked))
    return ranked


def fallback_rankings(candidates: list[Candidate]) -> list[RankedResult]:
    """Neutral ranking: input order, all counters zero, no badges."""
    return [
        RankedResult(
            candidate=candidate,
            meta=RankedMeta(
                candidate_id=getattr(candidate, "id", str(index)),
                consensus=LOW,
                rank=index + 1,
            ),
        )
        for index, candidate in enumerate(candidates)
    ]
