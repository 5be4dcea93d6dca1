"""Shared test helpers."""

from datetime import datetime, timedelta, timezone

from groupvote.models import DISLIKE, LIKE, Candidate, GroupConfig, Member, Vote
from groupvote.ranking import RankingOptions, compute_rankings

NOW = datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc)


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_candidate(candidate_id: str, **kwargs) -> Candidate:
    kwargs.setdefault("name", f"Restaurant {candidate_id}")
    return Candidate(id=candidate_id, **kwargs)


def make_group(num_members: int = 3, **kwargs) -> GroupConfig:
    """Build a group with members u1..uN named "User 1".."User N"."""
    members = [
        Member(user_id=f"u{i}", name=f"User {i}", avatar=f"https://example.com/u{i}.png")
        for i in range(1, num_members + 1)
    ]
    return GroupConfig(members=members, **kwargs)


def make_votes(candidate_id: str, pattern: str, age_days: float = 1.0, **kwargs) -> list[Vote]:
    """Build votes from a compact pattern such as "LLD" (like, like, dislike).

    Voters are u1, u2, ... in pattern order. Each vote is one minute newer
    than the previous one, so the last vote in the pattern is the most recent.
    """
    start = days_ago(age_days)
    return [
        Vote(
            voter_id=f"u{i + 1}",
            candidate_id=candidate_id,
            choice=LIKE if ch == "L" else DISLIKE,
            timestamp=start + timedelta(minutes=i),
            **kwargs,
        )
        for i, ch in enumerate(pattern)
    ]


def rank(candidates: list[Candidate], votes: list[Vote], num_members: int = 6):
    """Rank candidates for a group of u1..uN at NOW."""
    return compute_rankings(
        candidates, votes, RankingOptions(group_config=make_group(num_members), now=NOW)
    )
