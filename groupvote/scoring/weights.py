"""Effective weight of a single vote."""

from groupvote.models import GroupConfig, Member, Vote

AUTHORITY_MULTIPLIERS: dict[str, float] = {
    "admin": 1.5,
    "verified": 1.2,
}


def authority_multiplier(authority: str | None) -> float:
    """Multiplier for a voter's authority level. Unknown levels count as 1."""
    return AUTHORITY_MULTIPLIERS.get(authority or "", 1.0)


def resolve_weight(
    vote: Vote, member: Member | None, group: GroupConfig
) -> tuple[float, bool]:
    """Resolve the effective weight of a vote.

    effective = base weight x authority multiplier x membership weight,
    clamped at 0. A voter missing from the group has membership weight 1.

    Returns (weight, whether a non-default authority or membership weight
    was applied). With equal voting every vote weighs exactly 1.
    """
    if group.equal_voting:
        return 1.0, False

    multiplier = authority_multiplier(vote.authority)
    membership_weight = member.vote_weight if member is not None else 1.0
    weight = max(0.0, vote.base_weight * multiplier * membership_weight)
    return weight, multiplier != 1.0 or membership_weight != 1.0
