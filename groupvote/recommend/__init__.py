"""Recommenders that suggest compromises when the group disagrees."""

import logging
from datetime import datetime, timezone

from groupvote.models import GroupConfig, RankedResult, Recommendation, parse_timestamp

from .base import Recommender

logger = logging.getLogger(__name__)

# Recommender registry - order of registration is order of output
_recommenders: list[type[Recommender]] = []


def register_recommender(recommender_class: type[Recommender]) -> type[Recommender]:
    """Decorator to register a recommender class."""
    _recommenders.append(recommender_class)
    return recommender_class


def get_all_recommenders() -> list[Recommender]:
    """Return instances of all registered recommenders."""
    return [recommender_class() for recommender_class in _recommenders]


def generate_recommendations(
    ranked: list[RankedResult],
    group: GroupConfig | None = None,
    now: datetime | None = None,
) -> list[Recommendation]:
    """Run every registered recommender over a ranking.

    A recommender that fails is logged and skipped; the others still run.
    May return an empty list.
    """
    group = group or GroupConfig()
    now = parse_timestamp(now) or datetime.now(timezone.utc)

    recommendations = []
    for recommender in get_all_recommenders():
        try:
            recommendation = recommender.recommend(ranked, group, now)
        except Exception:
            logger.exception("Recommender %r failed", recommender.name)
            continue
        if recommendation is not None:
            recommendations.append(recommendation)
    return recommendations


# Import recommenders to register them (compromise before alternative)
from . import compromise  # noqa: E402, F401
from . import alternative  # noqa: E402, F401
