"""Alternative suggestions when an option has some fans but little consensus."""

from datetime import datetime

from groupvote.models import GroupConfig, RankedResult, Recommendation
from groupvote.recommend import register_recommender
from groupvote.recommend.base import Recommender
from groupvote.scoring.consensus import LOW, STRONG

MAX_SUGGESTIONS = 3
CONFIDENCE = 0.7


@register_recommender
class AlternativeRecommender(Recommender):
    """Suggest strongly agreed-on restaurants in the same price range.

    Takes the first (best ranked) candidate with low consensus that still has
    at least one like, and offers up to three strong-consensus candidates at
    the same price tier.
    """

    @property
    def name(self) -> str:
        return "alternative"

    def recommend(
        self, ranked: list[RankedResult], group: GroupConfig, now: datetime
    ) -> Recommendation | None:
        divisive = [r for r in ranked if r.meta.consensus == LOW and r.meta.likes > 0]
        if not divisive:
            return None
        source = divisive[0]
        price_range = source.candidate.price_range

        alternatives = [
            r for r in ranked
            if r.candidate.price_range == price_range and r.meta.consensus == STRONG
        ][:MAX_SUGGESTIONS]
        if not alternatives:
            return None

        source_name = source.candidate.name or source.candidate.id
        names = ", ".join(r.candidate.name or r.candidate.id for r in alternatives)
        return Recommendation(
            id=f"{self.name}-{source.candidate.id}",
            type=self.name,
            title=f"Alternatives at {price_range or 'the same price'}",
            description=(
                f"{source_name} has a few fans but little agreement. "
                f"The group is more aligned on {names}."
            ),
            candidate_ids=[r.candidate.id for r in alternatives],
            confidence=CONFIDENCE,
            reasoning=(
                f"{source_name} has only {source.meta.approval_percent}% approval; "
                f"{len(alternatives)} option(s) in the same price range have "
                f"strong consensus."
            ),
            created_at=now,
        )
