"""Compromise suggestions for contested favourites."""

from datetime import datetime

from groupvote.models import GroupConfig, RankedResult, Recommendation
from groupvote.recommend import register_recommender
from groupvote.recommend.base import Recommender
from groupvote.scoring.consensus import CONTESTED, STRONG

CONTESTED_RATIO_RANGE = (0.4, 0.6)
MAX_SUGGESTIONS = 3
CONFIDENCE = 0.8


@register_recommender
class CompromiseRecommender(Recommender):
    """Suggest well-liked restaurants of the same cuisine as a contested one.

    Picks the contested candidate with the highest composite score whose like
    ratio is between 40% and 60%, then looks for up to three other candidates
    with the same cuisine that the group strongly agrees on.
    """

    @property
    def name(self) -> str:
        return "compromise"

    def recommend(
        self, ranked: list[RankedResult], group: GroupConfig, now: datetime
    ) -> Recommendation | None:
        low, high = CONTESTED_RATIO_RANGE
        contested = [
            r for r in ranked
            if r.meta.badge == CONTESTED and low <= r.meta.like_ratio <= high
        ]
        if not contested:
            return None
        target = max(contested, key=lambda r: r.meta.composite_score)
        cuisine = target.candidate.cuisine

        alternatives = [
            r for r in ranked
            if r is not target
            and r.candidate.cuisine == cuisine
            and r.meta.consensus == STRONG
        ][:MAX_SUGGESTIONS]
        if not alternatives:
            return None

        names = ", ".join(r.candidate.name or r.candidate.id for r in alternatives)
        target_name = target.candidate.name or target.candidate.id
        return Recommendation(
            id=f"{self.name}-{target.candidate.id}",
            type=self.name,
            title=f"Compromise on {cuisine or 'this cuisine'}",
            description=(
                f"{target_name} is splitting the group. "
                f"Try {names} instead; same cuisine, broader support."
            ),
            candidate_ids=[r.candidate.id for r in alternatives],
            confidence=CONFIDENCE,
            reasoning=(
                f"{target_name} has {target.meta.approval_percent}% approval "
                f"across {target.meta.total_votes} votes, while "
                f"{len(alternatives)} other {cuisine or 'similar'} option(s) "
                f"have strong consensus."
            ),
            created_at=now,
        )
