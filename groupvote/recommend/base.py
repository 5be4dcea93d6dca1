"""Abstract base class for group recommenders."""

from abc import ABC, abstractmethod
from datetime import datetime

from groupvote.models import GroupConfig, RankedResult, Recommendation


class Recommender(ABC):
    """Abstract base class for recommenders.

    Each recommender looks at a finished ranking and may propose one
    Recommendation. Recommenders are registered via the @register_recommender
    decorator in groupvote/recommend/__init__.py and run in registration order.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Recommendation type this recommender produces."""
        pass

    @abstractmethod
    def recommend(
        self, ranked: list[RankedResult], group: GroupConfig, now: datetime
    ) -> Recommendation | None:
        """Propose a recommendation for the group, or None.

        Args:
            ranked: Output of compute_rankings, best first
            group: Group membership and settings
            now: Creation time stamped on the recommendation

        Returns:
            A Recommendation, or None when this recommender has nothing to say
        """
        pass
