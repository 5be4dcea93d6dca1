"""Parser for collection exports from the mobile app."""

import re
from collections import Counter

from groupvote.models import Candidate, GroupConfig, GroupSnapshot, Vote
from groupvote.snapshots import register_parser
from groupvote.snapshots.base import SnapshotError, SnapshotParser, load_json_object


@register_parser
class CollectionExportParser(SnapshotParser):
    """Parser for the app's camelCase collection export.

    The export looks like:

        {
            "collection": {
                "id": "c1", "name": "Date night",
                "collaborators": ["u1", {"userId": "u2", "voteWeight": 2}],
                "consensus_threshold": 0.7,
                "equal_voting": false,
                "vote_visibility": "public",
                "restaurant_ids": ["r1", "r2"]
            },
            "restaurants": [{"id": "r1", "priceRange": "$$", "commentsCount": 4}],
            "votes": [{"restaurantId": "r1", "userId": "u1", "vote": "like"}],
            "discussions": [{"restaurantId": "r1", "message": "..."}]
        }

    Collaborators may be bare user ids or full member records. Newer exports
    keep the consensus threshold under settings.consensusThreshold and the
    voting rules under votingRules; both layouts are read. Votes from other
    collections are ignored, and when restaurant_ids is present only those
    restaurants are ranked, in that order.

    Expected filename format:
        <anything>.collection.json
    """

    SOURCE_PATTERN = re.compile(r"\.collection\.json$", re.IGNORECASE)

    EXAMPLE_FILENAME = "date-night.collection.json"

    def can_parse(self, source: str) -> bool:
        return bool(self.SOURCE_PATTERN.search(source))

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Tell-tale sign: a "collection" object next to a "restaurants" list."""
        data = load_json_object(content)
        return (
            data is not None
            and isinstance(data.get("collection"), dict)
            and isinstance(data.get("restaurants"), list)
        )

    def parse(self, source: str, content: bytes) -> GroupSnapshot:
        data = load_json_object(content)
        if data is None:
            raise SnapshotError("The collection export is not a JSON object.")
        collection = data.get("collection")
        if not isinstance(collection, dict):
            raise SnapshotError("The collection export has no collection details.")

        restaurants = [Candidate.from_dict(r) for r in data.get("restaurants") or []]
        restaurants = self._select_restaurants(collection, restaurants)
        if not restaurants:
            raise SnapshotError("This collection has no restaurants to rank yet.")

        collection_id = collection.get("id")
        votes = [
            Vote.from_dict(v) for v in data.get("votes") or []
            if collection_id is None or v.get("collectionId") in (None, collection_id)
        ]

        discussions = Counter(
            str(d["restaurantId"]) for d in data.get("discussions") or []
            if d.get("restaurantId") is not None
            and (collection_id is None or d.get("collectionId") in (None, collection_id))
        )

        return GroupSnapshot(
            name=collection.get("name") or source,
            candidates=restaurants,
            votes=votes,
            group=self._parse_group(collection),
            discussion_counts=dict(discussions),
        )

    @staticmethod
    def _select_restaurants(collection: dict, restaurants: list[Candidate]) -> list[Candidate]:
        """Keep the collection's restaurants in the collection's order."""
        wanted = collection.get("restaurant_ids") or collection.get("restaurants")
        if not wanted:
            return restaurants
        by_id = {r.id: r for r in restaurants}
        return [by_id[str(rid)] for rid in wanted if str(rid) in by_id]

    @staticmethod
    def _parse_group(collection: dict) -> GroupConfig:
        settings = collection.get("settings") or {}
        rules = collection.get("votingRules") or {}

        threshold = collection.get("consensus_threshold")
        if threshold is None:
            threshold = settings.get("consensusThreshold", 0.7)

        equal_voting = collection.get("equal_voting")
        if equal_voting is None:
            equal_voting = rules.get("equalVoting", False)

        visibility = collection.get("vote_visibility") or settings.get("voteVisibility")
        anonymous = collection.get("anonymous_voting", rules.get("anonymousVoting", False))
        if anonymous:
            visibility = "anonymous"

        return GroupConfig(
            members=list(collection.get("collaborators") or []),
            consensus_threshold=float(threshold),
            equal_voting=bool(equal_voting),
            vote_visibility=visibility or "public",
        )
