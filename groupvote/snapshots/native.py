"""Parser for native group snapshot documents."""

import re

from groupvote.models import Candidate, GroupConfig, GroupSnapshot, Vote
from groupvote.snapshots import register_parser
from groupvote.snapshots.base import SnapshotError, SnapshotParser, load_json_object


@register_parser
class NativeSnapshotParser(SnapshotParser):
    """Parser for the engine's own snake_case snapshot format.

    This is the shape GroupSnapshot.to_dict() produces:

        {
            "name": "Friday dinner",
            "candidates": [{"id": "r1", "name": "...", "cuisine": "Thai", ...}],
            "votes": [{"voter_id": "u1", "candidate_id": "r1", "choice": "like", ...}],
            "group": {"members": [...], "consensus_threshold": 0.7},
            "discussion_counts": {"r1": 2}
        }

    Expected filename format:
        <anything>.groupvote.json
    """

    SOURCE_PATTERN = re.compile(r"\.groupvote\.json$", re.IGNORECASE)

    EXAMPLE_FILENAME = "friday-dinner.groupvote.json"

    def can_parse(self, source: str) -> bool:
        return bool(self.SOURCE_PATTERN.search(source))

    def can_parse_content(self, content: bytes, filename: str) -> bool:
        """Tell-tale sign: top-level "candidates" and "votes" lists."""
        data = load_json_object(content)
        return (
            data is not None
            and isinstance(data.get("candidates"), list)
            and isinstance(data.get("votes"), list)
        )

    def parse(self, source: str, content: bytes) -> GroupSnapshot:
        data = load_json_object(content)
        if data is None:
            raise SnapshotError("The snapshot is not a JSON object.")
        if not isinstance(data.get("candidates"), list):
            raise SnapshotError("The snapshot has no list of candidates.")

        candidates = [Candidate.from_dict(c) for c in data["candidates"]]
        if not candidates:
            raise SnapshotError("The snapshot has no candidates to rank.")

        return GroupSnapshot(
            name=data.get("name") or source,
            candidates=candidates,
            votes=[Vote.from_dict(v) for v in data.get("votes") or []],
            group=GroupConfig.from_dict(data.get("group") or {}),
            discussion_counts={
                str(k): int(v) for k, v in (data.get("discussion_counts") or {}).items()
            },
        )
