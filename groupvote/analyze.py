"""Orchestrator: parse a group snapshot, rank it and suggest compromises."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from groupvote.models import GroupSnapshot, RankedResult, Recommendation, format_timestamp, parse_timestamp
from groupvote.ranking import RankingOptions, compute_rankings
from groupvote.recommend import generate_recommendations
from groupvote.snapshots import detect_parser, detect_parser_by_content, get_supported_formats
from groupvote.snapshots.base import SnapshotError


@dataclass
class AnalysisResult:
    """Complete analysis result with snapshot, ranking and recommendations."""
    snapshot: GroupSnapshot
    rankings: list[RankedResult]
    recommendations: list[Recommendation]
    computed_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "name": self.snapshot.name,
            "num_candidates": self.snapshot.num_candidates,
            "num_members": self.snapshot.num_members,
            "num_votes": len(self.snapshot.votes),
            "computed_at": format_timestamp(self.computed_at),
            "rankings": [r.to_dict() for r in self.rankings],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


class AnalysisError(Exception):
    """Error during snapshot analysis."""
    pass


def rank_snapshot(snapshot: GroupSnapshot, now: datetime | None = None) -> AnalysisResult:
    """Rank an already-parsed snapshot and generate recommendations."""
    now = parse_timestamp(now) or datetime.now(timezone.utc)
    rankings = compute_rankings(
        snapshot.candidates,
        snapshot.votes,
        RankingOptions(
            group_config=snapshot.group,
            discussion_counts=snapshot.discussion_counts,
            now=now,
        ),
    )
    recommendations = generate_recommendations(rankings, snapshot.group, now)
    return AnalysisResult(
        snapshot=snapshot,
        rankings=rankings,
        recommendations=recommendations,
        computed_at=now,
    )


def analyze_snapshot(source: str, content: bytes, now: datetime | None = None) -> AnalysisResult:
    """Parse a group snapshot, rank its candidates and suggest compromises.

    Args:
        source: URL or filename (used to detect the appropriate parser)
        content: Raw bytes of the snapshot document
        now: Reference time for recency scoring; defaults to the current time

    Returns:
        AnalysisResult with the parsed snapshot, ranking and recommendations

    Raises:
        AnalysisError: If no parser is found or parsing fails
    """
    # Find appropriate parser: try filename matching first, then content detection
    parser = detect_parser(source)
    if parser is None:
        parser = detect_parser_by_content(content, source)
    if parser is None:
        raise AnalysisError(
            f"We couldn't determine the snapshot format.\n\n"
            f"{get_supported_formats()}"
        )

    try:
        snapshot = parser.parse(source, content)
    except SnapshotError as e:
        raise AnalysisError(str(e)) from e
    except Exception as e:
        raise AnalysisError(f"Failed to parse snapshot: {e}") from e

    return rank_snapshot(snapshot, now)
