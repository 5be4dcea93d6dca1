"""Print the ranking and recommendations for a group snapshot file.

Usage:
    python scripts/rank_snapshot.py friday.groupvote.json
    python scripts/rank_snapshot.py date-night.collection.json --now 2026-10-19T18:00:00Z
    python scripts/rank_snapshot.py friday.groupvote.json --json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from groupvote.analyze import AnalysisError, analyze_snapshot  # noqa: E402


def print_table(result) -> None:
    print(f"{result.snapshot.name}: {result.snapshot.num_candidates} candidates, "
          f"{len(result.snapshot.votes)} votes, {result.snapshot.num_members} members")
    print()
    print(f"{'#':>3}  {'Restaurant':<30} {'Score':>7} {'+':>3} {'-':>3} "
          f"{'Appr':>5}  {'Consensus':<9} {'Trend':<6} Badge")
    for r in result.rankings:
        m = r.meta
        print(f"{m.rank:>3}  {(r.candidate.name or r.candidate.id)[:30]:<30} "
              f"{m.composite_score:>7.2f} {m.likes:>3} {m.dislikes:>3} "
              f"{m.approval_percent:>4}%  {m.consensus:<9} {m.trend:<6} {m.badge or ''}")

    for rec in result.recommendations:
        print()
        print(f"[{rec.type}] {rec.title} (confidence {rec.confidence:.0%})")
        print(f"  {rec.description}")
        print(f"  {rec.reasoning}")


def main():
    parser = argparse.ArgumentParser(
        description="Rank a group snapshot")
    parser.add_argument("input", help="Path to the snapshot JSON file")
    parser.add_argument("--now", help="Reference time (ISO-8601), default: current time")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    path = Path(args.input)
    try:
        result = analyze_snapshot(path.name, path.read_bytes(), now=args.now)
    except AnalysisError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_table(result)


if __name__ == "__main__":
    main()
