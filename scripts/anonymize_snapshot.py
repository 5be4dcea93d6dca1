"""Anonymize a group snapshot for use as a test fixture.

Replaces every member's name with a fake one (using faker with a fixed seed),
clears avatars, and rewrites user ids to stable "u1", "u2", ... ids in both
the membership list and the votes. Works on native snapshots and on
collection exports.

Usage:
    python scripts/anonymize_snapshot.py friday.groupvote.json
    python scripts/anonymize_snapshot.py date-night.collection.json -o output.json
"""

import argparse
import json
from pathlib import Path

from faker import Faker

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "test_snapshots" / "fixtures"

SEED = 20261019

MEMBER_ID_KEYS = ("user_id", "userId", "id")
VOTER_ID_KEYS = ("voter_id", "user_id", "userId")


def find_members(data: dict) -> list:
    """Return the (mutable) membership list of either snapshot format."""
    if isinstance(data.get("collection"), dict):
        return data["collection"].setdefault("collaborators", [])
    return data.setdefault("group", {}).setdefault("members", [])


def member_id(member) -> str | None:
    if isinstance(member, str):
        return member
    for key in MEMBER_ID_KEYS:
        if key in member:
            return str(member[key])
    return None


def discover_user_ids(data: dict) -> list[str]:
    """All user ids in membership order, then any voters not in the group."""
    seen: dict[str, None] = {}
    for member in find_members(data):
        user_id = member_id(member)
        if user_id is not None:
            seen.setdefault(user_id)
    for vote in data.get("votes") or []:
        for key in VOTER_ID_KEYS:
            if key in vote:
                seen.setdefault(str(vote[key]))
                break
    return list(seen)


def generate_fake_members(user_ids: list[str], seed: int) -> dict[str, tuple[str, str]]:
    """Map each real user id to a (new id, fake name) pair."""
    fake = Faker(["en_US", "en_GB", "de_DE", "fr_FR"])
    Faker.seed(seed)

    mapping: dict[str, tuple[str, str]] = {}
    used: set[str] = set()
    for index, user_id in enumerate(user_ids, start=1):
        name = fake.name()
        while name in used:
            name = fake.name()
        used.add(name)
        mapping[user_id] = (f"u{index}", name)
    return mapping


def apply_replacements(data: dict, mapping: dict[str, tuple[str, str]]) -> dict:
    """Rewrite members and votes in place and return the document."""
    members = find_members(data)
    for i, member in enumerate(members):
        user_id = member_id(member)
        if user_id is None:
            continue
        new_id, name = mapping[user_id]
        if isinstance(member, str):
            members[i] = new_id
            continue
        for key in MEMBER_ID_KEYS:
            if key in member:
                member[key] = new_id
        member["name"] = name
        if "avatar" in member:
            member["avatar"] = ""

    for vote in data.get("votes") or []:
        for key in VOTER_ID_KEYS:
            if key in vote:
                vote[key] = mapping[str(vote[key])][0]

    for discussion in data.get("discussions") or []:
        user_id = discussion.get("userId")
        if user_id in mapping:
            new_id, name = mapping[user_id]
            discussion["userId"] = new_id
            discussion["userName"] = name
            discussion["userAvatar"] = ""

    return data


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize a group snapshot")
    parser.add_argument("input", help="Path to the input snapshot JSON file")
    parser.add_argument("-o", "--output",
                        help=f"Output path (default: {FIXTURES_DIR}/<input name>)")
    args = parser.parse_args()

    input_path = Path(args.input)
    data = json.loads(input_path.read_text(encoding="utf-8"))

    user_ids = discover_user_ids(data)
    print(f"Found {len(user_ids)} unique users")

    mapping = generate_fake_members(user_ids, SEED)
    for original, (new_id, name) in mapping.items():
        print(f"  {original} -> {new_id} ({name})")

    result = apply_replacements(data, mapping)

    output_path = Path(args.output) if args.output else FIXTURES_DIR / input_path.name
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(result, indent=2) + "\n", encoding="utf-8")
    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
