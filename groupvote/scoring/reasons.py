"""Keyword classification of free-text vote reasons."""

import re

from groupvote.models import ReasonTally, Vote

OTHER = "Other"
MAX_EXAMPLES = 3

# Checked in order; the first category with a matching keyword wins.
# Keywords match whole words, with an optional plural "s".
_CATEGORY_KEYWORDS: list[tuple[str, list[str]]] = [
    ("Price", [
        "price", "pricey", "pricy", "overpriced", "expensive", "cheap", "cost",
        "costly", "budget", "afford", "affordable", "value", "deal", "\\$+",
    ]),
    ("Service", [
        "service", "staff", "waiter", "waitress", "server", "rude", "friendly",
        "attentive", "slow", "host", "hostess", "manager",
    ]),
    ("Food Quality", [
        "food", "taste", "tasty", "tasteless", "delicious", "flavor", "flavour",
        "flavorful", "bland", "fresh", "stale", "quality", "menu", "dish",
        "portion", "cooked", "overcooked", "undercooked", "yummy", "spicy",
    ]),
    ("Atmosphere", [
        "atmosphere", "ambiance", "ambience", "vibe", "noisy", "loud", "quiet",
        "music", "decor", "cozy", "romantic", "crowded", "lighting",
    ]),
    ("Location", [
        "location", "far", "close", "nearby", "near", "distance", "parking",
        "drive", "commute", "neighborhood", "walk", "walking",
    ]),
    ("Availability", [
        "reservation", "booked", "booking", "wait", "waiting", "waitlist",
        "line", "open", "closed", "hours", "available", "availability",
    ]),
    ("Cleanliness", [
        "clean", "dirty", "hygiene", "hygienic", "sanitary", "unsanitary",
        "messy", "gross", "filthy",
    ]),
]

CATEGORIES: list[str] = [name for name, _ in _CATEGORY_KEYWORDS] + [OTHER]

_CATEGORY_PATTERNS: list[tuple[str, re.Pattern]] = [
    (name, re.compile(
        r"(?<![\w$])(?:" + "|".join(keywords) + r")s?(?![\w$])",
        re.IGNORECASE,
    ))
    for name, keywords in _CATEGORY_KEYWORDS
]


def classify_reason(reason: str) -> str:
    """Map a free-text reason to one of CATEGORIES ("Other" if nothing matches)."""
    for name, pattern in _CATEGORY_PATTERNS:
        if pattern.search(reason):
            return name
    return OTHER


def tally_reasons(votes: list[Vote]) -> list[ReasonTally]:
    """Count reasons per category, keeping up to MAX_EXAMPLES verbatim examples.

    Votes without a reason (or with a blank one) are skipped. The result is
    sorted by descending count; ties keep first-seen order.
    """
    tallies: dict[str, ReasonTally] = {}
    for vote in votes:
        if not vote.reason or not vote.reason.strip():
            continue
        category = classify_reason(vote.reason)
        if category not in tallies:
            tallies[category] = ReasonTally(category=category, count=0)
        tally = tallies[category]
        tally.count += 1
        if len(tally.examples) < MAX_EXAMPLES:
            tally.examples.append(vote.reason)

    return sorted(tallies.values(), key=lambda t: t.count, reverse=True)
