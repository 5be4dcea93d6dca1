"""Shared fixtures for recommendation tests."""

import pytest
from tests.conftest import make_candidate, make_votes, rank


@pytest.fixture
def thai_split():
    """E is a contested Thai place, F a Thai place everyone likes.

         votes     ratio  consensus  badge
    E    LDLDLD    0.5    mixed      contested (10 comments)
    F    LLLL      1.0    strong     unanimous
    G    LLL       1.0    strong     unanimous (Italian)
    """
    candidates = [
        make_candidate("E", name="Thai Basil", cuisine="Thai", price_range="$$", comments_count=10),
        make_candidate("F", name="Lotus of Siam", cuisine="Thai", price_range="$$"),
        make_candidate("G", name="Pasta Bar", cuisine="Italian", price_range="$$$"),
    ]
    votes = make_votes("E", "LDLDLD") + make_votes("F", "LLLL") + make_votes("G", "LLL")
    return rank(candidates, votes)


@pytest.fixture
def lukewarm_pick():
    """H has one fan but low consensus; I shares its price range and is loved.

         votes  ratio  consensus  price
    H    LDDD   0.25   low        $$
    I    LLLL   1.0    strong     $$
    J    LLL    1.0    strong     $$$
    """
    candidates = [
        make_candidate("H", name="Burger Joint", cuisine="American", price_range="$$"),
        make_candidate("I", name="Noodle House", cuisine="Chinese", price_range="$$"),
        make_candidate("J", name="Steakhouse", cuisine="American", price_range="$$$"),
    ]
    votes = make_votes("H", "LDDD") + make_votes("I", "LLLL") + make_votes("J", "LLL")
    return rank(candidates, votes)
