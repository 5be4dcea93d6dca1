"""Shared fixtures for scoring tests."""

import pytest
from tests.conftest import make_group


@pytest.fixture
def group():
    """Three members u1..u3 with default weights."""
    return make_group(3)


@pytest.fixture
def weighted_group():
    """u1 counts double, u2 is verified, u3 is a regular member.

    u4 is not a member at all.
    """
    group = make_group(3)
    group.members[0].vote_weight = 2.0
    group.members[1].is_verified = True
    return group
