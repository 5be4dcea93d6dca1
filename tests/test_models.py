"""Tests for core data models."""

import json
from datetime import datetime

import pytest
from tests.conftest import NOW

from groupvote.models import (
    Candidate,
    GroupConfig,
    Member,
    Vote,
    parse_timestamp,
)


class TestParseTimestamp:
    def test_none_and_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_iso_with_z(self):
        assert parse_timestamp("2026-10-19T18:00:00Z") == NOW

    def test_iso_with_offset_is_converted_to_utc(self):
        assert parse_timestamp("2026-10-19T20:00:00+02:00") == NOW

    def test_naive_is_utc(self):
        assert parse_timestamp(datetime(2026, 10, 19, 18, 0)) == NOW

    def test_epoch_millis(self):
        assert parse_timestamp(NOW.timestamp() * 1000) == NOW

    def test_unsupported(self):
        with pytest.raises(ValueError):
            parse_timestamp(["2026"])


class TestVote:
    def test_defaults(self):
        vote = Vote(voter_id="u1", candidate_id="r1", choice="like")
        assert vote.base_weight == 1.0
        assert vote.authority == "standard"
        assert vote.timestamp is None
        assert vote.is_like

    def test_none_fields_get_defaults(self):
        vote = Vote(voter_id="u1", candidate_id="r1", choice="dislike",
                    base_weight=None, authority=None)
        assert vote.base_weight == 1.0
        assert vote.authority == "standard"
        assert not vote.is_like

    def test_rejects_unknown_choice(self):
        with pytest.raises(ValueError, match="Unknown vote choice"):
            Vote(voter_id="u1", candidate_id="r1", choice="meh")

    def test_from_camel_case(self):
        vote = Vote.from_dict({
            "restaurantId": "r1",
            "userId": "u1",
            "vote": "like",
            "weight": 2,
            "authority": "admin",
            "timestamp": "2026-10-19T18:00:00Z",
            "isAnonymous": True,
        })
        assert vote.candidate_id == "r1"
        assert vote.voter_id == "u1"
        assert vote.base_weight == 2.0
        assert vote.authority == "admin"
        assert vote.timestamp == NOW
        assert vote.is_anonymous

    def test_from_dict_missing_ids(self):
        with pytest.raises(ValueError, match="missing"):
            Vote.from_dict({"vote": "like"})

    def test_to_dict_is_json_safe(self):
        vote = Vote(voter_id="u1", candidate_id="r1", choice="like", timestamp=NOW)
        data = json.loads(json.dumps(vote.to_dict()))
        assert data["timestamp"] == "2026-10-19T18:00:00+00:00"
        assert Vote.from_dict(data) == vote


class TestCandidate:
    def test_engagement(self):
        candidate = Candidate(id="r1", comments_count=3, saves_count=4, shares_count=5)
        assert candidate.engagement == 12

    def test_from_camel_case(self):
        candidate = Candidate.from_dict({
            "id": "r1", "name": "Thai Basil", "cuisine": "Thai",
            "priceRange": "$$", "commentsCount": 2, "savesCount": 1,
        })
        assert candidate.price_range == "$$"
        assert candidate.engagement == 3

    def test_missing_id(self):
        with pytest.raises(ValueError):
            Candidate.from_dict({"name": "Nameless"})


class TestGroupConfig:
    def test_members_are_normalized(self):
        group = GroupConfig(members=[
            "u1",
            {"userId": "u2", "name": "Bea", "voteWeight": 2, "isVerified": True},
            Member(user_id="u3", name="Cy"),
        ])
        assert [type(m) for m in group.members] == [Member, Member, Member]
        assert group.member_ids == ["u1", "u2", "u3"]
        assert group.members[0].name == "Unknown"
        assert group.members[0].vote_weight == 1.0
        assert group.members[1].vote_weight == 2.0
        assert group.members[1].is_verified

    def test_numeric_member_ids(self):
        group = GroupConfig(members=[7, {"id": 8, "name": "Dee"}])
        assert group.member_ids == ["7", "8"]

    def test_member_index(self):
        group = GroupConfig(members=["u1", "u2"])
        index = group.member_index()
        assert set(index) == {"u1", "u2"}
        assert index["u2"].user_id == "u2"

    def test_defaults(self):
        group = GroupConfig()
        assert group.members == []
        assert group.consensus_threshold == 0.7
        assert not group.equal_voting
        assert group.vote_visibility == "public"

    def test_from_dict(self):
        group = GroupConfig.from_dict({
            "members": ["u1"], "consensusThreshold": 0.6, "equal_voting": True,
        })
        assert group.member_ids == ["u1"]
        assert group.consensus_threshold == 0.6
        assert group.equal_voting

    def test_bad_member(self):
        with pytest.raises(TypeError):
            GroupConfig(members=[None])
        with pytest.raises(ValueError):
            GroupConfig(members=[{"name": "No id"}])

    def test_to_dict_round_trip(self):
        group = GroupConfig(members=["u1"], consensus_threshold=0.6)
        assert GroupConfig.from_dict(group.to_dict()) == group
