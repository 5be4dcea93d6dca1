"""Core data models for group votes and ranking results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Self

LIKE = "like"
DISLIKE = "dislike"

ANONYMOUS_NAME = "Anonymous"
UNKNOWN_NAME = "Unknown"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a vote timestamp into an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings (a trailing "Z" is allowed) and epoch
    milliseconds. Naive values are taken as UTC. Empty values give None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (snake_case or camelCase)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


@dataclass
class Candidate:
    """A restaurant being ranked within a group decision.

    Attributes:
        id: Opaque identifier
        name: Display name
        cuisine: Cuisine label, used to find compromise alternatives
        price_range: Price tier such as "$$", used to find alternatives
        comments_count, saves_count, shares_count: Engagement counters
    """
    id: str
    name: str = ""
    cuisine: str = ""
    price_range: str = ""
    comments_count: int = 0
    saves_count: int = 0
    shares_count: int = 0

    @property
    def engagement(self) -> int:
        return self.comments_count + self.saves_count + self.shares_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "cuisine": self.cuisine,
            "price_range": self.price_range,
            "comments_count": self.comments_count,
            "saves_count": self.saves_count,
            "shares_count": self.shares_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        candidate_id = _pick(data, "id", "restaurant_id", "restaurantId")
        if candidate_id is None:
            raise ValueError("Candidate is missing an id")
        return cls(
            id=str(candidate_id),
            name=_pick(data, "name", default=""),
            cuisine=_pick(data, "cuisine", default=""),
            price_range=_pick(data, "price_range", "priceRange", default=""),
            comments_count=int(_pick(data, "comments_count", "commentsCount", default=0)),
            saves_count=int(_pick(data, "saves_count", "savesCount", default=0)),
            shares_count=int(_pick(data, "shares_count", "sharesCount", default=0)),
        )


@dataclass
class Vote:
    """A single like/dislike event cast by a group member.

    Missing optional fields are filled with their defaults here, so the
    scoring code never has to check for them.
    """
    voter_id: str
    candidate_id: str
    choice: str  # LIKE or DISLIKE
    base_weight: float = 1.0
    authority: str = "standard"  # "admin", "verified" or anything else
    timestamp: datetime | None = None
    reason: str | None = None
    is_anonymous: bool = False

    def __post_init__(self):
        if self.choice not in (LIKE, DISLIKE):
            raise ValueError(f"Unknown vote choice: {self.choice!r}")
        self.timestamp = parse_timestamp(self.timestamp)
        if self.base_weight is None:
            self.base_weight = 1.0
        if self.authority is None:
            self.authority = "standard"

    @property
    def is_like(self) -> bool:
        return self.choice == LIKE

    def to_dict(self) -> dict[str, Any]:
        return {
            "voter_id": self.voter_id,
            "candidate_id": self.candidate_id,
            "choice": self.choice,
            "base_weight": self.base_weight,
            "authority": self.authority,
            "timestamp": format_timestamp(self.timestamp),
            "reason": self.reason,
            "is_anonymous": self.is_anonymous,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        voter_id = _pick(data, "voter_id", "user_id", "userId")
        candidate_id = _pick(data, "candidate_id", "restaurant_id", "restaurantId")
        if voter_id is None or candidate_id is None:
            raise ValueError(f"Vote is missing a voter or candidate id: {data!r}")
        return cls(
            voter_id=str(voter_id),
            candidate_id=str(candidate_id),
            choice=_pick(data, "choice", "vote"),
            base_weight=float(_pick(data, "base_weight", "baseWeight", "weight", default=1.0)),
            authority=_pick(data, "authority", default="standard"),
            timestamp=_pick(data, "timestamp"),
            reason=_pick(data, "reason"),
            is_anonymous=bool(_pick(data, "is_anonymous", "isAnonymous", default=False)),
        )


@dataclass
class Member:
    """A member of the voting group."""
    user_id: str
    name: str = UNKNOWN_NAME
    avatar: str = ""
    vote_weight: float = 1.0
    is_verified: bool = False
    role: str = "member"

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "avatar": self.avatar,
            "vote_weight": self.vote_weight,
            "is_verified": self.is_verified,
            "role": self.role,
        }

    @classmethod
    def coerce(cls, value: "str | dict | Member") -> Self:
        """Build a Member from a bare user id, a dict or an existing Member."""
        if isinstance(value, Member):
            return value
        if isinstance(value, (str, int)):
            return cls(user_id=str(value))
        if isinstance(value, dict):
            user_id = _pick(value, "user_id", "userId", "id")
            if user_id is None:
                raise ValueError(f"Member is missing a user id: {value!r}")
            return cls(
                user_id=str(user_id),
                name=_pick(value, "name", default=UNKNOWN_NAME),
                avatar=_pick(value, "avatar", default=""),
                vote_weight=float(_pick(value, "vote_weight", "voteWeight", default=1.0)),
                is_verified=bool(_pick(value, "is_verified", "isVerified", default=False)),
                role=_pick(value, "role", default="member"),
            )
        raise TypeError(f"Cannot build a Member from {type(value).__name__}")


@dataclass
class GroupConfig:
    """Group membership and voting settings.

    Attributes:
        members: Group members; bare user ids and dicts are normalized to Member
        consensus_threshold: Like ratio needed for the "group_favorite" badge
        equal_voting: When set, every vote counts with weight 1
        vote_visibility: "public", "anonymous" or "admin_only"; "anonymous"
            hides every voter's identity in vote breakdowns
    """
    members: list[Member] = field(default_factory=list)
    consensus_threshold: float = 0.7
    equal_voting: bool = False
    vote_visibility: str = "public"

    def __post_init__(self):
        self.members = [Member.coerce(m) for m in self.members]

    @property
    def member_ids(self) -> list[str]:
        return [m.user_id for m in self.members]

    def member_index(self) -> dict[str, Member]:
        """Members keyed by user id. Later duplicates win."""
        return {m.user_id: m for m in self.members}

    def to_dict(self) -> dict[str, Any]:
        return {
            "members": [m.to_dict() for m in self.members],
            "consensus_threshold": self.consensus_threshold,
            "equal_voting": self.equal_voting,
            "vote_visibility": self.vote_visibility,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            members=list(_pick(data, "members", default=[])),
            consensus_threshold=float(
                _pick(data, "consensus_threshold", "consensusThreshold", default=0.7)
            ),
            equal_voting=bool(_pick(data, "equal_voting", "equalVoting", default=False)),
            vote_visibility=_pick(data, "vote_visibility", "voteVisibility", default="public"),
        )


# --- Ranking output ---


@dataclass
class VoterInfo:
    """One voter's entry in a candidate's like or dislike list."""
    user_id: str | None
    name: str
    avatar: str
    timestamp: datetime
    weight: float
    is_verified: bool = False
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "avatar": self.avatar,
            "timestamp": format_timestamp(self.timestamp),
            "weight": self.weight,
            "is_verified": self.is_verified,
            "reason": self.reason,
        }


@dataclass
class ReasonTally:
    """How many votes gave a reason in one category, with a few examples."""
    category: str
    count: int
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "count": self.count, "examples": list(self.examples)}


@dataclass
class VoteEvent:
    """One raw vote in a candidate's timeline."""
    user_id: str | None
    candidate_id: str
    choice: str
    timestamp: datetime
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "candidate_id": self.candidate_id,
            "choice": self.choice,
            "timestamp": format_timestamp(self.timestamp),
            "reason": self.reason,
        }


@dataclass
class VoteBreakdown:
    """Who voted how on a candidate, and why."""
    like_voters: list[VoterInfo] = field(default_factory=list)
    dislike_voters: list[VoterInfo] = field(default_factory=list)
    abstentions: list[str] = field(default_factory=list)
    reasons: list[ReasonTally] = field(default_factory=list)
    timeline: list[VoteEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "like_voters": [v.to_dict() for v in self.like_voters],
            "dislike_voters": [v.to_dict() for v in self.dislike_voters],
            "abstentions": list(self.abstentions),
            "reasons": [r.to_dict() for r in self.reasons],
            "timeline": [e.to_dict() for e in self.timeline],
        }


@dataclass
class RankedMeta:
    """Scores, labels and breakdown computed for one candidate.

    Attributes:
        candidate_id: Candidate this metadata belongs to
        net_score: likes - dislikes
        likes, dislikes: Weighted vote sums, rounded half-up to integers
        like_ratio: likes / (likes + dislikes), 0 with no votes
        engagement_boost: Capped bonus from comments, saves and shares
        recency_boost: Time-decayed bonus (likes) or penalty (dislikes)
        distance_boost: Reserved for location-aware scoring, always 0
        composite_score: Sort key, sum of the score and the three boosts
        authority_applied: Whether any vote used a non-default multiplier
        consensus: "strong", "moderate", "mixed" or "low"
        badge: "unanimous", "group_favorite", "contested", "top_choice" or None
        trend: "up", "down" or "steady"
        approval_percent: like_ratio as a rounded percentage
        turnout_percent: Share of group members who voted on this candidate
        rank: 1-indexed position in the ranking
        vote_details: Voter lists, abstentions, reasons and timeline
        discussion_count: Number of discussion messages about the candidate
    """
    candidate_id: str
    net_score: int = 0
    likes: int = 0
    dislikes: int = 0
    like_ratio: float = 0.0
    engagement_boost: float = 0.0
    recency_boost: float = 0.0
    distance_boost: float = 0.0
    composite_score: float = 0.0
    authority_applied: bool = False
    consensus: str = "low"
    badge: str | None = None
    trend: str = "steady"
    approval_percent: int = 0
    turnout_percent: int = 0
    rank: int = 0
    vote_details: VoteBreakdown = field(default_factory=VoteBreakdown)
    discussion_count: int = 0

    @property
    def total_votes(self) -> int:
        return self.likes + self.dislikes

    def to_dict(self) -> dict[str, Any]:
        return {
            "candidate_id": self.candidate_id,
            "net_score": self.net_score,
            "likes": self.likes,
            "dislikes": self.dislikes,
            "like_ratio": self.like_ratio,
            "engagement_boost": self.engagement_boost,
            "recency_boost": self.recency_boost,
            "distance_boost": self.distance_boost,
            "composite_score": self.composite_score,
            "authority_applied": self.authority_applied,
            "consensus": self.consensus,
            "badge": self.badge,
            "trend": self.trend,
            "approval_percent": self.approval_percent,
            "turnout_percent": self.turnout_percent,
            "rank": self.rank,
            "vote_details": self.vote_details.to_dict(),
            "discussion_count": self.discussion_count,
        }


@dataclass
class RankedResult:
    """A candidate paired with its ranking metadata."""
    candidate: Candidate
    meta: RankedMeta

    def to_dict(self) -> dict[str, Any]:
        return {"candidate": self.candidate.to_dict(), "meta": self.meta.to_dict()}


@dataclass
class Recommendation:
    """A suggestion shown to the group when its top choices are in dispute.

    Attributes:
        id: Deterministic identifier, "<type>-<candidate id>"
        type: "compromise" or "alternative"
        title, description, reasoning: Display text
        candidate_ids: Suggested candidates, best first
        confidence: 0.0 to 1.0
        created_at: The "now" the ranking was computed for
    """
    id: str
    type: str
    title: str
    description: str
    candidate_ids: list[str]
    confidence: float
    reasoning: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "candidate_ids": list(self.candidate_ids),
            "confidence": self.confidence,
            "reasoning": self.reasoning,
            "created_at": format_timestamp(self.created_at),
        }


@dataclass
class GroupSnapshot:
    """Everything the ranking engine needs for one group decision.

    Attributes:
        name: Display name of the group or collection
        candidates: Restaurants being decided between
        votes: All votes cast in this group
        group: Membership and settings
        discussion_counts: Discussion message count per candidate id
    """
    name: str
    candidates: list[Candidate]
    votes: list[Vote]
    group: GroupConfig = field(default_factory=GroupConfig)
    discussion_counts: dict[str, int] = field(default_factory=dict)

    @property
    def num_candidates(self) -> int:
        return len(self.candidates)

    @property
    def num_members(self) -> int:
        return len(self.group.members)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "candidates": [c.to_dict() for c in self.candidates],
            "votes": [v.to_dict() for v in self.votes],
            "group": self.group.to_dict(),
            "discussion_counts": dict(self.discussion_counts),
        }
