"""Domain records, request inputs and the storage interfaces they rely on."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

_UINT64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Follow:
    """A relation in which ``follower_id`` follows ``followee_id``."""

    id: int = 0
    follower_id: int = 0
    followee_id: int = 0
    created_at: str = ""


@dataclass(frozen=True)
class Tweet:
    """A short message posted by a user."""

    id: int = 0
    user_id: int = 0
    content: str = ""
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation of the tweet."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "content": self.content,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def _require_mapping(data: object) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    return data


def _uint_field(data: Mapping[str, Any], name: str) -> int:
    value = data.get(name)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an unsigned integer")
    if not 0 <= value <= _UINT64_MAX:
        raise ValueError(f"{name} is out of range for an unsigned 64-bit integer")
    return value


def _str_field(data: Mapping[str, Any], name: str) -> str:
    value = data.get(name)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


@dataclass(frozen=True)
class InputCreateFollow:
    """Request to make one user follow another."""

    follower_id: int = 0
    followee_id: int = 0

    @classmethod
    def from_mapping(cls, data: object) -> InputCreateFollow:
        """Build the input from decoded JSON, raising ValueError on bad types."""
        body = _require_mapping(data)
        return cls(
            follower_id=_uint_field(body, "follower_id"),
            followee_id=_uint_field(body, "followee_id"),
        )


@dataclass(frozen=True)
class InputCreateTweet:
    """Request to post a tweet."""

    content: str = ""
    user_id: int = 0

    @classmethod
    def from_mapping(cls, data: object) -> InputCreateTweet:
        """Build the input from decoded JSON, raising ValueError on bad types."""
        body = _require_mapping(data)
        return cls(
            content=_str_field(body, "content"),
            user_id=_uint_field(body, "user_id"),
        )


@runtime_checkable
class TweetStore(Protocol):
    """Durable storage of tweets."""

    def create(self, tweet: Tweet) -> int:
        """Store a tweet and return its new id."""

    def list_tweets_by_user_id(self, user_id: int) -> list[Tweet]:
        """Return the latest tweets written by one user."""

    def get_tweets_by_ids(self, ids: Sequence[int]) -> list[Tweet]:
        """Return the tweets written by any of the given users."""


@runtime_checkable
class TweetCache(Protocol):
    """Cached per-user timelines of tweet ids."""

    def push_tweet_to_timeline(self, tweet: Tweet) -> None:
        """Put a tweet id at the head of its author's timeline."""

    def get_timeline(self, user_id: int) -> list[int]:
        """Return the tweet ids on a user's timeline."""


@runtime_checkable
class FollowStore(Protocol):
    """Durable storage of follow relations."""

    def create(self, follow: Follow) -> None:
        """Store a follow relation."""


@runtime_checkable
class FollowCache(Protocol):
    """Cached sets of followed users."""

    def add_following(self, follow: Follow) -> None:
        """Record that the follower follows the followee."""

    def get_followed_user_ids(self, user_id: int) -> list[int]:
        """Return the ids of the users followed by ``user_id``."""