"""Wiring of the SQL and Redis repositories into one bundle."""

from __future__ import annotations

from dataclasses import dataclass

from chirpline.domain import FollowCache, FollowStore, TweetCache, TweetStore
from chirpline.follow_repository import FollowCacheRepository, FollowRepository
from chirpline.tweet_repository import TweetCacheRepository, TweetRepository


@dataclass(frozen=True)
class Repositories:
    """The storage objects the use cases work with."""

    tweet_repository: TweetStore | None = None
    tweet_cache_repository: TweetCache | None = None
    follow_repository: FollowStore | None = None
    follow_cache_repository: FollowCache | None = None


def create_repositories(db, redis_client) -> Repositories:
    """Build every repository over one database engine and one Redis client."""
    return Repositories(
        tweet_repository=TweetRepository(db),
        tweet_cache_repository=TweetCacheRepository(redis_client),
        follow_repository=FollowRepository(db),
        follow_cache_repository=FollowCacheRepository(redis_client),
    )