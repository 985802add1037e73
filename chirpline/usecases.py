"""Application use cases: posting tweets, following users, reading timelines."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chirpline.domain import (
    Follow,
    FollowCache,
    FollowStore,
    InputCreateFollow,
    InputCreateTweet,
    Tweet,
    TweetCache,
    TweetStore,
)
from chirpline.repositories import Repositories


class CreateTweetUseCase:
    """Store a new tweet and push it onto its author's cached timeline."""

    def __init__(self, repository: TweetStore, cache_repository: TweetCache) -> None:
        self._repository = repository
        self._cache_repository = cache_repository

    def execute(self, data: InputCreateTweet) -> None:
        """Create the tweet; errors from either store propagate."""
        tweet = Tweet(user_id=data.user_id, content=data.content)
        new_id = self._repository.create(tweet)
        self._cache_repository.push_tweet_to_timeline(replace(tweet, id=new_id))


class CreateFollowUseCase:
    """Store a follow relation and record it in the cache."""

    def __init__(self, repository: FollowStore, cache_repository: FollowCache) -> None:
        self._repository = repository
        self._cache_repository = cache_repository

    def execute(self, data: InputCreateFollow) -> None:
        """Create the relation; the cache is only touched once the store succeeds."""
        follow = Follow(follower_id=data.follower_id, followee_id=data.followee_id)
        self._repository.create(follow)
        self._cache_repository.add_following(follow)


class GetTimelineUseCase:
    """Collect the tweets of every user the reader follows."""

    def __init__(
        self,
        repository: TweetStore,
        cache_repository: TweetCache,
        cache_followers: FollowCache,
    ) -> None:
        self._repository = repository
        self._cache_repository = cache_repository
        self._cache_followers = cache_followers

    def execute(self, user_id: int) -> list[Tweet]:
        """Return the home timeline; empty when the user follows nobody."""
        followed_ids = self._cache_followers.get_followed_user_ids(user_id)
        if not followed_ids:
            return []
        return self._repository.get_tweets_by_ids(followed_ids)


@dataclass(frozen=True)
class UseCases:
    """The use cases the web layer exposes."""

    create_tweet_use_case: CreateTweetUseCase
    create_follow_use_case: CreateFollowUseCase
    get_timeline_use_case: GetTimelineUseCase


def create_use_cases(repositories: Repositories) -> UseCases:
    """Build every use case over the given repositories."""
    return UseCases(
        create_tweet_use_case=CreateTweetUseCase(
            repositories.tweet_repository, repositories.tweet_cache_repository
        ),
        create_follow_use_case=CreateFollowUseCase(
            repositories.follow_repository, repositories.follow_cache_repository
        ),
        get_timeline_use_case=GetTimelineUseCase(
            repositories.tweet_repository,
            repositories.tweet_cache_repository,
            repositories.follow_cache_repository,
        ),
    )