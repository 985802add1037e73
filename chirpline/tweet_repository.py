"""SQL and Redis storage of tweets and timelines."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

import sqlalchemy

from chirpline.domain import Tweet

LIMIT = 20
OFFSET = 0

_UINT64_MAX = 2**64 - 1

_INSERT_TWEET = sqlalchemy.text(
    "INSERT INTO tweets (user_id, content) VALUES (:user_id, :content) RETURNING id"
)

_SELECT_BY_AUTHORS = sqlalchemy.text(
    """
    SELECT id, user_id, content, created_at
    FROM tweets
    WHERE user_id IN :ids
    ORDER BY created_at DESC
    """
).bindparams(sqlalchemy.bindparam("ids", expanding=True))

_SELECT_BY_USER = sqlalchemy.text(
    """
    SELECT id, content, user_id, created_at
    FROM tweets
    WHERE user_id = :user_id
    ORDER BY created_at DESC
    LIMIT :limit OFFSET :offset
    """
)


def _timeline_key(user_id: int) -> str:
    return f"user:{user_id}:timeline"


def _parse_uint(text: str) -> int | None:
    if text.isascii() and text.isdigit():
        value = int(text)
        if value <= _UINT64_MAX:
            return value
    return None


def _scan_uint(value: object, index: int, name: str) -> int:
    if isinstance(value, str):
        parsed = _parse_uint(value)
    elif isinstance(value, int) and not isinstance(value, bool):
        parsed = value if 0 <= value <= _UINT64_MAX else None
    else:
        parsed = None
    if parsed is None:
        raise ValueError(
            f'sql: Scan error on column index {index}, name "{name}": '
            f"converting {value!r} to an unsigned integer: invalid syntax"
        )
    return parsed


def _scan_datetime(value: object) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


class TweetRepository:
    """Tweets stored in the ``tweets`` table."""

    def __init__(self, engine: sqlalchemy.engine.Engine) -> None:
        self._engine = engine

    def create(self, tweet: Tweet) -> int:
        """Insert the tweet and return the id the database gave it."""
        with self._engine.begin() as connection:
            row_id = connection.execute(
                _INSERT_TWEET, {"user_id": tweet.user_id, "content": tweet.content}
            ).scalar_one()
        return _scan_uint(row_id, 0, "id")

    def get_tweets_by_ids(self, ids: Sequence[int]) -> list[Tweet]:
        """Return the tweets written by any of the given users, newest first."""
        if not ids:
            return []
        with self._engine.connect() as connection:
            rows = connection.execute(_SELECT_BY_AUTHORS, {"ids": list(ids)}).all()
        return [
            Tweet(
                id=_scan_uint(row_id, 0, "id"),
                user_id=_scan_uint(user_id, 1, "user_id"),
                content=str(content),
                created_at=_scan_datetime(created_at),
            )
            for row_id, user_id, content, created_at in rows
        ]

    def list_tweets_by_user_id(self, user_id: int) -> list[Tweet]:
        """Return at most LIMIT of the user's tweets, newest first."""
        with self._engine.connect() as connection:
            rows = connection.execute(
                _SELECT_BY_USER, {"user_id": user_id, "limit": LIMIT, "offset": OFFSET}
            ).all()
        return [
            Tweet(
                id=_scan_uint(row_id, 0, "id"),
                content=str(content),
                user_id=_scan_uint(author_id, 2, "user_id"),
                created_at=_scan_datetime(created_at),
            )
            for row_id, content, author_id, created_at in rows
        ]


class TweetCacheRepository:
    """Per-user timelines of tweet ids kept in Redis lists."""

    def __init__(self, client) -> None:
        self._client = client

    def push_tweet_to_timeline(self, tweet: Tweet) -> None:
        """Put the tweet id at the head of its author's timeline."""
        self._client.lpush(_timeline_key(tweet.user_id), str(tweet.id))

    def get_timeline(self, user_id: int) -> list[int]:
        """Return every tweet id on the user's timeline, in list order."""
        ids = []
        for item in self._client.lrange(_timeline_key(user_id), 0, -1):
            text = item.decode() if isinstance(item, bytes) else str(item)
            parsed = _parse_uint(text)
            if parsed is None:
                raise ValueError(f'error parsing tweet ID "{text}": invalid syntax')
            ids.append(parsed)
        return ids