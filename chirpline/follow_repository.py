"""SQL and Redis storage of follow relations."""

from __future__ import annotations

import logging

import sqlalchemy

from chirpline.domain import Follow

logger = logging.getLogger(__name__)

_UINT64_MAX = 2**64 - 1

_INSERT_FOLLOW = sqlalchemy.text(
    """
    INSERT INTO follows (follower_id, followee_id)
    VALUES (:follower_id, :followee_id)
    ON CONFLICT DO NOTHING
    RETURNING id
    """
)


def _following_key(user_id: int) -> str:
    return f"user:{user_id}:following"


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


class FollowRepository:
    """Follow relations stored in the ``follows`` table."""

    def __init__(self, engine: sqlalchemy.engine.Engine) -> None:
        self._engine = engine

    def create(self, follow: Follow) -> None:
        """Insert the relation; an existing identical relation is not an error."""
        with self._engine.begin() as connection:
            row_id = connection.execute(
                _INSERT_FOLLOW,
                {"follower_id": follow.follower_id, "followee_id": follow.followee_id},
            ).scalar_one_or_none()
        if row_id is not None:
            _scan_uint(row_id, 0, "id")


class FollowCacheRepository:
    """Sets of followed user ids kept in Redis."""

    def __init__(self, client) -> None:
        self._client = client

    def add_following(self, follow: Follow) -> None:
        """Add the followee to the follower's following set."""
        key = _following_key(follow.follower_id)
        logger.debug("SADD %s %d", key, follow.followee_id)
        try:
            self._client.sadd(key, follow.followee_id)
        except Exception:
            logger.exception("SADD %s failed", key)
            raise

    def get_followed_user_ids(self, user_id: int) -> list[int]:
        """Return the followed ids in ascending order, skipping unparsable members."""
        members = self._client.smembers(_following_key(user_id))
        ids = []
        for member in members:
            text = member.decode() if isinstance(member, bytes) else str(member)
            parsed = _parse_uint(text)
            if parsed is not None:
                ids.append(parsed)
        return sorted(ids)