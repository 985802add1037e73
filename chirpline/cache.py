"""Process-wide Redis client configured from the environment."""

from __future__ import annotations

import os
import threading

import redis

_DEFAULT_HOST = "localhost"
_DEFAULT_PORT = 6379
_TIMEOUT_SECONDS = 5

_client: redis.Redis | None = None
_lock = threading.Lock()


def _parse_addr(addr: str) -> tuple[str, int]:
    if not addr:
        return _DEFAULT_HOST, _DEFAULT_PORT
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, _DEFAULT_PORT
    return host or _DEFAULT_HOST, int(port)


def get_redis_client() -> redis.Redis:
    """Return the shared Redis client, connecting and pinging on first use."""
    global _client
    with _lock:
        if _client is None:
            host, port = _parse_addr(os.environ.get("REDIS_ADDR", ""))
            client = redis.Redis(
                host=host,
                port=port,
                password=os.environ.get("REDIS_PASS") or None,
                db=0,
                decode_responses=True,
                socket_connect_timeout=_TIMEOUT_SECONDS,
                socket_timeout=_TIMEOUT_SECONDS,
            )
            try:
                client.ping()
            except Exception:
                client.close()
                raise
            _client = client
        return _client


def close_redis_client() -> None:
    """Close the shared client if one was opened."""
    global _client
    with _lock:
        if _client is not None:
            try:
                _client.close()
            finally:
                _client = None