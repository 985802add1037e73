"""Command that starts the API server."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from dotenv import load_dotenv

from chirpline.cache import close_redis_client, get_redis_client
from chirpline.database import get_sql_client
from chirpline.repositories import create_repositories
from chirpline.usecases import create_use_cases
from chirpline.web import create_app

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080


def run(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Connect to PostgreSQL and Redis, then serve the API until stopped."""
    engine = get_sql_client()
    try:
        redis_client = get_redis_client()
        try:
            repositories = create_repositories(engine, redis_client)
            app = create_app(create_use_cases(repositories))
            app.run(host=host, port=port)
        finally:
            close_redis_client()
    finally:
        engine.dispose()


def main(argv: Sequence[str] | None = None) -> int:
    """Parse options, load .env and run the server; return the exit status."""
    parser = argparse.ArgumentParser(description="Serve the tweets and follows API.")
    parser.add_argument("--host", default=DEFAULT_HOST, help="address to listen on")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        run(args.host, args.port)
    except Exception as exc:
        logger.error("failed to start the application: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())