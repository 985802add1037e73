"""HTTP handlers and routes of the JSON API."""

from __future__ import annotations

import json
import logging
import re
from http import HTTPStatus

from flask import Blueprint, Flask, jsonify, request

from chirpline.domain import InputCreateFollow, InputCreateTweet

logger = logging.getLogger(__name__)

MAX_TWEET_BYTES = 280

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MODULUS = 2**64


def _error(status: HTTPStatus, message: str):
    return jsonify(error=message), status


def _decode_body() -> object:
    return json.loads(request.get_data())


def make_create_tweet_handler(use_case):
    """Return the view that posts a tweet."""

    def create_tweet():
        try:
            data = InputCreateTweet.from_mapping(_decode_body())
        except ValueError as exc:
            return _error(HTTPStatus.BAD_REQUEST, str(exc))
        if len(data.content.encode("utf-8")) > MAX_TWEET_BYTES:
            return _error(
                HTTPStatus.BAD_REQUEST, "El tweet no puede superar los 280 caracteres"
            )
        try:
            use_case.execute(data)
        except Exception:
            logger.exception("creating tweet failed")
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to create tweet")
        return jsonify(message="Tweet created successfully"), HTTPStatus.CREATED

    return create_tweet


def make_create_follow_handler(use_case):
    """Return the view that makes one user follow another."""

    def create_follow():
        try:
            data = InputCreateFollow.from_mapping(_decode_body())
        except ValueError as exc:
            return _error(HTTPStatus.BAD_REQUEST, str(exc))
        try:
            use_case.execute(data)
        except Exception:
            logger.exception("creating follow failed")
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to create follow")
        return jsonify(message="Follow created successfully"), HTTPStatus.CREATED

    return create_follow


def _parse_user_id(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value % _UINT64_MODULUS


def make_get_timeline_handler(use_case):
    """Return the view that lists a user's home timeline."""

    def get_timeline(user_id: str = ""):
        if user_id == "":
            return _error(HTTPStatus.BAD_REQUEST, "user_id is required")
        parsed = _parse_user_id(user_id)
        if parsed is None:
            return _error(HTTPStatus.BAD_REQUEST, "user_id must be a number")
        try:
            tweets = use_case.execute(parsed)
        except Exception:
            logger.exception("reading timeline failed")
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, "Failed to get timeline")
        return jsonify(tweets=[tweet.to_dict() for tweet in tweets or []]), HTTPStatus.OK

    return get_timeline


def _health():
    return jsonify(status="ok"), HTTPStatus.OK


def register_routes(app: Flask, use_cases) -> None:
    """Mount the API under /api on the application."""
    api = Blueprint("api", __name__, url_prefix="/api")
    api.add_url_rule("/health", "health", _health, methods=["GET"])
    api.add_url_rule(
        "/tweets/",
        "create_tweet",
        make_create_tweet_handler(use_cases.create_tweet_use_case),
        methods=["POST"],
    )
    api.add_url_rule(
        "/tweets/timeline/<user_id>",
        "get_timeline",
        make_get_timeline_handler(use_cases.get_timeline_use_case),
        methods=["GET"],
    )
    api.add_url_rule(
        "/follows/",
        "create_follow",
        make_create_follow_handler(use_cases.create_follow_use_case),
        methods=["POST"],
    )
    app.register_blueprint(api)


def create_app(use_cases) -> Flask:
    """Build the Flask application serving the API."""
    app = Flask(__name__)
    register_routes(app, use_cases)
    return app