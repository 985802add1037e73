from types import SimpleNamespace

from flask import Flask

from chirpline.domain import InputCreateFollow, InputCreateTweet, Tweet
from chirpline.web import (
    create_app,
    make_create_follow_handler,
    make_create_tweet_handler,
    make_get_timeline_handler,
    register_routes,
)


class FakeUseCase:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def execute(self, arg):
        self.calls.append(arg)
        if self.error:
            raise self.error
        return self.result


def _client(rule, handler, methods):
    app = Flask(__name__)
    app.add_url_rule(rule, view_func=handler, methods=methods)
    return app.test_client()


# follow handler

def test_follow_returns_201_on_success():
    uc = FakeUseCase()
    client = _client("/follows", make_create_follow_handler(uc), ["POST"])
    resp = client.post(
        "/follows",
        data='{"follower_id": 123, "followee_id": 456}',
        content_type="application/json",
    )
    assert resp.status_code == 201
    assert "Follow created successfully" in resp.get_data(as_text=True)
    assert uc.calls == [InputCreateFollow(follower_id=123, followee_id=456)]


def test_follow_returns_400_on_invalid_json():
    uc = FakeUseCase()
    client = _client("/follows", make_create_follow_handler(uc), ["POST"])
    resp = client.post(
        "/follows",
        data='{"follower_id": "not_a_number", "followee_id": 456}',
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    assert uc.calls == []


def test_follow_returns_500_when_usecase_fails():
    uc = FakeUseCase(error=RuntimeError("something went wrong"))
    client = _client("/follows", make_create_follow_handler(uc), ["POST"])
    resp = client.post(
        "/follows",
        data='{"follower_id": 123, "followee_id": 456}',
        content_type="application/json",
    )
    assert resp.status_code == 500
    assert "Failed to create follow" in resp.get_data(as_text=True)
    assert uc.calls == [InputCreateFollow(follower_id=123, followee_id=456)]


# tweet create handler

def test_tweet_returns_201_on_success():
    uc = FakeUseCase()
    client = _client("/tweets", make_create_tweet_handler(uc), ["POST"])
    resp = client.post(
        "/tweets",
        data='{"user_id": 123, "content": "Hello, world!"}',
        content_type="application/json",
    )
    assert resp.status_code == 201
    assert "Tweet created successfully" in resp.get_data(as_text=True)
    assert uc.calls == [InputCreateTweet(user_id=123, content="Hello, world!")]


def test_tweet_returns_400_on_invalid_json():
    uc = FakeUseCase()
    client = _client("/tweets", make_create_tweet_handler(uc), ["POST"])
    resp = client.post(
        "/tweets",
        data='{"user_id": "not_a_number", "content": 123}',
        content_type="application/json",
    )
    assert resp.status_code == 400
    assert "error" in resp.get_json()
    assert uc.calls == []


def test_tweet_returns_400_on_malformed_body():
    uc = FakeUseCase()
    client = _client("/tweets", make_create_tweet_handler(uc), ["POST"])
    resp = client.post("/tweets", data="{not json", content_type="application/json")
    assert resp.status_code == 400
    assert uc.calls == []


def test_tweet_returns_500_when_usecase_fails():
    uc = FakeUseCase(error=RuntimeError("something went wrong"))
    client = _client("/tweets", make_create_tweet_handler(uc), ["POST"])
    resp = client.post(
        "/tweets",
        data='{"user_id": 123, "content": "Failing tweet"}',
        content_type="application/json",
    )
    assert resp.status_code == 500
    assert "Failed to create tweet" in resp.get_data(as_text=True)


def test_tweet_over_limit_is_rejected():
    uc = FakeUseCase()
    client = _client("/tweets", make_create_tweet_handler(uc), ["POST"])
    resp = client.post("/tweets", json={"user_id": 1, "content": "x" * 281})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "El tweet no puede superar los 280 caracteres"}
    assert uc.calls == []


def test_tweet_at_limit_is_accepted():
    uc = FakeUseCase()
    client = _client("/tweets", make_create_tweet_handler(uc), ["POST"])
    resp = client.post("/tweets", json={"user_id": 1, "content": "x" * 280})
    assert resp.status_code == 201
    assert len(uc.calls) == 1


# timeline handler

def test_timeline_returns_200_with_tweets():
    uc = FakeUseCase(
        result=[
            Tweet(id=1, user_id=123, content="Hola mundo"),
            Tweet(id=2, user_id=124, content="Segundo tweet"),
        ]
    )
    client = _client("/tweets/<user_id>", make_get_timeline_handler(uc), ["GET"])
    resp = client.get("/tweets/123")
    assert resp.status_code == 200
    assert "Hola mundo" in resp.get_data(as_text=True)
    assert [t["content"] for t in resp.get_json()["tweets"]] == ["Hola mundo", "Segundo tweet"]
    assert uc.calls == [123]


def test_timeline_returns_400_when_user_id_missing():
    client = _client("/tweets/", make_get_timeline_handler(None), ["GET"])
    resp = client.get("/tweets/")
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "user_id is required"}


def test_timeline_returns_400_when_user_id_invalid():
    client = _client("/tweets/<user_id>", make_get_timeline_handler(None), ["GET"])
    resp = client.get("/tweets/abc")
    assert resp.status_code == 400
    assert "user_id must be a number" in resp.get_data(as_text=True)


def test_timeline_returns_500_when_usecase_fails():
    uc = FakeUseCase(error=RuntimeError("usecase error"))
    client = _client("/tweets/<user_id>", make_get_timeline_handler(uc), ["GET"])
    resp = client.get("/tweets/123")
    assert resp.status_code == 500
    assert "Failed to get timeline" in resp.get_data(as_text=True)


def test_timeline_empty_returns_empty_list():
    uc = FakeUseCase(result=[])
    client = _client("/tweets/<user_id>", make_get_timeline_handler(uc), ["GET"])
    resp = client.get("/tweets/5")
    assert resp.get_json() == {"tweets": []}


# routes

def _use_cases():
    return SimpleNamespace(
        create_tweet_use_case=FakeUseCase(),
        create_follow_use_case=FakeUseCase(),
        get_timeline_use_case=FakeUseCase(result=[]),
    )


def test_health_route():
    client = create_app(_use_cases()).test_client()
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_registered_routes_reach_use_cases():
    use_cases = _use_cases()
    app = Flask(__name__)
    register_routes(app, use_cases)
    client = app.test_client()

    resp = client.post("/api/tweets/", json={"user_id": 9, "content": "hey"})
    assert resp.status_code == 201
    assert use_cases.create_tweet_use_case.calls == [InputCreateTweet(content="hey", user_id=9)]

    resp = client.post("/api/follows/", json={"follower_id": 1, "followee_id": 2})
    assert resp.status_code == 201
    assert use_cases.create_follow_use_case.calls == [InputCreateFollow(1, 2)]

    resp = client.get("/api/tweets/timeline/7")
    assert resp.get_json() == {"tweets": []}
    assert use_cases.get_timeline_use_case.calls == [7]