# chirpline

A small microblogging HTTP API built on Flask. Users post short messages
(at most 280 bytes of UTF-8 text), follow other users, and read a home
timeline made of the messages written by the people they follow.

Messages and follow relations are stored in PostgreSQL through SQLAlchemy.
Redis keeps, for each user, the set of users they follow
(`user:<id>:following`) and a list of the ids of the messages they wrote
(`user:<id>:timeline`).

## Installation

```
pip install chirpline
```

The database engine is created with the `postgresql+psycopg2` dialect, so a
psycopg2 driver has to be installed alongside the package.

For running the test suite:

```
pip install "chirpline[test]"
pytest
```

## Configuration

Settings are read from the environment. The `chirpline` command loads a
`.env` file from the working directory first, if there is one.

| Variable      | Meaning                                                   |
|---------------|-----------------------------------------------------------|
| `DB_HOST`     | PostgreSQL host                                           |
| `DB_PORT`     | PostgreSQL port                                           |
| `DB_USER`     | PostgreSQL user                                           |
| `DB_PASSWORD` | PostgreSQL password                                       |
| `DB_NAME`     | PostgreSQL database name                                  |
| `REDIS_ADDR`  | Redis address as `host:port` (default `localhost:6379`)   |
| `REDIS_PASS`  | Redis password (may be empty)                             |

An example `.env`:

```
DB_HOST=localhost
DB_PORT=5432
DB_USER=user
DB_PASSWORD=password
DB_NAME=chirpline
REDIS_ADDR=localhost:6379
REDIS_PASS=
```

`chirpline.database.build_dsn(env)` shows the connection string built from
these variables, with `sslmode=disable`.

The database must already hold a `tweets` table (`id`, `user_id`,
`content`, `created_at`) and a `follows` table (`id`, `follower_id`,
`followee_id`) with a uniqueness constraint on the pair.

## Running the server

```
chirpline
chirpline --host 127.0.0.1 --port 9000
```

The command connects to PostgreSQL and Redis (checking each connection
once), then serves the API with Flask's built-in server. By default it
listens on `0.0.0.0`, port `8080`. If either connection fails, the error is
logged and the command exits with status 1.

## HTTP API

All routes live under `/api`. Every reply is JSON.

### `GET /api/health`

Returns `{"status": "ok"}`.

### `POST /api/tweets/`

Body:

```json
{"user_id": 123, "content": "Hello, world!"}
```

A missing field is taken as `0` or the empty string. A body that is not a
JSON object, or a field of the wrong type, gives `400` with an `error`
message. Content longer than 280 bytes gives `400` with
`{"error": "El tweet no puede superar los 280 caracteres"}`. On success the
message is stored, its id is pushed to the head of the author's Redis list,
and the reply is `201` with `{"message": "Tweet created successfully"}`; a
storage failure gives `500` with `{"error": "Failed to create tweet"}`.

### `POST /api/follows/`

Body:

```json
{"follower_id": 123, "followee_id": 456}
```

Missing fields are taken as `0`; bad types give `400`. Following the same
user twice is not an error. On success the reply is `201` with
`{"message": "Follow created successfully"}`; a storage failure gives `500`
with `{"error": "Failed to create follow"}`.

### `GET /api/tweets/timeline/<user_id>`

Looks up the users that `user_id` follows in Redis and returns every
message they wrote, newest first:

```json
{"tweets": [{"id": 1, "user_id": 456, "content": "Hello", "created_at": "2024-01-01T12:00:00"}]}
```

A user who follows nobody gets `{"tweets": []}`. A `user_id` that is not a
64-bit integer gives `400` with `{"error": "user_id must be a number"}`; a
storage failure gives `500` with `{"error": "Failed to get timeline"}`.

## Using it as a library

The pieces can be wired together by hand, for example to serve the API
from another WSGI server or to run it over in-memory stores:

```python
from chirpline.cache import get_redis_client
from chirpline.database import get_sql_client
from chirpline.repositories import create_repositories
from chirpline.usecases import create_use_cases
from chirpline.web import create_app

repositories = create_repositories(get_sql_client(), get_redis_client())
app = create_app(create_use_cases(repositories))
```

`get_sql_client()` and `get_redis_client()` return one shared engine and
one shared client per process; `close_redis_client()` closes the Redis one.

The use cases (`CreateTweetUseCase`, `CreateFollowUseCase`,
`GetTimelineUseCase`) depend only on the store protocols in
`chirpline.domain` (`TweetStore`, `TweetCache`, `FollowStore`,
`FollowCache`), so any object with the matching methods can stand in for
`TweetRepository`, `TweetCacheRepository`, `FollowRepository` and
`FollowCacheRepository`. The view factories in `chirpline.web`
(`make_create_tweet_handler`, `make_create_follow_handler`,
`make_get_timeline_handler`) and `register_routes(app, use_cases)` can be
used to mount the API on an existing Flask application.

## What it does not do

- It does not create or migrate the database tables; they must exist.
- There is no route to delete messages or to unfollow a user.
- It serves no API description document.
- The home timeline is read from PostgreSQL each time; the per-user lists
  of message ids in Redis are written but not used to build it.