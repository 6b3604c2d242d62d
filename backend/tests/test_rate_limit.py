"""Tests for the Redis-backed rate limiting middleware."""

from unittest.mock import AsyncMock, MagicMock, patch

from fastapi import FastAPI
from fastapi.testclient import TestClient
from redis.exceptions import ConnectionError as RedisConnectionError

from rentbid.middleware.rate_limit import RateLimitMiddleware


def build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, user_limit=1, ip_limit=5)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    return app


def redis_with_script(result) -> MagicMock:
    redis = MagicMock()
    redis.register_script = MagicMock(return_value=AsyncMock(return_value=result))
    return redis


class TestRateLimitMiddleware:
    def test_allowed_request_passes(self):
        redis = redis_with_script([1, 0])
        with patch("rentbid.middleware.rate_limit.get_redis", AsyncMock(return_value=redis)):
            response = TestClient(build_app()).get("/ping")

        assert response.status_code == 200
        assert response.json() == {"ok": True}

    def test_ip_limit_exceeded(self):
        redis = redis_with_script([0, 3])
        with patch("rentbid.middleware.rate_limit.get_redis", AsyncMock(return_value=redis)):
            response = TestClient(build_app()).get("/ping")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "3"
        assert response.json() == {"message": "Too many requests from this IP"}

    def test_user_limit_applies_to_bearer_tokens(self):
        script = AsyncMock(side_effect=[[1, 0], [0, 2]])
        redis = MagicMock()
        redis.register_script = MagicMock(return_value=script)
        with patch("rentbid.middleware.rate_limit.get_redis", AsyncMock(return_value=redis)):
            response = TestClient(build_app()).get(
                "/ping", headers={"Authorization": "Bearer abc"}
            )

        assert response.status_code == 429
        assert response.json() == {"message": "Too many requests for this user"}
        user_key = script.call_args_list[1].kwargs["keys"][0]
        assert user_key.startswith("ratelimit:user:")
        assert "abc" not in user_key

    def test_redis_outage_fails_open(self):
        script = AsyncMock(side_effect=RedisConnectionError("down"))
        redis = MagicMock()
        redis.register_script = MagicMock(return_value=script)
        with patch("rentbid.middleware.rate_limit.get_redis", AsyncMock(return_value=redis)):
            response = TestClient(build_app()).get("/ping")

        assert response.status_code == 200

    def test_script_registered_once(self):
        redis = redis_with_script([1, 0])
        with patch("rentbid.middleware.rate_limit.get_redis", AsyncMock(return_value=redis)):
            client = TestClient(build_app())
            client.get("/ping")
            client.get("/ping")

        redis.register_script.assert_called_once()
