from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from datetime import datetime, timezone

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from wedding_run.config.settings import ScoreServiceSettings
from wedding_run.services.scores import ScoreService, parse_timestamp


class FakeScoreApi:
    """In-process stand-in for the score REST API."""

    def __init__(self) -> None:
        self.rows: list[dict] = []
        self.fail_with: int | None = None
        self.delay = 0.0
        self.last_auth: str | None = None
        self.last_query: dict = {}

    def app(self) -> web.Application:
        app = web.Application()
        app.router.add_post("/scores", self.post)
        app.router.add_get("/scores", self.get)
        return app

    async def post(self, request: web.Request) -> web.Response:
        self.last_auth = request.headers.get("Authorization")
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_with:
            return web.json_response({"error": "nope"}, status=self.fail_with)
        body = await request.json()
        row = {"id": f"s{len(self.rows) + 1}", **body}
        self.rows.append(row)
        return web.json_response(row, status=201)

    async def get(self, request: web.Request) -> web.Response:
        self.last_query = dict(request.query)
        if self.fail_with:
            return web.json_response({"error": "nope"}, status=self.fail_with)
        return web.json_response({"scores": self.rows})


@pytest_asyncio.fixture()
async def api() -> AsyncIterator[tuple[FakeScoreApi, str]]:
    fake = FakeScoreApi()
    server = TestServer(fake.app())
    await server.start_server()
    try:
        yield fake, str(server.make_url(""))
    finally:
        await server.close()


def _service(url: str, **overrides) -> ScoreService:
    return ScoreService(ScoreServiceSettings(api_url=url, **overrides))


@pytest.mark.asyncio
async def test_save_score_posts_entry(api) -> None:
    fake, url = api
    service = _service(url)
    try:
        result = await service.save_score("wedding", "GUEST", 321)
    finally:
        await service.close()

    assert result.success is True
    assert result.entry_id == "s1"
    assert fake.rows == [{"id": "s1", "eventId": "wedding", "name": "GUEST", "score": 321}]
    assert fake.last_auth is None


@pytest.mark.asyncio
async def test_api_key_is_sent_as_bearer_token(api) -> None:
    fake, url = api
    service = _service(url, api_key="secret")
    try:
        await service.save_score("wedding", "GUEST", 1)
    finally:
        await service.close()
    assert fake.last_auth == "Bearer secret"


@pytest.mark.asyncio
async def test_http_error_is_reported_not_raised(api) -> None:
    fake, url = api
    fake.fail_with = 500
    service = _service(url)
    try:
        result = await service.save_score("wedding", "GUEST", 5)
    finally:
        await service.close()
    assert result.success is False
    assert result.error == "HTTP 500"


@pytest.mark.asyncio
async def test_timeout_is_reported(api) -> None:
    fake, url = api
    fake.delay = 1.0
    service = _service(url, timeout=0.1)
    try:
        result = await service.save_score("wedding", "GUEST", 5)
    finally:
        await service.close()
    assert result.success is False
    assert result.error == "TIMEOUT"


@pytest.mark.asyncio
async def test_unreachable_server_is_a_network_error() -> None:
    service = _service("http://127.0.0.1:1")
    try:
        result = await service.save_score("wedding", "GUEST", 5)
        ranking = await service.get_ranking("wedding")
    finally:
        await service.close()
    assert result.success is False
    assert result.error == "NETWORK_ERROR"
    assert ranking == []


@pytest.mark.asyncio
async def test_ranking_is_sorted_filtered_and_limited(api) -> None:
    fake, url = api
    fake.rows = [
        {"id": "a", "eventId": "wedding", "name": "A", "score": 10},
        {"id": "b", "eventId": "wedding", "name": "B", "score": 30},
        {"id": "c", "eventId": "other", "name": "C", "score": 99},
        {"id": "d", "eventId": "wedding", "name": "D", "score": 20},
    ]
    service = _service(url, ranking_limit=2)
    try:
        ranking = await service.get_ranking("wedding")
    finally:
        await service.close()

    assert [(e.name, e.score) for e in ranking] == [("B", 30), ("D", 20)]
    assert fake.last_query == {"eventId": "wedding", "limit": "2"}


@pytest.mark.asyncio
async def test_ranking_http_error_is_empty(api) -> None:
    fake, url = api
    fake.fail_with = 503
    service = _service(url)
    try:
        assert await service.get_ranking("wedding") == []
    finally:
        await service.close()


@pytest.mark.asyncio
async def test_ranking_reads_entry_timestamps(api) -> None:
    fake, url = api
    fake.rows = [
        {"id": "a", "eventId": "wedding", "name": "A", "score": 10, "timestamp": "2026-06-20T18:30:00Z"},
        {"id": "b", "eventId": "wedding", "name": "B", "score": 5},
    ]
    service = _service(url)
    try:
        ranking = await service.get_ranking("wedding")
    finally:
        await service.close()

    assert ranking[0].timestamp == datetime(2026, 6, 20, 18, 30, tzinfo=timezone.utc)
    assert ranking[1].timestamp is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2026-06-20T12:00:00+00:00", datetime(2026, 6, 20, 12, tzinfo=timezone.utc)),
        ("2026-06-20T12:00:00", datetime(2026, 6, 20, 12, tzinfo=timezone.utc)),
        (1781956800, datetime(2026, 6, 20, 12, tzinfo=timezone.utc)),
        ({"seconds": 1781956800, "nanoseconds": 0}, datetime(2026, 6, 20, 12, tzinfo=timezone.utc)),
        (None, None),
        ("yesterday", None),
        (True, None),
    ],
)
def test_parse_timestamp(value, expected) -> None:
    assert parse_timestamp(value) == expected
