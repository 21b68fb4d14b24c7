"""Shared fixtures: an in-process mock of the GraphQL and CurseMeta services."""

import asyncio
import json
import threading
from typing import Any

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from cursefetch.models import ClientConfig
from cursefetch.services import CurseClient


class MockCurseService:
    """Serves canned bodies and records the requests it received."""

    def __init__(self) -> None:
        self.graphql_body: bytes = b'{"data":{"addons":[]}}'
        self.addon_bodies: dict[int, bytes] = {}
        self.requests: list[dict[str, Any]] = []

    def set_graphql(self, payload: Any, trailer: bytes = b"") -> None:
        self.graphql_body = json.dumps(payload).encode() + trailer

    def set_addon(self, addon_id: int, payload: Any, trailer: bytes = b"") -> None:
        self.addon_bodies[addon_id] = json.dumps(payload).encode() + trailer

    async def handle_graphql(self, request: web.Request) -> web.Response:
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "headers": dict(request.headers),
                "json": await request.json(),
            }
        )
        return web.Response(body=self.graphql_body, content_type="application/json")

    async def handle_addon(self, request: web.Request) -> web.Response:
        addon_id = int(request.match_info["addon_id"])
        self.requests.append(
            {
                "method": request.method,
                "path": request.path,
                "headers": dict(request.headers),
            }
        )
        body = self.addon_bodies.get(addon_id)
        if body is None:
            body = json.dumps(
                {"error": True, "description": "not found", "status": 404}
            ).encode()
            return web.Response(body=body, status=404, content_type="application/json")
        return web.Response(body=body, content_type="application/json")


@pytest.fixture
def mock_service() -> MockCurseService:
    return MockCurseService()


def build_app(service: MockCurseService) -> web.Application:
    app = web.Application()
    app.router.add_post("/graphql", service.handle_graphql)
    app.router.add_get("/api/v3/direct/addon/{addon_id}", service.handle_addon)
    return app


def config_for(server: TestServer) -> ClientConfig:
    return ClientConfig(
        user_agent="cursefetch-tests/1.0",
        graphql_url=str(server.make_url("/graphql")),
        addon_url=str(server.make_url("/api/v3/direct/addon")),
    )


@pytest_asyncio.fixture
async def curse_server(mock_service: MockCurseService):
    server = TestServer(build_app(mock_service))
    await server.start_server()
    yield server
    await server.close()


@pytest.fixture
def server_config(curse_server: TestServer) -> ClientConfig:
    return config_for(curse_server)


@pytest_asyncio.fixture
async def client(server_config: ClientConfig):
    async with CurseClient(server_config) as curse_client:
        yield curse_client


@pytest.fixture
def threaded_server_config(mock_service: MockCurseService):
    """Mock service on its own loop thread, for exercising the blocking API."""
    loop = asyncio.new_event_loop()
    thread = threading.Thread(target=loop.run_forever, daemon=True)
    thread.start()

    async def start() -> TestServer:
        server = TestServer(build_app(mock_service))
        await server.start_server()
        return server

    server = asyncio.run_coroutine_threadsafe(start(), loop).result(timeout=10)
    try:
        yield config_for(server)
    finally:
        asyncio.run_coroutine_threadsafe(server.close(), loop).result(timeout=10)
        loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=10)
        loop.close()
