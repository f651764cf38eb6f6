"""Shared fixtures: fixture resource sets and a fake Hue bridge."""

import json
import os
import sys
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

FIXTURES = Path(__file__).parent / "fixtures"
APPLICATION_KEY = "applicationkey"
RESOURCE_KINDS = ["device", "room", "light", "temperature", "light_level", "motion", "device_power"]


def load_fixture(kind: str) -> dict:
    return json.loads((FIXTURES / f"{kind}.json").read_text())


@pytest.fixture
def fixture_data():
    """Raw JSON bodies keyed by resource kind (fresh copy per test)."""
    return {kind: load_fixture(kind) for kind in RESOURCE_KINDS}


class FakeBridge:
    """Serves the fixture resources like a bridge, checking the application key."""

    def __init__(self, data, prefix=""):
        self.data = data
        self.prefix = prefix
        self.requests = []
        self.status_overrides = {}   # kind -> HTTP status
        self.raw_bodies = {}         # kind -> raw response text
        self.url = None

    def make_app(self):
        app = web.Application()
        app.router.add_get(self.prefix + "/clip/v2/resource/{kind}", self.handle)
        return app

    async def handle(self, request):
        kind = request.match_info["kind"]
        key = request.headers.get("hue-application-key")
        self.requests.append((request.path, key))

        if key != APPLICATION_KEY:
            return web.Response(status=401, text="unauthorized user")
        if kind in self.status_overrides:
            return web.Response(status=self.status_overrides[kind])
        if kind in self.raw_bodies:
            return web.Response(text=self.raw_bodies[kind], content_type="application/json")
        if kind not in self.data:
            return web.Response(status=404)
        return web.json_response(self.data[kind])

    def requested_kinds(self):
        return [path.rsplit("/", 1)[-1] for path, _ in self.requests]


@pytest_asyncio.fixture
async def start_bridge(fixture_data):
    """Factory starting fake bridges; all servers are closed after the test."""
    servers = []

    async def _start(prefix=""):
        bridge = FakeBridge(fixture_data, prefix)
        server = TestServer(bridge.make_app())
        await server.start_server()
        servers.append(server)
        bridge.url = f"http://{server.host}:{server.port}{prefix}"
        return bridge

    yield _start

    for server in servers:
        await server.close()


@pytest_asyncio.fixture
async def fake_bridge(start_bridge):
    return await start_bridge()


@pytest_asyncio.fixture
async def make_poller():
    """Factory for HueBridgePoller instances whose sessions are closed after the test."""
    from services.hue_bridge_poller import HueBridgePoller

    pollers = []

    def _make(bridges, **options):
        config = {"bridges": bridges, "timeout": 5, "room_assignments": [], "debug": True}
        config.update(options)
        poller = HueBridgePoller(config)
        pollers.append(poller)
        return poller

    yield _make

    for poller in pollers:
        await poller.close()
