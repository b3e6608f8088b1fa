import asyncio

import aiohttp
import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer
from aioresponses import aioresponses

from dt_console import config
from dt_console.api.app import app_factory
from dt_console.core.exceptions import FetchError
from dt_console.core.models import ComponentStatus, Indicator, StatusSnapshot

STATUS_ENDPOINT = "https://status.example.com/api/v2/status.json"
QUERY_ENDPOINT = "https://platform.example.com/platform/storage/query/v1/query:execute"

MAJOR_OUTAGE = {
    "status": {"indicator": "major", "description": "Partial outage"},
    "components": [{"name": "API", "status": "degraded"}],
}
LOG_RECORDS = [{"ts": "t1", "content": "x"}, {"ts": "t2", "content": "y"}]


@pytest.fixture(autouse=True)
def setup():
    config.override(
        STATUS_ENDPOINT=STATUS_ENDPOINT,
        QUERY_ENDPOINT=QUERY_ENDPOINT,
        QUERY_TIMEOUT_MS=30000,
        QUERY_ENABLE_PREVIEW=True,
        QUERY_DEFAULT="fetch logs\n| limit 100",
        STATUS_POLL_INTERVAL=300,
        STATUS_COMPONENTS_DISPLAYED=5,
        PAGE_SIZE_DEFAULT=50,
        PAGE_SIZE_OPTIONS=[25, 50, 100, 200],
        PAGE_SIZE_MAX=200,
    )


@pytest.fixture
def rmock():
    # passthrough for local requests (aiohttp TestServer)
    with aioresponses(passthrough=["http://127.0.0.1"]) as m:
        yield m


@pytest_asyncio.fixture
async def client():
    async with aiohttp.ClientSession() as session:
        yield session


@pytest_asyncio.fixture
async def fake_client(rmock):
    app = await app_factory()
    async with TestClient(TestServer(app)) as client:
        yield client


class FakeStatusClient:
    """Status client returning queued outcomes, optionally blocking until released."""

    endpoint = STATUS_ENDPOINT

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.gate: asyncio.Event | None = None

    async def fetch_status(self) -> StatusSnapshot:
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def snapshot(indicator=Indicator.NONE, description="All good", components=()):
    return StatusSnapshot(
        indicator=indicator,
        description=description,
        components=tuple(ComponentStatus(name, status) for name, status in components),
    )


@pytest.fixture
def failing_status_client():
    return FakeStatusClient(FetchError("Failed to fetch status: HTTP 503"))
