"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - app_config: Deterministic front-end configuration
    - fake_clock: Manually advanced monotonic clock
    - stub_service: In-memory Query Service double
    - controller: ConversationController wired to the stub
    - async_client: HTTPX client for API testing
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import app
from src.chat.controller import ConversationController
from src.client.query_service import QueryServiceError
from src.config import AppConfig
from src.models.schemas import ChatResponse, ProcessQueriesResponse


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubQueryService:
    """Query Service double with scripted results.

    Each call advances the fake clock by ``latency`` seconds. When ``gate``
    is set, calls block until it is released.
    """

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.latency = 1.5
        self.gate: asyncio.Event | None = None
        self.queries: list[str] = []
        self.process_calls = 0
        self.response: ChatResponse | QueryServiceError = ChatResponse(message="42 wins")
        self.summary: ProcessQueriesResponse | QueryServiceError = ProcessQueriesResponse()

    async def _wait(self) -> None:
        await asyncio.sleep(0)
        if self.gate is not None:
            await self.gate.wait()
        self.clock.advance(self.latency)

    async def send_query(self, query: str) -> ChatResponse:
        self.queries.append(query)
        await self._wait()
        if isinstance(self.response, QueryServiceError):
            raise self.response
        return self.response

    async def process_queries(self) -> ProcessQueriesResponse:
        self.process_calls += 1
        await self._wait()
        if isinstance(self.summary, QueryServiceError):
            raise self.summary
        return self.summary


@pytest.fixture
def app_config() -> AppConfig:
    """Return configuration independent of the environment."""
    return AppConfig(
        query_service_url="http://backend.test",
        chat_path="/api/chat",
        process_queries_path="/api/queries/process",
        request_timeout=5.0,
        tick_interval=0.01,
        show_process_queries_button=True,
        enable_chat_history_panel=True,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def stub_service(fake_clock: FakeClock) -> StubQueryService:
    return StubQueryService(fake_clock)


@pytest.fixture
def controller(
    stub_service: StubQueryService,
    app_config: AppConfig,
    fake_clock: FakeClock,
) -> ConversationController:
    """Create a controller backed by the stub service.

    Returns:
        Fresh controller holding only the welcome message.
    """
    return ConversationController(stub_service, app_config, clock=fake_clock)


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
