"""Pytest configuration - offline logfire and a client wired to a mock transport."""

import asyncio
import json
from collections.abc import Callable

import httpx
import logfire
import pytest

from timing_api.client import TimingClient, TimingClientConfig

logfire.configure(send_to_logfire=False, console=False)

API_KEY = "test-api-key"
BASE_URL = "https://timing.test/api/v1"


class Recorder:
    """Mock transport handler that records requests and replays canned responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list[httpx.Response | Exception] = []
        self.routes: dict[str, tuple[float, httpx.Response]] = {}

    def reply(self, status: int = 200, json_body=None, **kwargs) -> "Recorder":
        self.responses.append(httpx.Response(status, json=json_body, **kwargs))
        return self

    def fail(self, error: Exception) -> "Recorder":
        self.responses.append(error)
        return self

    def route(self, path: str, json_body=None, delay: float = 0.0) -> "Recorder":
        """Answer every request for `path` with `json_body` after `delay` seconds."""
        self.routes[path] = (delay, httpx.Response(200, json=json_body))
        return self

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path in self.routes:
            delay, response = self.routes[request.url.path]
            await asyncio.sleep(delay)
            return response
        response = self.responses.pop(0) if self.responses else httpx.Response(200, json={"data": None})
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def config() -> TimingClientConfig:
    return TimingClientConfig(api_key=API_KEY, base_url=BASE_URL)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
async def client(config: TimingClientConfig, recorder: Recorder):
    async with TimingClient(config, transport=httpx.MockTransport(recorder)) as client:
        yield client


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    """Build a response bound to a request, as raise_for_status requires."""

    def _make(status: int = 200, json_body=None, method: str = "GET", url: str = f"{BASE_URL}/"):
        return httpx.Response(status, json=json_body, request=httpx.Request(method, url))

    return _make
