import httpx
import pytest

from juveboxd.database import MemoryStorage
from juveboxd.mirror import Mirror
from juveboxd.store import LocalReviewStore


class FakeClock:
    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        self.now += 1
        return self.now


class Recorder:
    """MockTransport handler that remembers every request."""

    def __init__(self, status_code: int = 200, error: Exception | None = None):
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(storage, clock):
    return LocalReviewStore(storage, clock=clock)


@pytest.fixture
def sink():
    return Recorder()


@pytest.fixture
async def mirror(sink):
    client = httpx.AsyncClient(transport=httpx.MockTransport(sink))
    mirror = Mirror("https://sheets.example.com/exec", client=client)
    yield mirror
    await mirror.drain()
    await client.aclose()
