import asyncio
import logging

import httpx
from prometheus_client import Counter

from juveboxd.config import Settings
from juveboxd.errors import MirrorFailure
from juveboxd.schemas import Review

logger = logging.getLogger(__name__)

MIRROR_SENT = Counter("juveboxd_mirror_sent_total", "Reviews handed to the mirror sink")
MIRROR_FAILED = Counter("juveboxd_mirror_failed_total", "Mirror writes that failed")


class Mirror:
    """Fire-and-forget copy of each new review to a spreadsheet webhook.

    ``send`` launches a detached task and returns at once; the caller never
    learns whether the write landed.
    """

    def __init__(self, url: str | None, client: httpx.AsyncClient | None = None):
        self.url = url
        self._client = client
        self._owns_client = client is None
        self._pending: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=Settings.HTTP_TIMEOUT)
        return self._client

    def send(self, review: Review) -> asyncio.Task | None:
        if not self.enabled:
            return None
        task = asyncio.create_task(self._post(review))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        MIRROR_SENT.inc()
        return task

    async def _post(self, review: Review) -> None:
        try:
            # response is never inspected
            await self._get_client().post(self.url, data={"data": review.model_dump_json()})
        except Exception as e:
            failure = MirrorFailure(f"Mirror write for review {review.id} failed: {e}")
            MIRROR_FAILED.inc()
            logger.warning("%s", failure.message)

    async def drain(self) -> None:
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
