import logging
from typing import Any, List
from urllib.parse import quote

import httpx
from pydantic import ValidationError as SchemaError

from juveboxd.config import Settings
from juveboxd.errors import NotFound, TransportError
from juveboxd.schemas import Review, ReviewAdapter, ReviewCreate, ReviewList

logger = logging.getLogger(__name__)


def error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("message"), str) and body["message"]:
        return body["message"]
    return f"HTTP error! status: {response.status_code}"


class RemoteReviewStore:
    """Review store backed by the reviews HTTP API, one round-trip per call."""

    def __init__(self, base_url: str | None = None, client: httpx.AsyncClient | None = None):
        self.base_url = (base_url or Settings.REVIEWS_API_URL).rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=Settings.HTTP_TIMEOUT)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.request(
                method, url, headers={"Content-Type": "application/json"}, **kwargs
            )
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"Request to {url} failed: {e}") from e
        return response

    @staticmethod
    def _resource(review_id: str) -> str:
        # ids are opaque, keep them to one path segment
        segment = quote(review_id, safe='')
        if segment in (".", ".."):
            segment = segment.replace(".", "%2E")
        return f"/reviews/{segment}"

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if not response.is_success:
            raise TransportError(error_message(response), status=response.status_code)

    @staticmethod
    def _parse(response: httpx.Response, schema):
        try:
            return schema.validate_python(response.json())
        except (ValueError, SchemaError) as e:
            raise TransportError(f"Malformed response from {response.url}: {e}", status=response.status_code) from e

    async def list(self) -> List[Review]:
        response = await self._request("GET", "/reviews")
        self._raise_for_status(response)
        return self._parse(response, ReviewList)

    async def create(self, draft: ReviewCreate) -> Review:
        response = await self._request("POST", "/reviews", json=draft.model_dump())
        self._raise_for_status(response)
        return self._parse(response, ReviewAdapter)

    async def get_by_id(self, review_id: str) -> Review:
        if not review_id:
            raise NotFound()
        response = await self._request("GET", self._resource(review_id))
        if response.status_code == 404:
            raise NotFound(f"Review {review_id} not found")
        self._raise_for_status(response)
        return self._parse(response, ReviewAdapter)

    async def delete(self, review_id: str) -> None:
        if not review_id:
            return
        response = await self._request("DELETE", self._resource(review_id))
        if response.status_code == 404:
            logger.debug("Review %s already gone", review_id)
            return
        self._raise_for_status(response)
