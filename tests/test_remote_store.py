import json

import httpx
import pytest

from juveboxd.errors import NotFound, StoreUnavailable, TransportError
from juveboxd.schemas import ReviewCreate
from juveboxd.store import RemoteReviewStore

BASE_URL = "http://reviews.test/api"

REVIEW = {
    "id": "1718000000000",
    "nickname": "Ana",
    "rating": 4.5,
    "comment": "Otimo",
    "timestamp": 1718000000000,
}


@pytest.fixture
async def remote():
    clients = []

    def build(handler) -> RemoteReviewStore:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return RemoteReviewStore(BASE_URL, client=client)

    yield build
    for client in clients:
        await client.aclose()


@pytest.mark.asyncio
async def test_list_gets_collection(remote):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[REVIEW])

    reviews = await remote(handler).list()

    assert [r.model_dump() for r in reviews] == [REVIEW]
    assert seen[0].method == "GET"
    assert str(seen[0].url) == f"{BASE_URL}/reviews"
    assert seen[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_create_posts_draft(remote):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json=REVIEW)

    review = await remote(handler).create(ReviewCreate(nickname="Ana", rating=4.5, comment="Otimo"))

    assert review.id == REVIEW["id"]
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"nickname": "Ana", "rating": 4.5, "comment": "Otimo"}


@pytest.mark.asyncio
async def test_get_by_id_and_not_found(remote):
    def handler(request):
        if request.url.path.endswith("/reviews/1718000000000"):
            return httpx.Response(200, json=REVIEW)
        return httpx.Response(404, json={"message": "Review not found"})

    store = remote(handler)
    assert (await store.get_by_id("1718000000000")).nickname == "Ana"
    with pytest.raises(NotFound):
        await store.get_by_id("nope")


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [200, 204, 404])
async def test_delete_accepts_success_and_absence(remote, status_code):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(status_code)

    await remote(handler).delete("abc")
    assert seen[0].method == "DELETE"
    assert seen[0].url.path == "/api/reviews/abc"


@pytest.mark.asyncio
async def test_error_uses_server_message(remote):
    store = remote(lambda request: httpx.Response(400, json={"message": "Nickname taken"}))

    with pytest.raises(TransportError) as excinfo:
        await store.create(ReviewCreate(nickname="Ana", rating=1))
    assert excinfo.value.message == "Nickname taken"
    assert excinfo.value.status == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="<html>boom</html>"),
        httpx.Response(502),
        httpx.Response(500, json={"detail": "no message field"}),
    ],
)
async def test_error_falls_back_to_status_message(remote, response):
    store = remote(lambda request: response)

    with pytest.raises(TransportError) as excinfo:
        await store.list()
    assert excinfo.value.message == f"HTTP error! status: {response.status_code}"


@pytest.mark.asyncio
async def test_network_failure_is_transport_error(remote):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as excinfo:
        await remote(handler).list()
    # list failures are caught by callers as StoreUnavailable
    assert isinstance(excinfo.value, StoreUnavailable)


@pytest.mark.asyncio
async def test_malformed_body_is_transport_error(remote):
    store = remote(lambda request: httpx.Response(200, json={"not": "a list"}))

    with pytest.raises(TransportError):
        await store.list()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "review_id, raw_path",
    [
        ("abc#other", b"/api/reviews/abc%23other"),
        ("?x", b"/api/reviews/%3Fx"),
        ("a/b", b"/api/reviews/a%2Fb"),
    ],
)
async def test_ids_are_sent_as_one_path_segment(remote, review_id, raw_path):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(404, json={"message": "Review not found"})

    store = remote(handler)
    with pytest.raises(NotFound):
        await store.get_by_id(review_id)
    await store.delete(review_id)

    assert [r.url.raw_path for r in seen] == [raw_path, raw_path]
    assert [r.method for r in seen] == ["GET", "DELETE"]


@pytest.mark.asyncio
async def test_empty_id_is_absent_without_a_request(remote):
    seen = []
    store = remote(lambda request: seen.append(request) or httpx.Response(500))

    with pytest.raises(NotFound):
        await store.get_by_id("")
    await store.delete("")
    assert seen == []
