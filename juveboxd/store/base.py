from typing import List, Protocol, runtime_checkable

from juveboxd.schemas import Review, ReviewCreate


@runtime_checkable
class ReviewStore(Protocol):
    """Operations every review backend offers; the board only talks to these."""

    async def list(self) -> List[Review]: ...

    async def create(self, draft: ReviewCreate) -> Review: ...

    async def get_by_id(self, review_id: str) -> Review: ...

    async def delete(self, review_id: str) -> None: ...


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...
