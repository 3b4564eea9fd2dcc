import asyncio
import json
import logging
import time
import uuid
from typing import Callable, List

from pydantic import ValidationError as SchemaError

from juveboxd.errors import NotFound, StoreUnavailable
from juveboxd.mirror import Mirror
from juveboxd.schemas import Review, ReviewCreate, ReviewList
from juveboxd.store.base import KeyValueStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = "juveboxd-reviews"


def now_ms() -> int:
    return int(time.time() * 1000)


class LocalReviewStore:
    """Reviews kept as one JSON array under STORAGE_KEY.

    Each mutation reads the whole array, changes it and writes it back.
    Mutations through one instance are serialised by a lock. With the
    synchronous storage handles here the critical section never awaits, so
    the lock only starts to matter once a storage handle does I/O
    asynchronously. Separate instances or processes sharing the same storage
    are not serialised and can lose each other's writes.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        mirror: Mirror | None = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.storage = storage
        self.mirror = mirror
        self.clock = clock
        self._lock = asyncio.Lock()

    def _load(self) -> List[Review]:
        raw = self.storage.get_item(STORAGE_KEY)
        if raw is None:
            return []
        try:
            return ReviewList.validate_python(json.loads(raw))
        except (ValueError, SchemaError) as e:
            raise StoreUnavailable(f"Stored reviews are corrupted: {e}") from e

    def _save(self, reviews: List[Review]) -> None:
        payload = ReviewList.dump_json(reviews).decode()
        self.storage.set_item(STORAGE_KEY, payload)

    async def list(self) -> List[Review]:
        return self._load()

    async def create(self, draft: ReviewCreate) -> Review:
        async with self._lock:
            reviews = self._load()
            timestamp = self.clock()
            if reviews:
                timestamp = max(timestamp, reviews[0].timestamp)
            review = Review(id=str(uuid.uuid4()), timestamp=timestamp, **draft.model_dump())
            self._save([review, *reviews])
        logger.info("Stored review %s from %s (%.1f)", review.id, review.nickname, review.rating)

        if self.mirror is not None:
            self.mirror.send(review)
        return review

    async def get_by_id(self, review_id: str) -> Review:
        for review in self._load():
            if review.id == review_id:
                return review
        raise NotFound(f"Review {review_id} not found")

    async def delete(self, review_id: str) -> None:
        async with self._lock:
            reviews = self._load()
            remaining = [r for r in reviews if r.id != review_id]
            if len(remaining) == len(reviews):
                logger.debug("Delete of unknown review %s ignored", review_id)
                return
            self._save(remaining)
        logger.info("Deleted review %s", review_id)
