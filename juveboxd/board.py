import logging

from juveboxd.errors import ReviewError, StoreUnavailable, ValidationError
from juveboxd.rating import StarRating
from juveboxd.schemas import Review, sort_newest_first
from juveboxd.store.base import ReviewStore
from juveboxd.validation import COMMENT_MAX_LENGTH, validate_draft

logger = logging.getLogger(__name__)

RECENT_LIMIT = 6


class ReviewBoard:
    """
    Submission flow behind the review page.

    Holds the transient draft (rating, nickname, comment) and the list of
    reviews on display. Validation failures never reach the store; store
    failures leave the draft in place so the user can retry.
    """

    def __init__(self, store: ReviewStore):
        self.store = store
        self.rating = StarRating(on_change=self._set_rating)
        self.draft_rating: float = 0
        self.nickname = ""
        self.comment = ""
        self.error = ""
        self.submitted = False
        self.reviews: list[Review] = []

    def _set_rating(self, value: float) -> None:
        self.draft_rating = value
        self.submitted = False

    def set_comment(self, text: str) -> bool:
        if len(text) > COMMENT_MAX_LENGTH:
            return False
        self.comment = text
        self.submitted = False
        return True

    def dismiss(self) -> None:
        """Hide the thank-you state; the page calls this a few seconds after a submit."""
        self.submitted = False

    def reset_draft(self) -> None:
        self.rating.reset()
        self.draft_rating = 0
        self.nickname = ""
        self.comment = ""
        self.submitted = False

    async def submit(self) -> Review | None:
        try:
            draft = validate_draft(self.nickname, self.draft_rating, self.comment)
        except ValidationError as e:
            self.error = e.message
            return None

        try:
            review = await self.store.create(draft)
        except ReviewError as e:
            logger.error("Failed to save review: %s", e.message)
            self.error = e.message
            return None

        self.reviews = sort_newest_first([review, *self.reviews])
        self.error = ""
        self.reset_draft()
        self.submitted = True
        return review

    async def refresh(self) -> list[Review]:
        try:
            reviews = await self.store.list()
        except StoreUnavailable as e:
            logger.warning("Could not load reviews: %s", e.message)
            reviews = []
        self.reviews = sort_newest_first(reviews)
        return self.reviews

    async def remove(self, review_id: str) -> bool:
        try:
            await self.store.delete(review_id)
        except ReviewError as e:
            logger.error("Failed to delete review %s: %s", review_id, e.message)
            self.error = e.message
            return False
        self.reviews = [r for r in self.reviews if r.id != review_id]
        return True

    def recent(self, limit: int = RECENT_LIMIT) -> list[Review]:
        return self.reviews[:limit]
