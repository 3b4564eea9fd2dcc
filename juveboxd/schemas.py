from typing import Iterable

from pydantic import BaseModel, ConfigDict, TypeAdapter


class ReviewCreate(BaseModel):
    nickname: str
    rating: float
    comment: str = ""


class Review(ReviewCreate):
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: int


ReviewAdapter = TypeAdapter(Review)
ReviewList = TypeAdapter(list[Review])


def sort_newest_first(reviews: Iterable[Review]) -> list[Review]:
    return sorted(reviews, key=lambda r: r.timestamp, reverse=True)
