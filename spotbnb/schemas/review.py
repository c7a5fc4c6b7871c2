"""
SpotBnB Backend — Review Request/Response Schemas
===================================================

What:  Payloads for POST/GET /api/spots/{spotId}/reviews.

ReviewCreate is intentionally loose (Any): the review text and star rating
are checked inline by SpotService so each failure maps to its single
combined message instead of per-field errors.
"""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from spotbnb.schemas.spot import CamelModel


class ReviewCreate(BaseModel):
    review: Any = None
    stars: Any = None


class ReviewResponse(CamelModel):
    id: int
    user_id: int
    spot_id: int
    review: str
    stars: int
    created_at: datetime
    updated_at: datetime


class ReviewUser(CamelModel):
    """Reviewer identity embedded in each listed review."""

    id: int
    first_name: str
    last_name: str


class ReviewImageResponse(CamelModel):
    id: int
    url: str


class ReviewDetail(ReviewResponse):
    user: ReviewUser = Field(alias="User")
    images: List[ReviewImageResponse] = Field(alias="ReviewImages")


class ReviewListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reviews: List[ReviewDetail] = Field(alias="Reviews")
