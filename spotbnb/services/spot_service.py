"""
SpotBnB Backend — Spot Service (Business Logic)
=================================================

What:  Every spot, spot image and review operation behind /api/spots.
Why:   Keeps lookup → ownership → mutation logic out of the HTTP layer so it
       can be tested with a mocked session.
How:   Each public method is one store read or write wrapped in
       `_store_errors`, which lets application errors through untouched and
       turns anything else into a DatabaseError carrying the operation's
       generic message.

Request flow (mutating operations):
    ┌──────────┐   ┌──────────┐   ┌───────────┐   ┌───────────┐   ┌──────────┐
    │   Auth   │──▶│ Validate │──▶│  Lookup   │──▶│ Authorize │──▶│  Mutate  │
    │  (401)   │   │  (400)   │   │  (404)    │   │  (403)    │   │  (500)   │
    └──────────┘   └──────────┘   └───────────┘   └───────────┘   └──────────┘

    Auth and declarative validation run as FastAPI dependencies before the
    service is called. Not-found is always decided before authorization.

Transactions:
    Services only flush. The session dependency commits after the handler
    returns, or rolls back if anything raised.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from spotbnb.auth import AuthUser
from spotbnb.exceptions import (
    DatabaseError,
    ForbiddenError,
    NotFoundError,
    SpotBnbError,
    ValidationError,
)
from spotbnb.models import Review, Spot, SpotImage
from spotbnb.schemas.common import MessageResponse
from spotbnb.schemas.review import (
    ReviewCreate,
    ReviewDetail,
    ReviewImageResponse,
    ReviewListResponse,
    ReviewResponse,
    ReviewUser,
)
from spotbnb.schemas.spot import (
    SpotCreate,
    SpotImageCreate,
    SpotImageResponse,
    SpotListResponse,
    SpotResponse,
    SpotUpdate,
)

logger = logging.getLogger(__name__)

SPOT_NOT_FOUND = "Spot could not be found."
SPOT_DOES_NOT_EXIST = "Spot does not exist."
SPOT_IMAGE_NOT_FOUND = "Spot image could not be found."
NOT_AUTHORIZED = "Not authorized."
IMAGE_WRONG_SPOT = "You can only delete images from your own spot."
ALREADY_REVIEWED = "User has already reviewed this spot."
INVALID_REVIEW = (
    "Review is required and must be a string with a maximum length of 250 characters."
)
INVALID_STARS = "Stars rating is required and must be a number between 1 and 5."

REVIEW_MAX_LENGTH = 250


@contextmanager
def _store_errors(message: str, **context: Any) -> Iterator[None]:
    """
    Maps unexpected failures inside the block to DatabaseError(message).

    SpotBnbError subclasses (404, 403, 400) pass through unchanged.
    """
    try:
        yield
    except SpotBnbError:
        raise
    except Exception as e:
        logger.error("%s %s: %s", message, context, str(e), exc_info=True)
        ctx = dict(context)
        ctx["original_error"] = type(e).__name__
        raise DatabaseError(message=message, context=ctx) from e


# ══════════════════════════════════════════════════════════════════════════
# Serialization helpers
# ══════════════════════════════════════════════════════════════════════════


def spot_to_response(spot: Spot) -> SpotResponse:
    return SpotResponse(
        id=spot.id,
        owner_id=spot.owner_id,
        address=spot.address,
        city=spot.city,
        state=spot.state,
        country=spot.country,
        lat=spot.lat,
        lng=spot.lng,
        name=spot.name,
        description=spot.description,
        price=spot.price,
        created_at=spot.created_at,
        updated_at=spot.updated_at,
    )


def review_to_response(review: Review) -> ReviewResponse:
    return ReviewResponse(
        id=review.id,
        user_id=review.user_id,
        spot_id=review.spot_id,
        review=review.review,
        stars=review.stars,
        created_at=review.created_at,
        updated_at=review.updated_at,
    )


def review_to_detail(review: Review) -> ReviewDetail:
    """Review plus reviewer identity and images; relationships must be loaded."""
    return ReviewDetail(
        **review_to_response(review).model_dump(),
        user=ReviewUser(
            id=review.user.id,
            first_name=review.user.first_name,
            last_name=review.user.last_name,
        ),
        images=[ReviewImageResponse(id=img.id, url=img.url) for img in review.images],
    )


# ══════════════════════════════════════════════════════════════════════════
# Lookup / ownership helpers
# ══════════════════════════════════════════════════════════════════════════


async def load_spot(db: AsyncSession, spot_id: int, message: str = SPOT_NOT_FOUND) -> Spot:
    """Primary-key lookup; raises NotFoundError(message) when absent."""
    spot = await db.get(Spot, spot_id)
    if spot is None:
        raise NotFoundError(message=message, resource="spot", resource_id=spot_id)
    return spot


async def get_owned_spot(db: AsyncSession, spot_id: int, user: AuthUser) -> Spot:
    """
    Loads a spot and asserts the caller owns it.

    Raises:
        NotFoundError:  No spot with this id (checked first)
        ForbiddenError: The spot belongs to another user
    """
    spot = await load_spot(db, spot_id)
    if spot.owner_id != user.id:
        raise ForbiddenError(
            message=NOT_AUTHORIZED,
            context={"spot_id": spot_id, "owner_id": spot.owner_id, "user_id": user.id},
        )
    return spot


class SpotService:
    """
    Business logic layer for spots, spot images and reviews.

    Stateless: every method receives the request's session (and the caller,
    where authentication is required).
    """

    # ── Spots ─────────────────────────────────────────────────────────────

    async def create_spot(
        self, db: AsyncSession, user: AuthUser, payload: SpotCreate
    ) -> SpotResponse:
        with _store_errors("Failed to create spot.", user_id=user.id):
            spot = Spot(owner_id=user.id, **payload.model_dump())
            db.add(spot)
            await db.flush()
            logger.info("Spot %s created by user %s", spot.id, user.id)
            return spot_to_response(spot)

    async def list_spots(self, db: AsyncSession) -> SpotListResponse:
        with _store_errors("Failed to get spots."):
            result = await db.execute(select(Spot).order_by(Spot.id))
            spots = result.scalars().all()
            return SpotListResponse(spots=[spot_to_response(s) for s in spots])

    async def get_spot(self, db: AsyncSession, spot_id: int) -> SpotResponse:
        with _store_errors("Failed to get spot.", spot_id=spot_id):
            spot = await load_spot(db, spot_id)
            return spot_to_response(spot)

    async def update_spot(
        self, db: AsyncSession, user: AuthUser, spot_id: int, payload: SpotUpdate
    ) -> SpotResponse:
        """Applies only the fields present in the request body."""
        with _store_errors("Editing failed.", spot_id=spot_id, user_id=user.id):
            spot = await get_owned_spot(db, spot_id, user)
            changes = payload.model_dump(exclude_unset=True)
            for field, value in changes.items():
                setattr(spot, field, value)
            await db.flush()
            logger.info("Spot %s updated by user %s: %s", spot.id, user.id, sorted(changes))
            return spot_to_response(spot)

    async def delete_spot(
        self, db: AsyncSession, user: AuthUser, spot_id: int
    ) -> MessageResponse:
        """Images and reviews go with the spot via ON DELETE CASCADE."""
        with _store_errors("Deleting failed.", spot_id=spot_id, user_id=user.id):
            spot = await get_owned_spot(db, spot_id, user)
            await db.delete(spot)
            await db.flush()
            logger.info("Spot %s deleted by user %s", spot_id, user.id)
            return MessageResponse(message="Spot successfully deleted.")

    # ── Spot images ───────────────────────────────────────────────────────

    async def add_spot_image(
        self, db: AsyncSession, user: AuthUser, spot_id: int, payload: SpotImageCreate
    ) -> SpotImageResponse:
        with _store_errors("Failed to add image.", spot_id=spot_id, user_id=user.id):
            spot = await get_owned_spot(db, spot_id, user)
            image = SpotImage(spot_id=spot.id, url=payload.url, preview=payload.preview)
            db.add(image)
            await db.flush()
            logger.info("Image %s added to spot %s", image.id, spot.id)
            return SpotImageResponse(id=image.id, url=image.url, preview=image.preview)

    async def delete_spot_image(
        self, db: AsyncSession, user: AuthUser, spot_id: int, image_id: int
    ) -> MessageResponse:
        """
        Deletes an image through its spot's URL.

        Order of checks: spot exists → caller owns spot → image exists →
        image belongs to that spot.
        """
        with _store_errors(
            "Failed to delete image.", spot_id=spot_id, image_id=image_id, user_id=user.id
        ):
            spot = await get_owned_spot(db, spot_id, user)

            image = await db.get(SpotImage, image_id)
            if image is None:
                raise NotFoundError(
                    message=SPOT_IMAGE_NOT_FOUND, resource="spot_image", resource_id=image_id
                )
            if image.spot_id != spot.id:
                raise ForbiddenError(
                    message=IMAGE_WRONG_SPOT,
                    context={"spot_id": spot.id, "image_spot_id": image.spot_id},
                )

            await db.delete(image)
            await db.flush()
            logger.info("Image %s deleted from spot %s", image_id, spot.id)
            return MessageResponse(message="Image successfully deleted.")

    # ── Reviews ───────────────────────────────────────────────────────────

    async def list_reviews(self, db: AsyncSession, spot_id: int) -> ReviewListResponse:
        with _store_errors("Failed to get reviews.", spot_id=spot_id):
            await load_spot(db, spot_id, message=SPOT_DOES_NOT_EXIST)
            result = await db.execute(
                select(Review)
                .where(Review.spot_id == spot_id)
                .options(selectinload(Review.user), selectinload(Review.images))
                .order_by(Review.id)
            )
            reviews = result.scalars().all()
            return ReviewListResponse(reviews=[review_to_detail(r) for r in reviews])

    async def create_review(
        self, db: AsyncSession, user: AuthUser, spot_id: int, payload: ReviewCreate
    ) -> ReviewResponse:
        """
        Creates the caller's review of a spot.

        Raises:
            ValidationError: Bad review text or star rating (400)
            NotFoundError:   Spot does not exist (404)
            ForbiddenError:  Caller already reviewed this spot (403)
            DatabaseError:   Store failure (500)
        """
        text = self._validate_review_text(payload.review)
        stars = self._validate_stars(payload.stars)

        with _store_errors("Failed to create review.", spot_id=spot_id, user_id=user.id):
            await load_spot(db, spot_id, message=SPOT_DOES_NOT_EXIST)

            existing = await db.execute(
                select(Review.id).where(Review.spot_id == spot_id, Review.user_id == user.id)
            )
            if existing.scalar_one_or_none() is not None:
                raise ForbiddenError(message=ALREADY_REVIEWED)

            review = Review(spot_id=spot_id, user_id=user.id, review=text, stars=stars)
            db.add(review)
            try:
                await db.flush()
            except IntegrityError:
                # concurrent insert of the same (spot, user) pair
                logger.warning("Duplicate review race on spot %s by user %s", spot_id, user.id)
                raise ForbiddenError(message=ALREADY_REVIEWED)

            logger.info("Review %s created on spot %s by user %s", review.id, spot_id, user.id)
            return review_to_response(review)

    # ── Inline review checks ──────────────────────────────────────────────

    def _validate_review_text(self, review: Any) -> str:
        if not isinstance(review, str) or not review or len(review) > REVIEW_MAX_LENGTH:
            raise ValidationError(message=INVALID_REVIEW, context={"field": "review"})
        return review

    def _validate_stars(self, stars: Any) -> int:
        # bool is an int subclass; JSON true is not a rating
        if isinstance(stars, bool):
            raise ValidationError(message=INVALID_STARS, context={"field": "stars"})
        if isinstance(stars, float) and stars.is_integer():
            stars = int(stars)
        if not isinstance(stars, int) or not 1 <= stars <= 5:
            raise ValidationError(message=INVALID_STARS, context={"field": "stars"})
        return stars


# ── Singleton Instance ────────────────────────────────────────────────────
spot_service = SpotService()
