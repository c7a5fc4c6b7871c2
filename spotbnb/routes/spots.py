"""
SpotBnB Backend — Spot Route Handlers
=======================================

What:  HTTP surface for spots, spot images and spot reviews under /api/spots.
How:   Thin handlers: FastAPI resolves the caller (get_current_user) and
       validates the body (SpotCreate / SpotUpdate rules) before the handler
       runs; the handler delegates to SpotService and returns its result.

Route Inventory:
    POST   /api/spots                               create spot        (auth)
    GET    /api/spots                               list spots
    GET    /api/spots/{spot_id}                     spot detail
    PATCH  /api/spots/{spot_id}                     edit spot          (auth, owner)
    DELETE /api/spots/{spot_id}                     delete spot        (auth, owner)
    POST   /api/spots/{spot_id}/images              add image          (auth, owner)
    DELETE /api/spots/{spot_id}/images/{image_id}   delete image       (auth, owner)
    GET    /api/spots/{spot_id}/reviews             list reviews
    POST   /api/spots/{spot_id}/reviews             create review      (auth)

Errors are raised by the service and rendered by the global handlers in
main.py; no handler here catches exceptions.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from spotbnb.auth import AuthUser, get_current_user
from spotbnb.database import get_db_session
from spotbnb.schemas.common import ErrorResponse, MessageResponse
from spotbnb.schemas.review import ReviewCreate, ReviewListResponse, ReviewResponse
from spotbnb.schemas.spot import (
    SpotCreate,
    SpotImageCreate,
    SpotImageResponse,
    SpotListResponse,
    SpotResponse,
    SpotUpdate,
)
from spotbnb.services.spot_service import spot_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/spots", tags=["Spots"])

# Shared OpenAPI error documentation
_BAD_REQUEST = {400: {"description": "Validation failed", "model": ErrorResponse}}
_UNAUTHORIZED = {401: {"description": "Authentication required", "model": ErrorResponse}}
_FORBIDDEN = {403: {"description": "Not the owner", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


# ── Spots ─────────────────────────────────────────────────────────────────

@router.post(
    "",
    status_code=201,
    response_model=SpotResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_SERVER_ERROR},
    summary="Create a spot owned by the caller",
)
async def create_spot(
    payload: SpotCreate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SpotResponse:
    return await spot_service.create_spot(db=db, user=user, payload=payload)


@router.get(
    "",
    response_model=SpotListResponse,
    responses={**_SERVER_ERROR},
    summary="List all spots",
)
async def list_spots(db: AsyncSession = Depends(get_db_session)) -> SpotListResponse:
    return await spot_service.list_spots(db=db)


@router.get(
    "/{spot_id}",
    response_model=SpotResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Get a spot by id",
)
async def get_spot(
    spot_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> SpotResponse:
    return await spot_service.get_spot(db=db, spot_id=spot_id)


@router.patch(
    "/{spot_id}",
    response_model=SpotResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Edit a spot (owner only)",
    description="Any subset of the create fields; omitted fields are left unchanged.",
)
async def update_spot(
    spot_id: int,
    payload: Optional[SpotUpdate] = None,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SpotResponse:
    # no body means no fields to change
    if payload is None:
        payload = SpotUpdate()
    return await spot_service.update_spot(db=db, user=user, spot_id=spot_id, payload=payload)


@router.delete(
    "/{spot_id}",
    response_model=MessageResponse,
    responses={**_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a spot (owner only)",
)
async def delete_spot(
    spot_id: int,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await spot_service.delete_spot(db=db, user=user, spot_id=spot_id)


# ── Spot images ───────────────────────────────────────────────────────────

@router.post(
    "/{spot_id}/images",
    status_code=201,
    response_model=SpotImageResponse,
    responses={**_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Add an image to a spot (owner only)",
)
async def add_spot_image(
    spot_id: int,
    payload: SpotImageCreate,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SpotImageResponse:
    return await spot_service.add_spot_image(db=db, user=user, spot_id=spot_id, payload=payload)


@router.delete(
    "/{spot_id}/images/{image_id}",
    response_model=MessageResponse,
    responses={**_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete an image from a spot (owner only)",
)
async def delete_spot_image(
    spot_id: int,
    image_id: int,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return await spot_service.delete_spot_image(
        db=db, user=user, spot_id=spot_id, image_id=image_id
    )


# ── Reviews ───────────────────────────────────────────────────────────────

@router.get(
    "/{spot_id}/reviews",
    response_model=ReviewListResponse,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="List a spot's reviews with reviewer and images",
)
async def list_reviews(
    spot_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ReviewListResponse:
    return await spot_service.list_reviews(db=db, spot_id=spot_id)


@router.post(
    "/{spot_id}/reviews",
    status_code=201,
    response_model=ReviewResponse,
    responses={**_BAD_REQUEST, **_UNAUTHORIZED, **_FORBIDDEN, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Review a spot (once per user)",
)
async def create_review(
    spot_id: int,
    payload: Optional[ReviewCreate] = None,
    user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ReviewResponse:
    if payload is None:
        payload = ReviewCreate()
    return await spot_service.create_review(db=db, user=user, spot_id=spot_id, payload=payload)
