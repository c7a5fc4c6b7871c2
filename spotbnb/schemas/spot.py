"""
SpotBnB Backend — Spot Request/Response Schemas
=================================================

What:  Pydantic models defining the spot and spot image API contract.
Why:   Request models run the declarative field rules before any handler
       code; response models pin down exactly which columns are exposed and
       render them in camelCase (`ownerId`, `createdAt`, ...).

Request validation:
    SpotCreate — every field is validated, present or not (validate_default),
                 so a missing field reports its "required" message.
    SpotUpdate — only fields present in the body are validated. A field sent
                 as null is present and fails its "required" rule.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from spotbnb.validation import SPOT_RULES, apply_rules


class CamelModel(BaseModel):
    """Serializes snake_case attributes as camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class SpotRules(BaseModel):
    """Applies SPOT_RULES to every declared field."""

    @field_validator("*", mode="before")
    @classmethod
    def run_field_rules(cls, value: Any, info: ValidationInfo) -> Any:
        return apply_rules(value, SPOT_RULES[info.field_name])


class SpotCreate(SpotRules):
    """Body of POST /api/spots."""

    address: str = Field(default=None, validate_default=True)
    city: str = Field(default=None, validate_default=True)
    state: str = Field(default=None, validate_default=True)
    country: str = Field(default=None, validate_default=True)
    lat: float = Field(default=None, validate_default=True)
    lng: float = Field(default=None, validate_default=True)
    name: str = Field(default=None, validate_default=True)
    description: str = Field(default=None, validate_default=True)
    price: float = Field(default=None, validate_default=True)


class SpotUpdate(SpotRules):
    """Body of PATCH /api/spots/{spotId}; any subset of the create fields."""

    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None


class SpotImageCreate(BaseModel):
    """Body of POST /api/spots/{spotId}/images. Stored as sent."""

    url: Optional[str] = None
    preview: bool = False


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class SpotResponse(CamelModel):
    id: int
    owner_id: int
    address: str
    city: str
    state: str
    country: str
    lat: float
    lng: float
    name: str
    description: str
    price: float
    created_at: datetime
    updated_at: datetime


class SpotListResponse(BaseModel):
    """GET /api/spots — every spot, unfiltered."""

    model_config = ConfigDict(populate_by_name=True)

    spots: List[SpotResponse] = Field(alias="Spots")


class SpotImageResponse(CamelModel):
    id: int
    url: str
    preview: bool
