"""
SpotBnB Backend — Spot SQLAlchemy Model
=========================================

What:  ORM model representing the `spots` table (rental listings).
Who:   Used by SpotService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - owner_id: The only user allowed to edit or delete the spot
    - lat / lng: Plain floats; range checks live in the request schemas
    - name: VARCHAR(50) mirrors the 50 character API limit
    - price: Nightly price, strictly positive (enforced at the API layer)

Deletion:
    Images and reviews are removed by the database (ON DELETE CASCADE).
    passive_deletes=True keeps the ORM from loading the collections first,
    which would otherwise be an implicit lazy load under AsyncSession.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotbnb.database import Base
from spotbnb.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from spotbnb.models.review import Review
    from spotbnb.models.spot_image import SpotImage
    from spotbnb.models.user import User


class Spot(TimestampMixin, Base):
    __tablename__ = "spots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # ── Location ──────────────────────────────────────────────────────────
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(255), nullable=False)
    lat: Mapped[float] = mapped_column(Float, nullable=False)
    lng: Mapped[float] = mapped_column(Float, nullable=False)

    # ── Listing ───────────────────────────────────────────────────────────
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)

    owner: Mapped["User"] = relationship(back_populates="spots")
    images: Mapped[List["SpotImage"]] = relationship(
        back_populates="spot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    reviews: Mapped[List["Review"]] = relationship(
        back_populates="spot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_spots_owner_id", "owner_id"),
    )

    def __repr__(self) -> str:
        return f"<Spot(id={self.id}, owner_id={self.owner_id}, name='{self.name}')>"
