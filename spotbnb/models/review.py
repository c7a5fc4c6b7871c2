"""
SpotBnB Backend — Review SQLAlchemy Model
===========================================

What:  A user's review of a spot: free text (≤250 chars) and a 1-5 star rating.
Who:   Created through SpotService.create_review; listed per spot.

Uniqueness:
    A user reviews a spot at most once. SpotService checks for an existing
    row before inserting; `uq_reviews_spot_user` closes the race between two
    concurrent inserts from the same user.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotbnb.database import Base
from spotbnb.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from spotbnb.models.review_image import ReviewImage
    from spotbnb.models.spot import Spot
    from spotbnb.models.user import User


class Review(TimestampMixin, Base):
    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    spot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("spots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    review: Mapped[str] = mapped_column(String(250), nullable=False)
    stars: Mapped[int] = mapped_column(Integer, nullable=False)

    spot: Mapped["Spot"] = relationship(back_populates="reviews")
    user: Mapped["User"] = relationship(back_populates="reviews")
    images: Mapped[List["ReviewImage"]] = relationship(
        back_populates="review",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("spot_id", "user_id", name="uq_reviews_spot_user"),
        CheckConstraint("stars >= 1 AND stars <= 5", name="check_stars_range"),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, spot_id={self.spot_id}, user_id={self.user_id}, stars={self.stars})>"
