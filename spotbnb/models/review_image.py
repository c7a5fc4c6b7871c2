"""
SpotBnB Backend — ReviewImage SQLAlchemy Model
================================================

What:  Image URLs attached to a review. Read-only in this service; embedded
       in the review listing as `ReviewImages: [{id, url}]`.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotbnb.database import Base
from spotbnb.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from spotbnb.models.review import Review


class ReviewImage(TimestampMixin, Base):
    __tablename__ = "review_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    review_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("reviews.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)

    review: Mapped["Review"] = relationship(back_populates="images")

    def __repr__(self) -> str:
        return f"<ReviewImage(id={self.id}, review_id={self.review_id})>"
