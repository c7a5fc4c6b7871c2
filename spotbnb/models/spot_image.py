"""
SpotBnB Backend — SpotImage SQLAlchemy Model
==============================================

What:  An image URL attached to a spot; `preview` marks the listing thumbnail.
Who:   Created and deleted by the spot's owner through SpotService.
"""

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotbnb.database import Base
from spotbnb.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from spotbnb.models.spot import Spot


class SpotImage(TimestampMixin, Base):
    __tablename__ = "spot_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    spot_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("spots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(String(2048), nullable=False)
    preview: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    spot: Mapped["Spot"] = relationship(back_populates="images")

    def __repr__(self) -> str:
        return f"<SpotImage(id={self.id}, spot_id={self.spot_id}, preview={self.preview})>"
