"""
SpotBnB Backend — User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table.
Why:   Spots and reviews reference their owner / author by user id, and the
       review listing embeds the reviewer's display name.
Who:   Read by the auth dependency (token → user) and by SpotService.

Accounts are managed outside this service; nothing here writes users.
"""

from typing import List, TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from spotbnb.database import Base
from spotbnb.models.mixins import TimestampMixin

if TYPE_CHECKING:
    from spotbnb.models.review import Review
    from spotbnb.models.spot import Spot


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)

    spots: Mapped[List["Spot"]] = relationship(
        back_populates="owner",
        passive_deletes=True,
    )
    reviews: Mapped[List["Review"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
