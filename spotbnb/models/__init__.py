# Models package init
"""
SpotBnB Backend — ORM Models
==============================

Importing this package registers every table with `Base.metadata`, which
Alembic autogenerate and the test suite's create_all rely on. It also lets
SQLAlchemy resolve the string targets used in relationship() declarations.
"""

from spotbnb.models.user import User
from spotbnb.models.spot import Spot
from spotbnb.models.spot_image import SpotImage
from spotbnb.models.review import Review
from spotbnb.models.review_image import ReviewImage

__all__ = ["User", "Spot", "SpotImage", "Review", "ReviewImage"]
