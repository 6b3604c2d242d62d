"""SQLAlchemy ORM models."""

from rentbid.models.base import CreatedAtMixin, TimestampMixin
from rentbid.models.bid import Bid
from rentbid.models.listing import Listing
from rentbid.models.user import User

__all__ = [
    "CreatedAtMixin",
    "TimestampMixin",
    "User",
    "Listing",
    "Bid",
]
