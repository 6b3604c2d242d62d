"""User model for member data."""

import uuid
from typing import TYPE_CHECKING, List

from sqlalchemy import Index, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentbid.core.database import Base
from rentbid.models.base import TimestampMixin

if TYPE_CHECKING:
    from rentbid.models.bid import Bid
    from rentbid.models.listing import Listing


class User(Base, TimestampMixin):
    """User model representing a registered member."""

    __tablename__ = "users"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="active",
    )

    # Relationships
    listings: Mapped[List["Listing"]] = relationship(
        "Listing", foreign_keys="Listing.landlord_id", back_populates="landlord"
    )
    bids: Mapped[List["Bid"]] = relationship("Bid", back_populates="bidder")

    __table_args__ = (
        Index("idx_users_status", "status"),
    )
