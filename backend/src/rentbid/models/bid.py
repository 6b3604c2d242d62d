"""Bid model for offers placed against listings."""

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Numeric
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentbid.core.database import Base
from rentbid.models.base import CreatedAtMixin

if TYPE_CHECKING:
    from rentbid.models.listing import Listing
    from rentbid.models.user import User


class Bid(Base, CreatedAtMixin):
    """Bid model representing an accepted offer on a listing.

    Rows are written once by the admission engine and never updated.
    """

    __tablename__ = "bids"

    bid_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    listing_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("listings.listing_id"),
        nullable=False,
    )
    bidder_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.user_id"),
        nullable=False,
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
    )

    # Relationships
    listing: Mapped["Listing"] = relationship("Listing", back_populates="bids")
    bidder: Mapped["User"] = relationship("User", back_populates="bids")

    __table_args__ = (
        Index("idx_bids_listing", "listing_id"),
        Index("idx_bids_bidder_created", "bidder_id", "created_at"),
    )
