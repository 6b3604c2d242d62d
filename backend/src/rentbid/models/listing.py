"""Listing model for rental properties open to bids."""

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import ForeignKey, Index, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from rentbid.core.database import Base
from rentbid.models.base import TimestampMixin

if TYPE_CHECKING:
    from rentbid.models.bid import Bid
    from rentbid.models.user import User


class Listing(Base, TimestampMixin):
    """Listing model representing a rental property.

    A listing is closed to new bids once ``tenant_id`` is set.
    """

    __tablename__ = "listings"

    listing_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    landlord_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.user_id"),
        nullable=False,
    )
    tenant_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.user_id"),
        nullable=True,
    )
    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    address: Mapped[str | None] = mapped_column(
        String(500),
        nullable=True,
    )
    rent: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2),
        nullable=True,
    )

    # Relationships
    landlord: Mapped["User"] = relationship(
        "User", foreign_keys=[landlord_id], back_populates="listings"
    )
    tenant: Mapped[Optional["User"]] = relationship("User", foreign_keys=[tenant_id])
    bids: Mapped[List["Bid"]] = relationship("Bid", back_populates="listing")

    __table_args__ = (
        Index("idx_listings_landlord", "landlord_id"),
        Index("idx_listings_tenant", "tenant_id"),
    )
