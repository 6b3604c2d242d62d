"""Bid service: listing lookup and bid persistence for the admission engine."""

import logging
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentbid.models.bid import Bid
from rentbid.models.listing import Listing

logger = logging.getLogger(__name__)


def coerce_listing_id(listing_id: Any) -> UUID | None:
    """Turn a raw listing reference into a UUID, or None if it is malformed."""
    if isinstance(listing_id, UUID):
        return listing_id
    if not isinstance(listing_id, str):
        return None
    try:
        return UUID(listing_id)
    except ValueError:
        return None


class BidService:
    """Service class for bid operations backed by PostgreSQL."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_listing(self, listing_id: Any) -> Listing | None:
        """Load a listing and lock its row until the current transaction ends.

        The lock keeps a concurrent tenant assignment from slipping in between
        the tenancy check and the bid insert. Rejected admissions release it
        when the request's session is closed.

        Args:
            listing_id: Raw listing reference from the request

        Returns:
            Listing or None if not found
        """
        listing_uuid = coerce_listing_id(listing_id)
        if listing_uuid is None:
            return None

        result = await self.db.execute(
            select(Listing).where(Listing.listing_id == listing_uuid).with_for_update()
        )
        return result.scalar_one_or_none()

    async def create_bid(
        self, *, amount: Decimal, listing_id: UUID, bidder_id: UUID
    ) -> Bid:
        """Insert a bid and commit it in a single transaction.

        Args:
            amount: Validated bid amount
            listing_id: Listing UUID
            bidder_id: Bidding user's UUID

        Returns:
            The persisted bid
        """
        bid = Bid(amount=amount, listing_id=listing_id, bidder_id=bidder_id)
        try:
            self.db.add(bid)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            logger.error(f"Failed to persist bid on listing {listing_id}")
            raise
        await self.db.refresh(bid)
        return bid

    async def get_bidder_history(self, bidder_id: UUID) -> list[Bid]:
        """Get every bid a user has placed, newest first."""
        result = await self.db.execute(
            select(Bid)
            .where(Bid.bidder_id == bidder_id)
            .order_by(Bid.created_at.desc())
        )
        return list(result.scalars().all())
