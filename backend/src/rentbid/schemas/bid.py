"""Bid schemas for request/response validation."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import BaseModel


class BiddingParams(BaseModel):
    """Raw bid fields.

    Both fields are left untyped so that blank and non-numeric amounts reach
    the admission engine, which owns their error messages.
    """

    bid: Any = None
    listing_id: Any = None

    @classmethod
    def from_body(cls, body: Any) -> "BiddingParams":
        """Pull ``bidding.bid`` and ``bidding.listing_id`` out of any decoded JSON body.

        Bodies of the wrong shape yield empty params instead of an error, so
        the request still reaches the authentication check.
        """
        bidding = body.get("bidding") if isinstance(body, dict) else None
        if not isinstance(bidding, dict):
            return cls()
        return cls(bid=bidding.get("bid"), listing_id=bidding.get("listing_id"))


class MessageResponse(BaseModel):
    """Schema for admission outcomes reported as a single message."""

    message: str


class ErrorsResponse(BaseModel):
    """Schema for authentication failures."""

    errors: list[str]


class BidResponse(BaseModel):
    """Schema for a persisted bid."""

    bid_id: UUID
    listing_id: UUID
    bidder_id: UUID
    amount: Decimal
    created_at: datetime

    model_config = {"from_attributes": True}


class BidHistoryResponse(BaseModel):
    """Schema for a bidder's bid history."""

    bids: list[BidResponse]
    total: int
