"""Pytest configuration and fixtures for testing."""

import os

# Settings are read at import time; keep tests away from a live Redis.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from rentbid.services.admission import Bidder
from rentbid.services.bid_service import coerce_listing_id


class InMemoryListings:
    """Listing lookup over a dict, recording every lookup."""

    def __init__(self, *listings):
        self.listings = {listing.listing_id: listing for listing in listings}
        self.lookups = []

    async def find_listing(self, listing_id):
        self.lookups.append(listing_id)
        listing_uuid = coerce_listing_id(listing_id)
        if listing_uuid is None:
            return None
        return self.listings.get(listing_uuid)


class RecordingBids:
    """Bid persistence that keeps created bids in a list."""

    def __init__(self):
        self.created = []

    async def create_bid(self, *, amount, listing_id, bidder_id):
        bid = SimpleNamespace(
            bid_id=uuid4(),
            amount=amount,
            listing_id=listing_id,
            bidder_id=bidder_id,
            created_at=datetime.now(timezone.utc),
        )
        self.created.append(bid)
        return bid


def make_listing(landlord_id, tenant_id=None) -> SimpleNamespace:
    return SimpleNamespace(
        listing_id=uuid4(),
        landlord_id=landlord_id,
        tenant_id=tenant_id,
        title="2 rooms on Kungsgatan",
    )


@pytest.fixture
def landlord() -> Bidder:
    return Bidder(user_id=uuid4(), username="landlord")


@pytest.fixture
def bidder() -> Bidder:
    return Bidder(user_id=uuid4(), username="bidder")


@pytest.fixture
def open_listing(landlord: Bidder) -> SimpleNamespace:
    """A listing with no tenant."""
    return make_listing(landlord.user_id)


@pytest.fixture
def rented_listing(landlord: Bidder) -> SimpleNamespace:
    """A listing whose tenant has already been assigned."""
    return make_listing(landlord.user_id, tenant_id=uuid4())


@pytest.fixture
def listings(open_listing, rented_listing) -> InMemoryListings:
    return InMemoryListings(open_listing, rented_listing)


@pytest.fixture
def bids() -> RecordingBids:
    return RecordingBids()


# Mock Redis client fixture
@pytest.fixture
def mock_redis() -> AsyncMock:
    """Create a mock Redis client."""
    redis = AsyncMock()

    pipe = MagicMock()
    pipe.execute = AsyncMock(return_value=[1, True])
    redis.pipeline = MagicMock(return_value=pipe)
    redis.hgetall = AsyncMock(return_value={})
    redis.delete = AsyncMock(return_value=1)

    return redis


# Mock database session fixture
@pytest.fixture
def mock_db() -> AsyncMock:
    """Create a mock AsyncSession whose queries return nothing."""
    db = AsyncMock()
    db.add = MagicMock()

    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    result.scalars.return_value.all.return_value = []
    db.execute = AsyncMock(return_value=result)

    return db


# Mock user fixture
@pytest.fixture
def mock_user() -> MagicMock:
    """Create a mock active user object."""
    user = MagicMock()
    user.user_id = uuid4()
    user.email = "test@example.com"
    user.username = "testuser"
    user.status = "active"
    user.created_at = datetime.now(timezone.utc)
    return user
