"""Tests for the SQL-backed listing lookup and bid persistence."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from rentbid.models.bid import Bid
from rentbid.services.bid_service import BidService, coerce_listing_id


class TestCoerceListingId:
    def test_uuid_passes_through(self):
        listing_id = uuid4()
        assert coerce_listing_id(listing_id) is listing_id

    def test_uuid_string_is_parsed(self):
        listing_id = uuid4()
        assert coerce_listing_id(str(listing_id)) == listing_id

    @pytest.mark.parametrize("raw", ["abc", "", None, 42, 3.5])
    def test_malformed_ids(self, raw):
        assert coerce_listing_id(raw) is None


class TestFindListing:
    @pytest.mark.asyncio
    async def test_listing_row_is_locked(self, mock_db):
        listing = MagicMock()
        mock_db.execute.return_value.scalar_one_or_none.return_value = listing
        service = BidService(mock_db)

        found = await service.find_listing(str(uuid4()))

        assert found is listing
        stmt = mock_db.execute.call_args.args[0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "FROM listings" in sql
        assert "FOR UPDATE" in sql

    @pytest.mark.asyncio
    async def test_missing_listing(self, mock_db):
        service = BidService(mock_db)

        assert await service.find_listing(uuid4()) is None

    @pytest.mark.asyncio
    async def test_malformed_id_skips_query(self, mock_db):
        service = BidService(mock_db)

        assert await service.find_listing("hej") is None
        mock_db.execute.assert_not_called()


class TestCreateBid:
    @pytest.mark.asyncio
    async def test_bid_is_added_committed_and_refreshed(self, mock_db):
        service = BidService(mock_db)
        listing_id, bidder_id = uuid4(), uuid4()

        bid = await service.create_bid(
            amount=Decimal("200"), listing_id=listing_id, bidder_id=bidder_id
        )

        assert isinstance(bid, Bid)
        assert bid.amount == Decimal("200")
        assert bid.listing_id == listing_id
        assert bid.bidder_id == bidder_id
        mock_db.add.assert_called_once_with(bid)
        mock_db.commit.assert_awaited_once()
        mock_db.refresh.assert_awaited_once_with(bid)

    @pytest.mark.asyncio
    async def test_failed_commit_rolls_back_and_raises(self, mock_db):
        mock_db.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))
        service = BidService(mock_db)

        with pytest.raises(OperationalError):
            await service.create_bid(amount=Decimal("1"), listing_id=uuid4(), bidder_id=uuid4())

        mock_db.rollback.assert_awaited_once()
        mock_db.refresh.assert_not_called()


class TestBidderHistory:
    @pytest.mark.asyncio
    async def test_history_orders_newest_first(self, mock_db):
        older, newer = MagicMock(), MagicMock()
        mock_db.execute.return_value.scalars.return_value.all.return_value = [newer, older]
        service = BidService(mock_db)

        history = await service.get_bidder_history(uuid4())

        assert history == [newer, older]
        sql = str(mock_db.execute.call_args.args[0].compile(dialect=postgresql.dialect()))
        assert "ORDER BY bids.created_at DESC" in sql
