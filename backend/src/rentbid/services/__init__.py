"""Business logic services."""

from rentbid.services.admission import BidAdmissionEngine, Bidder, BidCandidate
from rentbid.services.bid_service import BidService
from rentbid.services.redis_service import RedisService
from rentbid.services.user_service import UserService

__all__ = [
    "BidAdmissionEngine",
    "Bidder",
    "BidCandidate",
    "BidService",
    "RedisService",
    "UserService",
]
