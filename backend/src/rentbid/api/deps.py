"""API dependencies for authentication and service access."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from rentbid.core.config import settings
from rentbid.core.database import get_db
from rentbid.core.redis import get_redis
from rentbid.core.security import decode_access_token
from rentbid.services.admission import BidAdmissionEngine, Bidder
from rentbid.services.bid_service import BidService
from rentbid.services.redis_service import RedisService
from rentbid.services.user_service import UserService

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is an anonymous bidder, not a 403
security = HTTPBearer(auto_error=False)


async def get_redis_service() -> RedisService:
    """Get RedisService instance with shared Redis connection pool."""
    redis = await get_redis()
    return RedisService(redis)


async def get_current_bidder(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
    redis_service: Annotated[RedisService, Depends(get_redis_service)],
) -> Bidder | None:
    """Resolve the bearer token to a bidder, or None when the caller is anonymous.

    Missing, invalid or expired tokens and tokens naming an unknown or
    inactive user all resolve to None. Active users are cached in Redis; if
    Redis is unavailable the database is queried directly.

    Args:
        credentials: Optional HTTP Bearer token
        db: Database session
        redis_service: User cache

    Returns:
        Bidder or None
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        return None

    user_id = payload.get("sub")
    if user_id is None:
        return None

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        return None

    try:
        cached_user = await redis_service.get_cached_user(user_id)
    except RedisError as e:
        logger.warning(f"User cache unavailable, falling back to database: {e}")
        cached_user = None

    if cached_user:
        if cached_user.get("status") != "active":
            return None
        return Bidder(user_id=user_uuid, username=cached_user.get("username"))

    user_service = UserService(db)
    user = await user_service.get_by_id(user_uuid)
    if user is None or user.status != "active":
        return None

    try:
        await redis_service.cache_user(
            user_id,
            {"username": user.username, "email": user.email, "status": user.status},
            ttl=settings.USER_CACHE_TTL,
        )
    except RedisError as e:
        logger.warning(f"Failed to cache user {user_id}: {e}")

    return Bidder(user_id=user.user_id, username=user.username)


async def get_bid_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> BidService:
    """Get BidService instance bound to the request's session."""
    return BidService(db)


async def get_admission_engine(
    bid_service: Annotated[BidService, Depends(get_bid_service)],
) -> BidAdmissionEngine:
    """Get an admission engine whose collaborators share one session."""
    return BidAdmissionEngine(listings=bid_service, bids=bid_service)


# Type aliases for cleaner dependency injection
CurrentBidder = Annotated[Bidder | None, Depends(get_current_bidder)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
BidServiceDep = Annotated[BidService, Depends(get_bid_service)]
AdmissionEngineDep = Annotated[BidAdmissionEngine, Depends(get_admission_engine)]
