"""Pydantic schemas for request/response validation."""

from rentbid.schemas.bid import (
    BiddingParams,
    BidHistoryResponse,
    BidResponse,
    ErrorsResponse,
    MessageResponse,
)
from rentbid.schemas.user import TokenResponse, UserLogin, UserRegister, UserResponse

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserResponse",
    "TokenResponse",
    "BiddingParams",
    "MessageResponse",
    "ErrorsResponse",
    "BidResponse",
    "BidHistoryResponse",
]
