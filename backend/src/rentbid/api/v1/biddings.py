"""Bidding API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from rentbid.api.deps import AdmissionEngineDep, BidServiceDep, CurrentBidder
from rentbid.middleware.metrics import record_admission_outcome
from rentbid.schemas.bid import (
    BiddingParams,
    BidHistoryResponse,
    BidResponse,
    ErrorsResponse,
    MessageResponse,
)
from rentbid.services.admission import (
    UNAUTHENTICATED_MESSAGE,
    BidCandidate,
    RejectionKind,
)

logger = logging.getLogger(__name__)

router = APIRouter()


async def _read_json(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


def _unauthenticated_response() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=ErrorsResponse(errors=[UNAUTHENTICATED_MESSAGE]).model_dump(),
    )


@router.post(
    "",
    response_model=MessageResponse,
    responses={
        401: {"description": "Unauthenticated or bidding on own listing"},
        404: {"description": "Listing not found"},
        422: {"description": "Invalid amount or listing already rented"},
    },
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": {
                        "type": "object",
                        "properties": {
                            "bidding": {
                                "type": "object",
                                "properties": {
                                    "bid": {"type": ["string", "number"]},
                                    "listing_id": {"type": "string", "format": "uuid"},
                                },
                            }
                        },
                    }
                }
            }
        }
    },
)
async def create_bidding(
    current_bidder: CurrentBidder,
    engine: AdmissionEngineDep,
    request: Request,
):
    """Submit a bid on a listing.

    Every outcome is reported with a ``message`` body, except a missing or
    invalid login, which is reported as ``{"errors": [...]}``. The body is
    read raw so that a malformed payload is still judged by the engine,
    authentication first, rather than by request validation.
    """
    params = BiddingParams.from_body(await _read_json(request))
    candidate = BidCandidate(amount=params.bid, listing_id=params.listing_id)

    try:
        outcome = await engine.admit(candidate, current_bidder)
    except Exception:
        logger.exception(f"Bid admission failed for listing {params.listing_id}")
        record_admission_outcome("error")
        raise

    if outcome.accepted:
        record_admission_outcome("accepted")
    else:
        record_admission_outcome(outcome.kind.value)
        if outcome.kind is RejectionKind.UNAUTHENTICATED:
            return _unauthenticated_response()

    return JSONResponse(
        status_code=int(outcome.status_code),
        content=MessageResponse(message=outcome.message).model_dump(),
    )


@router.get("", response_model=BidHistoryResponse)
async def get_bidding_history(
    current_bidder: CurrentBidder,
    bid_service: BidServiceDep,
):
    """Get the current user's bids, newest first."""
    if current_bidder is None:
        return _unauthenticated_response()

    bids = await bid_service.get_bidder_history(current_bidder.user_id)
    return BidHistoryResponse(
        bids=[BidResponse.model_validate(bid) for bid in bids],
        total=len(bids),
    )
