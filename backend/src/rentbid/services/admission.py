"""Bid admission engine.

Decides whether a candidate bid on a listing is accepted. Checks run in a
fixed order and the first failure wins:

1. the bidder must be authenticated
2. the amount must be present, numeric and fit the stored column (errors are
   reported together)
3. the listing must exist
4. the bidder must not be the listing's landlord
5. the listing must not already have a tenant

Only an accepted candidate reaches the persistence collaborator, and it is
called exactly once.
"""

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from http import HTTPStatus
from typing import Any, Callable, Protocol
from uuid import UUID

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "You need to sign in or sign up before continuing."
BLANK_AMOUNT_MESSAGE = "Bid can't be blank"
NOT_A_NUMBER_MESSAGE = "Bid is not a number"
LISTING_NOT_FOUND_MESSAGE = "Listing not found"
SELF_BID_MESSAGE = "You could not bid on your own listing"
ALREADY_RENTED_MESSAGE = "This property is already rented."
ACCEPTED_MESSAGE = "Your bid was successfully sent"

# Bids are stored as Numeric(12, 2): whole cents, magnitude below 10^10.
AMOUNT_LIMIT = Decimal("10000000000")
CENTS = Decimal("0.01")
AMOUNT_TOO_LARGE_MESSAGE = f"Bid must be less than {AMOUNT_LIMIT}"
AMOUNT_TOO_SMALL_MESSAGE = f"Bid must be greater than -{AMOUNT_LIMIT}"

# Plain decimal literals only: no NaN/Infinity, no digit separators.
_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class RejectionKind(str, Enum):
    """Why a candidate bid was turned down."""

    UNAUTHENTICATED = "unauthenticated"
    INVALID = "invalid"
    LISTING_NOT_FOUND = "listing_not_found"
    SELF_BID = "self_bid"
    ALREADY_RENTED = "already_rented"


@dataclass(frozen=True)
class Bidder:
    """An authenticated user placing a bid."""

    user_id: UUID
    username: str | None = None


@dataclass(frozen=True)
class BidCandidate:
    """Raw bid input as submitted, before any validation."""

    amount: Any
    listing_id: Any


@dataclass(frozen=True)
class AmountValidation:
    """Result of validating a raw amount: the parsed value plus every error found."""

    value: Decimal | None
    errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        return " and ".join(self.errors)


@dataclass(frozen=True)
class Rejection:
    kind: RejectionKind
    message: str
    status_code: int

    accepted = False


@dataclass(frozen=True)
class Accepted:
    bid: Any
    message: str = ACCEPTED_MESSAGE
    status_code: int = HTTPStatus.OK

    accepted = True


Outcome = Accepted | Rejection


class ListingRecord(Protocol):
    listing_id: Any
    landlord_id: Any
    tenant_id: Any


class ListingFinder(Protocol):
    async def find_listing(self, listing_id: Any) -> ListingRecord | None: ...


class BidCreator(Protocol):
    async def create_bid(
        self, *, amount: Decimal, listing_id: Any, bidder_id: Any
    ) -> Any: ...


def is_blank(raw: Any) -> bool:
    """Return True for a missing value or a string with no visible characters."""
    if raw is None:
        return True
    if isinstance(raw, str):
        return not raw.strip()
    return False


def parse_number(raw: Any) -> Decimal | None:
    """Parse a raw amount into a finite Decimal, or None if it is not a number.

    Accepts ints, floats, Decimals and numeric strings. Booleans are not numbers.
    """
    if raw is None or isinstance(raw, bool):
        return None

    try:
        if isinstance(raw, (int, Decimal)):
            value = Decimal(raw)
        elif isinstance(raw, float):
            value = Decimal(str(raw))
        elif isinstance(raw, str):
            text = raw.strip()
            if not _NUMBER_PATTERN.fullmatch(text):
                return None
            value = Decimal(text)
        else:
            return None
    except InvalidOperation:
        return None

    return value if value.is_finite() else None


def _fit_to_column(value: Decimal) -> tuple[Decimal | None, str | None]:
    # Range is checked before quantize, which fails on huge exponents.
    if value >= AMOUNT_LIMIT:
        return None, AMOUNT_TOO_LARGE_MESSAGE
    if value <= -AMOUNT_LIMIT:
        return None, AMOUNT_TOO_SMALL_MESSAGE

    value = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    if value >= AMOUNT_LIMIT:
        return None, AMOUNT_TOO_LARGE_MESSAGE
    if value <= -AMOUNT_LIMIT:
        return None, AMOUNT_TOO_SMALL_MESSAGE
    return value, None


def validate_amount(raw: Any) -> AmountValidation:
    """Validate a raw bid amount, collecting every error rather than stopping at the first.

    Blank comes before not-a-number so the joined message reads
    "Bid can't be blank and Bid is not a number".
    Numbers are rounded half-up to whole cents; a magnitude that does not
    fit the stored column is reported as out of range.
    """
    errors: list[str] = []
    if is_blank(raw):
        errors.append(BLANK_AMOUNT_MESSAGE)

    value = parse_number(raw)
    if value is None:
        errors.append(NOT_A_NUMBER_MESSAGE)
    else:
        value, range_error = _fit_to_column(value)
        if range_error:
            errors.append(range_error)

    return AmountValidation(value=value, errors=tuple(errors))


def check_self_bid(bidder: Bidder, listing: ListingRecord) -> Rejection | None:
    if listing.landlord_id == bidder.user_id:
        return Rejection(
            kind=RejectionKind.SELF_BID,
            message=SELF_BID_MESSAGE,
            status_code=HTTPStatus.UNAUTHORIZED,
        )
    return None


def check_tenancy_lock(bidder: Bidder, listing: ListingRecord) -> Rejection | None:
    if listing.tenant_id is not None:
        return Rejection(
            kind=RejectionKind.ALREADY_RENTED,
            message=ALREADY_RENTED_MESSAGE,
            status_code=HTTPStatus.UNPROCESSABLE_ENTITY,
        )
    return None


ListingCheck = Callable[[Bidder, ListingRecord], Rejection | None]

# Evaluated in order once the listing is resolved.
LISTING_CHECKS: tuple[ListingCheck, ...] = (check_self_bid, check_tenancy_lock)


class BidAdmissionEngine:
    """Runs the admission pipeline against injected collaborators."""

    def __init__(
        self,
        listings: ListingFinder,
        bids: BidCreator,
        listing_checks: tuple[ListingCheck, ...] = LISTING_CHECKS,
    ):
        self.listings = listings
        self.bids = bids
        self.listing_checks = listing_checks

    async def admit(self, candidate: BidCandidate, bidder: Bidder | None) -> Outcome:
        """Decide whether ``candidate`` is accepted and persist it if so.

        Args:
            candidate: Raw amount and listing reference from the request
            bidder: Authenticated bidder, or None for an anonymous request

        Returns:
            Accepted with the persisted bid, or the first Rejection hit
        """
        if bidder is None:
            return self._reject(
                RejectionKind.UNAUTHENTICATED,
                UNAUTHENTICATED_MESSAGE,
                HTTPStatus.UNAUTHORIZED,
            )

        amount = validate_amount(candidate.amount)
        if not amount.is_valid:
            return self._reject(
                RejectionKind.INVALID,
                amount.message,
                HTTPStatus.UNPROCESSABLE_ENTITY,
            )

        listing = await self.listings.find_listing(candidate.listing_id)
        if listing is None:
            return self._reject(
                RejectionKind.LISTING_NOT_FOUND,
                LISTING_NOT_FOUND_MESSAGE,
                HTTPStatus.NOT_FOUND,
            )

        for check in self.listing_checks:
            rejection = check(bidder, listing)
            if rejection is not None:
                logger.info(
                    f"Bid by {bidder.user_id} on listing {listing.listing_id} "
                    f"rejected: {rejection.kind.value}"
                )
                return rejection

        bid = await self.bids.create_bid(
            amount=amount.value,
            listing_id=listing.listing_id,
            bidder_id=bidder.user_id,
        )
        logger.info(
            f"Bid of {amount.value} by {bidder.user_id} accepted on listing {listing.listing_id}"
        )
        return Accepted(bid=bid)

    def _reject(self, kind: RejectionKind, message: str, status_code: int) -> Rejection:
        logger.info(f"Bid rejected: {kind.value}")
        return Rejection(kind=kind, message=message, status_code=status_code)
