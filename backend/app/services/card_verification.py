"""
Card Verification Service

Answers "does this card key belong to a completed sale?" for external callers
(resellers, marketplaces) before they honor a warranty or support claim.

Flow for every request:
    authenticate -> normalize card key -> restricted lookup -> project result

The service holds no per-request state. Callers map the raised
CardVerificationError subclasses to HTTP responses; any other exception is an
internal failure.
"""
import logging
from typing import Any, Awaitable, Callable, Optional

from app.core.security import verify_api_key
from app.schemas.verify_card import VerificationResult
from app.services.order_lookup import SoldOrder, find_sold_order

logger = logging.getLogger("uvicorn.error")

MSG_UNAUTHORIZED = "Unauthorized: Invalid or missing API key"
MSG_INVALID_CARD_KEY = "Missing or invalid cardKey parameter"
MSG_EMPTY_CARD_KEY = "Card key cannot be empty"
MSG_MISSING_QUERY_PARAM = "Missing cardKey query parameter"
MSG_INTERNAL_ERROR = "Internal server error"

OrderLookup = Callable[[str], Awaitable[Optional[SoldOrder]]]


class CardVerificationError(Exception):
    """Base class for failures reported to the caller with a fixed message."""
    status_code: int = 500

    def __init__(self, message: str = MSG_INTERNAL_ERROR):
        super().__init__(message)
        self.message = message


class AuthorizationFailure(CardVerificationError):
    """Missing/mismatched API key, or no key configured (never distinguished)."""
    status_code = 401

    def __init__(self, message: str = MSG_UNAUTHORIZED):
        super().__init__(message)


class ClientInputFailure(CardVerificationError):
    """Missing, wrongly typed or blank card key."""
    status_code = 400


def mask_card_key(card_key: str) -> str:
    """Keep only the last 4 characters for logging."""
    if len(card_key) <= 4:
        return "****"
    return f"****{card_key[-4:]}"


def normalize_card_key(raw: Any) -> str:
    """
    Validate and trim a card key.

    Only surrounding whitespace is removed; the key is otherwise matched
    exactly as stored at sale time (no case folding).

    Raises:
        ClientInputFailure: if the key is absent, not a string, or blank
    """
    if raw is None or not isinstance(raw, str):
        raise ClientInputFailure(MSG_INVALID_CARD_KEY)
    card_key = raw.strip()
    if not card_key:
        raise ClientInputFailure(MSG_EMPTY_CARD_KEY)
    return card_key


def project_result(order: Optional[SoldOrder]) -> VerificationResult:
    """Turn a lookup outcome into the disclosure payload."""
    if order is None:
        return VerificationResult(valid=False)
    return VerificationResult(
        valid=True,
        orderId=order.order_id,
        productName=order.product_name,
        soldAt=order.paid_at or order.delivered_at,
    )


class CardVerifier:
    """
    Card key verification bound to one configured API key.

    Args:
        api_key: Shared secret callers must present; None/"" rejects everything
        lookup: Coroutine returning the eligible order for a card key
    """

    def __init__(self, api_key: Optional[str], lookup: OrderLookup = find_sold_order):
        self.api_key = api_key or None
        self.lookup = lookup

    @property
    def configured(self) -> bool:
        return self.api_key is not None

    def authenticate(self, credential: Optional[str]) -> None:
        """
        Raises:
            AuthorizationFailure: if the credential does not match the API key
        """
        if not verify_api_key(credential, self.api_key):
            raise AuthorizationFailure()

    async def handle_verification(self, card_key: Any, credential: Optional[str]) -> VerificationResult:
        """
        Verify a card key on behalf of an authenticated caller.

        Args:
            card_key: Raw card key from the request body or query string
            credential: Raw Authorization header value

        Returns:
            VerificationResult (valid=False is a normal outcome, not an error)

        Raises:
            AuthorizationFailure: bad or missing API key
            ClientInputFailure: missing/invalid/blank card key
            Exception: anything raised by the order store is propagated untouched
        """
        self.authenticate(credential)
        normalized = normalize_card_key(card_key)

        order = await self.lookup(normalized)
        result = project_result(order)
        logger.info(
            "[verify-card] key=%s valid=%s order=%s",
            mask_card_key(normalized), result.valid, result.orderId,
        )
        return result
