# app/api/v1/routers/verify_card.py
"""
Card verification API Router

POST /verify-card  - card key in the JSON body (primary)
GET  /verify-card  - card key in the query string

Both adapters authenticate first, then hand over to
CardVerifier.handle_verification and render through the same function, so
equal outcomes produce identical bodies.
"""
import logging
from typing import Any, Awaitable

from fastapi import APIRouter, Depends, Header, Query, Request
from fastapi.responses import JSONResponse

from app.api.v1.deps import get_card_verifier
from app.schemas.verify_card import ErrorOut, VerificationResult, VerifyCardIn
from app.services.card_verification import (
    MSG_INTERNAL_ERROR,
    MSG_INVALID_CARD_KEY,
    MSG_MISSING_QUERY_PARAM,
    CardVerificationError,
    CardVerifier,
    ClientInputFailure,
)

logger = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["verify-card"])

_ERROR_RESPONSES = {
    400: {"model": ErrorOut},
    401: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _respond(pending: Awaitable[VerificationResult]) -> JSONResponse:
    """Await a verification and map its outcome to the wire format."""
    try:
        result = await pending
    except CardVerificationError as e:
        return _error(e.status_code, e.message)
    except Exception:
        # Store/driver details stay in the server log
        logger.exception("[verify-card] Error while verifying card key")
        return _error(500, MSG_INTERNAL_ERROR)
    return JSONResponse(content=result.to_payload())


async def _read_card_key(request: Request) -> Any:
    """
    Pull `cardKey` out of a JSON object body.

    Raises:
        ClientInputFailure: if the body is not a JSON object
    """
    try:
        body = await request.json()
    except (ValueError, RecursionError):
        # JSONDecodeError and UnicodeDecodeError are ValueErrors; deep nesting raises RecursionError
        raise ClientInputFailure(MSG_INVALID_CARD_KEY)
    if not isinstance(body, dict):
        raise ClientInputFailure(MSG_INVALID_CARD_KEY)
    return body.get("cardKey")


@router.post(
    "/verify-card",
    response_model=VerificationResult,
    response_model_exclude_unset=True,
    responses=_ERROR_RESPONSES,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": VerifyCardIn.model_json_schema()}},
        }
    },
)
async def verify_card(
    request: Request,
    authorization: str | None = Header(default=None),
    verifier: CardVerifier = Depends(get_card_verifier),
):
    """
    Verify that a card key belongs to a paid or delivered order.

    Requires `Authorization: Bearer <key>` (or the bare key).

    Returns:
        - {"valid": true, "orderId", "productName", "soldAt"} if sold
        - {"valid": false} otherwise (HTTP 200, not 404)

    Errors:
        - 401: invalid or missing API key (checked before the body is read)
        - 400: missing/non-string cardKey, or blank after trimming
        - 500: order store failure
    """
    async def _verify() -> VerificationResult:
        # Gate before touching the body; handle_verification repeats it as the shared check
        verifier.authenticate(authorization)
        card_key = await _read_card_key(request)
        return await verifier.handle_verification(card_key, authorization)

    return await _respond(_verify())


@router.get(
    "/verify-card",
    response_model=VerificationResult,
    response_model_exclude_unset=True,
    responses=_ERROR_RESPONSES,
)
async def verify_card_by_query(
    cardKey: str | None = Query(default=None),
    authorization: str | None = Header(default=None),
    verifier: CardVerifier = Depends(get_card_verifier),
):
    """
    Query-string form of POST /verify-card, handy for manual checks.

    Same outcomes as the POST form, plus 400 "Missing cardKey query
    parameter" when the parameter is absent or empty.
    """
    async def _verify() -> VerificationResult:
        verifier.authenticate(authorization)
        if not cardKey:
            raise ClientInputFailure(MSG_MISSING_QUERY_PARAM)
        # Forward the caller's header as-is; an absent header stays unauthenticated
        return await verifier.handle_verification(cardKey, authorization or "")

    return await _respond(_verify())
