# app/schemas/verify_card.py
"""
Pydantic schemas for the card verification endpoint.
Defines the request body and the minimal disclosure payload returned to callers.
"""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class VerifyCardIn(BaseModel):
    """
    Request body for POST /verify-card.
    Documentation only: the body is parsed by hand so that malformed input
    maps to the endpoint's own 400 messages instead of a 422.
    """
    cardKey: str  # Card key as received by the buyer

class VerificationResult(BaseModel):
    """
    Verification answer.

    A negative result carries only `valid`; the other fields are set only
    when an eligible order matched, so nothing about unmatched or ineligible
    orders is disclosed.
    """
    valid: bool
    orderId: Optional[str] = None
    productName: Optional[str] = None
    soldAt: Optional[dt.datetime] = None  # paid_at, falling back to delivered_at

    def to_payload(self) -> dict:
        # exclude_unset keeps {"valid": false} minimal while a match always carries soldAt
        return self.model_dump(mode="json", exclude_unset=True)

class ErrorOut(BaseModel):
    """Error body shared by every non-200 response."""
    error: str
