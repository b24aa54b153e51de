"""
Services Module

- Order lookup: restricted read access to the order store
- Card verification: authentication, validation and result projection
"""

from .order_lookup import (
    SoldOrder,
    find_sold_order,
)
from .card_verification import (
    AuthorizationFailure,
    CardVerificationError,
    CardVerifier,
    ClientInputFailure,
    normalize_card_key,
    project_result,
)

__all__ = [
    # Order lookup
    "SoldOrder",
    "find_sold_order",
    # Card verification
    "AuthorizationFailure",
    "CardVerificationError",
    "CardVerifier",
    "ClientInputFailure",
    "normalize_card_key",
    "project_result",
]
