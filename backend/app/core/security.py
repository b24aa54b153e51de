# app/core/security.py
"""
Security module for API key authentication.
Handles extraction of the caller's API key from the Authorization header and
comparison against the configured shared secret.
"""
import logging
import secrets

logger = logging.getLogger("uvicorn.error")

BEARER_PREFIX = "Bearer "

def extract_api_key(authorization: str | None) -> str:
    """
    Extract the API key from an Authorization header value.

    Both "Bearer <key>" and the bare "<key>" are accepted. The prefix is only
    stripped when present; anything else is taken verbatim as the key.

    Args:
        authorization: Raw Authorization header value (may be None)

    Returns:
        The provided key, or "" when no header was sent
    """
    if not authorization:
        return ""
    if authorization.startswith(BEARER_PREFIX):
        return authorization[len(BEARER_PREFIX):]
    return authorization

def verify_api_key(authorization: str | None, configured_key: str | None) -> bool:
    """
    Decide whether a caller may use the verification endpoint.

    Args:
        authorization: Raw Authorization header value from the request
        configured_key: Shared secret from settings (None/"" when not configured)

    Returns:
        True if the provided key matches the configured secret, False otherwise

    Note:
        An unset secret rejects every request. That case is logged as a
        configuration fault; callers only ever see the generic 401.
    """
    if not configured_key:
        logger.error("[security] OPENAPI_KEY not configured -> rejecting request")
        return False

    provided = extract_api_key(authorization)
    if not provided:
        logger.info("[security] rejected request without API key")
        return False

    if not secrets.compare_digest(provided.encode("utf-8"), configured_key.encode("utf-8")):
        logger.info("[security] rejected request with invalid API key")
        return False
    return True
