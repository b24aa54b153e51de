# app/api/v1/deps.py
from app.config import settings
from app.services.card_verification import CardVerifier

def get_card_verifier() -> CardVerifier:
    """
    FastAPI dependency providing the card verifier.

    The shared secret comes from `settings`, which is read once at process
    start. An unset secret still yields a verifier; it simply rejects every
    request with 401.

    Usage:
        @router.post("/verify-card")
        async def verify(verifier: CardVerifier = Depends(get_card_verifier)):
            ...

    Tests replace it through `app.dependency_overrides[get_card_verifier]`.
    """
    return CardVerifier(api_key=settings.verify_api_key)
