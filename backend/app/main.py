# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.core.db import init_db, close_db

from app.api.v1.routers import verify_card

logger = logging.getLogger("uvicorn.error")

def _check_verify_api_key() -> None:
    """
    The endpoint stays up without a secret but answers every request with 401.
    Make that visible at startup rather than at the first rejected call.
    """
    if not settings.verify_api_key:
        logger.error("[startup] OPENAPI_KEY not configured -> /api/verify-card will reject all requests")
    else:
        logger.info("[startup] verify-card API key configured")

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def on_startup():
    _check_verify_api_key()
    await init_db()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(verify_card.router, prefix="/api")

@app.get("/healthz")
def healthz():
    return {"ok": True}
