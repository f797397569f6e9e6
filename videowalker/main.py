import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from videowalker.core.config import settings
from videowalker.core.errors import AlreadyWon, ContestError, StorageConflict
from videowalker.core.logging_config import setup_logging
from videowalker.db.init_db import create_tables, ensure_admin, ensure_sample_campaign
from videowalker.db.session import SessionLocal, engine

from videowalker.routers.api_auth import router as api_auth_router
from videowalker.routers.api_campaigns import router as api_campaigns_router
from videowalker.routers.api_stats import router as api_stats_router
from videowalker.routers.api_winners import router as api_winners_router

setup_logging()
logger = logging.getLogger(__name__)


def _parse_cors_origins(value) -> list[str]:
    """
    Accepts:
      - "*" (open to everyone, but without credentials)
      - comma separated list: "https://site.com,http://localhost:5173"
      - empty -> local defaults
    """
    v = (value or "").strip()
    if not v:
        return [
            "http://localhost",
            "http://localhost:5173",
            "http://127.0.0.1",
            "http://127.0.0.1:5173",
        ]
    if v == "*":
        return ["*"]
    return [x.strip() for x in v.split(",") if x.strip()]


cors_origins = _parse_cors_origins(settings.CORS_ORIGINS)

app = FastAPI(title=settings.APP_NAME)

# =========================
# CORS
# =========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=cors_origins != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================
# Errors
# =========================
@app.exception_handler(ContestError)
async def contest_error_handler(request: Request, exc: ContestError):
    if isinstance(exc, StorageConflict):
        # losing the race is, for the user, the same as arriving late
        exc = AlreadyWon()
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# =========================
# Routers
# =========================
app.include_router(api_auth_router)
app.include_router(api_campaigns_router)
app.include_router(api_winners_router)
app.include_router(api_stats_router)


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.APP_NAME, "env": settings.ENV}


@app.on_event("startup")
def on_startup():
    if settings.AUTO_CREATE_TABLES:
        create_tables(engine)

    db = SessionLocal()
    try:
        ensure_admin(db)
        if settings.SEED_SAMPLE_CAMPAIGN:
            ensure_sample_campaign(db)
    finally:
        db.close()

    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
