"""
Application FastAPI MoveRings : seances, resumes d'activite quotidiens, profil.
"""
import logging
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from sqlmodel import Session

from app.api.routers import limiter, router
from app.core.database import create_db_and_tables, engine
from app.core.logging_config import configure_logging
from app.core.settings import get_settings
from app.domain.services.workout_service import workout_type_service

API_VERSION = "1.0.0"

settings = get_settings()
configure_logging(settings)
logger = logging.getLogger(__name__)

# Sentry actif uniquement si un DSN est fourni
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENVIRONMENT,
        traces_sample_rate=0.2 if settings.ENVIRONMENT == "production" else 1.0,
        send_default_pii=False,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tables et catalogue des types de seance au demarrage."""
    logger.info(
        f"🚀 MoveRings API v{API_VERSION} ({settings.ENVIRONMENT}), "
        f"journees d'activite en {settings.ACTIVITY_TIMEZONE}"
    )
    create_db_and_tables()
    with Session(engine) as session:
        created = workout_type_service.ensure_defaults(session)
    logger.info(f"✅ Base prete ({created} types de seance ajoutes)")
    yield
    logger.info("🛑 Arret de MoveRings API")


app = FastAPI(
    title="MoveRings API",
    description="Suivi des seances et des anneaux d'activite quotidiens (move, exercise, stand)",
    version=API_VERSION,
    docs_url=None if settings.ENVIRONMENT == "production" else "/docs",
    redoc_url=None,
    lifespan=lifespan,
)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api/v1")


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 JSON avec les headers Retry-After / X-RateLimit-*."""
    response = JSONResponse(
        status_code=429,
        content={"detail": "Too many requests", "limit": str(exc.detail)},
    )
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Erreur non geree sur {request.method} {request.url.path}: {exc!r}", exc_info=True)
    content = {"detail": "Internal server error"}
    if settings.DEBUG:
        content["error"] = f"{type(exc).__name__}: {exc}"
    return JSONResponse(status_code=500, content=content)


@app.get("/health")
@limiter.exempt
async def health_check():
    return {"status": "healthy", "version": API_VERSION, "environment": settings.ENVIRONMENT}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
