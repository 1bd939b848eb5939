from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from prompt_history import __version__
from prompt_history.core.config import settings
from prompt_history.core.errors import register_exception_handlers
from prompt_history.core.logging import configure_logging
from prompt_history.core.sentry import init_sentry

import prompt_history.models  # noqa: F401 (register all models at startup)

from prompt_history.modules.documents.router import router as documents_router
from prompt_history.modules.text_diff.router import router as text_diff_router
from prompt_history.modules.versions.router import router as versions_router

configure_logging()

# ── Sentry: initialise BEFORE the FastAPI app is created ──────────────────────
init_sentry(settings.SENTRY_DSN, settings.SENTRY_ENVIRONMENT, settings.APP_VERSION)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    logger.info("Starting prompt history API", env=settings.APP_ENV, max_versions=settings.MAX_VERSIONS)
    if settings.APP_ENV != "production":
        from prompt_history.core.database import create_tables

        await create_tables()
    yield
    logger.info("Shutting down prompt history API")


_is_prod = settings.APP_ENV == "production"

app = FastAPI(
    title="Prompt History API",
    description="Line-level version control for prompt documents.",
    version=__version__,
    docs_url=None if _is_prod else "/docs",
    redoc_url=None if _is_prod else "/redoc",
    openapi_url=None if _is_prod else "/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-ID"],
)

register_exception_handlers(app)


@app.middleware("http")
async def add_version_header(request: Request, call_next) -> Response:
    response = await call_next(request)
    response.headers["X-API-Version"] = "v1"
    return response


# ── Health check (root-level, not under /v1) ─────────────────────────────────


@app.get("/health")
async def health_check() -> dict:
    """Probe the database."""
    checks: dict[str, dict] = {}

    try:
        from sqlalchemy import text
        from prompt_history.core.database import async_session_factory
        async with async_session_factory() as db:
            await db.execute(text("SELECT 1"))
        checks["database"] = {"status": "healthy"}
    except Exception as exc:
        checks["database"] = {"status": "unhealthy", "error": str(exc)}

    overall = (
        "healthy"
        if all(c["status"] == "healthy" for c in checks.values())
        else "degraded"
    )
    return {"status": overall, "service": "prompt-history", "checks": checks}


# ── /v1 versioned router ──────────────────────────────────────────────────────

api_v1 = APIRouter(prefix="/v1")

api_v1.include_router(text_diff_router)
api_v1.include_router(documents_router)
api_v1.include_router(versions_router)

app.include_router(api_v1)
