"""taxsort API: main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from taxsort.config import settings
from taxsort.core.database import async_session_factory, engine
from taxsort.core.middleware import RequestLoggingMiddleware
from taxsort.models import Base
from taxsort.services.rule_cache import RuleCache
from taxsort.services.rule_service import RuleService
from taxsort.services.rule_store import SqlRuleStore

logger = structlog.get_logger()


async def seed_global_rules(cache: RuleCache) -> None:
    """Insert the built-in global rules that are not in the database yet."""
    try:
        async with async_session_factory() as session:
            await RuleService(SqlRuleStore(session), cache).seed_global_rules()
            await session.commit()
    except Exception as e:
        logger.error("global_rules_seed_failed", error=str(e))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting taxsort API", env=settings.app_env)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if settings.seed_global_rules:
        await seed_global_rules(app.state.rule_cache)
    yield
    logger.info("Shutting down taxsort API")
    await engine.dispose()


app = FastAPI(
    title="taxsort API",
    description="Tax category classification for bank transactions",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.state.rule_cache = RuleCache(ttl_seconds=settings.rule_cache_ttl_seconds)
# Latest AI batch run per user, polled for progress and cancellation.
app.state.batch_runs = {}

# ── Middleware ─────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health Check ──────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check():
    """Liveness probe."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/ready", tags=["system"])
async def readiness_check():
    """Readiness probe: checks DB connectivity."""
    checks = {"database": "unknown", "api": "ok"}
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
            checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"
        return {"status": "degraded", "checks": checks}

    return {"status": "ready", "checks": checks}


# ── API Routes ────────────────────────────────────
from taxsort.api.v1 import classification, classification_rules, global_rules  # noqa: E402

app.include_router(classification.router, prefix="/api/v1/classification", tags=["classification"])
app.include_router(classification_rules.router, prefix="/api/v1/classification-rules", tags=["classification-rules"])
app.include_router(global_rules.router, prefix="/api/v1/global-rules", tags=["global-rules"])
