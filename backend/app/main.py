from contextlib import asynccontextmanager

from app.core.logging import configure_logging, get_logger
from app.core.middleware import RequestLoggingMiddleware
from app.core.rate_limit import limiter
from app.core.settings import settings
from app.db import Base, SessionLocal, engine, get_db, get_db_path
from app.routers import auth, content, me, social, watch_logs
from app.services.watch_log_service import seed_platforms
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import text

from app import models  # noqa: F401 - ensure models are imported for metadata

# Configure structured logging at module load
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    """
    Create tables and seed the platform catalogue on startup.
    """
    logger.info("application_starting", environment=settings.environment)
    db_path = get_db_path()
    if db_path:
        logger.info("using_sqlite_database", path=db_path)
    else:
        logger.info("using_database", url=engine.url.render_as_string(hide_password=True))
    Base.metadata.create_all(bind=engine)

    with SessionLocal() as db:
        seed_platforms(db)
    logger.info("database_ready")

    yield

    logger.info("application_shutdown")


app = FastAPI(title="CineLog Backend", version="0.1.0", lifespan=lifespan)

# ============================================================================
# CORS Middleware Configuration
# ============================================================================
ALLOWED_ORIGINS = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
ALLOWED_METHODS = ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "Accept", "Origin"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=ALLOWED_METHODS,
    allow_headers=ALLOWED_HEADERS,
)

# ============================================================================
# Rate Limiting Middleware (SlowAPI)
# ============================================================================
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# ============================================================================
# Request Logging Middleware (must be added after other middleware)
# ============================================================================
app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
def health_check():
    """Basic health check endpoint."""
    return {"status": "ok", "service": "cinelog-backend"}


@app.get("/health/ready")
def readiness_check(db=Depends(get_db)):
    """
    Readiness check - verifies database connectivity.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ready", "database": "connected"}
    except Exception as e:
        logger.warning("readiness_check_failed", error=str(e))
        return {"status": "not_ready", "database": "disconnected", "error": str(e)}


app.include_router(auth.router)
app.include_router(social.router)
app.include_router(watch_logs.router)
app.include_router(content.router)
app.include_router(me.router)
