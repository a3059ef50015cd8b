import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment-specific .env file BEFORE any app imports
env = os.getenv("ENV", "local")
dotenv_file = f".env.{env}"
load_dotenv(dotenv_file)

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.db import get_db
from app.middleware import PerformanceMiddleware, RequestIdMiddleware
from app.utils import (
    logger,
    configure_sentry,
    internal_error,
    is_debug,
    API_PREFIX,
)
from app.utils.sentry_utils import capture_exception
from app.routers import (
    auth_router,
    notes_router,
    categories_router,
)
from app.services.guest_pool import guest_pool_service
from app.services.scheduler import scheduler_service

# Initialize Sentry for error tracking (only in non-debug environments)
sentry_enabled = configure_sentry()
if sentry_enabled:
    logger.info("Sentry error tracking initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    logger.info("Starting background scheduler...")
    await scheduler_service.start()

    yield

    # Shutdown
    logger.info("Stopping background scheduler...")
    await scheduler_service.stop()
    await guest_pool_service.wait_for_background_tasks()


app = FastAPI(
    title="Notes Backend",
    description="Notes, checklists and labels with instant guest accounts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Performance monitoring middleware
app.add_middleware(PerformanceMiddleware)
# Added last so it wraps everything and the request id is set for all logs
app.add_middleware(RequestIdMiddleware)

# Register routers
app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(notes_router, prefix=API_PREFIX)
app.include_router(categories_router, prefix=API_PREFIX)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: "
        f"{exc.__class__.__name__}: {exc}",
        exc_info=True,
    )

    capture_exception(exc)

    return internal_error()


@app.get("/")
async def root():
    return {"message": "Welcome to Notes Backend API", "version": "0.1.0"}


@app.get("/healthz")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check endpoint."""
    try:
        await db.execute(text("SELECT 1"))
        db_status = "connected"
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "disconnected"

    return {
        "status": "healthy",
        "database": db_status,
        "scheduler": "running" if scheduler_service.running else "stopped",
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting Notes Backend (env={env}, debug={is_debug()})")
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=is_debug())
