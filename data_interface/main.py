"""Data Interface Mock API - FastAPI Application Factory."""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from data_interface.api import api_router
from data_interface.core import register_exception_handlers, settings, setup_logging
from data_interface.core.logging import get_logger
from data_interface.middleware import AuthGateMiddleware
from data_interface.services.token_blacklist import get_token_blacklist
from data_interface.services.user_store import DEMO_PASSWORD, DEMO_USERNAME, UserStore

logger = get_logger("main")


def task_done_callback(task: asyncio.Task[None]) -> None:
    """Log unhandled exceptions from background tasks."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error(f"Background task {task.get_name()} failed: {exc}")


async def _token_blacklist_sweep_loop(interval: int) -> None:
    """Periodically remove blacklist entries whose tokens have expired anyway."""
    blacklist = get_token_blacklist()
    while True:
        await asyncio.sleep(interval)
        try:
            removed = blacklist.sweep_expired()
            if removed > 0:
                logger.info(f"Swept {removed} expired token blacklist entries")
        except Exception:
            logger.exception("Error sweeping token blacklist")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    setup_logging(
        level=settings.log_level,
        format_type="dev" if settings.debug else "structured",
    )
    logger.info(f"Starting {settings.app_name} v{settings.app_version} ({settings.environment})")

    for warning in settings.check_security_configuration():
        logger.warning(f"SECURITY: {warning}")

    # Seed the credential store before the first request
    UserStore.get_instance()
    logger.info(f"Demo credentials: username={DEMO_USERNAME} password={DEMO_PASSWORD}")

    sweep_task: asyncio.Task[None] | None = None
    if settings.token_blacklist_sweep_interval > 0:
        sweep_task = asyncio.create_task(
            _token_blacklist_sweep_loop(settings.token_blacklist_sweep_interval),
            name="token-blacklist-sweep",
        )
        sweep_task.add_done_callback(task_done_callback)

    yield

    logger.info("Shutting down...")
    if sweep_task:
        sweep_task.cancel()
        try:
            await sweep_task
        except asyncio.CancelledError:
            pass


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Mock data API with JWT authentication and logout revocation",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
    )

    register_exception_handlers(app)

    app.add_middleware(AuthGateMiddleware)

    # CORS middleware - MUST be outermost (added last in Starlette LIFO order)
    # so that CORS headers are present on ALL responses, including 401 from AuthGate.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept"],
    )

    app.include_router(api_router)

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint listing the available endpoints."""
        return {
            "message": "Welcome to Data Interface Mock API",
            "version": settings.app_version,
            "endpoints": {
                "auth": {
                    "login": "POST /api/auth/login",
                    "register": "POST /api/auth/register",
                    "logout": "POST /api/auth/logout (requires JWT)",
                },
                "protected": {
                    "profile": "GET /api/protected/profile (requires JWT)",
                    "dashboard": "GET /api/protected/dashboard (requires JWT)",
                    "employeePerformance": "GET /api/protected/employee-performance (requires JWT)",
                },
                "public": {
                    "products": "GET /api/public/products",
                    "health": "GET /api/public/health",
                    "employeePerformance": "GET /api/public/employee-performance",
                },
            },
        }

    return app


# Application instance
app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(
        "data_interface.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
