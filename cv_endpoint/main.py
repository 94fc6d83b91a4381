"""
Main FastAPI application for the CV endpoint.
Handles CORS, request logging middleware, lifespan events, and router registration.
"""
import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cv_endpoint.config import settings
from cv_endpoint.database import AsyncSessionLocal, close_db, init_db
from cv_endpoint.routers import api, dashboard, health, page_builder
from cv_endpoint.services.document_store import DocumentStore
from cv_endpoint.services.exporter import ContentExporter
from cv_endpoint.services.page_config import PageConfigRepository
from cv_endpoint.services.profile_repository import ProfileRepository
from cv_endpoint.services.sections import SectionRegistry

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Startup helpers
# ---------------------------------------------------------------------------

async def prime_export_files(delay: float, exporter: Optional[ContentExporter] = None) -> None:
    """
    Write both export files once, shortly after startup, so the site
    generator has data even before the first edit.  Never raises.
    """
    await asyncio.sleep(delay)
    exporter = exporter or ContentExporter()
    try:
        async with AsyncSessionLocal() as session:
            store = DocumentStore(session)
            profile = await ProfileRepository(store, exporter).get_or_default()
            page_config = await PageConfigRepository(store, exporter).get_or_default()
        await exporter.write_profile(profile)
        logger.info("[CV] Initial data file written")
        await exporter.write_page_config(page_config)
        logger.info("[CV Page] Initial config file written")
    except Exception as exc:
        logger.warning("Deferred export failed: %s", exc)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("Starting CV endpoint …")

    await init_db()
    logger.info("✓ Database connection OK")

    export_task = asyncio.create_task(prime_export_files(settings.INITIAL_EXPORT_DELAY_SECONDS))
    logger.info(
        "✓ Initial export scheduled in %.1fs → %s",
        settings.INITIAL_EXPORT_DELAY_SECONDS,
        ContentExporter().export_dir,
    )

    yield  # ← server is running

    logger.info("Shutting down CV endpoint …")
    if not export_task.done():
        export_task.cancel()
    await close_db()
    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

def create_app() -> FastAPI:
    """Composition root: builds the app and owns the section registry."""
    app = FastAPI(
        title="CV Endpoint API",
        description=(
            "Edit a single CV (experience, projects, skills, education, "
            "languages, interests) and the layout of the CV page.\n\n"
            "Both documents are exported as JSON for the static site generator."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    registry = SectionRegistry(settings.MOUNT_PATH)
    registry.register_widgets(settings.CV_WIDGETS)
    app.state.section_registry = registry

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """
        Log every request with method, path, status code, and elapsed time.
        Attaches an ``X-Process-Time`` header (milliseconds) to every response.
        """
        t0 = time.monotonic()
        response = await call_next(request)
        elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

        if request.url.path not in ("/api/health/", "/"):
            logger.info(
                "%s %s → %d  (%.2f ms)",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )

        response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
        return response

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Return a structured JSON error for any unhandled exception."""
        logger.error(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "error": str(exc),
                "path": str(request.url.path),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )

    mount = settings.MOUNT_PATH.rstrip("/")
    app.include_router(health.router,       prefix="/api/health",   tags=["Health"])
    app.include_router(api.router,          prefix=mount,           tags=["Public API"])
    app.include_router(page_builder.router, prefix=f"{mount}/page", tags=["Page Builder"])
    app.include_router(dashboard.router,    prefix=mount,           tags=["CV Editor"])

    @app.get("/", tags=["Root"], include_in_schema=False)
    async def root():
        """API root — returns basic service info."""
        return {
            "name": "CV Endpoint API",
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/api/health",
            "endpoints": {
                "editor": f"{mount}/",
                "data": f"{mount}/data.json",
                "page": f"{mount}/page.json",
                "sections": f"{mount}/sections.json",
                "builder": f"{mount}/page",
            },
        }

    return app


app = create_app()


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cv_endpoint.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
