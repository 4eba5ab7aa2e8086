"""
==============================================================================
Furniture Visualizer - Application Entry Point
==============================================================================

FastAPI application with:
- Barcode catalog lookup and admin record assignment
- Single-admin Auth Gate with progressive lockout
- User preferences and scan history
- Material swap descriptions

Usage:
------
    # Development
    uvicorn furniture_visualizer.main:app --reload

    # Production
    uvicorn furniture_visualizer.main:app --host 0.0.0.0 --port 8000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from furniture_visualizer.config import get_settings
from furniture_visualizer.core.exceptions import register_exception_handlers
from furniture_visualizer.db import get_database_manager, init_db
from furniture_visualizer.api.router import api_router
from furniture_visualizer.catalog import BarcodeCatalog
from furniture_visualizer.services.storage_service import StorageService
from furniture_visualizer.storage import KeyValueStore


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Handles application lifecycle including:
    - Startup and shutdown events
    - Middleware configuration
    - Router registration
    - Exception handler setup

    The catalog and the optional text generator are owned here and
    published on app.state for the request dependencies.
    """

    def __init__(self):
        """Initialize the application."""
        self._settings = get_settings()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="Barcode-driven furniture and material visualizer",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        app.state.catalog = None
        app.state.text_generator = None

        # Configure middleware
        self._configure_middleware(app)

        # Register exception handlers
        register_exception_handlers(app)

        # Register routers
        self._register_routers(app)

        # Register root endpoint
        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        # Startup
        self._startup(app)
        yield
        # Shutdown
        self._shutdown()

    def _startup(self, app: FastAPI) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"Starting {self._settings.app_name}")
        logger.info("=" * 60)

        # Initialize storage
        init_db()

        # Build the catalog and re-apply saved custom records
        app.state.catalog = self._load_catalog()

        logger.info("=" * 60)
        logger.info(f"{self._settings.app_name} ready")
        logger.info(f"Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(f"API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("Shutting down...")
        get_database_manager().dispose()
        logger.info("Shutdown complete")

    def _load_catalog(self) -> BarcodeCatalog:
        """Build the catalog from the seed and the persisted custom records."""
        seed_path = self._settings.catalog_seed_path
        if seed_path is not None and seed_path.exists():
            catalog = BarcodeCatalog.from_file(seed_path)
        else:
            if seed_path is not None:
                logger.warning(f"Catalog seed file not found: {seed_path}, using built-in records")
            catalog = BarcodeCatalog()

        with get_database_manager().session_scope() as session:
            custom = StorageService(KeyValueStore(session)).load_custom_barcodes()

        if custom:
            catalog.load_custom(custom)

        logger.info(f"Catalog ready with {len(catalog)} records")
        return catalog

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_routers(self, app: FastAPI) -> None:
        """Register API routers."""
        app.include_router(api_router)

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/", include_in_schema=False)
        async def root():
            """Redirect to the interactive API docs."""
            return RedirectResponse(url="/docs")

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

# Create application instance
application = Application()
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "furniture_visualizer.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
