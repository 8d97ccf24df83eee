"""FastAPI application: main entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from resale_catalog.config import get_settings
from resale_catalog.core.exceptions import register_exception_handlers
from resale_catalog.core.logging import configure_logging
from resale_catalog.core.middleware import setup_middleware
from resale_catalog.infrastructure.database import Base, engine

# Import all models so SQLAlchemy knows about them
from resale_catalog.domain.models.category import Category  # noqa: F401
from resale_catalog.domain.models.export_history import ExportHistory  # noqa: F401
from resale_catalog.domain.models.folder import Folder  # noqa: F401
from resale_catalog.domain.models.product import Product  # noqa: F401
from resale_catalog.domain.models.user import User  # noqa: F401
from resale_catalog.domain.models.work_process import WorkProcess  # noqa: F401

from resale_catalog.interfaces.api.batch import router as batch_router
from resale_catalog.interfaces.api.categories import router as categories_router
from resale_catalog.interfaces.api.exports import router as exports_router
from resale_catalog.interfaces.api.folders import router as folders_router
from resale_catalog.interfaces.api.products import router as products_router
from resale_catalog.interfaces.api.users import router as users_router
from resale_catalog.interfaces.deps import get_vision_analyzer
from resale_catalog.vision.analyzer import VisionAnalyzer

settings = get_settings()

# Configure logging immediately
configure_logging()
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting Resale Catalog API", env=settings.ENVIRONMENT, vision_provider=settings.VISION_PROVIDER)

    # Create DB tables (no migrations yet)
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    yield

    logger.info("Resale Catalog API stopped")


app = FastAPI(
    title="Resale Catalog API",
    description="Batch photo upload, AI product analysis, review and spreadsheet export",
    version="1.0.0",
    lifespan=lifespan,
)

# Correlation ID and request logging
setup_middleware(app)

register_exception_handlers(app)

# Added last so it wraps everything else
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Export-Url"],
)

app.include_router(batch_router)
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(users_router)
app.include_router(folders_router)
app.include_router(exports_router)

# StaticFiles checks the directory when mounted
os.makedirs(settings.IMAGES_DIR, exist_ok=True)
os.makedirs(settings.EXPORT_DIR, exist_ok=True)
app.mount("/images", StaticFiles(directory=settings.IMAGES_DIR), name="images")
app.mount("/exports", StaticFiles(directory=settings.EXPORT_DIR), name="exports")


@app.get("/")
def root():
    return {
        "name": "Resale Catalog API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health(deep: bool = False, analyzer: VisionAnalyzer = Depends(get_vision_analyzer)):
    """Liveness; `?deep=true` also asks the vision model for a reply."""
    body = {"status": "healthy", "environment": settings.ENVIRONMENT}
    if deep:
        vision_ok = await analyzer.check_connection()
        body["vision"] = "connected" if vision_ok else "unavailable"
        if not vision_ok:
            body["status"] = "degraded"
    return body


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("resale_catalog.main:app", host=settings.HOST, port=settings.PORT)
