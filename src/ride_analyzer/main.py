"""FastAPI application for the Ride Analyzer."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import get_settings
from .api.routes import fit, metrics, tags
from .api.exception_handlers import register_exception_handlers
from .logging_config import configure_logging


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting Ride Analyzer v{__version__}")
    logger.info(f"Metrics config: {settings.metrics_config()}")
    yield
    logger.info("Shutting down Ride Analyzer")


app = FastAPI(
    title="Ride Analyzer API",
    description="Cycling training metrics, trends and FIT file analysis",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(metrics.router, prefix="/api/v1/metrics", tags=["metrics"])
app.include_router(fit.router, prefix="/api/v1/fit", tags=["fit"])
app.include_router(tags.router, prefix="/api/v1/tags", tags=["tags"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Ride Analyzer API",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
