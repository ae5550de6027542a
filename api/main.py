"""
FastAPI application initialization
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from api.routes import health, datasets
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.exceptions import CatalogException
from core.logging import setup_logging
from sqlalchemy.engine import make_url
import logging

setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title="HEP Metadata Catalog API",
    description="CRUD service for particle-physics dataset file metadata",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)

app.include_router(health.router)
app.include_router(datasets.router)


@app.exception_handler(CatalogException)
async def catalog_exception_handler(request: Request, exc: CatalogException):
    """Serialize catalog errors with their mapped HTTP status"""
    request_id = getattr(request.state, "request_id", None)
    if exc.status_code >= 500:
        logger.error(f"[{request_id}] {exc}")
    else:
        logger.warning(f"[{request_id}] {exc}")

    body = exc.to_dict()
    body["request_id"] = request_id
    # Context values must be JSON serializable
    body["context"] = {k: v if isinstance(v, (str, int, float, bool, list, type(None))) else str(v)
                       for k, v in body["context"].items()}
    return JSONResponse(status_code=exc.status_code, content=body)


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting HEP Metadata Catalog API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    url = make_url(settings.DATABASE_URL)
    logger.info(f"Database: {url.host or 'local'}/{url.database}")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info("Shutting down HEP Metadata Catalog API")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "HEP Metadata Catalog API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "datasets": "/datasets"
        }
    }
