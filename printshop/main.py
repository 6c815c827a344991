"""Main FastAPI application with all middleware"""

from fastapi import FastAPI
from contextlib import asynccontextmanager
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import logging

from printshop.core.config import settings
from printshop.core.database import init_db, close_db, get_db_context
from printshop.core.exceptions import (
    PrintShopException,
    printshop_exception_handler,
    unhandled_exception_handler
)
from printshop.core.logging import setup_logging
from printshop.core.middleware import setup_middleware
from printshop.core.monitoring import setup_monitoring_middleware, setup_metrics_endpoint
from printshop.core.rate_limit import limiter, custom_rate_limit_handler
from printshop.services.catalog_seed import seed_sample_products
from printshop.api import api_router
from printshop.api.health import router as health_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    setup_logging()
    logger.info(f"Starting up {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    await init_db()

    if settings.SEED_SAMPLE_PRODUCTS:
        async with get_db_context() as db:
            await seed_sample_products(db)

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Storefront API for 3D prints designed by kids",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

# Error handlers
app.add_exception_handler(PrintShopException, printshop_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, custom_rate_limit_handler)
app.add_middleware(SlowAPIMiddleware)

# Add middleware
setup_middleware(app)
setup_monitoring_middleware(app)
setup_metrics_endpoint(app)

# Include routers
app.include_router(api_router, prefix="/api")
app.include_router(health_router, tags=["Health"])

# Root endpoint
@app.get("/")
async def root():
    return {
        "status": "ok",
        "message": "🖨️ Kids 3D Print Store API",
        "docs": "/api/docs"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "printshop.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS
    )
