"""
FastAPI application entry point.
"""

from fastapi import FastAPI
import logging
from variant_pricing import config
from variant_pricing.routers import variants
from variant_pricing.core.cache import counter_store
from variant_pricing.middleware.rate_limiter import RateLimitMiddleware

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Product Variant Pricing Service",
    version="1.0.0",
    docs_url="/docs"
)

app.add_middleware(RateLimitMiddleware, requests_per_minute=config.RATE_LIMIT_PER_MINUTE)


# Redis Connection Lifecycle
@app.on_event("startup")
async def startup_event():
    """Connect the rate limit counter store on startup."""
    await counter_store.connect()


@app.on_event("shutdown")
async def shutdown_event():
    await counter_store.disconnect()


# Include routers
app.include_router(variants.router)


@app.get("/")
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "service": "Product Variant Pricing Service",
        "version": "1.0.0",
        "endpoints": {
            "validate": "/variants/validate",
            "defaults": "/variants/defaults",
            "quote": "/variants/quote",
            "combinations": "/variants/combinations",
            "docs": "/docs"
        }
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "variant-pricing-service",
        "rate_limit_store": "connected" if counter_store.connected else "disconnected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "variant_pricing.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
