import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentbid.api.v1 import auth, biddings
from rentbid.core.config import settings
from rentbid.core.database import engine
from rentbid.core.redis import close_redis
from rentbid.middleware.metrics import PrometheusMiddleware, metrics_endpoint
from rentbid.middleware.rate_limit import RateLimitMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting application...")

    yield

    logger.info("Shutting down: closing Redis and database pools")
    await close_redis()
    await engine.dispose()


app = FastAPI(
    title="Rental Bidding API",
    version="1.0.0",
    description="Bid admission for rental listings",
    lifespan=lifespan,
)

# Prometheus request metrics
app.add_middleware(PrometheusMiddleware)

if settings.RATE_LIMIT_ENABLED:
    app.add_middleware(
        RateLimitMiddleware,
        user_limit=settings.RATE_LIMIT_USER,
        ip_limit=settings.RATE_LIMIT_IP,
    )

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(biddings.router, prefix="/api/v1/biddings", tags=["biddings"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.add_route("/metrics", metrics_endpoint)
