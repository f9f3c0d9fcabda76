"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from airdrop_estimator.api.middleware import RequestIDMiddleware, MetricsMiddleware
from airdrop_estimator.api.v1 import allocation, score, price
from airdrop_estimator.infrastructure.clients.price import PriceFeed
from airdrop_estimator.infrastructure.observability.logging import setup_logging
from airdrop_estimator.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the background price refresh for the lifetime of the app"""
    if settings.price_refresh_enabled:
        app.state.price_feed.start()
    yield
    await app.state.price_feed.stop()


def create_app(price_feed: PriceFeed | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Airdrop Estimator",
        description="Reward pool share estimates and rule-based points scoring",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.price_feed = price_feed or PriceFeed()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(allocation.router, prefix="/v1", tags=["allocation"])
    app.include_router(score.router, prefix="/v1", tags=["scoring"])
    app.include_router(price.router, prefix="/v1", tags=["price"])

    return app


app = create_app()
