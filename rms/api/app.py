"""
FastAPI application factory.

* Registers the user and health routes.
* Maps domain errors to JSON error responses.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from rms.api.middleware import limiter
from rms.api.routes import health, users
from rms.domain.errors import DomainError
from rms.infrastructure.database import engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled DB connections on shutdown."""
    yield
    await engine.dispose()


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    logger.info("%s: %s", type(exc).__name__, exc.message)
    content = {"detail": exc.message}
    if getattr(exc, "field", None):
        content["field"] = exc.field
    return JSONResponse(status_code=exc.status_code, content=content)


def create_app() -> FastAPI:
    app = FastAPI(
        title="Restaurant Management System API",
        description=(
            "User sessions, profile and address management, and the "
            "distance from a user's address to a restaurant."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_exception_handler(DomainError, domain_error_handler)

    # Routers
    app.include_router(users.router, prefix="/api/v1")
    app.include_router(health.router, prefix="/api/v1")

    return app
