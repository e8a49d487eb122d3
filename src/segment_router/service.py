"""Sample service: health check, greeting and user lookup routes.

Routes are declared as an explicit, ordered registration list rather
than with decorators, and settings are passed in instead of read from
module state.
"""

import functools
import logging
from collections.abc import Mapping

from segment_router.config import Settings
from segment_router.core.router import RouteEntry, Router

logger = logging.getLogger(__name__)


def health(settings: Settings, params: Mapping[str, str]) -> dict[str, str]:
    """Check service health."""
    return {"status": "ok", "service": settings.service_name}


def hello(settings: Settings, params: Mapping[str, str]) -> dict[str, str]:
    """Return the configured greeting."""
    return {"message": settings.greeting}


def get_user(settings: Settings, params: Mapping[str, str]) -> dict[str, str]:
    """Get a user by ID.

    There is no user store behind this route; every ID returns the
    configured placeholder record.
    """
    return {
        "id": params["id"],
        "name": settings.user_name,
        "role": settings.user_role,
    }


def build_routes(settings: Settings) -> list[RouteEntry]:
    """Return the service's (method, pattern, handler) registration list."""

    def bind(handler):
        @functools.wraps(handler)
        def bound(params: Mapping[str, str]):
            return handler(settings, params)

        return bound

    return [
        ("GET", "/health", bind(health)),
        ("GET", "/hello", bind(hello)),
        ("GET", "/users/:id", bind(get_user)),
    ]


def create_router(settings: Settings | None = None) -> Router:
    """Build the frozen router for the sample service."""
    settings = settings or Settings()
    router = Router.from_table(build_routes(settings))

    logger.info(
        "Sample router built",
        extra={"service": settings.service_name, "route_count": len(router)},
    )
    return router
