"""FastAPI adapter for segment routing."""

from segment_router.fastapi.router import create_api_router, create_app

__all__ = ["create_api_router", "create_app"]
