"""HTTP request routing by path segments."""

# Primary API: the router and its request/response types
from segment_router.config import Settings

# Core types: for advanced users and type checking
from segment_router.core.models import HTTPMethod, Request, Response, Route, RouteMatch
from segment_router.core.parser import PathSegment, SegmentType
from segment_router.core.router import Router

# Exceptions: for error handling
from segment_router.exceptions import (
    ConfigurationError,
    ConflictError,
    DispatchError,
    InvalidMethodError,
    MethodNotAllowedError,
    NotFoundError,
    PathParseError,
    RouterFrozenError,
    RoutingError,
)

# Transport
from segment_router.fastapi.router import create_api_router, create_app
from segment_router.service import create_router

__all__ = [
    # Primary API
    "Router",
    "Request",
    "Response",
    "create_api_router",
    "create_app",
    "create_router",
    "Settings",
    # Core types
    "HTTPMethod",
    "PathSegment",
    "Route",
    "RouteMatch",
    "SegmentType",
    # Exceptions
    "ConfigurationError",
    "ConflictError",
    "DispatchError",
    "InvalidMethodError",
    "MethodNotAllowedError",
    "NotFoundError",
    "PathParseError",
    "RouterFrozenError",
    "RoutingError",
]

__version__ = "0.1.0"
