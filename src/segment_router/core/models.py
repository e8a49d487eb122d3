"""Request, response and route types shared by the router and adapters."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from segment_router.core.parser import PathSegment
from segment_router.exceptions import InvalidMethodError, PathParseError


class HTTPMethod(str, Enum):
    """HTTP methods a route can be registered for."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method: "str | HTTPMethod") -> "HTTPMethod":
        """Normalize a method string to an HTTPMethod.

        Raises:
            InvalidMethodError: If the method is not supported.

        Examples:
            "get" -> HTTPMethod.GET
            " Post " -> HTTPMethod.POST
        """
        if isinstance(method, HTTPMethod):
            return method
        try:
            return cls(str(method).strip().upper())
        except ValueError:
            raise InvalidMethodError(f"Unsupported HTTP method '{method}'") from None


@dataclass(frozen=True)
class Response:
    """A handler result: status code and a serializable body."""

    status_code: int = 200
    body: Any = None


Handler = Callable[[Mapping[str, str]], Any]


@dataclass(frozen=True)
class Route:
    """A registered (method, pattern, handler) binding.

    Attributes:
        method: HTTP method the route answers.
        pattern: Normalized pattern string (e.g., /users/:id).
        segments: Tuple of parsed PathSegment objects.
        handler: Callable receiving the bound params mapping.
    """

    method: HTTPMethod
    pattern: str
    segments: tuple[PathSegment, ...]
    handler: Handler = field(compare=False)

    @property
    def parameters(self) -> list[str]:
        """Names of the parameter segments, in path order."""
        return [s.name for s in self.segments if s.is_parameter]

    @property
    def shape(self) -> tuple[str | None, ...]:
        """Pattern with parameter names erased, used for conflict detection."""
        return tuple(None if s.is_parameter else s.name for s in self.segments)


@dataclass(frozen=True)
class Request:
    """An incoming request as seen by the router."""

    method: str
    path: str

    def __post_init__(self) -> None:
        if not self.path.startswith("/"):
            raise PathParseError(f"Request path must start with '/', got '{self.path}'")


@dataclass(frozen=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: Mapping[str, str]
