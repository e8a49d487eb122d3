"""Request router with ordered, segment-wise route matching.

Routes are registered during startup and frozen into an immutable
tuple before requests are dispatched. Matching walks the table in
registration order; the first structurally matching route wins.
"""

import logging
from collections.abc import Callable, Iterable

from segment_router.core.models import (
    Handler,
    HTTPMethod,
    Request,
    Response,
    Route,
    RouteMatch,
)
from segment_router.core.parser import PathSegment, parse_pattern, segments_to_pattern, split_path
from segment_router.exceptions import (
    ConflictError,
    MethodNotAllowedError,
    NotFoundError,
    RouterFrozenError,
)

logger = logging.getLogger(__name__)

RouteEntry = tuple[str | HTTPMethod, str, Handler]


class Router:
    """Maps (method, path) pairs to handlers.

    Usage::

        router = Router()
        router.register("GET", "/users/:id", get_user)
        router.freeze()
        response = router.dispatch(Request("GET", "/users/42"))
    """

    __slots__ = ("_frozen", "_routes", "_shapes")

    def __init__(self) -> None:
        self._routes: tuple[Route, ...] = ()
        self._shapes: dict[tuple[HTTPMethod, tuple[str | None, ...]], Route] = {}
        self._frozen = False

    @classmethod
    def from_table(cls, entries: Iterable[RouteEntry]) -> "Router":
        """Build a frozen router from an ordered sequence of (method, pattern, handler).

        Raises:
            ConflictError: If two entries resolve to the same method and pattern.
            PathParseError: If a pattern has invalid syntax.
            InvalidMethodError: If a method is not supported.
        """
        router = cls()
        for method, pattern, handler in entries:
            router.register(method, pattern, handler)
        router.freeze()
        return router

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in registration order."""
        return self._routes

    def register(self, method: str | HTTPMethod, pattern: str, handler: Handler) -> Route:
        """Parse a pattern and add a route for it.

        Args:
            method: HTTP method, case-insensitive.
            pattern: Route pattern, e.g. "/users/:id" or "/users/{id}".
            handler: Callable invoked with the bound params mapping.

        Returns:
            The registered Route.

        Raises:
            RouterFrozenError: If the router has been frozen.
            InvalidMethodError: If the method is not supported.
            PathParseError: If the pattern has invalid syntax.
            ConflictError: If an equivalent (method, pattern) is registered.
        """
        if self._frozen:
            raise RouterFrozenError(
                f"Cannot register {getattr(method, 'value', method)} {pattern}: router is frozen"
            )

        http_method = HTTPMethod.parse(method)
        segments = tuple(parse_pattern(pattern))
        route = Route(
            method=http_method,
            pattern=segments_to_pattern(segments),
            segments=segments,
            handler=handler,
        )

        key = (http_method, route.shape)
        existing = self._shapes.get(key)
        if existing is not None:
            raise ConflictError(
                f"Duplicate route: {http_method.value} {pattern}\n"
                f"  Existing: {existing.method.value} {existing.pattern}"
            )

        self._shapes[key] = route
        self._routes = (*self._routes, route)

        logger.debug(
            "Registered route",
            extra={
                "method": http_method.value,
                "pattern": route.pattern,
                "handler": getattr(handler, "__name__", repr(handler)),
            },
        )
        return route

    def freeze(self) -> None:
        """Make the route table immutable. Freezing twice is a no-op."""
        if self._frozen:
            return
        self._frozen = True
        logger.info("Router frozen", extra={"route_count": len(self._routes)})

    def match(
        self,
        method: str | HTTPMethod,
        path: str,
        *,
        decode: Callable[[str], str] | None = None,
    ) -> RouteMatch:
        """Find the route for a request without invoking its handler.

        Segments are split on the raw separator first, then passed through
        ``decode`` (e.g. ``urllib.parse.unquote``) when one is given.

        Returns a ``RouteMatch`` on success.

        Raises:
            InvalidMethodError: If the method is not supported.
            PathParseError: If the path does not start with '/'.
            NotFoundError: If no route matches the path for any method.
            MethodNotAllowedError: If the path matches only routes for other methods.
        """
        http_method = HTTPMethod.parse(method)
        parts = split_path(path, decode)
        allowed: set[str] = set()

        for route in self._routes:
            params = _match_segments(route.segments, parts)
            if params is None:
                continue
            if route.method is http_method:
                return RouteMatch(route=route, params=params)
            allowed.add(route.method.value)

        if allowed:
            raise MethodNotAllowedError(
                f"Method {http_method.value} not allowed for '{path}'. "
                f"Allowed methods: {', '.join(sorted(allowed))}",
                method=http_method.value,
                path=path,
                allowed_methods=allowed,
            )
        raise NotFoundError(
            f"No route matches {http_method.value} '{path}'",
            method=http_method.value,
            path=path,
        )

    def dispatch(
        self,
        request: Request,
        *,
        decode: Callable[[str], str] | None = None,
    ) -> Response:
        """Match a request and invoke the route's handler.

        A handler returning something other than a ``Response`` has its
        result wrapped as a 200 response body. ``decode`` is applied to
        each path segment as in ``match``. Errors raised by the
        handler propagate unchanged.

        Raises:
            NotFoundError: If no route matches the path.
            MethodNotAllowedError: If the path matches but the method doesn't.
        """
        matched = self.match(request.method, request.path, decode=decode)

        logger.debug(
            "Dispatching request",
            extra={
                "method": matched.route.method.value,
                "path": request.path,
                "pattern": matched.route.pattern,
            },
        )

        result = matched.route.handler(matched.params)
        if isinstance(result, Response):
            return result
        return Response(status_code=200, body=result)

    def dispatch_path(self, method: str | HTTPMethod, path: str) -> Response:
        """Dispatch a (method, path) pair. Shorthand for ``dispatch(Request(...))``."""
        if isinstance(method, HTTPMethod):
            method = method.value
        return self.dispatch(Request(method=method, path=path))

    def __len__(self) -> int:
        return len(self._routes)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"<Router routes={len(self._routes)} {state}>"


def _match_segments(
    segments: tuple[PathSegment, ...],
    parts: list[str],
) -> dict[str, str] | None:
    """Match request path parts against route segments.

    Returns the bound parameters, or None if the shapes differ.
    """
    if len(segments) != len(parts):
        return None

    params: dict[str, str] = {}
    for segment, part in zip(segments, parts):
        if not segment.matches(part):
            return None
        if segment.is_parameter:
            params[segment.name] = part
    return params
