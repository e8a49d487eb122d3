"""Exception hierarchy for request routing errors."""

from collections.abc import Iterable


class RoutingError(Exception):
    """Base exception for all routing errors.

    This is the parent class for all exceptions raised by the
    segment-router package. Catching this exception will catch all
    routing-related errors, at registration time and at dispatch time.

    Example:
        try:
            router.register("GET", "/users/:id", get_user)
        except RoutingError as e:
            logger.error(f"Failed to register route: {e}")
    """


class ConfigurationError(RoutingError):
    """Raised when settings cannot be built from the environment.

    Example:
        ConfigurationError("SEGMENT_ROUTER_PORT must be an integer, got 'abc'")
    """


class PathParseError(RoutingError):
    """Raised when a route pattern or request path has invalid syntax.

    Examples of invalid syntax:
        - Pattern not starting with '/': users/:id
        - Empty parameter name: /users/:
        - Invalid parameter names: /users/:123, /users/{not-valid}
        - The same parameter twice: /teams/:id/users/:id

    Example:
        PathParseError("Invalid parameter name '123' in pattern '/users/:123'")
    """


class InvalidMethodError(RoutingError):
    """Raised when an HTTP method is not one of the supported methods.

    Example:
        InvalidMethodError("Unsupported HTTP method 'FETCH'")
    """


class ConflictError(RoutingError):
    """Raised when two routes resolve to the same method and pattern.

    Parameter names do not take part in the comparison, so
    ``/users/:id`` and ``/users/{user_id}`` conflict.

    Example:
        ConflictError(
            "Duplicate route: GET /users/{user_id}\\n"
            "  Existing: GET /users/:id"
        )
    """


class RouterFrozenError(RoutingError):
    """Raised when registering a route on a router that has been frozen."""


class DispatchError(RoutingError):
    """Base exception for failures while dispatching a request.

    Each subclass maps to an HTTP status code that the transport layer
    uses to build its response.

    Attributes:
        method: The request method.
        path: The request path.
        status_code: HTTP status code for this outcome.
    """

    status_code: int = 500

    def __init__(self, message: str, *, method: str, path: str) -> None:
        super().__init__(message)
        self.method = method
        self.path = path


class NotFoundError(DispatchError):
    """Raised when no registered route matches the request path.

    Example:
        NotFoundError("No route matches GET '/unknown'", method="GET", path="/unknown")
    """

    status_code = 404


class MethodNotAllowedError(DispatchError):
    """Raised when the path matches a route, but not for the request method.

    Attributes:
        allowed_methods: Sorted tuple of methods registered for the path.

    Example:
        MethodNotAllowedError(
            "Method POST not allowed for '/users/42'. Allowed methods: GET",
            method="POST",
            path="/users/42",
            allowed_methods=["GET"],
        )
    """

    status_code = 405

    def __init__(
        self,
        message: str,
        *,
        method: str,
        path: str,
        allowed_methods: Iterable[str],
    ) -> None:
        super().__init__(message, method=method, path=path)
        self.allowed_methods = tuple(sorted(set(allowed_methods)))
