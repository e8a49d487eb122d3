"""FastAPI transport for a segment Router.

Mounts a frozen Router behind a single catch-all FastAPI route,
serializes handler bodies as JSON, and translates dispatch errors into
404 and 405 responses.
"""

import logging
from urllib.parse import unquote

from fastapi import APIRouter, FastAPI
from fastapi import Request as HTTPRequest
from fastapi.responses import JSONResponse
from starlette.responses import Response as HTTPResponse

from segment_router.config import Settings
from segment_router.core.models import HTTPMethod, Request
from segment_router.core.router import Router
from segment_router.exceptions import DispatchError, MethodNotAllowedError

logger = logging.getLogger(__name__)

CATCH_ALL_PATH = "/{full_path:path}"


def create_api_router(router: Router, *, prefix: str = "") -> APIRouter:
    """Create a FastAPI APIRouter that dispatches every request to ``router``.

    The router is frozen if it is not already, so no routes can be added
    once requests start arriving.

    Args:
        router: The segment Router to dispatch to.
        prefix: Optional URL prefix; it is not part of the dispatched path.

    Returns:
        A FastAPI APIRouter with one catch-all route for every HTTP method.

    Example:
        from fastapi import FastAPI
        from segment_router import Router, create_api_router

        router = Router()
        router.register("GET", "/users/:id", get_user)

        app = FastAPI()
        app.include_router(create_api_router(router))
    """
    router.freeze()
    api_router = APIRouter(prefix=prefix)

    # Sync endpoint: FastAPI runs it in its worker threadpool
    def endpoint(full_path: str, request: HTTPRequest) -> HTTPResponse:
        raw_path = _raw_request_path(request, prefix)
        if raw_path is None:
            # Server gave no raw_path; full_path is already decoded
            path, decode = "/" + full_path, None
        else:
            path, decode = raw_path, unquote

        try:
            response = router.dispatch(Request(method=request.method, path=path), decode=decode)
        except DispatchError as exc:
            return _error_response(exc)

        if response.body is None:
            return HTTPResponse(status_code=response.status_code)
        return JSONResponse(status_code=response.status_code, content=response.body)

    api_router.add_api_route(
        path=CATCH_ALL_PATH,
        endpoint=endpoint,
        methods=[method.value for method in HTTPMethod],
        include_in_schema=False,
    )

    logger.info(
        "Mounted router on FastAPI",
        extra={"route_count": len(router), "prefix": prefix or "(none)"},
    )

    return api_router


def create_app(router: Router, settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application serving ``router`` at the root path."""
    settings = settings or Settings()
    app = FastAPI(title=settings.service_name)
    app.include_router(create_api_router(router))
    return app


def _error_response(exc: DispatchError) -> JSONResponse:
    """Translate a dispatch error into its HTTP response.

    Args:
        exc: NotFoundError or MethodNotAllowedError raised by the router.

    Returns:
        JSON response with a ``detail`` message; 405 responses carry an
        ``Allow`` header listing the registered methods.
    """
    headers = None
    if isinstance(exc, MethodNotAllowedError):
        headers = {"Allow": ", ".join(exc.allowed_methods)}

    logger.debug(
        "Dispatch failed",
        extra={"method": exc.method, "path": exc.path, "status_code": exc.status_code},
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": str(exc)},
        headers=headers,
    )


def _raw_request_path(request: HTTPRequest, prefix: str) -> str | None:
    """Return the still-encoded request path, without root_path and prefix.

    Starlette decodes ``scope["path"]``, which turns ``%2F`` into a
    separator. The ASGI ``raw_path`` keeps the original bytes.

    Returns:
        The encoded path starting with '/', or None if the server did not
        provide ``raw_path``.
    """
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return None

    path = raw_path.split(b"?", 1)[0].decode("latin-1")
    for leading in (request.scope.get("root_path", ""), prefix):
        if leading and path.startswith(leading):
            path = path[len(leading):]
    return path or "/"
