"""Error Handlers — global exception handlers for the webfocus host.

Invariants:
    - Requests under /api get the JSON envelope; everything else gets layouts/error.html
    - WebfocusError → its own http_status and code
    - RequestValidationError → 400 with field-level details
    - HTTPException → 404 "Not found <path>", 405 "Method not allowed (<METHOD>)"
    - Exception (catch-all) → 500; message and stack only surface with debug enabled

Design Decisions:
    - Four-layer handler: domain (WebfocusError), validation (Pydantic),
      HTTP (Starlette routing/static files), catch-all (Exception)
"""

import logging
import traceback
from collections.abc import Callable
from http import HTTPStatus
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from webfocus.core.errors import ErrorCategory, ErrorSeverity, WebfocusError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
ERROR_VIEW = "layouts/error.html"

ViewContext = Callable[..., dict[str, Any]]

_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: ("BAD_REQUEST", ErrorCategory.VALIDATION),
    status.HTTP_404_NOT_FOUND: ("NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND),
    status.HTTP_405_METHOD_NOT_ALLOWED: (
        "METHOD_NOT_ALLOWED", ErrorCategory.METHOD_NOT_ALLOWED,
    ),
}


def is_api_request(request: Request) -> bool:
    path = request.url.path
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def register_error_handlers(
    app: FastAPI,
    templates: Jinja2Templates,
    view_context: ViewContext,
    debug: bool = False,
) -> None:
    """Register all global error handlers on the FastAPI app."""
    renderer = _ErrorPageRenderer(templates, view_context)
    _register_webfocus_error_handler(app, renderer)
    _register_validation_error_handler(app, renderer)
    _register_http_error_handler(app, renderer)
    _register_generic_error_handler(app, renderer, debug)


class _ErrorPageRenderer:
    """Renders the HTML error page with the shared view context."""

    def __init__(self, templates: Jinja2Templates, view_context: ViewContext):
        self._templates = templates
        self._view_context = view_context

    def __call__(
        self,
        request: Request,
        status_code: int,
        error: str,
        stack: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        context = self._view_context(request, error=error, stack=stack)
        return self._templates.TemplateResponse(
            request, ERROR_VIEW, context,
            status_code=status_code, headers=headers,
        )


def _register_webfocus_error_handler(
    app: FastAPI, render: _ErrorPageRenderer,
) -> None:
    """Register webfocus domain error handler."""

    @app.exception_handler(WebfocusError)
    async def webfocus_error_handler(request: Request, exc: WebfocusError):
        """Handle all webfocus errors raised while serving a request."""
        logger.error(
            f"WebfocusError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        if is_api_request(request):
            return JSONResponse(
                status_code=exc.http_status, content=exc.to_response(),
            )
        return render(request, exc.http_status, exc.message)


def _register_validation_error_handler(
    app: FastAPI, render: _ErrorPageRenderer,
) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        if is_api_request(request):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=_build_validation_error_response(exc),
            )
        return render(request, status.HTTP_400_BAD_REQUEST, "Invalid request data")


def _register_http_error_handler(
    app: FastAPI, render: _ErrorPageRenderer,
) -> None:
    """Register handler for routing, static file and explicit HTTP errors."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        """404/405 and any HTTPException raised by a component route."""
        logger.debug(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={
                "path": request.url.path,
                "method": request.method,
                "status_code": exc.status_code,
            },
        )
        if is_api_request(request):
            return JSONResponse(
                status_code=exc.status_code,
                content=_build_http_error_response(exc),
                headers=exc.headers,
            )
        return render(
            request, exc.status_code, _describe_http_error(request, exc),
            headers=exc.headers,
        )


def _register_generic_error_handler(
    app: FastAPI, render: _ErrorPageRenderer, debug: bool,
) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — message and stack only with debug enabled."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        stack = "".join(traceback.format_exception(exc)) if debug else None
        message = str(exc) if debug else "An unexpected error occurred"
        if is_api_request(request):
            content = {
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": message,
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            }
            if stack:
                content["error"]["stack"] = stack
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=content,
            )
        return render(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, message, stack,
        )


def _describe_http_error(request: Request, exc: StarletteHTTPException) -> str:
    """Message for the HTML error page; explicit details win over defaults."""
    try:
        default_detail = HTTPStatus(exc.status_code).phrase
    except ValueError:
        default_detail = None
    if exc.detail != default_detail:
        return str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return f"Not found {request.url.path}"
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        return f"Method not allowed ({request.method})"
    return str(exc.detail)


def _build_http_error_response(exc: StarletteHTTPException) -> dict:
    """Build JSON envelope for an HTTPException; pre-built envelopes pass through."""
    if isinstance(exc.detail, dict) and "error" in exc.detail:
        return exc.detail
    code, category = _HTTP_ERROR_CODES.get(
        exc.status_code, ("HTTP_ERROR", ErrorCategory.INTERNAL),
    )
    return {
        "error": {
            "code": code,
            "message": exc.detail,
            "category": category.value,
            "severity": ErrorSeverity.ERROR.value,
        },
    }


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
