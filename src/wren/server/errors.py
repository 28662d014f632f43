"""Error handling pipeline for wren requests.

Maps HTTPError exceptions and unexpected failures to responses, using
registered error handlers or plain-text defaults.
"""

import inspect
import logging
from collections.abc import Callable
from typing import Any

from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import AnyResponse, Response
from wren.negotiation import negotiate
from wren.server.terminal_errors import log_error

logger = logging.getLogger("wren.server")


async def call_error_handler(
    handler: Callable[..., Any],
    request: Request,
    exc: Exception,
) -> AnyResponse:
    """Invoke a registered error handler with introspected arguments.

    Error handlers may accept zero, one (request), or two (request, exc) args.
    Supports both sync and async error handlers.
    """
    params = list(inspect.signature(handler).parameters.values())

    if len(params) >= 2:
        result = handler(request, exc)
    elif len(params) == 1:
        result = handler(request)
    else:
        result = handler()

    if inspect.isawaitable(result):
        result = await result

    return negotiate(result)


async def handle_http_error(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> AnyResponse:
    """Map an HTTPError to a response using registered error handlers."""
    if exc.status >= 500:
        logger.error("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
    else:
        logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)

    # Try exact exception type, then status code
    handler = error_handlers.get(type(exc)) or error_handlers.get(exc.status)
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        # Keep the exception's status unless the handler chose its own
        if response.status == 200:
            response = response.with_status(exc.status)
        return response.with_headers(dict(exc.headers))

    # Server-side failures never leak their detail outside debug mode
    if exc.status >= 500 and not debug:
        body = "Internal Server Error"
    else:
        body = exc.detail or f"Error {exc.status}"

    return Response(
        body=body,
        status=exc.status,
        content_type="text/plain; charset=utf-8",
        headers=exc.headers,
    )


async def handle_internal_error(
    exc: Exception,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> AnyResponse:
    """Handle unexpected exceptions as 500 errors."""
    log_error(exc, request)

    handler = error_handlers.get(500) or error_handlers.get(type(exc))
    if handler is not None:
        response = await call_error_handler(handler, request, exc)
        if response.status == 200:
            response = response.with_status(500)
        return response

    if debug:
        return Response(
            body=f"{type(exc).__name__}: {exc}",
            status=500,
            content_type="text/plain; charset=utf-8",
        )
    return Response(
        body="Internal Server Error",
        status=500,
        content_type="text/plain; charset=utf-8",
    )
