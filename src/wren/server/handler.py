"""ASGI handler — translates ASGI scope/messages to wren types.

The only component that touches raw ASGI requests directly. Converts the
scope to a typed Request, dispatches through the router, maps errors to
responses, and sends the result back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.errors import HTTPError
from wren.http.request import Request
from wren.http.response import AnyResponse, StreamingResponse
from wren.negotiation import negotiate
from wren.routing.route import RouteMatch
from wren.routing.router import Router
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.sender import send_response, send_streaming_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        match = router.match(request.method, request.path)
        response = await _invoke_handler(match, request)
    except HTTPError as exc:
        response = await _error_response(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    head = request.method == "HEAD"
    if isinstance(response, StreamingResponse):
        await send_streaming_response(response, send, debug=debug, request=request, head=head)
    else:
        await send_response(response, send, head=head)


async def _error_response(
    exc: HTTPError,
    request: Request,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> AnyResponse:
    try:
        return await handle_http_error(exc, request, error_handlers, debug)
    except Exception as handler_exc:
        # A failing error handler degrades to the plain 500 default
        return await handle_internal_error(handler_exc, request, {}, debug)


async def _invoke_handler(match: RouteMatch, request: Request) -> AnyResponse:
    """Call the matched route handler and convert its return value."""
    handler = match.route.handler
    request = request.with_path_params(match.path_params)
    kwargs = _build_handler_kwargs(handler, request, match.path_params)
    result = await invoke(handler, **kwargs)
    return negotiate(result)


def _build_handler_kwargs(
    handler: Callable[..., Any],
    request: Request,
    path_params: dict[str, str],
) -> dict[str, Any]:
    """Inspect the handler signature and build kwargs.

    Resolution order:
    1. ``request`` parameter (by name or ``Request`` annotation)
    2. Path parameters (by name, converted to the annotated type)

    Parameters matching neither keep their defaults.
    """
    sig = inspect.signature(handler, eval_str=True)
    kwargs: dict[str, Any] = {}

    for name, param in sig.parameters.items():
        if name == "request" or param.annotation is Request:
            kwargs[name] = request
        elif name in path_params:
            value = path_params[name]
            if param.annotation in (inspect.Parameter.empty, str):
                kwargs[name] = value
            else:
                try:
                    kwargs[name] = param.annotation(value)
                except (ValueError, TypeError):
                    kwargs[name] = value

    return kwargs
