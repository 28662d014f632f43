"""Content negotiation.

Two concerns live here:

- ``wants_json`` decides whether a request asked for a machine-readable
  body. It reads the request's **Content-Type** header, not ``Accept``:
  clients signal JSON by declaring ``Content-Type: application/json`` on
  the request. Parameters such as ``; charset=utf-8`` are ignored and the
  comparison is case-insensitive.
- ``negotiate`` turns a handler's return value into a response.
  isinstance-based dispatch, no magic, fully predictable.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from wren.http.response import JSON, AnyResponse, Response, StreamingResponse

if TYPE_CHECKING:
    from wren.http.request import Request


def wants_json(request: Request) -> bool:
    """True when the request declares a JSON Content-Type."""
    return request.media_type == JSON


def json_response(value: Any, *, status: int = 200) -> Response:
    """Compact JSON response: ``{"message":"ok"}``, no whitespace."""
    return Response(
        body=json.dumps(value, separators=(",", ":")),
        status=status,
        content_type=JSON,
    )


def negotiate(value: Any) -> AnyResponse:
    """Convert a route handler's return value to a response.

    Dispatch order:

    1. ``Response`` / ``StreamingResponse`` -> pass through
    2. ``str``                 -> 200, text/html
    3. ``bytes``               -> 200, application/octet-stream
    4. ``dict`` / ``list``     -> 200, compact application/json
    5. ``(value, int)``        -> negotiate value, override status
    6. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response() | StreamingResponse():
            return value
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return json_response(value)
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _:
            msg = (
                f"Cannot convert {type(value).__name__} to a response. "
                f"Return str, bytes, dict, list, Response, or StreamingResponse."
            )
            raise TypeError(msg)
