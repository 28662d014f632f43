"""ASGI response sending — translates wren responses to ASGI messages.

Handles both single-body responses and chunked streaming responses.
"""

from __future__ import annotations

import html
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from wren._internal.asgi import Send
from wren.http.response import Response, StreamingResponse
from wren.server.terminal_errors import is_kida_error, log_error

if TYPE_CHECKING:
    from wren.http.request import Request

# Appended when a streamed template fails after the status was sent
RENDER_ERROR_MARKER = "<!-- wren: render error -->"


def _body_allowed(status: int) -> bool:
    # 1xx, 204 and 304 responses carry no body
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(
    content_type: str, headers: tuple[tuple[str, str], ...]
) -> list[tuple[bytes, bytes]]:
    raw = [(b"content-type", content_type.encode("latin-1"))]
    raw.extend(
        (name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers
    )
    return raw


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a Response into ASGI send() calls.

    For a ``HEAD`` request the headers, ``Content-Length`` included, are
    those of the full response and the body is empty.
    """
    body = response.body_bytes if _body_allowed(response.status) else b""

    raw_headers = _raw_headers(response.content_type, response.headers)
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))
    if head:
        body = b""

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send({"type": "http.response.body", "body": body})


def _error_chunk(exc: Exception, debug: bool) -> str:
    if not debug:
        return RENDER_ERROR_MARKER
    if is_kida_error(exc) and hasattr(exc, "format_compact"):
        detail = exc.format_compact()
    else:
        detail = f"{type(exc).__name__}: {exc}"
    return (
        '<pre class="wren-error" data-status="500">'
        f"{html.escape(detail)}</pre>"
    )


async def send_streaming_response(
    response: StreamingResponse,
    send: Send,
    *,
    debug: bool = False,
    request: Request | None = None,
    head: bool = False,
) -> None:
    """Send a streaming response via chunked transfer encoding.

    Sends headers immediately, then each chunk as an ASGI body message
    with ``more_body=True``, then an empty closing message. A failure
    while iterating is logged, reported in-band with an HTML comment (or
    a visible error block in debug mode), and the stream is closed. The
    status already sent is never changed and earlier chunks are kept.

    For a ``HEAD`` request only the headers are sent and the chunks are
    never rendered.
    """
    raw_headers = _raw_headers(response.content_type, response.headers)
    raw_headers.append((b"transfer-encoding", b"chunked"))

    # No content-length: chunked transfer encoding signals body boundaries
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )

    if head:
        await _close(response.chunks)
        await send({"type": "http.response.body", "body": b"", "more_body": False})
        return

    async def send_chunk(chunk: str | bytes) -> None:
        if not chunk:
            return
        body = chunk.encode("utf-8") if isinstance(chunk, str) else chunk
        await send({"type": "http.response.body", "body": body, "more_body": True})

    try:
        if isinstance(response.chunks, AsyncIterator):
            async for chunk in response.chunks:
                await send_chunk(chunk)
        else:
            for chunk in response.chunks:
                await send_chunk(chunk)
    except Exception as exc:
        log_error(exc, request)
        await send_chunk(_error_chunk(exc, debug))

    await send({"type": "http.response.body", "body": b"", "more_body": False})


async def _close(chunks: object) -> None:
    if hasattr(chunks, "aclose"):
        await chunks.aclose()
    elif hasattr(chunks, "close"):
        chunks.close()
