"""Immutable HTTP request.

Frozen metadata built from the ASGI scope. Wren's handlers never read a
request body, so only the receive callable is kept for completeness of
the ASGI contract.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from wren._internal.asgi import Receive
from wren.http.headers import Headers


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the percent-decoded path from the ASGI scope. Path
    parameters are filled in after routing via ``with_path_params``.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes
    path_params: dict[str, str]
    http_version: str
    server: tuple[str, int] | None
    client: tuple[str, int] | None

    # Private: ASGI receive callable
    _receive: Receive

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def media_type(self) -> str | None:
        """The Content-Type media type, lower-cased, without parameters."""
        value = self.content_type
        if value is None:
            return None
        return value.split(";", 1)[0].strip().lower()

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the router's captured parameters."""
        return replace(self, path_params=path_params)

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            path_params={},
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
            _receive=receive,
        )
