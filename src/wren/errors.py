"""Wren exception hierarchy.

Shared across the template registry, renderer, asset guard, router and
request pipeline so every module raises and catches the same types.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.templating.keys import TemplateKey


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when app configuration is invalid.

    Typically raised while reading the environment or during
    ``App._freeze()`` at startup.
    """


class TemplateBuildError(WrenError):
    """A template fragment could not be loaded or compiled.

    Raised while building the template registry. Fatal: the app must
    not start serving with a broken layout, page, or partial.
    """

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class TemplateRenderError(WrenError):
    """A composed template failed while executing (buffered rendering)."""

    def __init__(self, key: TemplateKey, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, the asset guard, or handlers. The ASGI handler
    catches these and dispatches to the matching ``@app.error()`` handler.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route, file, or template target matched the request."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class Forbidden(HTTPError):  # noqa: N818
    """403 — the file exists but the server may not read it."""

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(status=403, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )


class TemplateLookupError(HTTPError):
    """500 — a handler asked for a (layout, page) pair that was never composed.

    This is the server's own misconfiguration, not the caller's fault.
    """

    def __init__(self, key: TemplateKey) -> None:
        super().__init__(
            status=500,
            detail=f"No composed template for layout {key.layout!r} and page {key.page!r}",
        )
        object.__setattr__(self, "key", key)
