"""Terminal error formatting.

Replaces a raw ``logger.exception()`` with diagnostics that keep the
useful part of a failure readable in the server log.

Kida template errors are printed with ``exc.format_compact()`` inside a
banner, plus the route that triggered them::

    -- Template Error -----------------------------------------------
    K-RUN-001: Undefined variable 'titel' in layouts/main.html:4
    ...
      Route: GET /privacy-policy
    -----------------------------------------------------------------

Other errors use the traceback verbosity chosen by ``WREN_TRACEBACK``:
``compact`` (default, application frames only), ``full``, or
``minimal`` (one line).
"""

from __future__ import annotations

import logging
import os
import sysconfig
import traceback
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.http.request import Request

logger = logging.getLogger("wren.server")

_BANNER_WIDTH = 65
_MAX_FRAMES = 5


def is_kida_error(exc: BaseException) -> bool:
    """Whether an exception was raised by the kida template engine."""
    return (type(exc).__module__ or "").startswith("kida")


def _is_app_frame(filename: str) -> bool:
    if filename.startswith("<") or "site-packages" in filename:
        return False
    return not filename.startswith(sysconfig.get_paths()["stdlib"])


def format_template_error(exc: BaseException, request: Request | None = None) -> str:
    """Banner-wrapped kida error with the route that triggered it."""
    title = "-- Template Error "
    parts = [title + "-" * (_BANNER_WIDTH - len(title))]
    parts.append(exc.format_compact() if hasattr(exc, "format_compact") else str(exc))
    if request is not None:
        parts.append("")
        parts.append(f"  Route: {request.method} {request.path}")
    parts.append("-" * _BANNER_WIDTH)
    return "\n".join(parts)


def format_compact_traceback(exc: BaseException) -> str:
    """Error summary plus the last few application frames."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    shown = [f for f in frames if _is_app_frame(f.filename)] or frames[-3:]

    parts = [f"{type(exc).__name__}: {exc}"]
    if shown:
        parts.append("  Trace (app frames):")
        for frame in shown[-_MAX_FRAMES:]:
            parts.append(f"    {frame.filename}:{frame.lineno} in {frame.name}")
            if frame.line:
                parts.append(f"      {frame.line.strip()}")
    return "\n".join(parts)


def format_minimal_error(exc: BaseException) -> str:
    """One line: type, innermost location, message."""
    frames = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    location = f" at {frames[-1].filename}:{frames[-1].lineno}" if frames else ""
    return f"{type(exc).__name__}{location}: {exc}"


def log_error(exc: BaseException, request: Request | None = None) -> None:
    """Log an internal error with the formatting that suits it.

    Args:
        exc: The exception that caused the failure.
        request: The request being served, if any. Streaming failures
            happen after the handler returned and may pass ``None``.
    """
    prefix = f"500 {request.method} {request.path}" if request is not None else "Server error"

    if is_kida_error(exc):
        logger.error("%s\n%s", prefix, format_template_error(exc, request))
        return

    style = os.environ.get("WREN_TRACEBACK", "compact").lower()
    if style == "full":
        logger.error(prefix, exc_info=exc)
    elif style == "minimal":
        logger.error("%s: %s", prefix, format_minimal_error(exc))
    else:
        logger.error("%s\n%s", prefix, format_compact_traceback(exc))
