"""Template renderer — executes composed templates at request time.

Lookup and execution are separate failure modes:

- An absent (layout, page) pair raises ``TemplateLookupError``, a 500:
  the server asked for a template it never composed.
- A template that fails while executing raises ``TemplateRenderError``
  from ``render_to_string``. From ``render`` the failure surfaces while
  the response is streaming and is reported in-band by the sender.

``render()`` streams. The status is decided before the first chunk is
produced and cannot change afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from wren.errors import TemplateLookupError, TemplateRenderError
from wren.http.response import HTML, StreamingResponse
from wren.templating.keys import TemplateKey
from wren.templating.registry import ComposedTemplate, TemplateRegistry

logger = logging.getLogger("wren.templating")


class TemplateRenderer:
    """Render composed templates from a ``TemplateRegistry``.

    Usage::

        renderer = TemplateRenderer(registry)
        return renderer.render("main", "home")
        return renderer.render("main", "not-found", status=404)
    """

    __slots__ = ("_registry",)

    def __init__(self, registry: TemplateRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> TemplateRegistry:
        return self._registry

    def resolve(self, layout: str, page: str) -> ComposedTemplate:
        """Look up the composition for (*layout*, *page*).

        Raises ``TemplateLookupError`` when the pair was never composed.
        Never falls back to another page or layout.
        """
        key = TemplateKey.of(layout, page)
        composed = self._registry.lookup(key)
        if composed is None:
            logger.error("no composed template for %s", key)
            raise TemplateLookupError(key)
        return composed

    def render(
        self,
        layout: str,
        page: str,
        data: Mapping[str, Any] | None = None,
        *,
        status: int = 200,
    ) -> StreamingResponse:
        """Render (*layout*, *page*) as a streaming HTML response.

        The lookup happens eagerly, so a missing pair fails before any
        response is started. Execution happens lazily as the sender
        pulls chunks.
        """
        composed = self.resolve(layout, page)
        return StreamingResponse(
            chunks=_stream(composed, dict(data or {})),
            status=status,
            content_type=HTML,
        )

    def render_to_string(
        self,
        layout: str,
        page: str,
        data: Mapping[str, Any] | None = None,
    ) -> str:
        """Render (*layout*, *page*) fully into a string.

        Raises ``TemplateLookupError`` for an absent pair and
        ``TemplateRenderError`` when the template fails while executing.
        """
        composed = self.resolve(layout, page)
        try:
            return composed.template.render(dict(data or {}))
        except Exception as exc:
            detail = exc.format_compact() if hasattr(exc, "format_compact") else str(exc)
            raise TemplateRenderError(composed.key, detail) from exc


def _stream(composed: ComposedTemplate, context: dict[str, Any]) -> Iterator[str]:
    # Generator wrapper: render_stream isn't called until the sender starts iterating
    yield from composed.template.render_stream(context)
