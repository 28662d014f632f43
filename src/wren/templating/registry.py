"""Template registry — every layout × page composition, compiled once.

The registry is built in one pass at startup:

1. Discover ``*.html`` fragments in the layouts, pages, and partials
   directories (sorted, so builds are deterministic).
2. For every (layout, page) pair, generate a composition whose root is
   the layout: ``{% extends "layouts/<layout>.html" %}`` followed by the
   page source, so the page's blocks fill the layout's slots.
3. Compile every partial, every layout, and every composition. Any
   failure aborts the build with ``TemplateBuildError``; no pair is ever
   silently left out.

After the build the registry is a read-only mapping. Concurrent lookups
need no locking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from kida import Environment

from wren.config import AppConfig
from wren.errors import TemplateBuildError
from wren.templating.environment import create_environment
from wren.templating.keys import TEMPLATE_SUFFIX, TemplateKey, fragment_name

if TYPE_CHECKING:
    from kida.template.core import Template

logger = logging.getLogger("wren.templating")

# Private namespace for generated compositions in the in-memory loader
_COMPOSED_PREFIX = "@composed"


@dataclass(frozen=True, slots=True)
class Fragment:
    """A template fragment file discovered on disk.

    Attributes:
        name: File stem (``main``, ``home``, ``not-found``).
        template_name: Loader name relative to the template dir
            (``layouts/main.html``).
        path: Absolute file path.
    """

    name: str
    template_name: str
    path: Path


@dataclass(frozen=True, slots=True)
class ComposedTemplate:
    """One compiled layout × page composition.

    ``template`` renders the layout as the root; the page's blocks fill
    the layout's slots and every partial is available by include.
    """

    key: TemplateKey
    template: Template
    layout: Fragment
    page: Fragment
    partials: tuple[Fragment, ...]


class TemplateRegistry:
    """Immutable mapping of ``TemplateKey`` to ``ComposedTemplate``.

    Usage::

        registry = build_registry(config)
        composed = registry.get("main", "home")
    """

    __slots__ = ("_entries", "layouts", "pages", "partials")

    def __init__(
        self,
        entries: dict[TemplateKey, ComposedTemplate],
        *,
        layouts: tuple[Fragment, ...],
        pages: tuple[Fragment, ...],
        partials: tuple[Fragment, ...],
    ) -> None:
        self._entries = MappingProxyType(dict(entries))
        self.layouts = layouts
        self.pages = pages
        self.partials = partials

    def get(self, layout: str, page: str) -> ComposedTemplate | None:
        """Return the composition for (*layout*, *page*), or ``None``."""
        return self._entries.get(TemplateKey.of(layout, page))

    def lookup(self, key: TemplateKey) -> ComposedTemplate | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[TemplateKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return (
            f"TemplateRegistry(layouts={len(self.layouts)}, pages={len(self.pages)}, "
            f"partials={len(self.partials)})"
        )


def composed_name(key: TemplateKey) -> str:
    """Private loader name of the composition for *key*."""
    return f"{_COMPOSED_PREFIX}/{key.layout}/{key.page}{TEMPLATE_SUFFIX}"


def discover_fragments(template_dir: Path, subdir: str) -> tuple[Fragment, ...]:
    """List ``*.html`` fragments in ``template_dir/subdir``, sorted by name.

    Raises ``TemplateBuildError`` if the directory does not exist.
    """
    directory = template_dir / subdir
    if not directory.is_dir():
        msg = f"Template directory not found: {directory}"
        raise TemplateBuildError(msg, directory)

    return tuple(
        Fragment(
            name=fragment_name(path.name),
            template_name=f"{subdir}/{path.name}",
            path=path,
        )
        for path in sorted(directory.glob(f"*{TEMPLATE_SUFFIX}"))
        if path.is_file()
    )


def build_registry(
    config: AppConfig,
    globals_: dict[str, Any] | None = None,
) -> TemplateRegistry:
    """Discover fragments and compile every layout × page composition.

    Raises ``TemplateBuildError`` on a missing directory, an unreadable
    file, or a template that fails to compile.
    """
    template_dir = Path(config.template_dir).resolve()
    layouts = discover_fragments(template_dir, config.layouts_dir)
    pages = discover_fragments(template_dir, config.pages_dir)
    partials = discover_fragments(template_dir, config.partials_dir)

    sources: dict[str, str] = {}
    pairs: list[tuple[TemplateKey, Fragment, Fragment]] = []
    page_sources = {page.name: _read(page) for page in pages}
    for layout in layouts:
        for page in pages:
            key = TemplateKey(layout.name, page.name)
            # Extends on the page's first line keeps error line numbers aligned
            sources[composed_name(key)] = (
                f'{{% extends "{layout.template_name}" %}}' + page_sources[page.name]
            )
            pairs.append((key, layout, page))

    env = create_environment(replace(config, template_dir=template_dir), sources, globals_)

    for fragment in (*partials, *layouts):
        _compile(env, fragment.template_name, fragment.path)

    entries: dict[TemplateKey, ComposedTemplate] = {}
    for key, layout, page in pairs:
        entries[key] = ComposedTemplate(
            key=key,
            template=_compile(env, composed_name(key), page.path),
            layout=layout,
            page=page,
            partials=partials,
        )

    logger.info(
        "registry built: %d layouts x %d pages (%d partials) -> %d templates",
        len(layouts),
        len(pages),
        len(partials),
        len(entries),
    )
    return TemplateRegistry(entries, layouts=layouts, pages=pages, partials=partials)


def _read(fragment: Fragment) -> str:
    try:
        return fragment.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Cannot read template {fragment.path}: {exc}"
        raise TemplateBuildError(msg, fragment.path) from exc


def _compile(env: Environment, name: str, path: Path) -> Template:
    try:
        return env.get_template(name)
    except Exception as exc:
        detail = exc.format_compact() if hasattr(exc, "format_compact") else str(exc)
        msg = f"Template {path} failed to compile:\n{detail}"
        raise TemplateBuildError(msg, path) from exc
