"""Composite keys for composed templates."""

from __future__ import annotations

from dataclasses import dataclass

TEMPLATE_SUFFIX = ".html"


def fragment_name(name: str) -> str:
    """Strip a trailing ``.html`` so file names and bare names compare equal."""
    if name.endswith(TEMPLATE_SUFFIX):
        return name[: -len(TEMPLATE_SUFFIX)]
    return name


@dataclass(frozen=True, slots=True, order=True)
class TemplateKey:
    """A (layout, page) pair identifying one composed template.

    Kept as a pair rather than a joined string: ``("a_b", "c")`` and
    ``("a", "b_c")`` are distinct keys.
    """

    layout: str
    page: str

    @classmethod
    def of(cls, layout: str, page: str) -> TemplateKey:
        """Build a key from layout/page names, with or without ``.html``."""
        return cls(fragment_name(layout), fragment_name(page))

    def __str__(self) -> str:
        return f"{self.layout} × {self.page}"
