"""Compiled router with trie-based path matching.

Each route path is split into segments and inserted into a trie. Matching
walks the trie preferring, at every level, a static child over a
parameter child over a catch-all edge, so explicit routes always win over
``{path:path}`` mounts such as the static asset guard.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from wren.errors import ConfigurationError, MethodNotAllowed, NotFound
from wren.routing.params import CONVERTERS
from wren.routing.route import PathSegment, Route, RouteMatch

_PARAM_RE = re.compile(r"^\{(\w+)(?::(\w+))?\}$")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/"                   -> []
        "/healthz"            -> [PathSegment("healthz")]
        "/static/{path:path}" -> [PathSegment("static"), PathSegment("{path:path}", ...)]
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = f"Route {path!r} uses <param> syntax; wren expects {{param}}."
            raise ConfigurationError(msg)
        match = _PARAM_RE.match(part)
        if match is None:
            segments.append(PathSegment(value=part))
            continue
        name, param_type = match.group(1), match.group(2) or "str"
        if param_type not in CONVERTERS:
            msg = f"Route {path!r} uses unknown converter {param_type!r}."
            raise ConfigurationError(msg)
        segments.append(
            PathSegment(value=part, is_param=True, param_name=name, param_type=param_type)
        )
    return segments


@dataclass(slots=True)
class _Node:
    """A trie node. Mutable during compilation only."""

    children: dict[str, _Node] = field(default_factory=dict)
    param: _ParamEdge | None = None
    catch_all: _CatchAll | None = None
    routes: dict[str, Route] = field(default_factory=dict)


@dataclass(slots=True)
class _ParamEdge:
    name: str
    regex: re.Pattern[str]
    node: _Node


@dataclass(slots=True)
class _CatchAll:
    """Consumes every remaining segment."""

    name: str
    routes: dict[str, Route] = field(default_factory=dict)


class Router:
    """Compiled router with trie-based path matching.

    Usage::

        router = Router()
        router.add(Route("/healthz", handler, frozenset({"GET"})))
        router.add(Route("/static/{path:path}", guard, frozenset({"GET"})))
        router.compile()
        match = router.match("GET", "/static/app.css")
    """

    __slots__ = ("_compiled", "_root", "_routes")

    def __init__(self) -> None:
        self._root = _Node()
        self._routes: list[Route] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Add a route. Must be called before ``compile()``."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        node = self._root
        for seg in parse_path(route.path):
            if seg.param_type == "path":
                if node.catch_all is None:
                    node.catch_all = _CatchAll(name=seg.param_name or "path")
                self._bind(node.catch_all.routes, route)
                return
            if seg.is_param:
                if node.param is None:
                    node.param = _ParamEdge(
                        name=seg.param_name or "",
                        regex=re.compile(f"^{CONVERTERS[seg.param_type]}$"),
                        node=_Node(),
                    )
                node = node.param.node
            else:
                node = node.children.setdefault(seg.value, _Node())

        self._bind(node.routes, route)

    def _bind(self, table: dict[str, Route], route: Route) -> None:
        for method in route.methods:
            if method in table:
                msg = f"Duplicate route: {method} {route.path!r}"
                raise ConfigurationError(msg)
            table[method] = route
        self._routes.append(route)

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request method and path against the compiled routes.

        Raises ``NotFound`` if no route matches the path, and
        ``MethodNotAllowed`` if the path matches but the method doesn't.
        ``HEAD`` falls back to the ``GET`` route; the sender drops the body.
        """
        parts = [p for p in path.split("/") if p]
        found = self._walk(self._root, parts, 0, {})
        if found is None:
            raise NotFound(f"No route matches {method} {path!r}")

        table, params = found
        route = table.get(method)
        if route is None and method == "HEAD":
            route = table.get("GET")
        if route is None:
            raise MethodNotAllowed(_allowed_methods(table))
        return RouteMatch(route=route, path_params=params)

    def _walk(
        self,
        node: _Node,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[dict[str, Route], dict[str, str]] | None:
        if index == len(parts):
            if node.routes:
                return node.routes, params
            return None

        part = parts[index]

        child = node.children.get(part)
        if child is not None:
            found = self._walk(child, parts, index + 1, params)
            if found is not None:
                return found

        if node.param is not None and node.param.regex.match(part):
            found = self._walk(
                node.param.node, parts, index + 1, {**params, node.param.name: part}
            )
            if found is not None:
                return found

        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            return node.catch_all.routes, {**params, node.catch_all.name: remaining}

        return None


def _allowed_methods(table: dict[str, Route]) -> frozenset[str]:
    allowed = set(table)
    if "GET" in allowed:
        allowed.add("HEAD")
    return frozenset(allowed)
