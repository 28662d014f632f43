"""Routing — trie-based route table compiled once at startup.

Routes are registered while the app is being set up and frozen into an
immutable lookup structure before the first request.
"""

from wren.routing.route import Route, RouteMatch
from wren.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router"]
