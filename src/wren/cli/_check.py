"""``wren check`` — compose every template pair and report.

Prints one line per composed (layout, page) key. Exits with status 1 if
any fragment fails to load or compile.
"""

import argparse
import sys

from wren.cli._config import load_config
from wren.errors import TemplateBuildError
from wren.templating.registry import build_registry


def run_check(args: argparse.Namespace) -> None:
    """Build the registry and list its keys."""
    config = load_config(args)
    try:
        registry = build_registry(config)
    except TemplateBuildError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    for key in registry:
        print(f"  {key.layout:<16} {key.page}")
    print(
        f"{len(registry)} templates "
        f"({len(registry.layouts)} layouts × {len(registry.pages)} pages, "
        f"{len(registry.partials)} partials)"
    )
