"""Kida environment setup.

Creates the single kida Environment the registry compiles every fragment
in. File fragments (layouts, pages, partials) come from the template
directory; the per-pair compositions come from an in-memory loader that
is consulted first.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from kida import ChoiceLoader, DictLoader, Environment, FileSystemLoader

from wren.config import AppConfig


def template_globals(config: AppConfig) -> dict[str, Any]:
    """Site-wide values every template can reference."""
    return {
        "base_url": config.base_url.rstrip("/"),
        "admin_email": config.admin_email,
        "static_url": config.static_url.rstrip("/"),
        "current_year": datetime.now(UTC).year,
    }


def create_environment(
    config: AppConfig,
    composed: Mapping[str, str],
    globals_: Mapping[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment for the registry build.

    *composed* maps private template names to their generated source.
    The environment never reloads from disk: the registry built on top
    of it is immutable for the lifetime of the app.
    """
    loader = ChoiceLoader(
        [
            DictLoader(dict(composed)),
            FileSystemLoader(str(config.template_dir)),
        ]
    )
    env = Environment(
        loader=loader,
        autoescape=config.autoescape,
        auto_reload=False,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )

    for name, value in template_globals(config).items():
        env.add_global(name, value)
    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env
