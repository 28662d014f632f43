"""Shared config loading for CLI commands."""

import argparse
import sys
from dataclasses import replace

from wren.config import AppConfig
from wren.errors import ConfigurationError
from wren.logs import configure_logging


def load_config(args: argparse.Namespace) -> AppConfig:
    """Read the environment, apply CLI overrides, and set up logging.

    Exits with status 1 on invalid configuration.
    """
    try:
        config = AppConfig.from_env()
        overrides = {
            field: value
            for field in ("host", "port", "template_dir")
            if (value := getattr(args, field, None)) is not None
        }
        if getattr(args, "debug", False):
            overrides["debug"] = True
        config = replace(config, **overrides)
        configure_logging(config.log_level, config.log_format)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return config
