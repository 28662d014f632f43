"""``wren render`` — render one composed template to stdout."""

import argparse
import sys

from wren.cli._config import load_config
from wren.errors import TemplateBuildError, TemplateLookupError, TemplateRenderError
from wren.templating.registry import build_registry
from wren.templating.renderer import TemplateRenderer


def run_render(args: argparse.Namespace) -> None:
    """Render ``args.layout`` × ``args.page`` with no data."""
    config = load_config(args)
    try:
        renderer = TemplateRenderer(build_registry(config))
        html = renderer.render_to_string(args.layout, args.page)
    except (TemplateBuildError, TemplateLookupError, TemplateRenderError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    sys.stdout.write(html)
