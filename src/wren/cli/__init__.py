"""Wren CLI — serve the site and inspect its templates.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"

Configuration comes from the environment (``AppConfig.from_env()``);
flags override individual fields.
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren — a small templated site with a guarded static file server.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Build the templates and start the server")
    run_parser.add_argument("--host", default=None, help="Bind host address (HTTP_HOST)")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number (HTTP_PORT)")
    run_parser.add_argument("--debug", action="store_true", help="Show error details in responses")

    # -- wren check -------------------------------------------------------
    check_parser = subparsers.add_parser(
        "check", help="Compose every layout × page pair and list the results"
    )
    check_parser.add_argument(
        "--template-dir", default=None, help="Template directory (TEMPLATE_DIR)"
    )

    # -- wren render ------------------------------------------------------
    render_parser = subparsers.add_parser("render", help="Render one composed template to stdout")
    render_parser.add_argument("layout", help="Layout name, e.g. main")
    render_parser.add_argument("page", help="Page name, e.g. home")
    render_parser.add_argument(
        "--template-dir", default=None, help="Template directory (TEMPLATE_DIR)"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wren.cli._run import run_server

        run_server(args)
    elif args.command == "check":
        from wren.cli._check import run_check

        run_check(args)
    elif args.command == "render":
        from wren.cli._render import run_render

        run_render(args)
