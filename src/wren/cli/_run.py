"""``wren run`` — build the site and serve it with pounce.

Startup is ordered: config, then the template registry (fail-fast),
then the listener. Any startup failure is logged and exits with
status 1.
"""

import argparse
import logging

from wren.cli._config import load_config
from wren.errors import WrenError
from wren.site import create_app

logger = logging.getLogger("wren.app")


def run_server(args: argparse.Namespace) -> None:
    """Create the site app from the environment and start serving."""
    config = load_config(args)
    app = create_app(config)

    try:
        app.run()
    except WrenError as exc:
        logger.error("startup failed: %s", exc)
        raise SystemExit(1) from exc
    except OSError as exc:
        logger.error("listener failed on %s:%d: %s", config.host, config.port, exc)
        raise SystemExit(1) from exc
