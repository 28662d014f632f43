"""Server bootstrap.

Starts a pounce ASGI server with the live wren App object. The app is
frozen (routes compiled, templates composed) before the listener binds,
so a broken template aborts startup instead of failing the first request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.app import App

logger = logging.getLogger("wren.server")


def run_server(app: App, host: str, port: int, *, workers: int = 1) -> None:
    """Start pounce with the given wren App.

    Pounce's ``run()`` takes an import string, but wren has a live
    ``App`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=workers, reload=False)
    logger.info("starting server on http://%s:%d", host, port)
    Server(config, app).run()
