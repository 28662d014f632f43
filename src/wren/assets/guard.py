"""Static asset guard.

Sits between asset routes and the ``FileServer``. Every request path is
canonicalized before the filesystem is touched, and only a path that
names an existing regular file inside the asset root is forwarded.
Everything else, including directories, raises ``NotFound`` so the
client gets the same response as for an unmatched route.

Checks, in order:

1. Strip leading separators and collapse ``.``/``..``/``//`` with
   ``posixpath.normpath``.
2. Reject a result that is absolute, is ``..`` or starts with ``../``.
3. Resolve symlinks and require the target to stay inside the root.
4. ``stat`` the target: missing or a directory is ``NotFound``.

The stat runs on every request; nothing is cached, so files added or
removed on disk are reflected immediately.
"""

import logging
import posixpath
import stat
from pathlib import Path

from wren.assets.files import FileServer
from wren.errors import NotFound
from wren.http.response import Response

logger = logging.getLogger("wren.assets")


def canonicalize(relative: str) -> str | None:
    """Canonical form of a request-relative asset path.

    Returns ``None`` when the path would climb out of the root. An empty
    or root path canonicalizes to ``"."``.
    """
    cleaned = posixpath.normpath(relative.replace("\\", "/").lstrip("/"))
    if posixpath.isabs(cleaned) or cleaned == ".." or cleaned.startswith("../"):
        return None
    if "\x00" in cleaned:
        return None
    return cleaned


class AssetGuard:
    """Forward only existing regular files under *root* to a FileServer.

    Usage::

        guard = AssetGuard("./public", FileServer("./public"))

        @app.route("/static/{path:path}")
        async def assets(path: str = ""):
            return await guard(path)
    """

    __slots__ = ("_files", "_root")

    def __init__(self, root: str | Path, file_server: FileServer) -> None:
        self._root = Path(root).resolve()
        self._files = file_server

    @property
    def root(self) -> Path:
        return self._root

    async def __call__(self, relative: str) -> Response:
        """Serve the file at *relative* under the root, or raise ``NotFound``."""
        cleaned = canonicalize(relative)
        if cleaned is None:
            logger.warning("rejected asset path escaping root: %r", relative)
            raise NotFound

        target = (self._root / cleaned).resolve()
        if not target.is_relative_to(self._root):
            logger.warning("rejected asset path resolving outside root: %r", relative)
            raise NotFound

        try:
            mode = target.stat().st_mode
        except OSError:
            raise NotFound from None

        if not stat.S_ISREG(mode):
            # Directories never reach the file server: no index, no listing
            raise NotFound

        return await self._files.serve(target.relative_to(self._root).as_posix())
