"""Generic static file server.

Serves regular files from a directory with a guessed content type and a
``Cache-Control`` header. For a directory it serves the index file or,
failing that, an HTML listing of the directory's entries.

Only the ``AssetGuard`` is wired into the site. It never forwards a
directory, so the index and listing branches stay unreachable over HTTP.
"""

import html
import mimetypes
from pathlib import Path

import anyio

from wren.errors import Forbidden, NotFound
from wren.http.response import Response

# Types browsers expect where mimetypes picks a different registration
CONTENT_TYPES = {
    ".ico": "image/x-icon",
}


class FileServer:
    """Serve files beneath *root*.

    Usage::

        files = FileServer("./public", cache_control="no-cache")
        response = await files.serve("css/app.css")
    """

    __slots__ = ("_cache_control", "_index", "_listing", "_root")

    def __init__(
        self,
        root: str | Path,
        *,
        cache_control: str = "public, max-age=3600",
        index: str = "index.html",
        listing: bool = True,
    ) -> None:
        self._root = Path(root).resolve()
        self._cache_control = cache_control
        self._index = index
        self._listing = listing

    @property
    def root(self) -> Path:
        return self._root

    async def serve(self, relative: str) -> Response:
        """Serve ``root / relative``.

        Raises ``NotFound`` if nothing servable exists there, and
        ``Forbidden`` if the file exists but cannot be read.
        """
        path = self._root / relative if relative else self._root

        if path.is_dir():
            index_path = path / self._index
            if index_path.is_file():
                return await self._serve_file(index_path)
            if self._listing:
                return self._list_directory(path, relative)
            raise NotFound

        if not path.is_file():
            raise NotFound

        return await self._serve_file(path)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _serve_file(self, path: Path) -> Response:
        content_type = CONTENT_TYPES.get(path.suffix.lower())
        if content_type is None:
            content_type, _ = mimetypes.guess_type(path.name)
        if content_type is None:
            content_type = "application/octet-stream"
        elif content_type.startswith("text/"):
            content_type = f"{content_type}; charset=utf-8"

        # Read on a worker thread so large assets don't stall the event loop
        try:
            body = await anyio.Path(path).read_bytes()
        except FileNotFoundError:
            # Removed after the caller checked it
            raise NotFound from None
        except PermissionError:
            raise Forbidden from None

        return Response(body=body, content_type=content_type).with_header(
            "Cache-Control", self._cache_control
        )

    def _list_directory(self, path: Path, relative: str) -> Response:
        title = html.escape("/" + relative.strip("/"))
        items = []
        for entry in sorted(path.iterdir(), key=lambda p: p.name):
            name = entry.name + ("/" if entry.is_dir() else "")
            items.append(f'<li><a href="{html.escape(name)}">{html.escape(name)}</a></li>')
        body = (
            f"<!DOCTYPE html><title>Index of {title}</title>"
            f"<h1>Index of {title}</h1><ul>{''.join(items)}</ul>"
        )
        return Response(body=body).with_header("Cache-Control", "no-cache")
