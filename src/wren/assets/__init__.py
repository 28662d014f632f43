"""Static assets.

    FileServer -- Serve files (and, unguarded, index pages and listings)
    AssetGuard -- Forward only existing regular files under the root
"""

from wren.assets.files import FileServer
from wren.assets.guard import AssetGuard, canonicalize

__all__ = ["AssetGuard", "FileServer", "canonicalize"]
