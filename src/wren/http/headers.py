"""Immutable, case-insensitive request headers.

Built once from the ASGI scope's raw byte pairs. Names are lower-cased
and decoded at construction so lookups are plain dict reads.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Case-insensitive view over the request's header list.

    ``headers["Content-Type"]`` returns the first value sent for that
    name.
    """

    __slots__ = ("_index",)

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        index: dict[str, str] = {}
        for name, value in raw:
            index.setdefault(name.decode("latin-1").lower(), value.decode("latin-1"))
        self._index = index

    def __getitem__(self, key: str) -> str:
        return self._index[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Headers({self._index!r})"

