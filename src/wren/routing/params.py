"""Path parameter patterns for route segments like ``{slug}`` or ``{path:path}``."""

# Regex pattern for each supported converter
CONVERTERS: dict[str, str] = {
    "str": r"[^/]+",
    "int": r"\d+",
    "path": r".+",
}
