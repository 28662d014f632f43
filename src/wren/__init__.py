"""Wren — a small ASGI front end for a templated informational site.

Pages are composed from layout, page and partial fragments into one kida
template per (layout, page) pair, all compiled before the first request.
Static assets are served only through a guard that refuses traversal,
symlink escapes and directories.

Basic usage::

    from wren.site import create_app

    app = create_app()   # AppConfig.from_env()
    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "Forbidden",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "Request",
    "Response",
    "StreamingResponse",
    "TemplateBuildError",
    "TemplateKey",
    "TemplateLookupError",
    "TemplateRenderError",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name in ("Response", "StreamingResponse"):
        from wren.http import response

        return getattr(response, name)

    if name == "TemplateKey":
        from wren.templating.keys import TemplateKey

        return TemplateKey

    if name in (
        "ConfigurationError",
        "Forbidden",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "TemplateBuildError",
        "TemplateLookupError",
        "TemplateRenderError",
        "WrenError",
    ):
        from wren import errors

        return getattr(errors, name)

    msg = f"module 'wren' has no attribute {name!r}"
    raise AttributeError(msg)
