"""Application configuration.

AppConfig is a frozen dataclass and cannot change after creation.
``AppConfig.from_env()`` reads the process environment once at startup.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from wren.errors import ConfigurationError

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True, slots=True)
class EmailConfig:
    """Outbound mail transport settings."""

    host: str = ""
    port: int = 587
    secure: bool = False
    user: str = ""
    password: str = field(default="", repr=False)
    sender: str = ""


@dataclass(frozen=True, slots=True)
class NotifyConfig:
    """Third-party notification endpoint."""

    url: str = ""
    x_api_key: str = field(default="", repr=False)


@dataclass(frozen=True, slots=True)
class CaptchaConfig:
    """Cloudflare Turnstile keys."""

    site_key: str = ""
    secret_key: str = field(default="", repr=False)


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, static_url="/")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    base_url: str = "http://localhost"

    # Templates
    template_dir: str | Path = "templates"
    layouts_dir: str = "layouts"
    pages_dir: str = "pages"
    partials_dir: str = "partials"
    default_layout: str = "main"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Static files
    static_dir: str | Path = "public"
    static_url: str = "/static"
    cache_control: str = "public, max-age=3600"

    # Logging
    log_level: str = "info"
    log_format: str = "text"

    # Site
    admin_email: str = ""
    email: EmailConfig = field(default_factory=EmailConfig)
    notify: NotifyConfig = field(default_factory=NotifyConfig)
    captcha: CaptchaConfig = field(default_factory=CaptchaConfig)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Build a config from environment variables.

        Unset variables fall back to their defaults. Malformed integers or
        booleans raise ``ConfigurationError`` naming the variable.
        """
        env = _Env(os.environ if environ is None else environ)
        return cls(
            host=env.get_string("HTTP_HOST", "127.0.0.1"),
            port=env.get_int("HTTP_PORT", 80),
            debug=env.get_bool("APP_DEBUG", False),
            base_url=env.get_string("BASE_URL", "http://localhost"),
            template_dir=env.get_string("TEMPLATE_DIR", "templates"),
            static_dir=env.get_string("STATIC_DIR", "public"),
            static_url=env.get_string("STATIC_URL", "/static"),
            log_level=env.get_string("LOG_LEVEL", "info"),
            log_format=env.get_string("LOG_FORMAT", "text"),
            admin_email=env.get_string("ADMIN_EMAIL", ""),
            email=EmailConfig(
                host=env.get_string("EMAIL_HOST", ""),
                port=env.get_int("EMAIL_PORT", 587),
                secure=env.get_bool("EMAIL_SECURE", False),
                user=env.get_string("EMAIL_USER", ""),
                password=env.get_string("EMAIL_PASSWORD", ""),
                sender=env.get_string("EMAIL_FROM", ""),
            ),
            notify=NotifyConfig(
                url=env.get_string("NOTIFY_URL", ""),
                x_api_key=env.get_string("NOTIFY_X_API_KEY", ""),
            ),
            captcha=CaptchaConfig(
                site_key=env.get_string("CLOUDFLARE_TURNSTILE_SITE_KEY", ""),
                secret_key=env.get_string("CLOUDFLARE_TURNSTILE_SECRET_KEY", ""),
            ),
        )


class _Env:
    """Typed reads over an environment mapping."""

    __slots__ = ("_environ",)

    def __init__(self, environ: Mapping[str, str]) -> None:
        self._environ = environ

    def get_string(self, key: str, default: str) -> str:
        return self._environ.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        value = self._environ.get(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            msg = f"{key} must be an integer, got {value!r}"
            raise ConfigurationError(msg) from None

    def get_bool(self, key: str, default: bool) -> bool:
        value = self._environ.get(key)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
        msg = f"{key} must be a boolean (true/false), got {value!r}"
        raise ConfigurationError(msg)
