"""Tests for wren.config — AppConfig and environment parsing."""

import pytest

from wren.config import AppConfig, EmailConfig
from wren.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8000
        assert cfg.debug is False
        assert cfg.template_dir == "templates"
        assert cfg.static_dir == "public"
        assert cfg.static_url == "/static"
        assert cfg.default_layout == "main"
        assert cfg.autoescape is True

    def test_frozen(self) -> None:
        cfg = AppConfig()
        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_secrets_hidden_from_repr(self) -> None:
        cfg = AppConfig(email=EmailConfig(password="hunter2"))
        assert "hunter2" not in repr(cfg)


class TestFromEnv:
    def test_empty_environment(self) -> None:
        cfg = AppConfig.from_env({})

        assert cfg.port == 80
        assert cfg.base_url == "http://localhost"
        assert cfg.email.port == 587
        assert cfg.email.secure is False
        assert cfg.captcha.site_key == ""

    def test_reads_variables(self) -> None:
        cfg = AppConfig.from_env(
            {
                "HTTP_HOST": "0.0.0.0",
                "HTTP_PORT": "8080",
                "APP_DEBUG": "true",
                "BASE_URL": "https://example.test",
                "TEMPLATE_DIR": "/srv/templates",
                "STATIC_DIR": "/srv/public",
                "STATIC_URL": "/",
                "LOG_LEVEL": "debug",
                "LOG_FORMAT": "json",
                "ADMIN_EMAIL": "admin@example.test",
                "EMAIL_HOST": "smtp.example.test",
                "EMAIL_PORT": "465",
                "EMAIL_SECURE": "yes",
                "EMAIL_USER": "mailer",
                "EMAIL_PASSWORD": "pw",
                "EMAIL_FROM": "noreply@example.test",
                "NOTIFY_URL": "https://notify.example.test",
                "NOTIFY_X_API_KEY": "key",
                "CLOUDFLARE_TURNSTILE_SITE_KEY": "site",
                "CLOUDFLARE_TURNSTILE_SECRET_KEY": "secret",
            }
        )

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 8080
        assert cfg.debug is True
        assert cfg.base_url == "https://example.test"
        assert cfg.template_dir == "/srv/templates"
        assert cfg.static_dir == "/srv/public"
        assert cfg.static_url == "/"
        assert cfg.log_level == "debug"
        assert cfg.log_format == "json"
        assert cfg.admin_email == "admin@example.test"
        assert cfg.email == EmailConfig(
            host="smtp.example.test",
            port=465,
            secure=True,
            user="mailer",
            password="pw",
            sender="noreply@example.test",
        )
        assert cfg.notify.url == "https://notify.example.test"
        assert cfg.notify.x_api_key == "key"
        assert cfg.captcha.site_key == "site"
        assert cfg.captcha.secret_key == "secret"

    def test_reads_process_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("HTTP_PORT", "9000")
        assert AppConfig.from_env().port == 9000

    @pytest.mark.parametrize("name", ["HTTP_PORT", "EMAIL_PORT"])
    def test_bad_integer(self, name: str) -> None:
        with pytest.raises(ConfigurationError, match=name):
            AppConfig.from_env({name: "eighty"})

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("off", False), ("", False)])
    def test_booleans(self, raw: str, expected: bool) -> None:
        assert AppConfig.from_env({"APP_DEBUG": raw}).debug is expected

    def test_bad_boolean(self) -> None:
        with pytest.raises(ConfigurationError, match="APP_DEBUG"):
            AppConfig.from_env({"APP_DEBUG": "maybe"})
