"""Tests for wren.cli — ``wren run``, ``wren check`` and ``wren render``."""

from unittest.mock import MagicMock, patch

import pytest

from wren.app import App
from wren.cli import main

_ENV = ("HTTP_HOST", "HTTP_PORT", "APP_DEBUG", "LOG_LEVEL", "LOG_FORMAT", "STATIC_URL")


@pytest.fixture(autouse=True)
def site_env(monkeypatch: pytest.MonkeyPatch, template_dir, static_dir) -> None:
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TEMPLATE_DIR", str(template_dir))
    monkeypatch.setenv("STATIC_DIR", str(static_dir))
    monkeypatch.setenv("LOG_LEVEL", "error")


class TestNoCommand:
    def test_prints_help(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "wren" in capsys.readouterr().out


class TestRun:
    @patch("wren.server.serve.run_server")
    def test_env_host_and_port(self, mock_server: MagicMock, monkeypatch) -> None:
        monkeypatch.setenv("HTTP_PORT", "8080")
        main(["run"])
        app, host, port = mock_server.call_args[0]
        assert isinstance(app, App)
        assert host == "127.0.0.1"
        assert port == 8080

    @patch("wren.server.serve.run_server")
    def test_default_port_is_80(self, mock_server: MagicMock) -> None:
        main(["run"])
        assert mock_server.call_args[0][2] == 80

    @patch("wren.server.serve.run_server")
    def test_flag_overrides(self, mock_server: MagicMock) -> None:
        main(["run", "--host", "0.0.0.0", "--port", "3000", "--debug"])
        app, host, port = mock_server.call_args[0]
        assert (host, port) == ("0.0.0.0", 3000)
        assert app.config.debug is True

    @patch("wren.server.serve.run_server")
    def test_templates_built_before_listening(self, mock_server: MagicMock) -> None:
        main(["run"])
        app = mock_server.call_args[0][0]
        assert app._frozen
        assert len(app.registry) == 10

    @patch("wren.server.serve.run_server")
    def test_broken_template_exits_1(self, mock_server: MagicMock, template_dir) -> None:
        (template_dir / "pages" / "broken.html").write_text("{% block content %}{% if %}")
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 1
        mock_server.assert_not_called()

    @patch("wren.server.serve.run_server")
    def test_bad_port_exits_1(self, mock_server: MagicMock, monkeypatch, capsys) -> None:
        monkeypatch.setenv("HTTP_PORT", "eighty")
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 1
        assert "HTTP_PORT" in capsys.readouterr().err
        mock_server.assert_not_called()

    @patch("wren.server.serve.run_server", side_effect=OSError("address in use"))
    def test_listener_failure_exits_1(self, mock_server: MagicMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run"])
        assert exc_info.value.code == 1


class TestCheck:
    def test_lists_every_pair(self, capsys) -> None:
        main(["check"])
        out = capsys.readouterr().out
        assert "main" in out
        assert "terms-of-service" in out
        assert "10 templates (2 layouts × 5 pages, 2 partials)" in out

    def test_template_dir_flag(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["check", "--template-dir", str(tmp_path / "missing")])
        assert exc_info.value.code == 1
        assert "Template directory not found" in capsys.readouterr().err

    def test_broken_template_exits_1(self, template_dir, capsys) -> None:
        (template_dir / "partials" / "broken.html").write_text("{% for %}")
        with pytest.raises(SystemExit) as exc_info:
            main(["check"])
        assert exc_info.value.code == 1
        assert "broken.html" in capsys.readouterr().err


class TestRender:
    def test_renders_to_stdout(self, capsys) -> None:
        main(["render", "main", "home"])
        out = capsys.readouterr().out
        assert out.startswith("<html>")
        assert "<h1>Welcome home</h1>" in out

    def test_missing_pair_exits_1(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["render", "main", "missing"])
        assert exc_info.value.code == 1
        assert "missing" in capsys.readouterr().err
