"""Shared fixtures: a small site tree on disk under ``tmp_path``."""

import logging
from pathlib import Path

import pytest

from wren.config import AppConfig

LAYOUTS = {
    "main.html": (
        "<html><head><title>{% block title %}Site{% end %}</title></head>"
        '<body>{% include "partials/header.html" %}'
        "<main>{% block content %}{% end %}</main>"
        '{% include "partials/footer.html" %}</body></html>'
    ),
    "plain.html": "<div class=\"plain\">{% block content %}{% end %}</div>",
}

PAGES = {
    "home.html": "{% block title %}Home{% end %}{% block content %}<h1>Welcome home</h1>{% end %}",
    "healthz.html": "{% block content %}<h1>ok</h1>{% end %}",
    "not-found.html": "{% block content %}<h1>Page not found</h1>{% end %}",
    "privacy-policy.html": "{% block content %}<h1>Privacy Policy</h1>{% end %}",
    "terms-of-service.html": "{% block content %}<h1>Terms of Service</h1>{% end %}",
}

PARTIALS = {
    "header.html": "<header>{{ base_url }}</header>",
    "footer.html": "<footer>{{ admin_email }}</footer>",
}


def write_tree(root: Path, files: dict[str, str]) -> None:
    root.mkdir(parents=True, exist_ok=True)
    for name, source in files.items():
        (root / name).write_text(source, encoding="utf-8")


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """templates/{layouts,pages,partials} with two layouts and five pages."""
    templates = tmp_path / "templates"
    write_tree(templates / "layouts", LAYOUTS)
    write_tree(templates / "pages", PAGES)
    write_tree(templates / "partials", PARTIALS)
    return templates


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """public/ with a few assets, a subdirectory, and a secret one level up."""
    public = tmp_path / "public"
    public.mkdir()
    (public / "app.css").write_text("body { color: red; }")
    (public / "robots.txt").write_text("User-agent: *\nAllow: /\n")
    (public / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    (public / "index.html").write_text("<h1>index must never be served</h1>")
    css = public / "css"
    css.mkdir()
    (css / "main.css").write_text("h1 { font-size: 2em; }")
    (css / "index.html").write_text("<h1>nested index</h1>")

    (tmp_path / "secret.txt").write_text("top secret")
    return public


@pytest.fixture
def config(template_dir: Path, static_dir: Path) -> AppConfig:
    return AppConfig(
        template_dir=template_dir,
        static_dir=static_dir,
        base_url="https://example.test",
        admin_email="admin@example.test",
    )


@pytest.fixture(autouse=True)
def _reset_wren_logging():
    """Drop handlers installed by ``configure_logging`` between tests."""
    yield
    logger = logging.getLogger("wren")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
