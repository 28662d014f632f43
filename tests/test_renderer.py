"""Tests for wren.templating.renderer — lookup and execution contract."""

import pytest

from wren.errors import HTTPError, TemplateLookupError, TemplateRenderError
from wren.http.response import StreamingResponse
from wren.templating.keys import TemplateKey
from wren.templating.registry import build_registry
from wren.templating.renderer import TemplateRenderer


def _explode() -> str:
    msg = "boom"
    raise RuntimeError(msg)


@pytest.fixture
def renderer(template_dir, config) -> TemplateRenderer:
    (template_dir / "pages" / "greet.html").write_text(
        "{% block content %}Hello, {{ name }}!{% end %}"
    )
    (template_dir / "pages" / "explode.html").write_text(
        "{% block content %}before {{ explode() }}{% end %}"
    )
    return TemplateRenderer(build_registry(config, {"explode": _explode}))


class TestRender:
    def test_returns_streaming_html(self, renderer) -> None:
        response = renderer.render("main", "home")
        assert isinstance(response, StreamingResponse)
        assert response.status == 200
        assert response.content_type.startswith("text/html")

    def test_chunks_join_to_full_page(self, renderer) -> None:
        response = renderer.render("main", "home")
        html = "".join(response.chunks)
        assert html == renderer.render_to_string("main", "home")
        assert "<h1>Welcome home</h1>" in html

    def test_status_is_fixed_up_front(self, renderer) -> None:
        response = renderer.render("main", "not-found", status=404)
        assert response.status == 404

    def test_data_reaches_template(self, renderer) -> None:
        html = "".join(renderer.render("plain", "greet", {"name": "wren"}).chunks)
        assert html == '<div class="plain">Hello, wren!</div>'

    def test_data_is_escaped(self, renderer) -> None:
        html = renderer.render_to_string("plain", "greet", {"name": "<b>"})
        assert "&lt;b&gt;" in html

    def test_missing_pair_raises_lookup_error(self, renderer) -> None:
        with pytest.raises(TemplateLookupError) as exc_info:
            renderer.render("main", "missing")
        assert exc_info.value.status == 500
        assert exc_info.value.key == TemplateKey("main", "missing")
        assert isinstance(exc_info.value, HTTPError)

    def test_missing_layout_never_falls_back(self, renderer) -> None:
        with pytest.raises(TemplateLookupError):
            renderer.render("missing", "home")

    def test_execution_is_lazy(self, renderer) -> None:
        response = renderer.render("plain", "explode")
        with pytest.raises(Exception):
            "".join(response.chunks)


class TestRenderToString:
    def test_renders(self, renderer) -> None:
        html = renderer.render_to_string("main", "privacy-policy")
        assert "<h1>Privacy Policy</h1>" in html

    def test_execution_failure_is_distinct(self, renderer) -> None:
        with pytest.raises(TemplateRenderError) as exc_info:
            renderer.render_to_string("plain", "explode")
        assert exc_info.value.key == TemplateKey("plain", "explode")
        assert not isinstance(exc_info.value, HTTPError)

    def test_lookup_failure(self, renderer) -> None:
        with pytest.raises(TemplateLookupError):
            renderer.render_to_string("plain", "missing")
