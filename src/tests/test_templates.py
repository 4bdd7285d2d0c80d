"""Tests for the template registry."""

import pytest
from starlette.requests import Request

from tinywiki.core.errors import TemplateSetupError
from tinywiki.core.models import Page
from tinywiki.core.templates import (
    DEFAULT_TEMPLATES_DIR,
    TEMPLATE_NAMES,
    TemplateRegistry,
    load_templates,
)


def make_request(path: str = "/view/Test") -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": path,
        "query_string": b"",
        "headers": [],
        "app": None,
    }
    return Request(scope)


def write_templates(directory, **overrides):
    files = {
        "view.html": "<h1>{{ page.title }}</h1>{{ page.text }}",
        "edit.html": "<textarea>{{ page.text }}</textarea>",
        "index.html": "{% for t in titles %}{{ t }}{% endfor %}",
    }
    files.update(overrides)
    for name, content in files.items():
        if content is not None:
            (directory / name).write_text(content)


class TestLoadTemplates:
    def test_bundled_templates_load(self):
        registry = load_templates()
        assert isinstance(registry, TemplateRegistry)
        assert set(registry.names) == {"view", "edit", "index"}

    def test_default_directory_exists(self):
        for filename in TEMPLATE_NAMES.values():
            assert (DEFAULT_TEMPLATES_DIR / filename).is_file()

    def test_missing_directory(self, tmp_path):
        with pytest.raises(TemplateSetupError, match="not found"):
            load_templates(tmp_path / "nope")

    def test_missing_template(self, tmp_path):
        write_templates(tmp_path, **{"edit.html": None})
        with pytest.raises(TemplateSetupError, match="edit"):
            load_templates(tmp_path)

    def test_syntax_error(self, tmp_path):
        write_templates(tmp_path, **{"view.html": "{% if %}"})
        with pytest.raises(TemplateSetupError, match="view"):
            load_templates(tmp_path)

    def test_autoescape_always_on(self, tmp_path):
        write_templates(tmp_path)
        registry = load_templates(tmp_path)
        template = registry.env.from_string("{{ value }}")
        assert template.render(value="<b>") == "&lt;b&gt;"

    def test_names_are_read_only(self):
        registry = load_templates()
        with pytest.raises(TypeError):
            registry.names["view"] = "other.html"

    def test_app_title_global(self, tmp_path):
        write_templates(tmp_path)
        registry = load_templates(tmp_path, app_title="MyWiki")
        assert registry.env.globals["app_title"] == "MyWiki"


class TestRender:
    def test_render_view(self):
        registry = load_templates()
        resp = registry.render(make_request(), "view", page=Page(title="Test", body=b"Hello"))
        assert resp.status_code == 200
        body = resp.body.decode()
        assert "<h1>Test</h1>" in body
        assert "Hello" in body

    def test_render_escapes_body(self):
        registry = load_templates()
        page = Page(title="Test", body=b"<script>alert(1)</script>")
        resp = registry.render(make_request(), "view", page=page)
        body = resp.body.decode()
        assert "<script>" not in body
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in body

    def test_render_failure_is_500(self, tmp_path):
        write_templates(tmp_path, **{"view.html": "{{ page.missing.attr }}"})
        registry = load_templates(tmp_path)
        resp = registry.render(make_request(), "view", page=Page(title="Test"))
        assert resp.status_code == 500
        assert "missing" in resp.body.decode()
