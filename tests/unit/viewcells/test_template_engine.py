"""Tests for the Jinja2 template engine adapter."""

import pytest
from markupsafe import Markup

from viewcells.exceptions import ErrorCode, MissingTemplateError
from viewcells.views.template_engine import Jinja2TemplateEngine


@pytest.fixture
def template_dirs(tmp_path):
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "greeting.html").write_text("first {{ name }}", encoding="utf-8")
    (second / "greeting.html").write_text("second {{ name }}", encoding="utf-8")
    (second / "only_second.html").write_text("only second", encoding="utf-8")
    return str(first), str(second)


class TestJinja2TemplateEngine:
    """Tests for Jinja2TemplateEngine.render_file."""

    def test_first_search_path_wins(self, template_dirs):
        engine = Jinja2TemplateEngine()

        assert engine.render_file("greeting.html", {"name": "cell"}, template_dirs) == "first cell"

    def test_falls_through_to_later_paths(self, template_dirs):
        engine = Jinja2TemplateEngine()

        assert engine.render_file("only_second.html", {}, template_dirs) == "only second"

    def test_absolute_path_ignores_search_paths(self, template_dirs, tmp_path):
        engine = Jinja2TemplateEngine()
        path = tmp_path / "second" / "greeting.html"

        assert engine.render_file(str(path), {"name": "x"}, template_dirs[:1]) == "second x"

    def test_missing_template_raises(self, template_dirs):
        engine = Jinja2TemplateEngine()

        with pytest.raises(MissingTemplateError) as exc_info:
            engine.render_file("nope.html", {}, template_dirs)

        assert exc_info.value.code == ErrorCode.MISSING_TEMPLATE
        assert exc_info.value.template == "nope.html"
        assert exc_info.value.search_paths == template_dirs

    def test_autoescape_on_by_default(self, template_dirs):
        engine = Jinja2TemplateEngine()

        assert engine.render_file("greeting.html", {"name": "<b>"}, template_dirs) == "first &lt;b&gt;"

    def test_markup_is_not_escaped(self, template_dirs):
        engine = Jinja2TemplateEngine()

        assert engine.render_file("greeting.html", {"name": Markup("<b>")}, template_dirs) == "first <b>"

    def test_environment_reused_per_search_path_list(self, template_dirs):
        engine = Jinja2TemplateEngine()

        assert engine.environment_for(template_dirs) is engine.environment_for(list(template_dirs))
        assert engine.environment_for(template_dirs) is not engine.environment_for(template_dirs[:1])
