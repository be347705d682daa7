"""Tests for template dispatch and rendering."""

from datetime import date

import pytest
from jinja2 import TemplateNotFound
from markupsafe import Markup

from semantic_forms.config import DEFAULT_TEMPLATE_ROOT
from semantic_forms.dispatcher import TemplateDispatcher, all_time_zones, get_dispatcher, strftime


class CountingDispatcher(TemplateDispatcher):
    """Dispatcher recording every filesystem existence check."""

    def __init__(self, template_root):
        super().__init__(template_root)
        self.checks = []

    def template_exists(self, name):
        self.checks.append(name)
        return super().template_exists(name)


@pytest.fixture
def template_root(tmp_path):
    (tmp_path / "_input.html.jinja").write_text("<input name='{{ name }}'>")
    (tmp_path / "_select_input.html.jinja").write_text("<select>{{ name }}</select>")
    (tmp_path / "_wrapper.html.jinja").write_text("<ol>{{ content }}</ol>")
    return tmp_path


class TestFindTemplate:
    """Tests for template lookup."""

    def test_first_existing_choice(self, template_root):
        """Test the first existing candidate is picked."""
        dispatcher = TemplateDispatcher(template_root)
        assert dispatcher.find_template("select_input", "input") == "_select_input.html.jinja"
        assert dispatcher.find_template("numeric_input", "input") == "_input.html.jinja"

    def test_lookups_are_cached(self, template_root):
        """Test the filesystem is consulted once per candidate tuple."""
        dispatcher = CountingDispatcher(template_root)
        first = dispatcher.find_template("numeric_input", "input")
        checks = len(dispatcher.checks)
        assert checks == 2

        assert dispatcher.find_template("numeric_input", "input") == first
        assert len(dispatcher.checks) == checks

        dispatcher.find_template("input")
        assert len(dispatcher.checks) == checks + 1

    def test_fallback_to_first_choice(self, template_root):
        """Test a miss falls back to the first candidate's conventional name."""
        dispatcher = TemplateDispatcher(template_root)
        ref = dispatcher.find_template("missing_button", "other_button")
        assert ref == "_missing_button.html"
        with pytest.raises(TemplateNotFound):
            dispatcher.render(ref, {})

    def test_template_exists(self, template_root):
        dispatcher = TemplateDispatcher(template_root)
        assert dispatcher.template_exists("wrapper")
        assert not dispatcher.template_exists("form")


class TestRender:
    """Tests for rendering."""

    def test_render_returns_markup(self, template_root):
        """Test rendered output is escaped markup."""
        dispatcher = TemplateDispatcher(template_root)
        html = dispatcher.render("_input.html.jinja", {"name": "<b>"})
        assert isinstance(html, Markup)
        assert html == "<input name='&lt;b&gt;'>"

    def test_render_with_layout_string(self, template_root):
        """Test pre-rendered content is inserted without escaping."""
        dispatcher = TemplateDispatcher(template_root)
        html = dispatcher.render_with_layout("_wrapper.html.jinja", {}, "<li>a</li>")
        assert html == "<ol><li>a</li></ol>"

    def test_render_with_layout_callable(self, template_root):
        """Test content may be produced by a zero-argument callable."""
        dispatcher = TemplateDispatcher(template_root)
        html = dispatcher.render_with_layout("_wrapper.html.jinja", {}, lambda: "<li>b</li>")
        assert html == "<ol><li>b</li></ol>"


class TestDefaults:
    """Tests for the shipped templates and helpers."""

    @pytest.mark.parametrize(
        "name",
        [
            "input",
            "text_input",
            "boolean_input",
            "select_input",
            "radio_input",
            "date_input",
            "datetime_input",
            "time_input",
            "time_zone_input",
            "wrapper",
            "button",
            "commit_button",
            "form",
            "macros",
        ],
    )
    def test_default_templates_ship(self, name):
        """Test every default template is present."""
        assert TemplateDispatcher(DEFAULT_TEMPLATE_ROOT).template_exists(name)

    def test_shared_dispatcher(self):
        """Test dispatchers are shared per template root."""
        assert get_dispatcher(DEFAULT_TEMPLATE_ROOT) is get_dispatcher(DEFAULT_TEMPLATE_ROOT)

    def test_strftime(self):
        assert strftime(date(2024, 1, 2), "%Y-%m-%d") == "2024-01-02"
        assert strftime(None, "%Y") == ""
        assert strftime("2024-01-02", "%Y") == "2024-01-02"

    def test_time_zones_sorted(self):
        zones = all_time_zones()
        assert zones == sorted(zones)
