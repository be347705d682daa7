"""Tests for the form entry points."""

import pytest
from markupsafe import Markup

from semantic_forms import SemanticForms, semantic_fields_for, semantic_form_for
from semantic_forms.builder import SemanticFormBuilder


@pytest.fixture
def forms(config, reflection):
    return SemanticForms(config=config, reflection=reflection)


class TestFormFor:
    """Tests for form_for."""

    def test_form_tag(self, forms, post):
        """Test the form tag carries the formtastic and model classes."""
        html = forms.form_for(post, url="/posts", block=lambda f: f.inputs("title") + f.buttons())
        assert isinstance(html, Markup)
        assert html.startswith('<form class="formtastic post" action="/posts" method="post">')
        assert 'name="post[title]"' in html
        assert 'value="Create Post"' in html
        assert html.rstrip().endswith("</form>")

    def test_object_name(self, forms, post):
        """Test a string names the parameters and the model class."""
        html = forms.form_for("article", post, block=lambda f: f.input("title"))
        assert 'class="formtastic article"' in html
        assert 'name="article[title]"' in html

    def test_nested_resource(self, forms, post, authors):
        """Test the last element of a list is the form object."""
        html = forms.form_for([authors[0], post], block=lambda f: f.input("title"))
        assert 'class="formtastic post"' in html
        assert 'name="post[title]"' in html

    def test_html_options(self, forms, post):
        html = forms.form_for(post, method="get", html={"class": "wide", "id": "new_post"}, block=lambda f: "")
        assert 'class="wide formtastic post"' in html
        assert 'id="new_post"' in html
        assert 'method="get"' in html
        assert "action=" not in html

    def test_block_receives_builder(self, forms, post):
        seen = []
        forms.form_for(post, block=seen.append)
        assert isinstance(seen[0], SemanticFormBuilder)
        assert seen[0].object is post

    def test_builder_options(self, forms, post):
        """Test extra options reach the builder."""
        html = forms.form_for(post, block=lambda f: f.input("title"), errors={"title": "is taken"})
        assert '<p class="inline-errors">is taken</p>' in html


class TestFieldsFor:
    """Tests for fields_for."""

    def test_no_form_tag(self, forms, post):
        html = forms.fields_for(post, block=lambda f: f.input("title"))
        assert "<form" not in html
        assert 'name="post[title]"' in html


class TestModuleHelpers:
    """Tests for the one-call helpers."""

    def test_semantic_form_for(self, post, config, reflection):
        html = semantic_form_for(
            post,
            url="/posts",
            config=config,
            reflection=reflection,
            block=lambda f: f.inputs("title", "author"),
        )
        assert '<form class="formtastic post"' in html
        assert 'name="post[author_id]"' in html

    def test_semantic_fields_for(self, post, config, reflection):
        html = semantic_fields_for("post", post, config=config, reflection=reflection, block=lambda f: f.input("body"))
        assert 'name="post[body]"' in html

    def test_without_reflection(self, config):
        """Test plain objects render with virtual attributes only."""
        html = semantic_form_for("search", None, config=config, block=lambda f: f.input("query"))
        assert 'class="formtastic search"' in html
        assert 'name="search[query]"' in html
        assert 'type="text"' in html
