"""Tests for string inflections."""

import pytest

from semantic_forms.inflections import (
    camelize,
    humanize,
    label_strategy,
    pluralize,
    singularize,
    titleize,
    underscore,
)


class TestInflections:
    """Tests for name inflections."""

    def test_humanize(self):
        assert humanize("author_id") == "Author"
        assert humanize("published_at") == "Published at"
        assert humanize("URL") == "Url"

    def test_titleize(self):
        assert titleize("published_at") == "Published At"
        assert titleize("BlogPost") == "Blog Post"

    def test_plural_and_singular(self):
        """Test only the last word is inflected."""
        assert singularize("tags") == "tag"
        assert singularize("categories") == "category"
        assert singularize("post_tags") == "post_tag"
        assert pluralize("category") == "categories"
        assert pluralize("blog_post") == "blog_posts"

    def test_underscore_and_camelize(self):
        assert underscore("BlogPost") == "blog_post"
        assert underscore("HTMLPage") == "html_page"
        assert camelize("blog_post") == "BlogPost"


class TestLabelStrategy:
    """Tests for label strategies."""

    def test_known(self):
        assert label_strategy("humanize")("first_name") == "First name"
        assert label_strategy("verbatim")("first_name") == "first_name"

    def test_unknown(self):
        with pytest.raises(ValueError):
            label_strategy("shout")
