"""Tests for Jekyll permalink resolution."""

from pathlib import Path

import pytest

from folio.core.conventions import PermalinkConvention
from folio.core.types import Page, Post


@pytest.fixture
def post():
    return Post(
        layout="post",
        title="Object builders for test data",
        date="2017-05-20 10:00:00",
        categories=["Testing", "java"],
        source_path=Path("_posts/2017-05-20-object-builders.md"),
    )


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ("date", "/testing/java/2017/05/20/object-builders.html"),
        ("pretty", "/testing/java/2017/05/20/object-builders/"),
        ("ordinal", "/testing/java/2017/140/object-builders.html"),
        ("none", "/testing/java/object-builders.html"),
    ],
)
def test_post_styles(post, style, expected):
    assert PermalinkConvention(style).resolve(post) == expected


def test_post_without_categories():
    post = Post(layout="post", title="Hello", date="2017-01-15")

    assert PermalinkConvention().resolve(post) == "/2017/01/15/hello.html"


def test_explicit_permalink_wins(post):
    post.permalink = "blog/builders/"

    assert PermalinkConvention("date").resolve(post) == "/blog/builders/"


def test_page_with_permalink():
    page = Page(layout="page", title="About", permalink="/about/")

    assert PermalinkConvention().resolve(page) == "/about/"


def test_page_without_permalink():
    page = Page(layout="page", title="Contact", source_path=Path("contact.md"))

    assert PermalinkConvention("date").resolve(page) == "/contact.html"
    assert PermalinkConvention("pretty").resolve(page) == "/contact/"


@pytest.mark.parametrize(
    ("relative", "date_url", "pretty_url"),
    [
        ("about.md", "/about.html", "/about/"),
        ("talks/about.md", "/talks/about.html", "/talks/about/"),
        ("index.md", "/", "/"),
        ("talks/index.markdown", "/talks/", "/talks/"),
    ],
)
def test_page_url_follows_path_under_site_root(tmp_path, relative, date_url, pretty_url):
    page = Page(layout="page", title="About", source_path=tmp_path / relative)

    assert PermalinkConvention("date", site_root=tmp_path).resolve(page) == date_url
    assert PermalinkConvention("pretty", site_root=tmp_path).resolve(page) == pretty_url


def test_page_outside_site_root_falls_back_to_slug(tmp_path):
    page = Page(layout="page", title="About", source_path=tmp_path / "elsewhere" / "about.md")

    assert PermalinkConvention(site_root=tmp_path / "blog").resolve(page) == "/about.html"
