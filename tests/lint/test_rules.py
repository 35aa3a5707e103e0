"""Tests for individual lint rules."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from folio.core.config import FolioConfig
from folio.core.types import Page, Post
from folio.lint.findings import Severity
from folio.lint.rules import RuleContext, available_rules, get_rule


@pytest.fixture
def ctx(tmp_path):
    return RuleContext(config=FolioConfig.load(tmp_path), now=datetime(2020, 1, 1, tzinfo=UTC))


def make_post(**overrides):
    fields = {
        "layout": "post",
        "title": "Hello",
        "date": "2017-01-15 12:00:00 +0100",
        "categories": ["testing"],
        "body": "Some prose.\n",
        "source_path": Path("_posts/2017-01-15-hello.md"),
    }
    fields.update(overrides)
    return Post(**fields)


def run(name, doc, ctx):
    return list(get_rule(name).run_document(doc, ctx))


def test_clean_post_passes_every_document_rule(ctx):
    post = make_post()

    for rule in available_rules():
        if rule.scope == "document":
            assert list(rule.run_document(post, ctx)) == [], rule.name


def test_registry_lists_load_document_and_site_rules():
    scopes = {rule.name: rule.scope for rule in available_rules()}

    assert scopes["title-present"] == "load"
    assert scopes["date-parseable"] == "load"
    assert scopes["fences-closed"] == "document"
    assert scopes["permalink-unique"] == "site"
    assert all(rule.description for rule in available_rules())


def test_unknown_rule():
    with pytest.raises(KeyError, match="no-such-rule"):
        get_rule("no-such-rule")


def test_layout_known(ctx):
    (finding,) = run("layout-known", make_post(layout="fancy"), ctx)

    assert finding.severity is Severity.WARNING
    assert "fancy" in finding.message
    assert finding.path == Path("_posts/2017-01-15-hello.md")


def test_layout_known_skipped_without_configured_layouts(ctx):
    ctx.config.lint.layouts = []

    assert run("layout-known", make_post(layout="fancy"), ctx) == []


def test_body_present(ctx):
    assert len(run("body-present", make_post(body="  \n\n"), ctx)) == 1


def test_fences_closed_reports_file_line(ctx):
    post = make_post(body="\nText.\n\n```java\nclass A {}\n", body_start_line=7)

    (finding,) = run("fences-closed", post, ctx)

    assert finding.severity is Severity.ERROR
    assert finding.line == 10


def test_listing_language(ctx):
    post = make_post(body="```\nplain\n```\n\n```sh\nls\n```\n")

    (finding,) = run("listing-language", post, ctx)

    assert finding.severity is Severity.INFO
    assert finding.line == 1


def test_permalink_present_only_for_pages(ctx):
    page = Page(layout="page", title="About", body="x", source_path=Path("about.md"))

    assert len(run("permalink-present", page, ctx)) == 1
    assert run("permalink-present", make_post(), ctx) == []


def test_date_matches_filename(ctx):
    (finding,) = run("date-matches-filename", make_post(date="2017-01-16"), ctx)

    assert "2017-01-16" in finding.message
    assert "2017-01-15" in finding.message


def test_date_matches_filename_ignores_unconventional_names(ctx):
    post = make_post(date="2017-01-16", source_path=Path("drafts/hello.md"))

    assert run("date-matches-filename", post, ctx) == []


@pytest.mark.parametrize("date", ["2021-06-01 10:00:00 +0000", "2021-06-01"])
def test_date_not_in_future(ctx, date):
    post = make_post(date=date, source_path=Path("_posts/2021-06-01-hello.md"))

    assert len(run("date-not-in-future", post, ctx)) == 1


def test_categories_present(ctx):
    assert len(run("categories-present", make_post(categories=[]), ctx)) == 1


def test_categories_lowercase(ctx):
    findings = run("categories-lowercase", make_post(categories=["Kubernetes", "testing", "DevOps"]), ctx)

    assert [f.message for f in findings] == [
        "category 'Kubernetes' is not lowercase",
        "category 'DevOps' is not lowercase",
    ]


class TestSiteRules:
    """Rules that compare documents with each other."""

    def test_permalink_unique_flags_both_documents(self, ctx):
        first = make_post(source_path=Path("_posts/2017-01-15-hello.md"))
        second = make_post(title="Other", source_path=Path("_posts/2017-01-15-hello.markdown"))

        findings = list(get_rule("permalink-unique").run_site([first, second], ctx))

        assert {f.path for f in findings} == {first.source_path, second.source_path}
        assert all(f.severity is Severity.ERROR for f in findings)
        assert all("/testing/2017/01/15/hello.html" in f.message for f in findings)

    def test_page_permalink_collides_with_post(self, ctx):
        post = make_post()
        page = Page(layout="page", title="Copy", permalink="/testing/2017/01/15/hello.html", body="x")

        findings = list(get_rule("permalink-unique").run_site([post, page], ctx))

        assert len(findings) == 2

    def test_title_unique_is_case_insensitive(self, ctx):
        first = make_post(title="Builders", source_path=Path("_posts/2017-01-15-a.md"))
        second = make_post(title="builders", source_path=Path("_posts/2017-02-15-b.md"))
        page = Page(layout="page", title="Builders", permalink="/b/", body="x")

        findings = list(get_rule("title-unique").run_site([first, second, page], ctx))

        assert {f.path for f in findings} == {first.source_path, second.source_path}


@pytest.mark.parametrize(
    ("date", "flagged"),
    [("2017-03-02 09:30:00 +0100", False), ("2017-05-20", True), ("2017-05-20 10:00:00 +0000", True)],
)
def test_date_not_in_future_with_naive_clock(tmp_path, date, flagged):
    naive_ctx = RuleContext(config=FolioConfig.load(tmp_path), now=datetime(2017, 4, 1))
    post = make_post(date=date, source_path=Path("_posts/hello.md"))

    assert bool(run("date-not-in-future", post, naive_ctx)) is flagged
