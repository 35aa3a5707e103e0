"""Lint rules for pages and posts.

Document rules look at one document at a time; site rules look across every
loaded document. Rules register themselves by name so they can be listed and
disabled from the configuration or the command line.

Rule functions yield :class:`Issue` objects; the registry attaches the rule
name, severity and document path when turning them into findings.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from folio.core.conventions import PermalinkConvention
from folio.core.types import Document, Page, Post
from folio.lint.findings import LintFinding, Severity
from folio.markdown.listings import find_unclosed_fence

if TYPE_CHECKING:
    from pathlib import Path

    from folio.core.config import FolioConfig

__all__ = ["Issue", "Rule", "RuleContext", "available_rules", "get_rule", "rule"]


@dataclass(frozen=True, slots=True)
class Issue:
    message: str
    line: int | None = None
    path: Path | None = None


@dataclass
class RuleContext:
    """Inputs shared by every rule in one run."""

    config: FolioConfig
    now: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def convention(self) -> PermalinkConvention:
        return PermalinkConvention(self.config.lint.permalink_style, site_root=self.config.site_root)


DocumentCheck = Callable[[Document, RuleContext], Iterable[Issue]]
SiteCheck = Callable[[Sequence[Document], RuleContext], Iterable[Issue]]
RuleScope = Literal["load", "document", "site"]


@dataclass(frozen=True)
class Rule:
    name: str
    severity: Severity
    scope: RuleScope
    description: str
    check: DocumentCheck | SiteCheck | None = None

    def run_document(self, doc: Document, ctx: RuleContext) -> Iterator[LintFinding]:
        for issue in self.check(doc, ctx):
            yield self._finding(issue, default_path=doc.source_path)

    def run_site(self, docs: Sequence[Document], ctx: RuleContext) -> Iterator[LintFinding]:
        for issue in self.check(docs, ctx):
            yield self._finding(issue, default_path=None)

    def _finding(self, issue: Issue, default_path: Path | None) -> LintFinding:
        return LintFinding(
            rule=self.name,
            severity=self.severity,
            path=issue.path if issue.path is not None else default_path,
            message=issue.message,
            line=issue.line,
        )


_RULES: dict[str, Rule] = {}


def rule(name: str, severity: Severity, *, scope: RuleScope = "document"):
    """Register the decorated function as a lint rule.

    The first line of the function's docstring becomes the rule description.
    """

    def decorator(func):
        if name in _RULES:
            msg = f"Lint rule {name!r} is already registered"
            raise ValueError(msg)
        description = (func.__doc__ or "").strip().split("\n", 1)[0]
        _RULES[name] = Rule(name=name, severity=severity, scope=scope, description=description, check=func)
        return func

    return decorator


def available_rules() -> list[Rule]:
    """Return every registered rule, ordered by name."""
    return [_RULES[name] for name in sorted(_RULES)]


def get_rule(name: str) -> Rule:
    try:
        return _RULES[name]
    except KeyError:
        msg = f"Unknown lint rule {name!r}"
        raise KeyError(msg) from None


# --- Load rules ---
# These fail while a document is being loaded, so they have no check function.
# They are always reported, even when listed in `lint.disable`.

LOAD_RULE_BY_FIELD = {
    "title": "title-present",
    "layout": "layout-present",
    "date": "date-parseable",
    "categories": "categories-valid",
}
FRONTMATTER_RULE = "frontmatter-valid"
READABLE_RULE = "readable"
METADATA_RULE = "metadata-valid"

for _name, _description in (
    (READABLE_RULE, "File can be read as UTF-8 text."),
    (FRONTMATTER_RULE, "Document opens with a closed YAML front-matter mapping."),
    ("title-present", "Title is present and not blank."),
    ("layout-present", "Layout is present and not blank."),
    ("date-parseable", "Post date is present and parseable."),
    ("categories-valid", "Categories are a list or a space-separated string."),
    (METADATA_RULE, "Remaining front-matter values have the expected types."),
):
    _RULES[_name] = Rule(name=_name, severity=Severity.ERROR, scope="load", description=_description)


# --- Document rules ---


@rule("layout-known", Severity.WARNING)
def check_layout_known(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Layout names one of the theme's configured layouts."""
    layouts = ctx.config.lint.layouts
    if layouts and doc.layout not in layouts:
        yield Issue(f"unknown layout {doc.layout!r} (expected one of: {', '.join(layouts)})")


@rule("body-present", Severity.WARNING)
def check_body_present(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Document has some content after the front matter."""
    if not doc.body.strip():
        yield Issue("document body is empty")


@rule("fences-closed", Severity.ERROR)
def check_fences_closed(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Every fenced or highlighted listing is closed."""
    line = find_unclosed_fence(doc.body)
    if line is not None:
        yield Issue("listing is never closed", line=doc.body_start_line + line - 1)


@rule("listing-language", Severity.INFO)
def check_listing_language(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Fenced listings name a language so they get highlighted."""
    for listing in doc.listings:
        if not listing.language:
            yield Issue("listing has no language tag", line=doc.body_start_line + listing.line - 1)


@rule("permalink-present", Severity.WARNING)
def check_permalink_present(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Pages declare an explicit permalink."""
    if isinstance(doc, Page) and not doc.permalink:
        yield Issue("page has no permalink")


@rule("date-matches-filename", Severity.WARNING)
def check_date_matches_filename(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """A post's front-matter date agrees with its YYYY-MM-DD filename prefix."""
    if not isinstance(doc, Post):
        return
    filename_date = doc.filename_date
    if filename_date is not None and doc.date.date() != filename_date:
        yield Issue(
            f"front-matter date {doc.date.date().isoformat()} differs from filename date {filename_date.isoformat()}"
        )


@rule("date-not-in-future", Severity.WARNING)
def check_date_not_in_future(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Posts are not dated in the future (Jekyll skips those by default)."""
    if not isinstance(doc, Post):
        return
    # Naive datetimes on either side are local time.
    now = ctx.now if ctx.now.tzinfo is not None else ctx.now.astimezone()
    published = doc.date if doc.date.tzinfo is not None else doc.date.astimezone()
    if published > now:
        yield Issue(f"post is dated in the future ({doc.date.isoformat()})")


@rule("categories-present", Severity.WARNING)
def check_categories_present(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Posts carry at least one category."""
    if isinstance(doc, Post) and not doc.categories:
        yield Issue("post has no categories")


@rule("categories-lowercase", Severity.INFO)
def check_categories_lowercase(doc: Document, ctx: RuleContext) -> Iterator[Issue]:
    """Categories are lowercase so their URLs stay stable."""
    if not isinstance(doc, Post):
        return
    for category in doc.categories:
        if category != category.lower():
            yield Issue(f"category {category!r} is not lowercase")


# --- Site rules ---


@rule("permalink-unique", Severity.ERROR, scope="site")
def check_permalink_unique(docs: Sequence[Document], ctx: RuleContext) -> Iterator[Issue]:
    """No two documents resolve to the same URL."""
    convention = ctx.convention
    by_url: dict[str, list[Document]] = defaultdict(list)
    for doc in docs:
        by_url[convention.resolve(doc)].append(doc)

    for url, colliding in sorted(by_url.items()):
        if len(colliding) < 2:
            continue
        for doc in colliding:
            others = ", ".join(other.display_path for other in colliding if other is not doc)
            yield Issue(f"permalink {url} is also used by {others}", path=doc.source_path)


@rule("title-unique", Severity.WARNING, scope="site")
def check_title_unique(docs: Sequence[Document], ctx: RuleContext) -> Iterator[Issue]:
    """No two posts share a title."""
    by_title: dict[str, list[Document]] = defaultdict(list)
    for doc in docs:
        if isinstance(doc, Post):
            by_title[doc.title.casefold()].append(doc)

    for colliding in by_title.values():
        if len(colliding) < 2:
            continue
        for doc in colliding:
            others = ", ".join(other.display_path for other in colliding if other is not doc)
            yield Issue(f"title {doc.title!r} is also used by {others}", path=doc.source_path)
