"""Run lint rules over a loaded site."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from folio.core.exceptions import DocumentError, DocumentReadError, DocumentValidationError, FrontmatterError
from folio.core.loader import load_site
from folio.lint.findings import LintFinding, LintReport, Severity
from folio.lint.rules import (
    FRONTMATTER_RULE,
    LOAD_RULE_BY_FIELD,
    METADATA_RULE,
    READABLE_RULE,
    RuleContext,
    available_rules,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from folio.core.config import FolioConfig
    from folio.core.types import Document

logger = logging.getLogger(__name__)


def failure_findings(failure: DocumentError) -> Iterator[LintFinding]:
    """Translate a load failure into findings named after the rule it broke."""
    if isinstance(failure, DocumentValidationError):
        for field_name, message in failure.field_errors:
            rule = LOAD_RULE_BY_FIELD.get(field_name.split(".", 1)[0], METADATA_RULE)
            yield LintFinding(rule, Severity.ERROR, failure.path, f"{field_name}: {message}")
        return

    if isinstance(failure, FrontmatterError):
        rule = FRONTMATTER_RULE
    elif isinstance(failure, DocumentReadError):
        rule = READABLE_RULE
    else:
        rule = METADATA_RULE
    yield LintFinding(rule, Severity.ERROR, failure.path, failure.message)


def lint_documents(
    docs: Sequence[Document],
    ctx: RuleContext,
    *,
    disabled: Iterable[str] = (),
) -> LintReport:
    """Run document and site rules over already-loaded documents."""
    skip = set(disabled)
    rules = [rule for rule in available_rules() if rule.name not in skip]
    report = LintReport(checked=len(docs))

    for doc in docs:
        for rule in rules:
            if rule.scope == "document":
                report.extend(rule.run_document(doc, ctx))

    for rule in rules:
        if rule.scope == "site":
            report.extend(rule.run_site(docs, ctx))

    return report


def lint_site(config: FolioConfig, *, disabled: Iterable[str] = (), ctx: RuleContext | None = None) -> LintReport:
    """Load every document under the site root and lint it.

    Documents that fail to load are reported as errors under the load rule
    they broke; the rest of the site is still checked.

    Args:
        config: Site configuration.
        disabled: Extra rule names to skip, on top of ``config.lint.disable``.
        ctx: Rule context to use; a fresh one (with the current time) by default.

    """
    ctx = ctx or RuleContext(config=config)
    site = load_site(config)

    skip = {*config.lint.disable, *disabled}
    known = {rule.name for rule in available_rules()}
    for name in sorted(skip - known):
        logger.warning("Ignoring unknown lint rule %r", name)

    report = lint_documents(site.documents, ctx, disabled=skip)
    for failure in site.failures:
        report.extend(failure_findings(failure))
    report.checked += len(site.failures)

    logger.info(
        "Checked %d documents: %d errors, %d warnings",
        report.checked,
        len(report.errors),
        len(report.warnings),
    )
    return report
