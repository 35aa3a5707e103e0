"""Content linting for blog pages and posts."""

from folio.lint.findings import LintFinding, LintReport, Severity
from folio.lint.rules import RuleContext, available_rules
from folio.lint.runner import lint_documents, lint_site

__all__ = [
    "LintFinding",
    "LintReport",
    "RuleContext",
    "Severity",
    "available_rules",
    "lint_documents",
    "lint_site",
]
