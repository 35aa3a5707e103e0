"""Lint findings and the report that collects them."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class Severity(str, Enum):
    """Finding severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class LintFinding:
    """One problem found in one document.

    Attributes:
        rule: Name of the rule that produced the finding (e.g., "title-present")
        severity: How serious the finding is
        path: Document the finding is about, if known
        message: Human-readable message
        line: 1-based file line, for findings tied to a position

    """

    rule: str
    severity: Severity
    path: Path | None
    message: str
    line: int | None = None

    @property
    def location(self) -> str:
        where = str(self.path) if self.path is not None else "<site>"
        return f"{where}:{self.line}" if self.line is not None else where


@dataclass
class LintReport:
    """All findings from one lint run."""

    findings: list[LintFinding] = field(default_factory=list)
    checked: int = 0

    def extend(self, findings: Iterable[LintFinding]) -> None:
        self.findings.extend(findings)

    @property
    def errors(self) -> list[LintFinding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[LintFinding]:
        return [f for f in self.findings if f.severity == Severity.WARNING]

    @property
    def infos(self) -> list[LintFinding]:
        return [f for f in self.findings if f.severity == Severity.INFO]

    @property
    def ok(self) -> bool:
        return not self.errors and not self.warnings

    def has_failures(self, *, strict: bool = False) -> bool:
        """Return True when the run should fail: any error, or any warning in strict mode."""
        if self.errors:
            return True
        return strict and bool(self.warnings)

    def by_path(self) -> dict[Path | None, list[LintFinding]]:
        """Group findings by document, keeping each group ordered by line."""
        grouped: dict[Path | None, list[LintFinding]] = defaultdict(list)
        for finding in self.findings:
            grouped[finding.path].append(finding)
        return {
            path: sorted(items, key=lambda f: (f.line or 0, f.rule))
            for path, items in sorted(grouped.items(), key=lambda item: str(item[0] or ""))
        }
