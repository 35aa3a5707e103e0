"""Diagnostic utilities for verifying a Folio setup.

Health checks for the interpreter, installed packages, and the layout of the
blog being checked. Used by the ``folio doctor`` CLI command.

Usage:
    from folio.diagnostics import run_diagnostics

    results = run_diagnostics(Path("."))
    for result in results:
        print(f"{result.check}: {result.status}")
"""

from __future__ import annotations

import importlib
import sys
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from folio.core.config import CONFIG_FILENAME, FolioConfig
from folio.core.exceptions import ConfigError

REQUIRED_PACKAGES = (
    "pydantic",
    "pydantic_settings",
    "frontmatter",
    "yaml",
    "dateutil",
    "typer",
    "rich",
    "markdown_it",
)


class HealthStatus(str, Enum):
    """Health check status levels."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


@dataclass(frozen=True, slots=True)
class DiagnosticResult:
    """Result of a diagnostic health check.

    Attributes:
        check: Name of the check (e.g., "Posts Directory")
        status: Health status (OK, WARNING, ERROR, INFO)
        message: Human-readable message
        details: Optional additional details

    """

    check: str
    status: HealthStatus
    message: str
    details: dict[str, Any] | None = None


def check_python_version() -> DiagnosticResult:
    """Check if Python version meets minimum requirement (3.11+)."""
    version = sys.version_info
    label = f"Python {version.major}.{version.minor}.{version.micro}"
    if version >= (3, 11):
        return DiagnosticResult(check="Python Version", status=HealthStatus.OK, message=label)
    return DiagnosticResult(
        check="Python Version",
        status=HealthStatus.ERROR,
        message=f"{label} (requires 3.11+)",
    )


def check_required_packages() -> DiagnosticResult:
    """Check if required packages are importable."""
    missing = []
    for package in REQUIRED_PACKAGES:
        try:
            importlib.import_module(package)
        except ImportError:
            missing.append(package)

    if not missing:
        return DiagnosticResult(
            check="Required Packages",
            status=HealthStatus.OK,
            message=f"All {len(REQUIRED_PACKAGES)} required packages installed",
        )

    return DiagnosticResult(
        check="Required Packages",
        status=HealthStatus.ERROR,
        message=f"Missing packages: {', '.join(missing)}",
        details={"missing": missing},
    )


def check_site_root(site_root: Path) -> DiagnosticResult:
    """Check that the site root exists and is a directory."""
    if site_root.is_dir():
        return DiagnosticResult(check="Site Root", status=HealthStatus.OK, message=str(site_root.resolve()))
    return DiagnosticResult(
        check="Site Root",
        status=HealthStatus.ERROR,
        message=f"{site_root} is not a directory",
    )


def check_config_file(site_root: Path) -> DiagnosticResult:
    """Check the optional .folio.toml file."""
    config_file = site_root / CONFIG_FILENAME
    if not config_file.exists():
        return DiagnosticResult(
            check="Folio Config",
            status=HealthStatus.INFO,
            message=f"No {CONFIG_FILENAME} found; using defaults",
        )

    try:
        with config_file.open("rb") as f:
            tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        return DiagnosticResult(
            check="Folio Config",
            status=HealthStatus.ERROR,
            message=f"Cannot read {CONFIG_FILENAME}: {e}",
        )

    return DiagnosticResult(check="Folio Config", status=HealthStatus.OK, message=str(config_file))


def check_posts_directory(site_root: Path) -> DiagnosticResult:
    """Check that the posts directory exists and holds Markdown files."""
    try:
        config = FolioConfig.load(site_root)
    except ConfigError as e:
        return DiagnosticResult(check="Posts Directory", status=HealthStatus.ERROR, message=str(e))

    posts_dir = config.paths.abs_posts_dir
    if not posts_dir.is_dir():
        return DiagnosticResult(
            check="Posts Directory",
            status=HealthStatus.WARNING,
            message=f"{posts_dir} does not exist",
        )

    count = sum(1 for path in posts_dir.rglob("*") if path.suffix.lower() in {".md", ".markdown"})
    status = HealthStatus.OK if count else HealthStatus.WARNING
    return DiagnosticResult(
        check="Posts Directory",
        status=status,
        message=f"{count} post file(s) in {posts_dir}",
        details={"path": str(posts_dir), "count": count},
    )


def run_diagnostics(site_root: Path | None = None) -> list[DiagnosticResult]:
    """Run all diagnostic checks.

    Returns:
        List of diagnostic results, one per check

    """
    root = site_root if site_root is not None else Path.cwd()
    checks = [
        check_python_version,
        check_required_packages,
        lambda: check_site_root(root),
        lambda: check_config_file(root),
        lambda: check_posts_directory(root),
    ]
    return [check() for check in checks]
