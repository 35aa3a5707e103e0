"""Main Typer application for Folio."""

import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from folio import __version__
from folio.cli.errorhandler import handle_cli_errors
from folio.core.config import FolioConfig
from folio.core.conventions import PermalinkConvention
from folio.core.dates import parse_flexible_datetime
from folio.core.exceptions import DocumentExistsError
from folio.core.loader import build_document, load_document, load_site
from folio.core.types import Post
from folio.core.utils import slugify
from folio.diagnostics import HealthStatus, run_diagnostics
from folio.lint import Severity, available_rules, lint_site
from folio.logging_setup import configure_logging
from folio.markdown.frontmatter import dump_document

app = typer.Typer(
    name="folio",
    help="Inspect and lint the pages and posts of a Jekyll-style blog.",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)

SiteOption = Annotated[
    Path,
    typer.Option("--site", "-s", help="Root directory of the blog.", file_okay=False),
]


class KindFilter(str, Enum):
    ALL = "all"
    POST = "post"
    PAGE = "page"


_SEVERITY_STYLE = {
    Severity.ERROR: "red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"folio {__version__}")
        raise typer.Exit


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (defaults to FOLIO_LOG_LEVEL or INFO)."),
    ] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Folio - content toolkit for a Jekyll-style blog."""
    configure_logging(log_level)


@app.command("list")
def list_documents(
    site: SiteOption = Path(),
    kind: Annotated[KindFilter, typer.Option("--kind", "-k", help="Only show posts or pages.")] = KindFilter.ALL,
) -> None:
    """List the posts (newest first) and pages of the blog."""
    with handle_cli_errors():
        config = FolioConfig.load(site)
        content = load_site(config)

    table = Table(title=f"Documents in {config.site_root}")
    table.add_column("Kind", style="dim")
    table.add_column("Date", no_wrap=True)
    table.add_column("Title", style="bold")
    table.add_column("Categories")
    table.add_column("Path", style="dim")

    if kind in (KindFilter.ALL, KindFilter.POST):
        for post in content.posts:
            table.add_row(
                "post",
                post.date.date().isoformat(),
                post.title,
                ", ".join(post.categories),
                _relative(post.source_path, config.site_root),
            )
    if kind in (KindFilter.ALL, KindFilter.PAGE):
        for page in content.pages:
            table.add_row("page", "", page.title, "", _relative(page.source_path, config.site_root))

    console.print(table)
    if content.failures:
        console.print(f"[yellow]{len(content.failures)} document(s) could not be loaded; run `folio lint`.[/yellow]")


@app.command()
def show(
    path: Annotated[Path, typer.Argument(help="Document to inspect.", exists=True, dir_okay=False)],
    site: SiteOption = Path(),
) -> None:
    """Show the metadata, permalink, and listings of one document."""
    with handle_cli_errors():
        config = FolioConfig.load(site)
        doc = load_document(path, posts_dir_name=config.paths.posts_dir.name)

    convention = PermalinkConvention(config.lint.permalink_style, site_root=config.site_root)

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("kind", doc.kind.value)
    table.add_row("layout", doc.layout)
    table.add_row("title", doc.title)
    if isinstance(doc, Post):
        table.add_row("date", doc.date.isoformat())
        table.add_row("categories", ", ".join(doc.categories) or "-")
    table.add_row("permalink", convention.resolve(doc))
    for key, value in sorted(doc.extra.items()):
        table.add_row(key, str(value))
    console.print(table)

    listings = doc.listings
    console.print(f"\n[bold]{len(listings)} listing(s)[/bold]")
    for listing in listings:
        line = doc.body_start_line + listing.line - 1
        console.print(f"  line {line}: {listing.language or 'plain'} ({listing.line_count} lines)")


@app.command()
def lint(
    site: SiteOption = Path(),
    strict: Annotated[
        bool | None,
        typer.Option("--strict/--no-strict", help="Fail on warnings as well as errors."),
    ] = None,
    disable: Annotated[
        list[str] | None,
        typer.Option("--disable", "-d", help="Rule to skip (repeatable)."),
    ] = None,
    rules: Annotated[bool, typer.Option("--rules", help="List the available rules and exit.")] = False,
) -> None:
    """Check every page and post for well-formed metadata and listings."""
    if rules:
        _print_rules()
        return

    with handle_cli_errors():
        config = FolioConfig.load(site)
        report = lint_site(config, disabled=disable or [])

    for path, findings in report.by_path().items():
        console.print(f"[bold]{_relative(path, config.site_root) if path else '<site>'}[/bold]")
        for finding in findings:
            style = _SEVERITY_STYLE[finding.severity]
            where = f"{finding.line}: " if finding.line is not None else ""
            console.print(
                f"  {where}[{style}]{finding.severity.value}[/{style}] {escape(finding.message)} [dim]({finding.rule})[/dim]"
            )

    strict_mode = config.lint.strict if strict is None else strict
    summary = (
        f"{report.checked} document(s) checked: "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s), {len(report.infos)} note(s)"
    )
    if report.has_failures(strict=strict_mode):
        console.print(f"[bold red]{summary}[/bold red]")
        raise typer.Exit(1)
    console.print(f"[bold green]{summary}[/bold green]")


def _print_rules() -> None:
    table = Table(title="Lint rules")
    table.add_column("Rule", style="bold", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Scope", style="dim")
    table.add_column("Description")
    for rule in available_rules():
        style = _SEVERITY_STYLE[rule.severity]
        table.add_row(rule.name, f"[{style}]{rule.severity.value}[/{style}]", rule.scope, rule.description)
    console.print(table)


@app.command()
def new(
    title: Annotated[str, typer.Argument(help="Title of the new post.")],
    site: SiteOption = Path(),
    category: Annotated[
        list[str] | None,
        typer.Option("--category", "-c", help="Category for the post (repeatable)."),
    ] = None,
    date: Annotated[
        str | None,
        typer.Option("--date", help="Publication date (defaults to now)."),
    ] = None,
    layout: Annotated[str, typer.Option("--layout", help="Layout for the post.")] = "post",
) -> None:
    """Create a skeleton post with well-formed front matter."""
    if date is None:
        published = datetime.now().astimezone().replace(microsecond=0)
    else:
        published = parse_flexible_datetime(date)
        if published is None:
            raise typer.BadParameter(f"cannot parse date {date!r}", param_hint="--date")

    with handle_cli_errors():
        config = FolioConfig.load(site)
        target = config.paths.abs_posts_dir / f"{published.date().isoformat()}-{slugify(title)}.md"
        if target.exists():
            raise DocumentExistsError(target)

        metadata = {
            "layout": layout,
            "title": title,
            "date": published.strftime("%Y-%m-%d %H:%M:%S %z").strip(),
            "categories": category or [],
        }
        # Refuse to write a post that `folio lint` would reject.
        build_document(Post, metadata, source_path=target)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dump_document(metadata, ""), encoding="utf-8")

    logger.info("Created %s", target)
    console.print(f"[green]Created[/green] {_relative(target, config.site_root)}")


@app.command()
def doctor(
    site: SiteOption = Path(),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show detailed diagnostic information")] = False,
) -> None:
    """Run diagnostic checks on the installation and the blog layout."""
    console.print("[bold cyan]Running diagnostics...[/bold cyan]")
    console.print()

    results = run_diagnostics(site)

    ok_count = sum(1 for r in results if r.status == HealthStatus.OK)
    warning_count = sum(1 for r in results if r.status == HealthStatus.WARNING)
    error_count = sum(1 for r in results if r.status == HealthStatus.ERROR)

    for result in results:
        if result.status == HealthStatus.OK:
            icon, color = "OK", "green"
        elif result.status == HealthStatus.WARNING:
            icon, color = "!!", "yellow"
        elif result.status == HealthStatus.ERROR:
            icon, color = "XX", "red"
        else:
            icon, color = "i", "cyan"

        console.print(f"[{color}]{icon} {result.check}:[/{color}] {result.message}")

        if verbose and result.details:
            for key, value in result.details.items():
                console.print(f"    {key}: {value}", style="dim")

    console.print()
    console.print(f"[dim]Summary: {ok_count} OK, {warning_count} warnings, {error_count} errors[/dim]")

    if error_count > 0:
        raise typer.Exit(1)


def _relative(path: Path | None, root: Path) -> str:
    if path is None:
        return "-"
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)
