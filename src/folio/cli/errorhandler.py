"""CLI error handling utilities."""

from collections.abc import Generator
from contextlib import contextmanager

import typer
from rich.console import Console

from folio.core.exceptions import (
    ConfigError,
    DocumentExistsError,
    DocumentValidationError,
    FolioError,
)

console = Console(stderr=True)


@contextmanager
def handle_cli_errors(*, debug: bool = False) -> Generator[None, None, None]:
    """Turn Folio errors into a short message and exit code 1.

    Args:
        debug: If True, re-raise so the full traceback is shown.

    """
    try:
        yield
    except ConfigError as e:
        if debug:
            raise
        console.print(f"[bold red]Configuration error:[/bold red] {e}")
        raise typer.Exit(1) from e
    except DocumentExistsError as e:
        if debug:
            raise
        console.print(f"[bold red]Refusing to overwrite:[/bold red] {e.path}")
        raise typer.Exit(1) from e
    except DocumentValidationError as e:
        if debug:
            raise
        console.print(f"[bold red]Invalid document:[/bold red] {e.path}")
        for err in e.errors:
            console.print(f"  - {err}")
        raise typer.Exit(1) from e
    except FolioError as e:
        if debug:
            raise
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1) from e
