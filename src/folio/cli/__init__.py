"""Folio command line interface."""

from folio.cli.main import app

__all__ = ["app"]
