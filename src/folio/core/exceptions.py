"""Centralized exceptions for Folio."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class FolioError(Exception):
    """Base exception for all Folio errors."""


class ConfigError(FolioError):
    """Raised when the configuration file cannot be read or validated."""


class DocumentError(FolioError):
    """Base exception for errors tied to a single document on disk."""

    def __init__(self, path: Path | None, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path is not None else message)


class DocumentReadError(DocumentError):
    """Raised when a document file cannot be read."""


class FrontmatterError(DocumentError):
    """Raised when a document's front-matter block is missing or malformed."""


class DocumentValidationError(DocumentError):
    """Raised when front-matter metadata does not describe a valid page or post."""

    def __init__(self, path: Path | None, field_errors: list[tuple[str, str]]) -> None:
        self.field_errors = field_errors
        super().__init__(path, "; ".join(self.errors) or "invalid document")

    @property
    def errors(self) -> list[str]:
        return [f"{field}: {message}" for field, message in self.field_errors]


class DocumentExistsError(DocumentError):
    """Raised when a new document would overwrite an existing file."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "file already exists")


class SlugifyError(FolioError):
    """Base exception for slugify-related errors."""


class InvalidInputError(SlugifyError):
    """Raised when the input to a function is invalid."""
