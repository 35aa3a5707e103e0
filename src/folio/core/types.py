"""Core data types for Folio: the pages and posts of the blog."""

from __future__ import annotations

from datetime import date as calendar_date
from datetime import datetime
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator

from folio.core.dates import parse_flexible_datetime
from folio.core.utils import post_filename_parts, slugify
from folio.markdown.listings import Listing, extract_listings

__all__ = ["Document", "DocumentKind", "Listing", "Page", "Post"]


class DocumentKind(str, Enum):
    PAGE = "page"
    POST = "post"


class Document(BaseModel):
    """Fields shared by every front-matter document."""

    model_config = ConfigDict(validate_assignment=True)

    kind: ClassVar[DocumentKind]
    known_keys: ClassVar[frozenset[str]] = frozenset({"layout", "title", "permalink"})

    layout: str
    title: str
    permalink: str | None = None
    body: str = ""
    source_path: Path | None = None
    body_start_line: int = 1
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("layout", "title", mode="before")
    @classmethod
    def _require_text(cls, value: Any) -> str:
        if value is None:
            msg = "must not be empty"
            raise ValueError(msg)
        # YAML happily turns `title: 2017` into an int.
        text = str(value).strip()
        if not text:
            msg = "must not be empty"
            raise ValueError(msg)
        return text

    @field_validator("permalink", mode="before")
    @classmethod
    def _normalize_permalink(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @classmethod
    def from_front_matter(
        cls,
        metadata: dict[str, Any],
        body: str = "",
        source_path: Path | None = None,
        *,
        body_start_line: int = 1,
    ) -> Self:
        """Build a document from parsed front matter.

        Keys the model does not know about are kept in ``extra``.

        Raises:
            pydantic.ValidationError: If the metadata does not describe a valid document.

        """
        known = {key: value for key, value in metadata.items() if key in cls.known_keys}
        extra = {key: value for key, value in metadata.items() if key not in cls.known_keys}
        return cls.model_validate(
            {
                **cls._prepare(known, source_path),
                "body": body,
                "source_path": source_path,
                "body_start_line": body_start_line,
                "extra": extra,
            }
        )

    @classmethod
    def _prepare(cls, known: dict[str, Any], source_path: Path | None) -> dict[str, Any]:
        return known

    @property
    def slug(self) -> str:
        if self.permalink:
            segment = PurePosixPath(self.permalink.rstrip("/")).stem
            if segment:
                return segment
        if self.source_path is not None:
            return self.source_path.stem
        return slugify(self.title)

    @property
    def listings(self) -> list[Listing]:
        return extract_listings(self.body)

    @property
    def display_path(self) -> str:
        return str(self.source_path) if self.source_path is not None else f"<{self.slug}>"


class Page(Document):
    """A static content unit: layout, title, permalink and body."""

    kind: ClassVar[DocumentKind] = DocumentKind.PAGE


class Post(Document):
    """A dated, categorized static content unit."""

    kind: ClassVar[DocumentKind] = DocumentKind.POST
    known_keys: ClassVar[frozenset[str]] = frozenset(
        {"layout", "title", "permalink", "date", "categories", "category"}
    )

    date: datetime
    categories: list[str] = Field(default_factory=list)

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> datetime:
        parsed = parse_flexible_datetime(value)
        if parsed is None:
            msg = f"unparseable date {value!r}"
            raise ValueError(msg)
        return parsed

    @field_validator("categories", mode="before")
    @classmethod
    def _normalize_categories(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, str):
            items: list[Any] = value.split()
        elif isinstance(value, list | tuple):
            items = list(value)
        else:
            msg = f"categories must be a list or a space-separated string, got {type(value).__name__}"
            raise ValueError(msg)
        return [str(item).strip() for item in items if item is not None and str(item).strip()]

    @classmethod
    def _prepare(cls, known: dict[str, Any], source_path: Path | None) -> dict[str, Any]:
        prepared = dict(known)
        # Jekyll accepts the singular key as well.
        singular = prepared.pop("category", None)
        if "categories" not in prepared and singular is not None:
            prepared["categories"] = singular
        if "date" not in prepared and source_path is not None:
            parts = post_filename_parts(source_path.name)
            if parts is not None:
                prepared["date"] = parts[0]
        return prepared

    @property
    def filename_date(self) -> calendar_date | None:
        """Date encoded in the ``YYYY-MM-DD-slug.md`` filename, if any."""
        if self.source_path is None:
            return None
        parts = post_filename_parts(self.source_path.name)
        return parts[0] if parts else None

    @property
    def slug(self) -> str:
        if self.source_path is not None:
            parts = post_filename_parts(self.source_path.name)
            if parts is not None:
                return parts[1]
        return slugify(self.title)
