"""Jekyll permalink conventions.

Used to work out which URL each document would be served at so collisions
can be reported. Nothing here renders or writes output.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from folio.core.config import PermalinkStyle
from folio.core.types import Document, Post
from folio.core.utils import slugify


class PermalinkConvention:
    """Resolves documents to URL paths following one of Jekyll's built-in styles.

    Example:
        Post(date=2017-03-15, categories=["testing"], slug="builders")
        -> "/testing/2017/03/15/builders.html"  (style "date")
        -> "/testing/2017/03/15/builders/"      (style "pretty")

    Pages without a permalink are served from their path under the site root:
    ``talks/about.md`` -> ``/talks/about.html`` and ``talks/index.md`` -> ``/talks/``.

    """

    def __init__(self, style: PermalinkStyle = "date", site_root: Path | None = None) -> None:
        self.style = style
        self.site_root = site_root

    def resolve(self, doc: Document) -> str:
        """Resolve document to its URL path."""
        if doc.permalink:
            return self._absolute(doc.permalink)

        if not isinstance(doc, Post):
            return self._page_url(doc)

        parts = [""]
        parts.extend(slugify(category) for category in doc.categories)

        match self.style:
            case "date" | "pretty":
                parts.extend([f"{doc.date.year:04d}", f"{doc.date.month:02d}", f"{doc.date.day:02d}"])
            case "ordinal":
                parts.extend([f"{doc.date.year:04d}", f"{doc.date.timetuple().tm_yday:03d}"])
            case "none":
                pass

        parts.append(doc.slug)
        return self._finish(parts)

    def _page_url(self, doc: Document) -> str:
        relative = self._relative_source(doc)
        if relative is None:
            return self._finish(["", doc.slug])

        parts = ["", *relative.parent.parts]
        if relative.stem == "index":
            return "/".join(parts) + "/"
        parts.append(relative.stem)
        return self._finish(parts)

    def _relative_source(self, doc: Document) -> PurePosixPath | None:
        if doc.source_path is None or self.site_root is None:
            return None
        try:
            relative = doc.source_path.resolve().relative_to(self.site_root.resolve())
        except ValueError:
            return None
        return PurePosixPath(relative.as_posix())

    def _finish(self, parts: list[str]) -> str:
        path = "/".join(parts)
        if self.style == "pretty":
            return f"{path}/"
        return f"{path}.html"

    @staticmethod
    def _absolute(permalink: str) -> str:
        return permalink if permalink.startswith("/") else f"/{permalink}"
