"""Discovery and loading of the blog's documents."""

from __future__ import annotations

import fnmatch
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import ValidationError

from folio.core.exceptions import DocumentError, DocumentReadError, DocumentValidationError
from folio.core.types import Document, Page, Post
from folio.markdown.frontmatter import split_frontmatter_strict, starts_with_frontmatter

if TYPE_CHECKING:
    from folio.core.config import FolioConfig

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", Page, Post)

MARKDOWN_SUFFIXES = frozenset({".md", ".markdown"})


@dataclass
class SiteContent:
    """Everything loaded from one site root.

    Attributes:
        posts: Posts, newest first
        pages: Pages, ordered by path
        failures: Documents that could not be loaded

    """

    posts: list[Post] = field(default_factory=list)
    pages: list[Page] = field(default_factory=list)
    failures: list[DocumentError] = field(default_factory=list)

    @property
    def documents(self) -> list[Document]:
        return [*self.posts, *self.pages]


def _field_errors(exc: ValidationError) -> list[tuple[str, str]]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "document"
        message = error["msg"].removeprefix("Value error, ")
        errors.append((location, message))
    return errors


def _is_post(path: Path, metadata: dict, posts_dir_name: str) -> bool:
    if posts_dir_name in path.parts:
        return True
    return metadata.get("layout") == "post" or "date" in metadata


def build_document(
    model: type[DocT],
    metadata: dict[str, Any],
    body: str = "",
    *,
    source_path: Path | None = None,
    body_start_line: int = 1,
) -> DocT:
    """Validate front-matter metadata into a page or post.

    Raises:
        DocumentValidationError: If the metadata does not describe a valid document.

    """
    try:
        return model.from_front_matter(metadata, body, source_path=source_path, body_start_line=body_start_line)
    except ValidationError as exc:
        raise DocumentValidationError(source_path, _field_errors(exc)) from exc


def load_document(path: Path, *, posts_dir_name: str = "_posts", encoding: str = "utf-8") -> Page | Post:
    """Load a single front-matter document from disk.

    Files under the posts directory, or whose front matter has ``layout: post``
    or a ``date``, load as :class:`Post`; everything else loads as :class:`Page`.

    Raises:
        DocumentReadError: If the file cannot be read or decoded.
        FrontmatterError: If the front-matter block is missing or malformed.
        DocumentValidationError: If the metadata does not describe a valid document.

    """
    try:
        content = path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(path, str(exc)) from exc

    metadata, body = split_frontmatter_strict(content, path=path)
    model = Post if _is_post(path, metadata, posts_dir_name) else Page
    header_lines = len(content.splitlines(keepends=True)) - len(body.splitlines(keepends=True))

    doc = build_document(model, metadata, body, source_path=path, body_start_line=header_lines + 1)

    logger.debug("Loaded %s %s", doc.kind.value, path)
    return doc


def _is_hidden(relative: Path) -> bool:
    return any(part.startswith(("_", ".")) for part in relative.parts)


def _is_excluded(relative: str, patterns: list[str]) -> bool:
    return any(fnmatch.fnmatch(relative, pattern) for pattern in patterns)


def discover_documents(config: FolioConfig) -> list[Path]:
    """Find the posts and pages of a site.

    Every Markdown file in the posts directory is returned. Elsewhere in the
    site root, only Markdown files that open with a front-matter block count as
    pages; Jekyll copies the others through untouched. Names starting with
    ``_`` or ``.`` are skipped, as are paths matching the configured
    ``exclude`` globs. The posts directory itself is the one exception; names
    inside it are filtered like any other.
    """
    site_root = config.paths.site_root
    posts_dir = config.paths.abs_posts_dir
    patterns = config.paths.exclude
    found: set[Path] = set()

    if posts_dir.is_dir():
        for path in posts_dir.rglob("*"):
            if _is_hidden(path.relative_to(posts_dir)):
                continue
            if path.is_file() and path.suffix.lower() in MARKDOWN_SUFFIXES:
                relative = path.relative_to(site_root).as_posix() if path.is_relative_to(site_root) else path.name
                if not _is_excluded(relative, patterns):
                    found.add(path)
    else:
        logger.warning("Posts directory %s does not exist", posts_dir)

    for dirpath, dirnames, filenames in os.walk(site_root):
        dirnames[:] = sorted(name for name in dirnames if not name.startswith(("_", ".")))
        for filename in filenames:
            if filename.startswith(("_", ".")):
                continue
            path = Path(dirpath) / filename
            if path.suffix.lower() not in MARKDOWN_SUFFIXES:
                continue
            if _is_excluded(path.relative_to(site_root).as_posix(), patterns):
                continue
            if starts_with_frontmatter(path):
                found.add(path)

    return sorted(found)


def load_site(config: FolioConfig) -> SiteContent:
    """Load every document of a site, collecting failures instead of aborting."""
    site = SiteContent()
    posts_dir_name = config.paths.posts_dir.name

    for path in discover_documents(config):
        try:
            doc = load_document(path, posts_dir_name=posts_dir_name)
        except DocumentError as exc:
            logger.warning("Skipping %s", exc)
            site.failures.append(exc)
            continue
        if isinstance(doc, Post):
            site.posts.append(doc)
        else:
            site.pages.append(doc)

    # Naive dates compare as local time.
    site.posts.sort(key=lambda post: (post.date.timestamp(), str(post.source_path)), reverse=True)
    site.pages.sort(key=lambda page: str(page.source_path))
    logger.info(
        "Loaded %d posts and %d pages from %s (%d failed)",
        len(site.posts),
        len(site.pages),
        config.paths.site_root,
        len(site.failures),
    )
    return site
