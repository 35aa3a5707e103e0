"""YAML front matter: detecting, splitting and writing it."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from folio.core.exceptions import FrontmatterError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

DELIMITER = "---"
_BOM = "\ufeff"


def starts_with_frontmatter(path: Path, *, encoding: str = "utf-8") -> bool:
    """Return True when the file's first line is the ``---`` delimiter.

    Only the first line is read. Whether the block is well formed is left to
    :func:`split_frontmatter_strict`, so broken documents are still found.
    """
    try:
        with path.open("r", encoding=encoding) as f:
            return f.readline().removeprefix(_BOM).rstrip() == DELIMITER
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Cannot read first line of %s: %s", path, exc)
        return False


def split_frontmatter_strict(content: str, *, path: Path | None = None) -> tuple[dict[str, Any], str]:
    """Split a document into metadata and body, refusing to guess.

    Every defect is raised so the caller can report the document instead of
    treating it as plain Markdown.

    Args:
        content: Full document text.
        path: Source path, used only in error messages.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        FrontmatterError: If the opening or closing delimiter is missing, the YAML
            is malformed, or the front matter is not a mapping.

    """
    # Some editors write a UTF-8 BOM.
    text = content.removeprefix(_BOM)
    lines = text.splitlines(keepends=True)

    if not lines or lines[0].rstrip() != DELIMITER:
        msg = "document does not start with a '---' front-matter block"
        raise FrontmatterError(path, msg)

    for index, line in enumerate(lines[1:], start=1):
        if line.rstrip() == DELIMITER:
            closing = index
            break
    else:
        msg = "front-matter block is never closed with '---'"
        raise FrontmatterError(path, msg)

    raw_yaml = "".join(lines[1:closing])
    try:
        data = yaml.safe_load(raw_yaml)
    except yaml.YAMLError as exc:
        msg = f"invalid YAML in front matter: {exc}"
        raise FrontmatterError(path, msg) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"front matter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError(path, msg)

    body = "".join(lines[closing + 1 :])
    return {str(key): value for key, value in data.items()}, body


def dump_document(metadata: dict[str, Any], body: str) -> str:
    """Serialize metadata and body back into a front-matter document.

    Keys keep their insertion order so ``layout`` and ``title`` stay on top.
    """
    post = frontmatter.Post(body, **metadata)
    return frontmatter.dumps(post, sort_keys=False) + "\n"
