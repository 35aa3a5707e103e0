"""Small text helpers shared across Folio."""

import re
from datetime import date
from unicodedata import normalize

from folio.core.exceptions import InvalidInputError


def slugify(text: str, max_len: int = 60) -> str:
    """Convert text to a safe URL-friendly slug.

    Args:
        text: Input text to slugify
        max_len: Maximum length of output slug (default 60)

    Returns:
        Safe slug string suitable for filenames and URLs

    Raises:
        InvalidInputError: If ``text`` is not a string.

    Examples:
        >>> slugify("Hello World")
        'hello-world'
        >>> slugify("Café")
        'cafe'
        >>> slugify("A" * 100, max_len=20)
        'aaaaaaaaaaaaaaaaaaaa'

    """
    if not isinstance(text, str):
        msg = f"slugify expects a string, got {type(text).__name__}"
        raise InvalidInputError(msg)

    # Normalize unicode (NFKD) and convert to ASCII
    normalized = normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()

    slug = re.sub(r"[^a-z0-9]+", "-", normalized).strip("-")

    if not slug:
        return "untitled"

    if len(slug) > max_len:
        slug = slug[:max_len].rstrip("-")

    return slug


_POST_FILENAME = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})-(?P<slug>.+)\.(?P<ext>md|markdown)$")


def post_filename_parts(name: str) -> tuple[date, str] | None:
    """Split a Jekyll post filename (``YYYY-MM-DD-slug.md``) into date and slug.

    Returns:
        ``(date, slug)``, or None when the name does not follow the convention
        or names an impossible calendar date.

    """
    match = _POST_FILENAME.match(name)
    if not match:
        return None
    try:
        day = date(int(match["year"]), int(match["month"]), int(match["day"]))
    except ValueError:
        return None
    return day, match["slug"]
