"""Extraction of fenced code and log listings from Markdown bodies.

Posts quote code and log output for illustration. Two notations show up in
Jekyll content: CommonMark fences, parsed with markdown-it-py so that fences
nested in blockquotes and list items are found too, and Liquid
``{% highlight lang %}`` ... ``{% endhighlight %}`` blocks, which Markdown
parsers see as plain text and are scanned line by line. Neither is ever
executed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from markdown_it import MarkdownIt

if TYPE_CHECKING:
    from markdown_it.token import Token

_md = MarkdownIt("commonmark")

_HIGHLIGHT_OPEN = re.compile(r"^\s*\{%-?\s*highlight\s+(?P<lang>[\w+#.-]+)[^%]*-?%\}\s*$")
_HIGHLIGHT_CLOSE = re.compile(r"^\s*\{%-?\s*endhighlight\s*-?%\}\s*$")


@dataclass(frozen=True, slots=True)
class Listing:
    """A fenced block quoted in a document body.

    Attributes:
        language: Info string after the opening fence (e.g. "java", "log"), if any
        code: Text between the fences, without the fence lines
        line: 1-based line of the opening fence within the body

    """

    language: str | None
    code: str
    line: int

    @property
    def line_count(self) -> int:
        return len(self.code.splitlines())


def _strip_container(line: str) -> str:
    """Drop blockquote markers and indentation in front of a line."""
    text = line.lstrip()
    while text.startswith(">"):
        text = text[1:].lstrip()
    return text


def _fence_is_closed(token: Token, lines: list[str]) -> bool:
    # markdown-it runs an unclosed fence to the end of its container, so the
    # last mapped line is a closing fence only when the block really closed.
    start, end = token.map
    if end - start < 2:
        return False
    last = _strip_container(lines[end - 1]).rstrip()
    char = token.markup[0]
    return bool(last) and set(last) == {char} and len(last) >= len(token.markup)


def _fences(body: str, lines: list[str]) -> list[tuple[Token, bool]]:
    return [
        (token, _fence_is_closed(token, lines))
        for token in _md.parse(body)
        if token.type == "fence" and token.map is not None
    ]


def _highlights(lines: list[str], skip: set[int]) -> tuple[list[Listing], int | None]:
    """Scan for Liquid highlight blocks outside Markdown fences.

    Returns the closed blocks and the line of a block left open, if any.
    """
    listings: list[Listing] = []
    language: str | None = None
    opened_at: int | None = None
    code: list[str] = []

    for index, line in enumerate(lines):
        if index in skip:
            continue
        if opened_at is None:
            match = _HIGHLIGHT_OPEN.match(line)
            if match:
                language, opened_at, code = match.group("lang"), index + 1, []
        elif _HIGHLIGHT_CLOSE.match(line):
            listings.append(Listing(language=language, code="\n".join(code), line=opened_at))
            opened_at = None
        else:
            code.append(line)

    return listings, opened_at


def _scan(body: str) -> tuple[list[Listing], list[int]]:
    lines = body.splitlines()
    listings: list[Listing] = []
    unclosed: list[int] = []
    inside_fences: set[int] = set()

    for token, closed in _fences(body, lines):
        start, end = token.map
        inside_fences.update(range(start, end))
        if not closed:
            unclosed.append(start + 1)
            continue
        info = token.info.strip()
        listings.append(
            Listing(
                language=info.split()[0] if info else None,
                code=token.content.removesuffix("\n"),
                line=start + 1,
            )
        )

    highlighted, open_highlight = _highlights(lines, inside_fences)
    listings.extend(highlighted)
    if open_highlight is not None:
        unclosed.append(open_highlight)

    listings.sort(key=lambda listing: listing.line)
    return listings, sorted(unclosed)


def extract_listings(body: str) -> list[Listing]:
    """Return every closed fenced or highlighted block in ``body``, in order.

    Fences inside blockquotes and list items are included. A block that is
    still open at the end of its container is not returned; use
    :func:`find_unclosed_fence` to report it.
    """
    listings, _ = _scan(body)
    return listings


def find_unclosed_fence(body: str) -> int | None:
    """Return the 1-based line of the first block that never closes, or None."""
    _, unclosed = _scan(body)
    return unclosed[0] if unclosed else None
