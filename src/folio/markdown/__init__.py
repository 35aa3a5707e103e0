"""Markdown document helpers: front matter and fenced listings."""

from folio.markdown.frontmatter import dump_document, split_frontmatter_strict, starts_with_frontmatter
from folio.markdown.listings import Listing, extract_listings, find_unclosed_fence

__all__ = [
    "Listing",
    "dump_document",
    "extract_listings",
    "find_unclosed_fence",
    "split_frontmatter_strict",
    "starts_with_frontmatter",
]
