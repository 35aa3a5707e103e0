"""Folio - content toolkit for a Jekyll-style personal blog."""

__version__ = "0.1.0"
