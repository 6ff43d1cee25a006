"""Simple Notes: browse, filter, and create tagged Markdown notes."""

__version__ = "0.5.0"
