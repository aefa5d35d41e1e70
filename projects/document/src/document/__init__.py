"""Markdown documentation generation for database schemas."""

from document.labels import LABELS, Labels, Language
from document.main import listed_tables, schema_to_markdown

__all__ = [
    "LABELS",
    "Labels",
    "Language",
    "listed_tables",
    "schema_to_markdown",
]
