"""Markdown documentation of a database schema."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from jinja2 import Environment, FileSystemLoader, select_autoescape

from diagram import schema_to_diagrams
from document.labels import LABELS, Labels

if TYPE_CHECKING:
    from collections.abc import Iterable

    from diagram import DatabaseSchema, DiagramOptions, Table

logger = getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def escape_cell(value: object) -> str:
    """Escape a value for use inside a markdown table cell."""
    return str(value).replace("|", r"\|").replace("\n", " ")


# Jinja2 environment for markdown template rendering
_JINJA_ENV = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=select_autoescape(),
    trim_blocks=True,
    lstrip_blocks=True,
)
_JINJA_ENV.filters["cell"] = escape_cell


def listed_tables(tables: Iterable[Table], included_tables: Iterable[str]) -> list[Table]:
    """Select the included tables, keeping their load order."""
    included = frozenset(included_tables)
    return [table for table in tables if table.name in included]


def schema_to_markdown(
    schema: DatabaseSchema,
    options: DiagramOptions,
    labels: Labels = LABELS["en"],
) -> str:
    """Render the column listing and relationship diagrams of a schema.

    Args:
        schema: Loaded tables and relationships
        options: Root entities, included tables and traversal depth
        labels: Wording of headings and table columns

    Returns:
        Markdown document

    """
    tables = listed_tables(schema.tables, options.included_tables)
    diagrams = schema_to_diagrams(
        schema.tables,
        schema.relationships,
        options,
        title=labels.diagram,
    )
    logger.debug("Documenting %d tables and %d diagrams", len(tables), len(diagrams))

    template = _JINJA_ENV.get_template("document.md")
    return template.render(labels=labels, tables=tables, diagrams=diagrams)
