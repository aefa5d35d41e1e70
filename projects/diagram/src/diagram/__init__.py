"""ER diagram selection and mermaid rendering package."""

from diagram.describe import describe_table, index_tables
from diagram.graph import build_graph
from diagram.main import DiagramBuilder, entity_diagram, schema_to_diagrams
from diagram.types import (
    AUDIT_COLUMNS,
    Column,
    DatabaseSchema,
    DiagramGraph,
    DiagramOptions,
    Relationship,
    RootEntity,
    Table,
)

__all__ = [
    "AUDIT_COLUMNS",
    "Column",
    "DatabaseSchema",
    "DiagramBuilder",
    "DiagramGraph",
    "DiagramOptions",
    "Relationship",
    "RootEntity",
    "Table",
    "build_graph",
    "describe_table",
    "entity_diagram",
    "index_tables",
    "schema_to_diagrams",
]
