"""Composition of mermaid ER diagrams, one per configured root entity."""

from collections.abc import Iterable, Mapping
from logging import getLogger

from diagram.describe import describe_table, index_tables
from diagram.graph import build_graph
from diagram.types import (
    AUDIT_COLUMNS,
    DiagramOptions,
    Relationship,
    RootEntity,
    Table,
)

logger = getLogger(__name__)

DEFAULT_TITLE = "Diagram for entity"


def edge_line(relationship: Relationship) -> str:
    """Render a relationship as a mermaid edge."""
    return (
        f"    {relationship.parent_table} ||--|{{{relationship.child_table}"
        f" : {relationship.ref_col_name}"
    )


class DiagramBuilder:
    """Accumulates the mermaid source of a single root entity's diagram."""

    def __init__(
        self,
        root: str,
        tables: Mapping[str, Table],
        *,
        described: Iterable[str] = (),
        hidden_columns: Iterable[str] = AUDIT_COLUMNS,
    ) -> None:
        self.root = root
        self.tables = tables
        self.described = set(described)
        self.hidden_columns = frozenset(hidden_columns)
        self.lines: list[str] = []

    def add_edge(self, relationship: Relationship) -> None:
        """Add an edge followed by the attribute blocks of its endpoints."""
        self.lines.append(edge_line(relationship))
        for name in (relationship.parent_table, relationship.child_table):
            self.lines.extend(
                describe_table(
                    name,
                    self.tables,
                    self.described,
                    hidden_columns=self.hidden_columns,
                ),
            )

    def render(self, title: str = DEFAULT_TITLE) -> str:
        """Return the heading and fenced mermaid block."""
        body = "".join(f"{line}\n" for line in self.lines)
        return f"### {title}: {self.root}\n\n```mermaid\nerDiagram\n{body}```\n"


def entity_diagram(
    root: RootEntity,
    tables: Mapping[str, Table],
    relationships: Iterable[Relationship],
    options: DiagramOptions,
    *,
    title: str = DEFAULT_TITLE,
) -> str:
    """Render the diagram of one root entity.

    Other configured roots are pre-marked as described so they show up as bare
    nodes rather than with their full attribute block.
    """
    root_names = options.root_names
    graph = build_graph(
        root.name,
        relationships,
        included_tables=options.included_tables,
        exclusions=root.exclusions,
        roots=root_names,
        max_depth=options.max_depth,
    )

    builder = DiagramBuilder(
        root.name,
        tables,
        described=root_names - {root.name},
        hidden_columns=options.hidden_columns,
    )
    for relationship in graph.edges:
        builder.add_edge(relationship)

    return builder.render(title)


def schema_to_diagrams(
    tables: Iterable[Table],
    relationships: Iterable[Relationship],
    options: DiagramOptions,
    *,
    title: str = DEFAULT_TITLE,
) -> list[str]:
    """Render one diagram per configured root, in configuration order."""
    table_index = index_tables(tables)
    relationships = tuple(relationships)
    logger.debug("Rendering diagrams for %d root entities", len(options.roots))
    return [
        entity_diagram(root, table_index, relationships, options, title=title)
        for root in options.roots
    ]
