"""Immutable schema model consumed by the diagram engine."""

from typing import NamedTuple

# Structural and audit columns never listed inside a diagram attribute block
AUDIT_COLUMNS = frozenset(
    {
        "Id",
        "CreatedOn",
        "CreatedById",
        "ModifiedOn",
        "ModifiedById",
        "ProcessListeners",
    },
)


class Column(NamedTuple):
    """A single column of a table."""

    name: str
    data_type: str
    max_length: int
    is_nullable: bool
    description: str = ""


class Table(NamedTuple):
    """A table and its columns in ordinal order."""

    name: str
    columns: tuple[Column, ...] = ()


class Relationship(NamedTuple):
    """A foreign key edge, joined to tables by name only."""

    parent_table: str  # Table holding the foreign key
    child_table: str  # Referenced table
    foreign_key_name: str
    ref_col_name: str  # Referencing column on the parent side


class RootEntity(NamedTuple):
    """A table that gets its own diagram, with the tables it never expands."""

    name: str
    exclusions: frozenset[str] = frozenset()


class DatabaseSchema(NamedTuple):
    """One snapshot of tables and relationships loaded from a database."""

    tables: tuple[Table, ...]
    relationships: tuple[Relationship, ...]


class DiagramOptions(NamedTuple):
    """Configuration shared by every diagram of a run."""

    roots: tuple[RootEntity, ...] = ()
    included_tables: frozenset[str] = frozenset()
    max_depth: int = 2
    hidden_columns: frozenset[str] = AUDIT_COLUMNS

    @property
    def root_names(self) -> frozenset[str]:
        """Names of every configured root entity."""
        return frozenset(root.name for root in self.roots)


class DiagramGraph(NamedTuple):
    """Edges selected for one root, in discovery order."""

    root: str
    edges: tuple[Relationship, ...]
    entities: tuple[str, ...]  # Edge endpoints in order of first appearance
