"""Mermaid attribute blocks for the tables of a diagram."""

from collections.abc import Iterable, Mapping

from diagram.types import AUDIT_COLUMNS, Column, Table


def index_tables(tables: Iterable[Table]) -> dict[str, Table]:
    """Index tables by name, keeping the first table loaded under each name."""
    index: dict[str, Table] = {}
    for table in tables:
        index.setdefault(table.name, table)
    return index


def attribute_line(column: Column) -> str:
    """Render one column as a mermaid attribute."""
    data_type = column.data_type.replace(" ", "_")
    description = column.description.replace('"', "'")
    return f'        {data_type} {column.name} "{description}"'


def describe_table(
    name: str,
    tables: Mapping[str, Table],
    described: set[str],
    *,
    hidden_columns: Iterable[str] = AUDIT_COLUMNS,
) -> list[str]:
    """Render the attribute block of a table, at most once per diagram.

    The name is always recorded in ``described``, also when the table is
    unknown and nothing is rendered for it.
    """
    first_time = name not in described
    described.add(name)

    table = tables.get(name)
    if table is None or not first_time:
        return []

    hidden = frozenset(hidden_columns)
    return [
        f"    {name} {{",
        *(attribute_line(column) for column in table.columns if column.name not in hidden),
        "    }",
    ]
