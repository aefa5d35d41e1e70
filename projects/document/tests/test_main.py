"""Tests for markdown documentation rendering."""

import pytest

from diagram import Column, DatabaseSchema, DiagramOptions, Relationship, RootEntity, Table
from document import LABELS, listed_tables, schema_to_markdown
from document.main import escape_cell


@pytest.fixture(name="schema")
def order_schema() -> DatabaseSchema:
    """Schema snapshot with two related tables and one unrelated table."""
    return DatabaseSchema(
        tables=(
            Table(
                "Customer",
                (
                    Column("Id", "int", 4, is_nullable=False),
                    Column("Name", "nvarchar", 500, True, "Full name"),
                ),
            ),
            Table("Log", (Column("Message", "text", 0, is_nullable=True),)),
            Table(
                "Order",
                (
                    Column("Id", "int", 4, is_nullable=False),
                    Column("CustomerId", "int", 4, False, "Buyer | payer"),
                ),
            ),
        ),
        relationships=(
            Relationship("Order", "Customer", "FK_Order_Customer", "CustomerId"),
        ),
    )


@pytest.fixture(name="options")
def order_options() -> DiagramOptions:
    """Options documenting the order tables only."""
    return DiagramOptions(
        roots=(RootEntity("Order"),),
        included_tables=frozenset({"Order", "Customer"}),
        max_depth=2,
    )


def test_listed_tables_keep_load_order(schema: DatabaseSchema) -> None:
    """Test that listed tables follow the schema order."""
    tables = listed_tables(schema.tables, ["Order", "Customer"])

    assert [table.name for table in tables] == ["Customer", "Order"]


def test_column_listing(schema: DatabaseSchema, options: DiagramOptions) -> None:
    """Test the heading, header row and rows of an included table."""
    markdown = schema_to_markdown(schema, options)

    assert markdown.startswith("# Database documentation\n\n## Table: Customer\n\n")
    assert (
        "| Column name | Data type | Size | Nullable | Description |\n"
        "|---|---|---|---|---|\n"
        "| Id | int | 4 | False |  |\n"
        "| Name | nvarchar | 500 | True | Full name |\n"
        "\n"
        "## Table: Order\n"
    ) in markdown


def test_excluded_tables_are_not_listed(
    schema: DatabaseSchema,
    options: DiagramOptions,
) -> None:
    """Test that tables outside the inclusion list are skipped."""
    markdown = schema_to_markdown(schema, options)

    assert "Log" not in markdown


def test_pipes_are_escaped(schema: DatabaseSchema, options: DiagramOptions) -> None:
    """Test that cell content cannot break the table layout."""
    markdown = schema_to_markdown(schema, options)

    assert r"| CustomerId | int | 4 | False | Buyer \| payer |" in markdown


def test_diagram_section_follows_listing(
    schema: DatabaseSchema,
    options: DiagramOptions,
) -> None:
    """Test that the diagrams come after the table listing."""
    markdown = schema_to_markdown(schema, options)

    listing, diagrams = markdown.split("## Relationship diagrams\n\n")
    assert "## Table: Order" in listing
    assert diagrams.startswith("### Diagram for entity: Order\n\n```mermaid\nerDiagram\n")
    assert "    Order ||--|{Customer : CustomerId\n" in diagrams
    assert diagrams.rstrip().endswith("```")


def test_russian_labels(schema: DatabaseSchema, options: DiagramOptions) -> None:
    """Test the Russian label set."""
    markdown = schema_to_markdown(schema, options, LABELS["ru"])

    assert markdown.startswith("# Документация по базе данных\n\n## Таблица: Customer\n")
    assert "| Имя колонки | Тип данных | Размер | Допускает NULL | Описание |" in markdown
    assert "## Диаграмма связей\n" in markdown
    assert "### Диаграмма для сущности: Order\n" in markdown


def test_empty_configuration(schema: DatabaseSchema) -> None:
    """Test that empty lists produce empty sections rather than errors."""
    markdown = schema_to_markdown(schema, DiagramOptions())

    assert markdown.strip() == "# Database documentation\n\n## Relationship diagrams"


def test_escape_cell() -> None:
    """Test escaping of pipes and line breaks."""
    assert escape_cell("a|b\nc") == r"a\|b c"
    assert escape_cell(12) == "12"
