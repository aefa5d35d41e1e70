"""Tests for mermaid attribute blocks."""

import pytest

from diagram.describe import attribute_line, describe_table, index_tables
from diagram.types import Column, Table


@pytest.fixture(name="tables")
def order_tables() -> dict[str, Table]:
    """Index of a small order schema."""
    return index_tables(
        [
            Table(
                "Order",
                (
                    Column("Id", "uniqueidentifier", 16, is_nullable=False),
                    Column("CreatedOn", "datetime2", 8, is_nullable=True),
                    Column("CreatedById", "uniqueidentifier", 16, is_nullable=True),
                    Column("ModifiedOn", "datetime2", 8, is_nullable=True),
                    Column("ModifiedById", "uniqueidentifier", 16, is_nullable=True),
                    Column("ProcessListeners", "int", 4, is_nullable=False),
                    Column("CustomerId", "uniqueidentifier", 16, True, "Customer"),
                    Column("Total", "decimal", 9, False, "Order total"),
                ),
            ),
        ],
    )


def test_audit_columns_are_suppressed(tables: dict[str, Table]) -> None:
    """Test that structural columns never reach the attribute block."""
    lines = describe_table("Order", tables, set())

    assert lines == [
        "    Order {",
        '        uniqueidentifier CustomerId "Customer"',
        '        decimal Total "Order total"',
        "    }",
    ]


def test_table_is_described_once(tables: dict[str, Table]) -> None:
    """Test that a second request for the same table renders nothing."""
    described: set[str] = set()

    assert describe_table("Order", tables, described)
    assert describe_table("Order", tables, described) == []
    assert described == {"Order"}


def test_unknown_table_is_recorded(tables: dict[str, Table]) -> None:
    """Test that unknown tables render nothing but are still marked."""
    described: set[str] = set()

    assert describe_table("Ghost", tables, described) == []
    assert "Ghost" in described


def test_pre_described_table_is_skipped(tables: dict[str, Table]) -> None:
    """Test that tables seeded as described are referenced by name only."""
    assert describe_table("Order", tables, {"Order"}) == []


def test_hidden_columns_override(tables: dict[str, Table]) -> None:
    """Test a custom suppression list."""
    lines = describe_table("Order", tables, set(), hidden_columns={"Total"})

    assert '        uniqueidentifier Id ""' in lines
    assert all("Total" not in line for line in lines)


def test_case_sensitive_suppression() -> None:
    """Test that suppression matches exact column names."""
    tables = index_tables([Table("Tag", (Column("id", "int", 4, is_nullable=False),))])

    assert describe_table("Tag", tables, set()) == [
        "    Tag {",
        '        int id ""',
        "    }",
    ]


def test_attribute_line_sanitizes_values() -> None:
    """Test that spaces in types and quotes in descriptions stay well formed."""
    column = Column("Price", "double precision", 8, False, 'The "net" price')

    assert attribute_line(column) == "        double_precision Price \"The 'net' price\""


def test_index_keeps_first_table() -> None:
    """Test that duplicate names resolve to the first loaded table."""
    first = Table("Order", (Column("A", "int", 4, is_nullable=False),))
    second = Table("Order", (Column("B", "int", 4, is_nullable=False),))

    assert index_tables([first, second]) == {"Order": first}
