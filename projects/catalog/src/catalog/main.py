"""Reflection of tables, columns and foreign keys into the schema model."""

from logging import getLogger
from pathlib import Path
from typing import Any
from urllib.parse import quote_plus

from sqlalchemy import Engine, Inspector, create_engine, inspect
from sqlalchemy.engine.interfaces import ReflectedColumn, ReflectedForeignKeyConstraint
from sqlalchemy.exc import CompileError
from sqlalchemy.types import TypeEngine

from diagram.types import Column, DatabaseSchema, Relationship, Table

logger = getLogger(__name__)

SQLITE_EXTENSIONS = {".sqlite", ".db", ".sqlite3"}
DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"


def read_only_sqlite(sqlite_location: Path) -> Engine:
    """Create a read-only SQLAlchemy engine for SQLite database."""
    connection_string = f"sqlite:///{sqlite_location}?mode=ro"
    return create_engine(connection_string, connect_args={"uri": True})


def odbc_connection_url(connection_string: str) -> str:
    """Build a SQL Server URL from an ODBC style connection string."""
    if "driver=" not in connection_string.lower():
        connection_string = f"Driver={{{DEFAULT_ODBC_DRIVER}}};{connection_string}"
    return f"mssql+pyodbc:///?odbc_connect={quote_plus(connection_string)}"


def create_engine_for_database(location: str) -> Engine:
    """Create an engine from a URL, a SQLite file or an ODBC connection string.

    Args:
        location: SQLAlchemy URL, path to a SQLite file, or a
            ``Server=...;Database=...`` connection string for SQL Server

    Returns:
        Engine for the database

    Raises:
        ValueError: If the location is blank

    """
    location = location.strip()
    if not location:
        msg = "No database connection string configured"
        raise ValueError(msg)

    if "://" in location:
        return create_engine(location)

    if Path(location).suffix.lower() in SQLITE_EXTENSIONS:
        return read_only_sqlite(Path(location))

    return create_engine(odbc_connection_url(location))


def _type_name(column_type: TypeEngine[Any], inspector: Inspector) -> str:
    """Render a column type as a bare, lower-cased type name."""
    try:
        compiled = column_type.compile(dialect=inspector.dialect)
    except CompileError:
        compiled = type(column_type).__name__
    return compiled.split("(", 1)[0].strip().lower()


def _build_column(col_info: ReflectedColumn, inspector: Inspector) -> Column:
    """Build a column from SQLAlchemy column info."""
    length = getattr(col_info["type"], "length", None)
    return Column(
        name=col_info["name"],
        data_type=_type_name(col_info["type"], inspector),
        max_length=length if isinstance(length, int) else 0,
        is_nullable=bool(col_info["nullable"]),
        description=col_info.get("comment") or "",
    )


def _build_relationships(
    table_name: str,
    fk: ReflectedForeignKeyConstraint,
) -> list[Relationship]:
    """Build one relationship per constrained column of a foreign key."""
    return [
        Relationship(
            parent_table=table_name,
            child_table=fk["referred_table"],
            foreign_key_name=fk.get("name") or "",
            ref_col_name=column,
        )
        for column in fk["constrained_columns"]
    ]


def load_schema(engine: Engine, schema: str | None = None) -> DatabaseSchema:
    """Reflect every table of the database into a schema snapshot.

    Tables come back sorted by name with their columns in ordinal order. The
    connection is released before the snapshot is returned.
    """
    with engine.connect() as connection:
        inspector = inspect(connection)
        table_names = sorted(inspector.get_table_names(schema=schema))

        tables = tuple(
            Table(
                name=table_name,
                columns=tuple(
                    _build_column(col_info, inspector)
                    for col_info in inspector.get_columns(table_name, schema=schema)
                ),
            )
            for table_name in table_names
        )
        relationships = tuple(
            relationship
            for table_name in table_names
            for fk in inspector.get_foreign_keys(table_name, schema=schema)
            for relationship in _build_relationships(table_name, fk)
        )

    logger.info(
        "Reflected %d tables and %d relationships from %s",
        len(tables),
        len(relationships),
        engine.url.render_as_string(hide_password=True),
    )
    return DatabaseSchema(tables=tables, relationships=relationships)


def schema_to_dict(schema: DatabaseSchema) -> dict[str, Any]:
    """Convert a schema snapshot to plain JSON-ready data."""
    return {
        "tables": [
            {
                "name": table.name,
                "columns": [column._asdict() for column in table.columns],
            }
            for table in schema.tables
        ],
        "relationships": [
            relationship._asdict() for relationship in schema.relationships
        ],
    }
