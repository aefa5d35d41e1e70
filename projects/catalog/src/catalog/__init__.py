"""Schema loading from live databases."""

from catalog.main import (
    create_engine_for_database,
    load_schema,
    read_only_sqlite,
    schema_to_dict,
)

__all__ = [
    "create_engine_for_database",
    "load_schema",
    "read_only_sqlite",
    "schema_to_dict",
]
