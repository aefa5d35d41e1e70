"""Settings loading from TOML files or the legacy appsettings.json layout."""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from tomllib import load
from typing import Any, NamedTuple, NotRequired, TypedDict

from diagram import AUDIT_COLUMNS, DiagramOptions, RootEntity
from document import LABELS, Language

DEFAULT_SETTINGS_FILE = Path("model-builder.toml")
DEFAULT_MAX_DEPTH = 2


class RootEntitySettings(TypedDict):
    """A root entity as written in a settings file."""

    name: str
    exclusions: NotRequired[list[str]]


class DatabaseSettings(TypedDict):
    """Connection section of a settings file."""

    connection_string: NotRequired[str]
    schema: NotRequired[str]


class DiagramSettings(TypedDict):
    """Diagram section of a settings file."""

    root_entities: NotRequired[list[RootEntitySettings | str]]
    included_tables: NotRequired[list[str]]
    max_depth: NotRequired[int]
    hidden_columns: NotRequired[list[str]]


class SettingsFile(TypedDict):
    """Raw contents of a settings file."""

    language: NotRequired[str]
    database: NotRequired[DatabaseSettings]
    diagram: NotRequired[DiagramSettings]


class Settings(NamedTuple):
    """Validated settings for one run."""

    connection_string: str | None
    schema: str | None
    options: DiagramOptions
    language: Language = "en"


def _section(data: Mapping[str, object], key: str) -> dict[str, Any]:
    """Return a settings section, which must be a table or object when present."""
    section = data.get(key) or {}
    if not isinstance(section, dict):
        msg = f"'{key}' must be an object, got {section!r}"
        raise ValueError(msg)
    return section


def _appsettings_root(entry: object) -> RootEntitySettings | str:
    """Translate one RootEntities entry, keeping bare table names as they are."""
    if isinstance(entry, str):
        return entry
    if not isinstance(entry, dict):
        msg = f"Invalid root entity: {entry!r}"
        raise ValueError(msg)
    return {"name": entry.get("Name"), "exclusions": entry.get("Exclusions") or []}


def from_appsettings(data: dict[str, Any]) -> SettingsFile:
    """Translate the PascalCase appsettings.json layout into settings data."""
    database = _section(data, "DatabaseSettings")
    diagram = _section(data, "DiagramSettings")

    settings: SettingsFile = {"database": {}, "diagram": {}}
    if "ConnectionString" in database:
        settings["database"]["connection_string"] = database["ConnectionString"]
    if "Schema" in database:
        settings["database"]["schema"] = database["Schema"]
    if "RootEntities" in diagram:
        entries = diagram["RootEntities"] or []
        settings["diagram"]["root_entities"] = (
            [_appsettings_root(entry) for entry in entries]
            if isinstance(entries, list)
            else entries
        )
    if "IncludedTables" in diagram:
        settings["diagram"]["included_tables"] = diagram["IncludedTables"] or []
    if "MaxDepth" in diagram:
        settings["diagram"]["max_depth"] = diagram["MaxDepth"]
    if "HiddenColumns" in diagram:
        settings["diagram"]["hidden_columns"] = diagram["HiddenColumns"] or []
    if "Language" in data:
        settings["language"] = data["Language"]
    return settings


def read_settings_file(path: Path) -> SettingsFile:
    """Read raw settings from a ``.toml`` or ``.json`` file."""
    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as f:
            settings: SettingsFile = load(f)
            return settings
    if suffix == ".json":
        with path.open(encoding="utf-8-sig") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            msg = f"Settings file must hold a JSON object: {path}"
            raise ValueError(msg)
        return from_appsettings(data)
    msg = f"Unsupported settings file type: {path.suffix}"
    raise ValueError(msg)


def _names(values: Iterable[Any] | None, field: str) -> frozenset[str]:
    """Validate a list of table or column names."""
    names = list(values or [])
    if isinstance(values, str) or not all(isinstance(name, str) for name in names):
        msg = f"'{field}' must be a list of names"
        raise ValueError(msg)
    return frozenset(names)


def _root_entity(entry: RootEntitySettings | str) -> RootEntity:
    """Validate one root entity entry, given as a table name or a table."""
    if isinstance(entry, str):
        entry = {"name": entry}
    if not isinstance(entry, dict):
        msg = f"Invalid root entity: {entry!r}"
        raise ValueError(msg)
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        msg = f"Root entity without a name: {entry}"
        raise ValueError(msg)
    return RootEntity(name, _names(entry.get("exclusions"), f"{name}.exclusions"))


def _root_entities(entries: object) -> tuple[RootEntity, ...]:
    """Validate the list of root entities."""
    if entries is None:
        return ()
    if not isinstance(entries, list):
        msg = f"'root_entities' must be a list, got {entries!r}"
        raise ValueError(msg)
    return tuple(_root_entity(entry) for entry in entries)


def validate_max_depth(max_depth: object) -> int:
    """Check that the traversal depth is a non-negative integer."""
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 0:
        msg = f"'max_depth' must be a non-negative integer, got {max_depth!r}"
        raise ValueError(msg)
    return max_depth


def parse_settings(data: SettingsFile) -> Settings:
    """Validate raw settings data."""
    database = _section(data, "database")
    diagram = _section(data, "diagram")

    language = data.get("language", "en")
    if language not in LABELS:
        msg = f"Unknown language '{language}', expected one of: {', '.join(LABELS)}"
        raise ValueError(msg)

    options = DiagramOptions(
        roots=_root_entities(diagram.get("root_entities")),
        included_tables=_names(diagram.get("included_tables"), "included_tables"),
        max_depth=validate_max_depth(diagram.get("max_depth", DEFAULT_MAX_DEPTH)),
        hidden_columns=(
            _names(diagram["hidden_columns"], "hidden_columns")
            if "hidden_columns" in diagram
            else AUDIT_COLUMNS
        ),
    )
    return Settings(
        connection_string=database.get("connection_string"),
        schema=database.get("schema"),
        options=options,
        language=language,  # pyright: ignore[reportArgumentType]
    )


def load_settings(path: Path) -> Settings:
    """Load and validate settings from a file."""
    return parse_settings(read_settings_file(path))
