"""Command line interface for SQL Model Builder."""

import logging
import sys
from json import dumps
from pathlib import Path
from sys import stdout

from catalog import create_engine_for_database, load_schema, schema_to_dict
from cyclopts import App
from diagram import DatabaseSchema, schema_to_diagrams
from document import LABELS, Language, schema_to_markdown
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from sqlalchemy.exc import SQLAlchemyError

from model_builder.settings import (
    DEFAULT_SETTINGS_FILE,
    Settings,
    load_settings,
    parse_settings,
    validate_max_depth,
)

app = App(help="Markdown documentation and ER diagrams for database schemas")

err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print success message to stderr."""
    err_console.print(f"[bold green]✓[/] {message}")


def print_info(message: str) -> None:
    """Print info message to stderr."""
    err_console.print(f"[bold blue]i[/] {message}")


def configure_logging(*, verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def resolve_settings(
    config: Path,
    *,
    url: str | None = None,
    max_depth: int | None = None,
    language: Language | None = None,
) -> Settings:
    """Load the settings file and apply command line overrides."""
    try:
        if config.exists():
            settings = load_settings(config)
            print_info(f"Settings: {config}")
        elif config == DEFAULT_SETTINGS_FILE:
            settings = parse_settings({})
        else:
            print_error(f"Settings file does not exist: {config}")
            sys.exit(1)

        if url is not None:
            settings = settings._replace(connection_string=url)
        if max_depth is not None:
            options = settings.options._replace(max_depth=validate_max_depth(max_depth))
            settings = settings._replace(options=options)
        if language is not None:
            settings = settings._replace(language=language)
    except (ValueError, OSError) as e:
        print_error(f"Invalid settings: {e}")
        sys.exit(1)

    return settings


def read_schema(settings: Settings) -> DatabaseSchema:
    """Load the schema snapshot, exiting on any database failure."""
    if not settings.connection_string:
        print_error("No database configured, pass --url or set a connection string")
        sys.exit(1)

    try:
        engine = create_engine_for_database(settings.connection_string)
    except ImportError:
        print_error("SQL Server connections require [mssql] extra dependencies")
        sys.exit(1)
    except (SQLAlchemyError, ValueError) as e:
        print_error(f"Failed to connect to database: {e}")
        sys.exit(1)

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
        ) as progress:
            progress.add_task("Reading database schema...", total=None)
            database_schema = load_schema(engine, settings.schema)
    except SQLAlchemyError as e:
        print_error(f"Failed to read database schema: {e}")
        sys.exit(1)
    finally:
        engine.dispose()

    print_info(
        f"Tables: {len(database_schema.tables)}, "
        f"relationships: {len(database_schema.relationships)}",
    )
    return database_schema


def write_output(text: str, output: Path | None) -> None:
    """Write to the output file, or to stdout when none is given."""
    if output is None:
        stdout.write(text)
        return

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to write output file: {e}")
        sys.exit(1)
    print_success(f"Written to {output}")


@app.command
def document(
    config: Path = DEFAULT_SETTINGS_FILE,
    *,
    url: str | None = None,
    max_depth: int | None = None,
    language: Language | None = None,
    output: Path | None = None,
    verbose: bool = False,
) -> None:
    """Generate markdown documentation with relationship diagrams."""
    configure_logging(verbose=verbose)
    settings = resolve_settings(config, url=url, max_depth=max_depth, language=language)
    database_schema = read_schema(settings)

    markdown = schema_to_markdown(
        database_schema,
        settings.options,
        LABELS[settings.language],
    )
    write_output(markdown, output)
    print_success("Documentation generated successfully")


@app.command
def diagram(
    config: Path = DEFAULT_SETTINGS_FILE,
    *,
    url: str | None = None,
    max_depth: int | None = None,
    language: Language | None = None,
    output: Path | None = None,
    verbose: bool = False,
) -> None:
    """Generate only the mermaid diagrams of the configured root entities."""
    configure_logging(verbose=verbose)
    settings = resolve_settings(config, url=url, max_depth=max_depth, language=language)
    database_schema = read_schema(settings)

    diagrams = schema_to_diagrams(
        database_schema.tables,
        database_schema.relationships,
        settings.options,
        title=LABELS[settings.language].diagram,
    )
    write_output("\n".join(diagrams), output)
    print_success(f"Generated {len(diagrams)} diagrams")


@app.command
def schema(
    config: Path = DEFAULT_SETTINGS_FILE,
    *,
    url: str | None = None,
    output: Path | None = None,
    verbose: bool = False,
) -> None:
    """Dump the reflected tables and relationships as JSON."""
    configure_logging(verbose=verbose)
    settings = resolve_settings(config, url=url)
    database_schema = read_schema(settings)

    write_output(dumps(schema_to_dict(database_schema), ensure_ascii=False), output)
    print_success("Schema export completed successfully")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
