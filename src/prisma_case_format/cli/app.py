import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from prisma_case_format.config import DEFAULTS, get_config
from prisma_case_format.core.conventions import resolve_case_convention, resolve_inflection_convention
from prisma_case_format.core.migrate import run_migration
from prisma_case_format.core.ports.formatter import SchemaFormatter
from prisma_case_format.errors import CaseFormatError, ConfigurationError, FormatterError
from prisma_case_format.formatter import get_formatter
from prisma_case_format.models import RenameRecord

app = typer.Typer(
    name="prisma-case-format",
    help="Give your schema.prisma sane naming conventions.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
err_console = Console(stderr=True)

T = TypeVar("T")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _warn(message: str) -> None:
    err_console.print(f"[yellow]Warning:[/yellow] {escape(message)}", soft_wrap=True)


def _error(message: str) -> None:
    err_console.print(f"[red]{escape(message)}[/red]", soft_wrap=True, highlight=False)


def _with_default(resolver: Callable[[str], T], value: str, default: str, what: str) -> T:
    try:
        return resolver(value)
    except ConfigurationError:
        _warn(f'encountered unsupported {what}: "{value}". Defaulting to "{default}".')
        return resolver(default)


def _render_renames(records: Sequence[RenameRecord]) -> None:
    if not records:
        console.print("No declarations were renamed.")
        return
    table = Table(show_lines=False)
    for header in ("scope", "block", "original", "new name", "mapped"):
        table.add_column(header)
    for record in records:
        table.add_row(record.scope.value, record.block, record.original, record.new_name, "yes" if record.mapped else "kept")
    console.print(table)
    console.print(f"({len(records)} renames)")


def format_schema_file(
    file: Annotated[Path | None, typer.Option(help="schema.prisma file location.")] = None,
    table_case: Annotated[
        str | None, typer.Option(help='Case convention for table names: "pascal", "camel" or "snake".')
    ] = None,
    table_inflection: Annotated[
        str | None, typer.Option(help='Singular or plural table names: "singular", "plural" or "leave".')
    ] = None,
    field_case: Annotated[
        str | None, typer.Option(help='Case convention for field names: "pascal", "camel" or "snake".')
    ] = None,
    formatter: Annotated[
        str | None, typer.Option(help='Formatter for the result: "builtin", "prisma" or "none".')
    ] = None,
    rename_references: Annotated[
        bool,
        typer.Option(
            "--rename-references/--keep-references",
            help="Rewrite field types that point at renamed models or enums. Keeping them leaves relations"
            " pointing at the old names, which prisma rejects.",
        ),
    ] = True,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", "-D", help="Print changes to the console rather than back to the file.")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log every rename.")] = False,
) -> None:
    """Rename models and fields to the requested case conventions, keeping database names with @map/@@map."""
    _configure_logging(verbose)
    config = get_config()

    if dry_run:
        console.print("***Dry run mode***", markup=False)

    schema_path = file or config.file
    try:
        contents = schema_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        _error(f"Encountered an error while trying to read provided schema.prisma file at path {schema_path}")
        _error(str(exc))
        raise typer.Exit(1) from None

    table_case_fn = _with_default(
        resolve_case_convention, table_case or config.table_case, DEFAULTS.table_case, "case convention"
    )
    table_inflection_fn = _with_default(
        resolve_inflection_convention,
        table_inflection or config.table_inflection,
        DEFAULTS.table_inflection,
        "inflection convention",
    )
    field_case_fn = _with_default(
        resolve_case_convention, field_case or config.field_case, DEFAULTS.field_case, "case convention"
    )
    schema_formatter: SchemaFormatter = _with_default(
        get_formatter, formatter or config.formatter, DEFAULTS.formatter, "formatter"
    )

    try:
        result = run_migration(contents, table_case_fn, field_case_fn, table_inflection_fn, rename_references)
    except CaseFormatError as exc:
        _error("Encountered error while migrating case conventions")
        _error(str(exc))
        raise typer.Exit(1) from None

    try:
        new_schema = asyncio.run(schema_formatter.format(result.schema_text))
    except FormatterError as exc:
        _error("Encountered error while formatting the migrated schema")
        _error(str(exc))
        raise typer.Exit(1) from None

    if dry_run:
        console.print("Prettify yielded the following schema:", markup=False)
        console.print(new_schema, markup=False, highlight=False, soft_wrap=True)
        _render_renames(result.renames)
        return

    schema_path.write_text(new_schema, encoding="utf-8")
    console.print("✨ Done.", markup=False)


app.command()(format_schema_file)


def main() -> None:
    app()
