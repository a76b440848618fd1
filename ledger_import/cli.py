"""Typer CLI interface for the statement ledger import."""

from pathlib import Path

import typer
from pydantic import ValidationError

from ledger_import.config import DEFAULT_DB_PATH, ImportSettings
from ledger_import.logging_setup import LOG_LEVEL_ENV, configure_logging

app = typer.Typer(
    name="ledger-import",
    help="Import delimited bank and card statements into a SQLite ledger.",
)


@app.callback()
def main(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        envvar=LOG_LEVEL_ENV,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    ),
) -> None:
    """Import delimited bank and card statements into a SQLite ledger."""
    try:
        configure_logging(log_level)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--log-level") from exc


@app.command(name="import")
def import_cmd(
    file: Path = typer.Argument(..., help="Delimited statement file; the first line is the header"),
    account: str = typer.Option(
        ...,
        "--account",
        "-a",
        help="Account identifier every imported transaction is tagged with",
    ),
    db: Path = typer.Option(
        DEFAULT_DB_PATH,
        "--db",
        envvar="LEDGER_IMPORT_DB",
        help="Path to the SQLite database file",
    ),
    delimiter: str = typer.Option(",", "--delimiter", "-d", help="Field separator character"),
    workers: int = typer.Option(1, "--workers", help="Threads used to normalize rows"),
    skip_duplicates: bool = typer.Option(
        False,
        "--skip-duplicates",
        help="Skip the file if byte-identical content was imported before",
    ),
) -> None:
    """Import one statement file into the ledger.

    Columns are matched by header name (date/txn_date/posted,
    description/memo/details, amount/amt/value or debit + credit). Either
    every row is imported or, on the first invalid row, nothing is.
    """
    if not file.exists() or not file.is_file():
        typer.echo(f"Error: File not found: {file}", err=True)
        raise typer.Exit(1)

    try:
        settings = ImportSettings(delimiter=delimiter, max_workers=workers)
    except ValidationError as exc:
        typer.echo(f"Error: Invalid options: {exc}", err=True)
        raise typer.Exit(2)

    from ledger_import.db.repository import LedgerRepository
    from ledger_import.db.schema import create_schema
    from ledger_import.exceptions import LedgerImportError
    from ledger_import.pipeline import import_statement
    from ledger_import.writer import content_hash

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db, settings.busy_timeout)
    repo = LedgerRepository(conn)

    try:
        if skip_duplicates and repo.check_import_duplicate(content_hash(file.read_bytes())):
            typer.echo(f"Warning: {file.name} was already imported. Skipping.", err=True)
            raise typer.Exit(0)
        outcome = import_statement(repo, file, account, settings)
    except LedgerImportError as exc:
        typer.echo(f"Error importing {file.name}: {exc}", err=True)
        raise typer.Exit(1)
    finally:
        conn.close()

    if outcome.previously_imported:
        typer.echo(
            f"Warning: {file.name} has the same content as an earlier import",
            err=True,
        )
    typer.echo(
        f"Imported {outcome.transaction_count} transaction(s) from {outcome.source_name} "
        f"into {db.name} (import #{outcome.import_id})"
    )
    typer.echo(f"SHA-256: {outcome.source_hash}")
