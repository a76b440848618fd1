"""Delimited statement reader: file bytes to header and data rows."""

import csv
from dataclasses import dataclass, field
from pathlib import Path

from ledger_import.exceptions import EmptyStatementError, UnreadableStatementError
from ledger_import.models.transaction import StatementRow


@dataclass
class StatementFile:
    """A statement read fully into memory, split into header and data rows."""

    source_name: str
    content: bytes
    headers: list[str]
    rows: list[StatementRow] = field(default_factory=list)


def _split_fields(line: str, delimiter: str) -> list[str]:
    # Quoted cells may contain the delimiter; records never span lines.
    return next(csv.reader([line], delimiter=delimiter), [])


def split_statement(
    content: bytes,
    source_name: str,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
) -> StatementFile:
    """Split raw statement bytes into a header row and numbered data rows.

    Blank lines are discarded. Each data row keeps its physical 1-based line
    number in the file so diagnostics point at the source line.
    """
    try:
        text = content.decode(encoding)
    except UnicodeDecodeError as exc:
        raise UnreadableStatementError(source_name, str(exc)) from exc

    numbered = [
        (line_number, line.rstrip("\r"))
        for line_number, line in enumerate(text.split("\n"), start=1)
        if line.strip()
    ]
    if not numbered:
        raise EmptyStatementError(source_name, "no header line")

    _, header_line = numbered[0]
    rows = [
        StatementRow(line_number=line_number, fields=_split_fields(line, delimiter))
        for line_number, line in numbered[1:]
    ]
    return StatementFile(
        source_name=source_name,
        content=content,
        headers=_split_fields(header_line, delimiter),
        rows=rows,
    )


def read_statement(
    file_path: Path,
    delimiter: str = ",",
    encoding: str = "utf-8-sig",
) -> StatementFile:
    """Read a statement file fully into memory and split it."""
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")
    try:
        content = file_path.read_bytes()
    except OSError as exc:
        raise UnreadableStatementError(file_path.name, str(exc)) from exc
    return split_statement(content, file_path.name, delimiter=delimiter, encoding=encoding)
