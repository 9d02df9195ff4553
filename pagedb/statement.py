"""Parsing and execution of the statements the table understands."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from pagedb.row import COLUMN_EMAIL_SIZE, COLUMN_USERNAME_SIZE, Row, deserialize_row, serialize_row
from pagedb.table import TABLE_MAX_ROWS, Table

# Tokens are separated by runs of any of these characters; empty tokens are skipped.
_DELIMITERS = re.compile(r"[ ,.\-]+")
_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1


class StatementType(enum.Enum):
    INSERT = "insert"
    SELECT = "select"
    DELETE = "delete"
    UPDATE = "update"


@dataclass(frozen=True)
class Statement:
    """A prepared statement; ``row`` is set only for inserts."""

    type: StatementType
    row: Row | None = None


class PrepareError(Exception):
    """Raised when a line cannot be turned into a statement."""


class StatementSyntaxError(PrepareError):
    """The statement is missing arguments."""


class StringTooLongError(PrepareError):
    """A text column is longer than its column allows."""


class NegativeIdError(PrepareError):
    """The row id is negative."""


class UnrecognizedStatementError(PrepareError):
    """The line does not start with a known keyword."""


class TableFullError(Exception):
    """The table already holds its maximum number of rows."""


def _tokenize(line: str) -> list[str]:
    return [token for token in _DELIMITERS.split(line) if token]


def _parse_int(text: str) -> int:
    """Read a leading integer the way the C library does, as a 32-bit int."""
    match = _LEADING_INTEGER.match(text)
    if match is None:
        return 0
    value = min(max(int(match.group(1)), _LONG_MIN), _LONG_MAX)
    value &= 0xFFFFFFFF
    return value - 2**32 if value >= 2**31 else value


def prepare_insert(line: str) -> Statement:
    """Parse ``insert <id> <username> <email>`` into an insert statement."""
    tokens = _tokenize(line)
    if len(tokens) < 4:
        raise StatementSyntaxError("Syntax error. Could not parse statement.")
    _keyword, id_text, username, email = tokens[:4]

    row_id = _parse_int(id_text)
    if row_id < 0:
        raise NegativeIdError("ID must be positive.")

    if (
        len(username.encode("utf-8")) > COLUMN_USERNAME_SIZE
        or len(email.encode("utf-8")) > COLUMN_EMAIL_SIZE
    ):
        raise StringTooLongError("String is too long.")

    return Statement(StatementType.INSERT, Row(row_id, username, email))


def prepare_statement(line: str) -> Statement:
    """Recognise the statement keyword at the start of ``line`` and prepare it."""
    if line.startswith("insert"):
        return prepare_insert(line)
    for statement_type in (StatementType.SELECT, StatementType.DELETE, StatementType.UPDATE):
        if line.startswith(statement_type.value):
            return Statement(statement_type)
    raise UnrecognizedStatementError(f"Unrecognized keyword at start of '{line}'.")


def execute_insert(statement: Statement, table: Table) -> None:
    """Append the statement's row to the end of ``table``."""
    if table.num_of_rows >= TABLE_MAX_ROWS:
        raise TableFullError("Error: Table full.")
    if statement.row is None:
        raise ValueError("insert statement carries no row")
    table.row_slot(table.num_of_rows)[:] = serialize_row(statement.row)
    table.num_of_rows += 1


def execute_select(statement: Statement, table: Table) -> list[Row]:
    """Return every row of ``table`` in insertion order."""
    return [deserialize_row(table.row_slot(number)) for number in range(table.num_of_rows)]


def execute_statement(statement: Statement, table: Table) -> list[Row]:
    """Run ``statement`` against ``table`` and return the rows it selects."""
    if statement.type is StatementType.INSERT:
        execute_insert(statement, table)
        return []
    if statement.type is StatementType.SELECT:
        return execute_select(statement, table)
    # Delete and update are accepted but change nothing.
    return []


def format_row(row: Row) -> str:
    """Render a row as ``(id, username, email)``."""
    row_id = row.id - 2**32 if row.id >= 2**31 else row.id
    return f"({row_id}, {row.username}, {row.email})"