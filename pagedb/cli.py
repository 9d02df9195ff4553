"""Interactive prompt for the database."""

from __future__ import annotations

import enum
import sys
from collections.abc import Iterable, Iterator
from typing import TextIO

from pagedb.statement import (
    NegativeIdError,
    StatementSyntaxError,
    StringTooLongError,
    TableFullError,
    UnrecognizedStatementError,
    execute_statement,
    format_row,
    prepare_statement,
)
from pagedb.table import PagerError, Table, db_close, db_open

PROMPT = "db > "


class MetaCommandResult(enum.Enum):
    SUCCESS = enum.auto()
    UNRECOGNIZED_COMMAND = enum.auto()


def do_meta_command(line: str, table: Table) -> MetaCommandResult:
    """Handle a line starting with a dot.

    ``.exit`` closes the table and reports success; the session should end.
    """
    if line == ".exit":
        db_close(table)
        return MetaCommandResult.SUCCESS
    return MetaCommandResult.UNRECOGNIZED_COMMAND


def _read_input(source: Iterator[str]) -> str:
    line = next(source, "")
    if not line:
        raise EOFError("Error reading input")
    return line.removesuffix("\n")


def repl(table: Table, lines: Iterable[str], out: TextIO) -> None:
    """Read statements from ``lines`` and write results to ``out`` until ``.exit``.

    Raises EOFError if the input ends before ``.exit``.
    """
    source = iter(lines)
    while True:
        out.write(PROMPT)
        line = _read_input(source)

        if line.startswith("."):
            if do_meta_command(line, table) is MetaCommandResult.SUCCESS:
                return
            out.write(f"Unrecognized command '{line}'\n")
            continue

        try:
            statement = prepare_statement(line)
        except StatementSyntaxError:
            out.write("Syntax error. Could not parse statement.\n")
            continue
        except StringTooLongError:
            out.write("String is too long.\n")
            continue
        except UnrecognizedStatementError:
            out.write(f"Unrecognized keyword at start of '{line}'.\n")
            continue
        except NegativeIdError:
            out.write("ID must be positive.\n")
            continue

        try:
            rows = execute_statement(statement, table)
        except TableFullError:
            out.write("Error: Table full.\n")
            continue
        for row in rows:
            out.write(format_row(row) + "\n")
        out.write("Executed.\n")


def main(argv: list[str] | None = None) -> int:
    """Run the prompt on the database file named by the first argument."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        sys.stdout.write("I think you forgot to specify the database name :/")
        return 1

    try:
        table = db_open(args[0])
    except PagerError as exc:
        print(exc)
        return 1

    try:
        repl(table, sys.stdin, sys.stdout)
    except EOFError as exc:
        print(exc, file=sys.stderr)
        # Rows not yet written are lost, as nothing is flushed on this path.
        table.pager.close()
        return 1
    except PagerError as exc:
        print(exc)
        return 1
    finally:
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())