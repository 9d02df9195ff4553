# pagedb

`pagedb` is a small single-table database. It keeps rows of the form
`(id, username, email)` in one file and reads and writes that file in
4096-byte pages, holding at most 100 pages in memory. It comes with an
interactive prompt.

## Installing

```
pip install .
```

## Using the prompt

Start it with the name of the database file. A missing file is created
with permissions for its owner only.

```
pagedb users.db
```

`python -m pagedb.cli users.db` does the same. Without a file name the
command prints `I think you forgot to specify the database name :/` and
exits with status 1.

The prompt is `db > `. A line is recognised by how it starts:

- `insert <id> <username> <email>` adds a row at the end of the table.
  Fields are separated by runs of spaces, commas, dots or hyphens, and any
  extra fields are ignored. The id is read as a leading integer (text that
  is not a number counts as 0) and must not be negative. A username may be
  at most 32 bytes long and an email at most 255.
- `select` prints every row as `(id, username, email)`, in the order they
  were inserted.
- `delete` and `update` are accepted and answer `Executed.`, but change
  nothing.
- `.exit` writes the cached pages to the file, closes it and ends the
  session.

Because dots separate fields, an address such as `alice@example.com` is
stored as `alice@example`:

```
db > insert 1 alice alice@example.com
Executed.
db > select
(1, alice, alice@example)
Executed.
db > .exit
```

Other lines get one of these messages:
`Syntax error. Could not parse statement.`, `String is too long.`,
`ID must be positive.`, `Unrecognized keyword at start of '...'.`,
`Unrecognized command '...'` for an unknown line starting with a dot, or
`Error: Table full.` once the table holds its maximum number of rows.

If the input ends before `.exit`, the command reports `Error reading input`
on standard error, closes the file without writing the cached pages and
exits with status 1; rows inserted in that session are lost.

## Using it from Python

```python
from pagedb.table import Table
from pagedb.statement import execute_statement, format_row, prepare_statement

with Table("users.db") as table:
    execute_statement(prepare_statement("insert 1 alice alice@example.com"), table)
    for row in execute_statement(prepare_statement("select"), table):
        print(format_row(row))
```

- `pagedb.row` has the `Row` dataclass and `serialize_row` /
  `deserialize_row` for its fixed-width byte layout.
- `pagedb.table` has `Pager`, which caches pages of the file, and `Table`,
  which places rows in those pages and writes them back on `close()` or
  when its `with` block ends. `db_open` and `db_close` do the same as
  creating and closing a `Table`. File problems raise `PagerError`.
- `pagedb.statement` has `prepare_statement` / `prepare_insert`, which
  raise subclasses of `PrepareError` (`StatementSyntaxError`,
  `StringTooLongError`, `NegativeIdError`, `UnrecognizedStatementError`),
  and `execute_statement`, which returns the selected rows and raises
  `TableFullError` when no room is left.
- `pagedb.cli` has `repl(table, lines, out)`, which runs the prompt over
  any iterable of lines and any text stream, and `main(argv)`.

## Limits

- There is one table with a fixed schema; there is no query language
  beyond the statements above, no filtering, no indexes and no
  transactions.
- Rows cannot be deleted or changed once inserted.
- The stored email field overlaps the start of the next row slot. An
  email longer than 227 bytes can be cut short by the next insert or when
  the last page is written to the file.

## Running the tests

```
pip install .[test]
pytest
```