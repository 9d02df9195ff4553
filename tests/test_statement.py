import pytest

from pagedb.row import COLUMN_EMAIL_SIZE, COLUMN_USERNAME_SIZE, Row
from pagedb.statement import (
    NegativeIdError,
    PrepareError,
    Statement,
    StatementSyntaxError,
    StatementType,
    StringTooLongError,
    TableFullError,
    UnrecognizedStatementError,
    execute_insert,
    execute_select,
    execute_statement,
    format_row,
    prepare_insert,
    prepare_statement,
)
from pagedb.table import TABLE_MAX_ROWS, Table


@pytest.fixture
def table(tmp_path):
    tbl = Table(tmp_path / "test.db")
    yield tbl
    tbl.pager.close()


def test_prepare_insert_basic():
    statement = prepare_insert("insert 7 alice alice")
    assert statement.type is StatementType.INSERT
    assert statement.row == Row(7, "alice", "alice")


def test_prepare_insert_splits_email_on_dot():
    statement = prepare_insert("insert 1 user person@example.com")
    assert statement.row == Row(1, "user", "person@example")


def test_prepare_insert_minus_is_a_delimiter():
    statement = prepare_insert("insert -5 a b")
    assert statement.row.id == 5


def test_prepare_insert_non_numeric_id_is_zero():
    assert prepare_insert("insert abc a b").row.id == 0


def test_prepare_insert_comma_separated():
    assert prepare_insert("insert,3,bob,carol").row == Row(3, "bob", "carol")


@pytest.mark.parametrize("line", ["insert", "insert 1", "insert 1 user"])
def test_prepare_insert_missing_arguments(line):
    with pytest.raises(StatementSyntaxError):
        prepare_insert(line)


def test_prepare_insert_overflowing_id_is_negative():
    with pytest.raises(NegativeIdError):
        prepare_insert("insert 3000000000 a b")


def test_username_limit():
    ok = "u" * COLUMN_USERNAME_SIZE
    assert prepare_insert(f"insert 1 {ok} e").row.username == ok
    with pytest.raises(StringTooLongError):
        prepare_insert(f"insert 1 {ok}u e")


def test_email_limit():
    ok = "e" * COLUMN_EMAIL_SIZE
    assert prepare_insert(f"insert 1 u {ok}").row.email == ok
    with pytest.raises(StringTooLongError):
        prepare_insert(f"insert 1 u {ok}e")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("select", StatementType.SELECT),
        ("selectall", StatementType.SELECT),
        ("delete 1", StatementType.DELETE),
        ("update 1", StatementType.UPDATE),
    ],
)
def test_prepare_statement_keywords(line, expected):
    assert prepare_statement(line) == Statement(expected)


def test_prepare_statement_dispatches_insert():
    assert prepare_statement("insert 2 x y").row == Row(2, "x", "y")


@pytest.mark.parametrize("line", ["", "INSERT 1 a b", "sel", "drop table"])
def test_prepare_statement_unrecognized(line):
    with pytest.raises(UnrecognizedStatementError) as info:
        prepare_statement(line)
    assert isinstance(info.value, PrepareError)
    assert f"'{line}'" in str(info.value)


def test_insert_then_select_round_trip(table):
    rows = [Row(1, "alice", "a"), Row(2, "bob", "b"), Row(3, "carol", "c")]
    for row in rows:
        execute_insert(Statement(StatementType.INSERT, row), table)
    assert table.num_of_rows == len(rows)
    assert execute_select(Statement(StatementType.SELECT), table) == rows


def test_execute_statement_returns_selected_rows(table):
    assert execute_statement(prepare_statement("insert 4 dan d"), table) == []
    assert execute_statement(prepare_statement("select"), table) == [Row(4, "dan", "d")]


def test_delete_and_update_change_nothing(table):
    execute_statement(prepare_statement("insert 1 a b"), table)
    assert execute_statement(prepare_statement("delete"), table) == []
    assert execute_statement(prepare_statement("update"), table) == []
    assert table.num_of_rows == 1


def test_rows_persist_across_reopen(tmp_path):
    path = tmp_path / "persist.db"
    rows = [Row(number, f"user{number}", f"mail{number}") for number in range(20)]
    with Table(path) as tbl:
        for row in rows:
            execute_insert(Statement(StatementType.INSERT, row), tbl)
    with Table(path) as tbl:
        assert execute_select(Statement(StatementType.SELECT), tbl) == rows


def test_table_full(table):
    table.num_of_rows = TABLE_MAX_ROWS
    with pytest.raises(TableFullError):
        execute_insert(Statement(StatementType.INSERT, Row(1, "a", "b")), table)
    assert table.num_of_rows == TABLE_MAX_ROWS


def test_format_row():
    assert format_row(Row(1, "a", "b")) == "(1, a, b)"


def test_format_row_high_id_prints_signed():
    assert format_row(Row(2**32 - 1, "a", "b")).startswith("(-1,")