"""
Integration tests for the SQL string extensions.

These tests actually execute SQL queries against DuckDB to verify end-to-end functionality.
"""

import duckdb
import pytest

from sysql.config import SysqlConfig
from sysql.sql_tools.registry import (
    STRING_FUNCTIONS,
    get_function_names,
    lookup_string_function,
)
from sysql.sql_tools.udf import get_registered_functions, register_string_extensions

pytestmark = pytest.mark.engine


@pytest.fixture
def db_conn():
    """Create DuckDB connection with the string UDFs registered."""
    conn = duckdb.connect(':memory:')
    register_string_extensions(conn)

    # Create test data
    conn.execute("""
        CREATE TEMP TABLE addresses AS
        SELECT * FROM (VALUES
            (1, '192.168.0.1', '/Users/alice/ws/proj'),
            (2, '10.0.0.1', '/Users/bob/src'),
            (3, 'fe80::1', '/opt/bin'),
            (4, NULL, NULL)
        ) AS t(id, address, path)
    """)

    yield conn
    conn.close()


def scalar(conn, sql):
    return conn.execute(sql).fetchone()[0]


class TestRegistration:
    """Function registration onto a connection."""

    def test_returns_registered_names(self):
        conn = duckdb.connect(':memory:')
        try:
            assert register_string_extensions(conn) == ["split", "regex_split", "regex_replace", "inet_aton"]
        finally:
            conn.close()

    def test_functions_visible_in_catalog(self, db_conn):
        names = get_registered_functions(db_conn)
        for fn in STRING_FUNCTIONS:
            assert fn.name in names

    def test_duplicate_registration_is_rejected_by_engine(self, db_conn):
        """This layer does not deduplicate; DuckDB refuses the second registration."""
        with pytest.raises(duckdb.Error):
            register_string_extensions(db_conn)

    def test_config_limits_functions(self):
        conn = duckdb.connect(':memory:')
        try:
            registered = register_string_extensions(conn, SysqlConfig(functions=["inet_aton"]))
            assert registered == ["inet_aton"]
            assert scalar(conn, "SELECT inet_aton('10.0.0.1')") == 167772161
            with pytest.raises(duckdb.Error):
                conn.execute("SELECT regex_replace('a', 'a', 'b')").fetchone()
        finally:
            conn.close()

    def test_connections_are_independent(self):
        first = duckdb.connect(':memory:')
        second = duckdb.connect(':memory:')
        try:
            register_string_extensions(first)
            register_string_extensions(second)
            assert scalar(second, "SELECT inet_aton('192.168.0.1')") == 3232235521
        finally:
            first.close()
            second.close()

    def test_descriptors(self):
        assert get_function_names() == ["split", "regex_split", "regex_replace", "inet_aton"]
        inet = lookup_string_function("INET_ATON")
        assert inet is not None
        assert inet.arity == 1
        assert inet.return_type == "BIGINT"
        assert lookup_string_function("split").parameters == ("VARCHAR", "VARCHAR", "DOUBLE")
        assert lookup_string_function("nope") is None
        for fn in STRING_FUNCTIONS:
            assert fn.arity == len(fn.parameters)
            assert fn.encoding == "UTF-8"
            assert fn.deterministic is False


class TestSplitSQL:
    """split() and regex_split() through SQL."""

    def test_split(self, db_conn):
        assert scalar(db_conn, "SELECT split('192.168.0.1', '.', 1)") == "168"

    def test_split_token_set(self, db_conn):
        assert scalar(db_conn, "SELECT split('192.168.0.1', '.0', 0)") == "192"

    def test_regex_split(self, db_conn):
        assert scalar(db_conn, r"SELECT regex_split('192.168.0.1', '\.', 1)") == "168"

    def test_regex_split_multi_character(self, db_conn):
        assert scalar(db_conn, r"SELECT regex_split('192.168.0.1', '\.0', 0)") == "192.168"

    def test_decimal_index_truncates(self, db_conn):
        assert scalar(db_conn, "SELECT split('a.b.c', '.', 2.9)") == "c"
        assert scalar(db_conn, "SELECT split('a.b', '.', 1.6::DOUBLE)") == "b"
        assert scalar(db_conn, r"SELECT regex_split('a.b.c', '\.', 0.5)") == "a"

    def test_integer_column_index(self, db_conn):
        rows = db_conn.execute("""
            SELECT id, split('a.b.c.d', '.', id::BIGINT)
            FROM addresses
            ORDER BY id
        """).fetchall()
        assert rows == [(1, "b"), (2, "c"), (3, "d"), (4, None)]

    def test_out_of_range_index_is_null(self, db_conn):
        assert scalar(db_conn, "SELECT split('192.168.0.1', '.', 4)") is None
        assert scalar(db_conn, r"SELECT regex_split('192.168.0.1', '\.', 99)") is None

    def test_null_arguments(self, db_conn):
        assert scalar(db_conn, "SELECT split(NULL, '.', 0)") is None
        assert scalar(db_conn, "SELECT split('a.b', NULL, 0)") is None
        assert scalar(db_conn, "SELECT regex_split('a.b', '.', NULL)") is None

    def test_empty_tokens_fail_query(self, db_conn):
        with pytest.raises(duckdb.Error, match="Invalid input to split function"):
            db_conn.execute("SELECT split('192.168.0.1', '', 0)").fetchall()

    def test_empty_pattern_fails_query(self, db_conn):
        with pytest.raises(duckdb.Error, match="Invalid input to split function"):
            db_conn.execute("SELECT regex_split('192.168.0.1', '', 0)").fetchall()

    def test_split_over_column(self, db_conn):
        rows = db_conn.execute("""
            SELECT id, split(address, '.', 0)
            FROM addresses
            ORDER BY id
        """).fetchall()
        assert rows == [(1, "192"), (2, "10"), (3, "fe80::1"), (4, None)]

    def test_error_fails_only_the_failing_query(self, db_conn):
        with pytest.raises(duckdb.Error):
            db_conn.execute("SELECT split(address, '', 0) FROM addresses").fetchall()
        assert scalar(db_conn, "SELECT split('a,b', ',', 1)") == "b"


class TestRegexReplaceSQL:
    """regex_replace() through SQL."""

    def test_replace_home_directory(self, db_conn):
        result = scalar(db_conn, "SELECT regex_replace('/Users/alice/ws/proj', '/Users/[^/]+/', './')")
        assert result == "./ws/proj"

    def test_replace_over_column(self, db_conn):
        rows = db_conn.execute("""
            SELECT regex_replace(path, '/Users/[^/]+/', './')
            FROM addresses
            ORDER BY id
        """).fetchall()
        assert rows == [("./ws/proj",), ("./src",), ("/opt/bin",), (None,)]

    def test_group_reference(self, db_conn):
        assert scalar(db_conn, r"SELECT regex_replace('john smith', '(\w+) (\w+)', '\2 \1')") == "smith john"

    def test_backslash_replacement_is_literal(self, db_conn):
        assert scalar(db_conn, "SELECT regex_replace('a/b', '/', '\\')") == "a\\b"

    def test_windows_path_replacement(self, db_conn):
        result = scalar(db_conn, r"SELECT regex_replace('/home/x', '/home/', 'C:\Users\')")
        assert result == r"C:\Users\x"

    def test_invalid_pattern_fails_query(self, db_conn):
        with pytest.raises(duckdb.Error, match="Invalid regular expression in regex_replace function"):
            db_conn.execute("SELECT regex_replace('abc', '(', 'x')").fetchall()

    def test_empty_pattern_fails_query(self, db_conn):
        with pytest.raises(duckdb.Error, match="Invalid substring to find in replace function"):
            db_conn.execute("SELECT regex_replace('abc', '', 'x')").fetchall()

    def test_null_argument(self, db_conn):
        assert scalar(db_conn, "SELECT regex_replace('abc', 'b', NULL)") is None


class TestInetAtonSQL:
    """inet_aton() through SQL."""

    def test_converts(self, db_conn):
        assert scalar(db_conn, "SELECT inet_aton('192.168.0.1')") == 3232235521

    def test_ipv6_is_null(self, db_conn):
        assert scalar(db_conn, "SELECT inet_aton('::1')") is None

    def test_parse_failure_is_null(self, db_conn):
        assert scalar(db_conn, "SELECT inet_aton('999.999.999.999')") is None

    def test_over_column(self, db_conn):
        rows = db_conn.execute("SELECT inet_aton(address) FROM addresses ORDER BY id").fetchall()
        assert rows == [(3232235521,), (167772161,), (None,), (None,)]

    def test_usable_in_where_clause(self, db_conn):
        rows = db_conn.execute("""
            SELECT id FROM addresses
            WHERE inet_aton(address) BETWEEN inet_aton('10.0.0.0') AND inet_aton('10.255.255.255')
        """).fetchall()
        assert rows == [(2,)]
