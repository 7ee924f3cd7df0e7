"""
SYSQL - SQL string extensions for DuckDB.

Adds split, regex_split, regex_replace and inet_aton scalar functions to a
DuckDB connection:

    import duckdb
    from sysql import register_string_extensions

    conn = duckdb.connect()
    register_string_extensions(conn)
    conn.execute("SELECT inet_aton('192.168.0.1')").fetchone()  # (3232235521,)
"""

from .config import SysqlConfig, load_config
from .sql_tools.udf import register_string_extensions

__version__ = "0.1.0"

__all__ = [
    "SysqlConfig",
    "load_config",
    "register_string_extensions",
]
