"""
SQL string extensions - registration onto a DuckDB connection.

After registration, queries can tokenize, regex-split, regex-replace and
convert IPv4 addresses directly:

    SELECT
      address,
      split(address, '.', 0) AS first_octet,
      inet_aton(address) AS address_int
    FROM interface_addresses

The UDFs:
- Propagate NULL (any NULL argument gives NULL)
- Return NULL for out-of-range segment indexes and unparseable addresses
- Fail the query with a named error for empty delimiters/patterns
- Are registered as non-deterministic, so the optimizer never folds them
"""

import logging
from typing import TYPE_CHECKING, Iterable, List, Optional

import duckdb

from .registry import STRING_FUNCTIONS, FunctionDescriptor

if TYPE_CHECKING:
    from ..config import SysqlConfig

log = logging.getLogger(__name__)

# DuckDB maps these Python types onto VARCHAR / BIGINT / DOUBLE
_PYTHON_TYPES = {
    "VARCHAR": str,
    "BIGINT": int,
    "DOUBLE": float,
}


# =============================================================================
# UDF Registration Utilities
# =============================================================================

def get_registered_functions(conn: duckdb.DuckDBPyConnection) -> set:
    """
    Query DuckDB for all scalar function names it currently knows.

    Includes built-ins as well as anything registered from Python.

    Returns:
        Set of lowercase function names.
    """
    result = conn.execute(
        "SELECT DISTINCT function_name FROM duckdb_functions() WHERE function_type = 'scalar'"
    ).fetchall()
    return {row[0].lower() for row in result}


def create_string_function(conn: duckdb.DuckDBPyConnection, fn: FunctionDescriptor) -> None:
    """
    Register one string function.

    NULLs are passed through to the entry point (null_handling="special") so
    the Value Adapter decides the result, and exceptions become query errors.
    Duplicate names are not checked here; DuckDB rejects them.
    """
    conn.create_function(
        fn.name,
        fn.entry_point,
        parameters=[_PYTHON_TYPES[t] for t in fn.parameters],
        return_type=_PYTHON_TYPES[fn.return_type],
        null_handling="special",
        exception_handling="default",
        side_effects=not fn.deterministic,
    )


def _select_functions(names: Optional[Iterable[str]]) -> List[FunctionDescriptor]:
    if names is None:
        return list(STRING_FUNCTIONS)
    wanted = {name.lower() for name in names}
    return [fn for fn in STRING_FUNCTIONS if fn.name in wanted]


def register_string_extensions(connection: duckdb.DuckDBPyConnection, config: Optional["SysqlConfig"] = None) -> List[str]:
    """
    Register the string extensions as DuckDB user-defined functions.

    Registers:
        - split(input, tokens, index) → VARCHAR
        - regex_split(input, pattern, index) → VARCHAR
        - regex_replace(input, pattern, replacement) → VARCHAR
        - inet_aton(address) → BIGINT

    Args:
        connection: DuckDB connection to register with
        config: Optional config; config.functions limits which are registered

    Returns:
        Names of the functions registered, in registration order.

    Example:
        conn = duckdb.connect()
        register_string_extensions(conn)
        conn.execute("SELECT split('192.168.0.1', '.', 1)").fetchone()  # ('168',)
    """
    functions = _select_functions(config.functions if config is not None else None)

    registered = []
    for fn in functions:
        create_string_function(connection, fn)
        registered.append(fn.name)
        log.debug(f"Registered {fn.name} UDF ({fn.arity}-arg, {fn.encoding})")

    log.info(f"Registered {len(registered)} string UDFs")
    return registered
