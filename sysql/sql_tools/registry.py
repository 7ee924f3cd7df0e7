"""
String Function Registry - descriptors for the SQL string extensions.

Each scalar function is described once, here, by a frozen FunctionDescriptor:
its SQL name, fixed arity, DuckDB parameter/return types and the Python
entry point the engine calls per row. udf.register_string_extensions() walks
this table to bind the functions onto a connection.

The table is a tuple and the descriptors are frozen; nothing mutates them
after import.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .string_functions import (
    ip4_string_to_decimal,
    regex_replace,
    regex_split,
    token_split,
)
from .values import call_address_func, call_string_replace_func, call_string_split_func

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FunctionDescriptor:
    """Metadata for a scalar string function."""
    name: str                     # SQL name (e.g., "split")
    arity: int                    # Fixed argument count
    parameters: Tuple[str, ...]   # DuckDB parameter types
    return_type: str              # DuckDB return type
    entry_point: Callable         # Called once per row
    encoding: str = "UTF-8"       # VARCHAR is always UTF-8 in DuckDB
    deterministic: bool = False   # Registered with side_effects when False
    description: str = ""
    example: str = ""


# =============================================================================
# Entry points (one positional parameter per SQL argument)
# =============================================================================

def token_string_split_func(input, tokens, index):
    return call_string_split_func((input, tokens, index), token_split, name="split")


def regex_string_split_func(input, pattern, index):
    return call_string_split_func((input, pattern, index), regex_split, name="regex_split")


def regex_string_replace_func(input, pattern, replace_with):
    return call_string_replace_func((input, pattern, replace_with), regex_replace, name="regex_replace")


def ip4_string_to_decimal_func(address):
    return call_address_func((address,), ip4_string_to_decimal)


STRING_FUNCTIONS: Tuple[FunctionDescriptor, ...] = (
    FunctionDescriptor(
        name="split",
        arity=3,
        parameters=("VARCHAR", "VARCHAR", "DOUBLE"),
        return_type="VARCHAR",
        entry_point=token_string_split_func,
        description="Split on any character of a token set and select one segment",
        example="SELECT split('192.168.0.1', '.', 1)  -- 168",
    ),
    FunctionDescriptor(
        name="regex_split",
        arity=3,
        parameters=("VARCHAR", "VARCHAR", "DOUBLE"),
        return_type="VARCHAR",
        entry_point=regex_string_split_func,
        description="Split on a regular expression and select one segment",
        example="SELECT regex_split('192.168.0.1', '\\.0', 0)  -- 192.168",
    ),
    FunctionDescriptor(
        name="regex_replace",
        arity=3,
        parameters=("VARCHAR", "VARCHAR", "VARCHAR"),
        return_type="VARCHAR",
        entry_point=regex_string_replace_func,
        description="Replace every regular expression match",
        example="SELECT regex_replace(path, '/Users/[^/]+/', './')",
    ),
    FunctionDescriptor(
        name="inet_aton",
        arity=1,
        parameters=("VARCHAR",),
        return_type="BIGINT",
        entry_point=ip4_string_to_decimal_func,
        description="Convert a dotted-quad IPv4 address to an integer",
        example="SELECT inet_aton('192.168.0.1')  -- 3232235521",
    ),
)


def get_function_names() -> List[str]:
    """Names of every string function, in registration order."""
    return [fn.name for fn in STRING_FUNCTIONS]


def get_string_function_registry() -> Dict[str, FunctionDescriptor]:
    """
    Get all string function descriptors keyed by lowercase name.

    A fresh dict is built per call, so callers may filter it freely.
    """
    return {fn.name.lower(): fn for fn in STRING_FUNCTIONS}


def lookup_string_function(name: str) -> Optional[FunctionDescriptor]:
    """
    Look up a string function by SQL name (case-insensitive).

    Returns:
        FunctionDescriptor if found, None otherwise
    """
    fn = get_string_function_registry().get(name.lower())
    if fn is None:
        log.debug(f"[string_registry] No string function named {name!r}")
    return fn
