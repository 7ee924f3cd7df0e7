"""
SQL Tools - scalar string functions for DuckDB queries.

Token split, regex split, regex replace and IPv4-to-integer conversion.
"""

from .registry import (
    STRING_FUNCTIONS,
    FunctionDescriptor,
    get_string_function_registry,
    lookup_string_function,
)
from .udf import get_registered_functions, register_string_extensions
from .values import StringFunctionError

__all__ = [
    "STRING_FUNCTIONS",
    "FunctionDescriptor",
    "get_string_function_registry",
    "lookup_string_function",
    "get_registered_functions",
    "register_string_extensions",
    "StringFunctionError",
]
