"""
Value Adapter - marshals SQL argument vectors into the string algorithms.

DuckDB hands a registered function one Python value per argument (None for
SQL NULL, because the functions are registered with null_handling="special").
The helpers here:

- short-circuit to NULL when any argument is NULL
- decode the rest into str / int
- run the algorithm
- encode the result (str or 64-bit int), or raise StringFunctionError with
  the message the client sees as the query error

Regex failures from the algorithms reach the engine only as
StringFunctionError.
"""

import math
import re
from typing import Any, Callable, Optional, Sequence

from .string_functions import SplitResult

# Engine-visible error messages. Clients match on these, keep them literal.
SPLIT_INPUT_ERROR = "Invalid input to split function"
REPLACE_SUBSTRING_ERROR = "Invalid substring to find in replace function"

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

StringSplitFunction = Callable[[str, str], SplitResult]
StringReplaceFunction = Callable[[str, str, str], str]


class StringFunctionError(ValueError):
    """An argument-shape violation reported to the engine as a query error."""


def is_null(value: Any) -> bool:
    return value is None


def any_null(args: Sequence[Any]) -> bool:
    """True if any argument in the vector is SQL NULL."""
    return any(is_null(value) for value in args)


def check_arity(args: Sequence[Any], arity: int, name: str) -> None:
    if len(args) != arity:
        raise TypeError(f"{name} takes {arity} arguments, got {len(args)}")


def decode_text(value: Any) -> str:
    """Decode an argument as text (UTF-8 for raw bytes)."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def decode_integer(value: Any) -> int:
    """
    Decode an index argument using truncating conversion.

    The index reaches the function as DOUBLE, so integers, decimals and
    numeric literals all bind. Values truncate toward zero; NaN decodes as 0
    and infinities clamp to the 64-bit range, as an embedded engine coerces
    a real to an integer.
    """
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return INT64_MAX if value > 0 else INT64_MIN
    return int(value)


def encode_text(value: str) -> str:
    """Hand a text result back to the engine; the engine copies it."""
    return str(value)


def encode_integer(value: int) -> int:
    """Hand an integer result back to the engine as a 64-bit value."""
    return int(value)


def select_index(result: SplitResult, index: int) -> Optional[str]:
    """Pick one segment of a split; out-of-range selects NULL."""
    # A negative index is out of range, never counted from the end
    if index < 0 or index >= len(result):
        return None
    return result[index]


def call_string_split_func(args: Sequence[Any], f: StringSplitFunction, name: str = "split") -> Optional[str]:
    """
    Evaluate a split-family function for one row.

    Args:
        args: (input, tokens, index) as received from the engine
        f: The split algorithm (token or regex based)
        name: SQL function name, used in regex error messages

    Raises:
        StringFunctionError: Empty delimiter, or a pattern the regex engine rejects

    Returns:
        The selected segment, or None for NULL
    """
    check_arity(args, 3, name)
    if any_null(args):
        return None

    input = decode_text(args[0])
    token = decode_text(args[1])
    index = decode_integer(args[2])
    if not token:
        # The input itself may be empty, the delimiter may not
        raise StringFunctionError(SPLIT_INPUT_ERROR)

    try:
        result = f(input, token)
    except re.error as e:
        raise StringFunctionError(f"Invalid regular expression in {name} function: {e}") from e

    selected = select_index(result, index)
    if selected is None:
        return None
    return encode_text(selected)


def call_string_replace_func(args: Sequence[Any], f: StringReplaceFunction, name: str = "regex_replace") -> Optional[str]:
    """Evaluate a replace-family function for one row."""
    check_arity(args, 3, name)
    if any_null(args):
        return None

    input = decode_text(args[0])
    find_string = decode_text(args[1])
    replace_with = decode_text(args[2])
    if not find_string:
        raise StringFunctionError(REPLACE_SUBSTRING_ERROR)

    try:
        result = f(input, find_string, replace_with)
    except re.error as e:
        raise StringFunctionError(f"Invalid regular expression in {name} function: {e}") from e

    return encode_text(result)


def call_address_func(args: Sequence[Any], f: Callable[[str], Optional[int]]) -> Optional[int]:
    """Evaluate a one-argument address conversion for one row."""
    check_arity(args, 1, "inet_aton")
    if any_null(args):
        return None

    result = f(decode_text(args[0]))
    if result is None:
        return None
    return encode_integer(result)
