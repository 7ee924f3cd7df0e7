"""
String and address algorithms behind the SQL string extensions.

These are plain Python functions with no knowledge of the query engine.
The Value Adapter (values.py) decides NULL handling and how results are
handed back; everything here works on already-decoded str values.

Examples (as SQL, once registered):

    SELECT split('192.168.0.1', '.', 1);                    -- 168
    SELECT split('192.168.0.1', '.0', 0);                   -- 192
    SELECT regex_split('192.168.0.1', '\\.0', 0);           -- 192.168
    SELECT regex_replace(path, '/Users/[^/]+/', './');      -- ./ws/proj
    SELECT inet_aton('192.168.0.1');                        -- 3232235521
"""

import ipaddress
import re
from typing import List, Optional

SplitResult = List[str]


def token_split(input: str, tokens: str) -> SplitResult:
    """
    Split on any single character found in ``tokens``.

    Multiple characters in ``tokens`` are a set, not a substring: ".0"
    cuts at every "." and every "0". Adjacent delimiters and delimiters at
    either end yield empty segments, so joining the segments of a
    single-character split with that character gives back ``input``.

    Examples:
        >>> token_split('192.168.0.1', '.')
        ['192', '168', '0', '1']
        >>> token_split('192.168.0.1', '.0')
        ['192', '168', '', '', '1']
    """
    delimiters = set(tokens)
    result = []
    start = 0
    for pos, char in enumerate(input):
        if char in delimiters:
            result.append(input[start:pos])
            start = pos + 1
    result.append(input[start:])
    return result


def regex_split(input: str, pattern: str) -> SplitResult:
    """
    Split using ``pattern`` as a regular expression.

    Every non-overlapping match is a cut point. Unlike ``re.split``, capture
    groups in the pattern never add segments to the result.

    Examples:
        >>> regex_split('192.168.0.1', r'\\.')
        ['192', '168', '0', '1']
        >>> regex_split('192.168.0.1', r'\\.0')
        ['192.168', '.1']
    """
    # Compiled per call; no pattern cache is kept between rows
    compiled = re.compile(pattern)
    result = []
    start = 0
    for match in compiled.finditer(input):
        result.append(input[start:match.start()])
        start = match.end()
    result.append(input[start:])
    return result


def regex_replace(input: str, pattern: str, replace_with: str) -> str:
    """
    Replace every match of ``pattern`` in ``input`` with ``replace_with``.

    The replacement may reference groups (``\\1``, ``\\g<name>``). A
    replacement that is not a valid template (a lone backslash, a Windows
    path like ``C:\\Users``, a group the pattern lacks) is inserted
    literally instead. Input without a match comes back unchanged.

    Example:
        >>> regex_replace('/Users/osquery_dev/workspace/osqueryi', '/Users/[^/]+/', './')
        './workspace/osqueryi'
    """
    def expand(match):
        try:
            return match.expand(replace_with)
        except (re.error, IndexError):
            return replace_with

    # Compiled per call; no pattern cache is kept between rows
    return re.compile(pattern).sub(expand, input)


def ip4_string_to_decimal(address: str) -> Optional[int]:
    """
    Convert a dotted-quad IPv4 address to its host-order integer.

    Anything containing a colon is assumed to be IPv6 and yields None
    without a parse attempt. Unparseable text also yields None.

    Examples:
        >>> ip4_string_to_decimal('192.168.0.1')
        3232235521
        >>> ip4_string_to_decimal('::1') is None
        True
    """
    if ':' in address:
        return None

    try:
        parsed = ipaddress.IPv4Address(address)
    except ipaddress.AddressValueError:
        return None

    return int(parsed)
