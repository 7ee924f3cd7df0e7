"""
Console styling utilities for SYSQL.

Rich-styled prefixes for CLI status output.

Usage:
    from sysql.console_style import S, styled_print

    styled_print(f"{S.OK} Registered 4 string functions")
    styled_print(f"{S.ERR} Query failed", stderr=True)
"""

from rich.console import Console

# Module-level console instances
_console = Console()
_err_console = Console(stderr=True)


class S:
    """
    Style prefixes for console output.

    Categories:
    - Status: OK, ERR, INFO
    - Help: TIP
    """

    # === STATUS INDICATORS ===
    OK = "[bold green][OK][/bold green]"
    ERR = "[bold red][ERR][/bold red]"
    INFO = "[bold blue][INFO][/bold blue]"

    # Tips/help
    TIP = "[bold yellow][TIP][/bold yellow]"


def styled_print(message: str, stderr: bool = False, **kwargs):
    """
    Print a message with Rich styling.

    Args:
        message: The message with Rich markup
        stderr: Print to standard error instead of standard output
        **kwargs: Additional arguments passed to console.print()
    """
    (_err_console if stderr else _console).print(message, **kwargs)


def get_console() -> Console:
    """Get the module's Rich console instance."""
    return _console
