import argparse
import csv
import json
import logging
import sys

import duckdb
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from sysql.config import load_config
from sysql.console_style import S, get_console, styled_print
from sysql.sql_tools.registry import STRING_FUNCTIONS
from sysql.sql_tools.udf import register_string_extensions


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="sysql",
        description="SYSQL - SQL string extensions for DuckDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  sysql query \"SELECT split('192.168.0.1', '.', 1)\"\n"
            "  sysql query \"SELECT inet_aton(addr) FROM addrs\" --database state.duckdb\n"
            "  sysql functions"
        ),
    )
    parser.add_argument("--config", help="Path to YAML config file (default: $SYSQL_CONFIG)", default=None)

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    query_parser = subparsers.add_parser(
        'query',
        help='Run a SQL query with the string functions registered',
        aliases=['q']
    )
    query_parser.add_argument('query', help='SQL query')
    query_parser.add_argument('--database', help='DuckDB database path (default: from config, else :memory:)', default=None)
    query_parser.add_argument('--format', choices=['table', 'json', 'csv'], default='table', help='Output format')
    query_parser.add_argument('--limit', type=int, default=None, help='Limit number of rows displayed')
    query_parser.set_defaults(func=cmd_query)

    functions_parser = subparsers.add_parser('functions', help='List the SQL string functions')
    functions_parser.set_defaults(func=cmd_functions)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        styled_print(f"{S.ERR} Invalid configuration: {escape(str(e))}", stderr=True)
        return 1

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    return args.func(args, config)


def cmd_query(args, config):
    """Execute a SQL query against DuckDB with the string extensions registered."""
    database = args.database or config.database

    try:
        conn = duckdb.connect(database)
    except duckdb.Error as e:
        styled_print(f"{S.ERR} Could not open {escape(database)}: {escape(str(e))}", stderr=True)
        return 1

    try:
        register_string_extensions(conn, config)
        cursor = conn.execute(args.query)
        if cursor.description is None:
            styled_print(f"{S.OK} Statement executed")
            return 0
        columns = [col[0] for col in cursor.description]
        rows = cursor.fetchall()
    except duckdb.Error as e:
        styled_print(f"{S.ERR} Query failed: {escape(str(e))}", stderr=True)
        styled_print(f"{S.TIP} Run 'sysql functions' to list the string functions", stderr=True)
        return 1
    finally:
        conn.close()

    total = len(rows)
    if args.limit is not None and total > args.limit:
        rows = rows[:args.limit]
        styled_print(f"{S.INFO} Showing {args.limit} of {total} rows", stderr=True)

    if args.format == 'json':
        print(json.dumps([dict(zip(columns, row)) for row in rows], indent=2, default=str))
    elif args.format == 'csv':
        writer = csv.writer(sys.stdout)
        writer.writerow(columns)
        for row in rows:
            writer.writerow(["" if val is None else val for val in row])
    else:
        if not rows:
            print("No results found.")
            return 0

        table = Table(show_header=True, header_style="bold magenta")
        for col in columns:
            table.add_column(str(col))
        for row in rows:
            table.add_row(*[Text("NULL" if val is None else str(val)) for val in row])

        get_console().print(table)
        print(f"({total} rows)")

    return 0


def cmd_functions(args, config):
    """List the string functions and whether the config enables them."""
    enabled = set(config.functions)

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Function")
    table.add_column("Arguments")
    table.add_column("Returns")
    table.add_column("Enabled")
    table.add_column("Example")

    for fn in STRING_FUNCTIONS:
        table.add_row(
            fn.name,
            ", ".join(fn.parameters),
            fn.return_type,
            "yes" if fn.name in enabled else "no",
            Text(fn.example),
        )

    get_console().print(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
