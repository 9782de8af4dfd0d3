#!/usr/bin/env python
# ============================================================================
# SCHEMA EXPORT SCRIPT
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# PURPOSE: Dump the current schema of a PostgreSQL database as canonical DDL
# USAGE:
#   python scripts/export_schema.py mydb                   # Whole schema
#   python scripts/export_schema.py mydb --table users     # One table
#   python scripts/export_schema.py mydb -v 2>export.log   # With debug logs
# ============================================================================

import sys
import os
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from __version__ import __version__
from core.config import ConnectionDefaults, get_defaults
from core.logging import configure_logging, get_logger, ComponentType
from infrastructure import PostgreSQLConnection, RepositoryError
from services import SchemaExportService

logger = get_logger("scripts.export_schema", ComponentType.SCRIPT)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Export the current PostgreSQL schema as canonical DDL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        # -h is the host, as in psql
        add_help=False,
        epilog="""
Examples:
  python scripts/export_schema.py mydb                      # Dump everything
  python scripts/export_schema.py mydb --table public.users # One table
  python scripts/export_schema.py -U app -h db.local mydb

Environment Variables:
  DATABASE_URL          Full PostgreSQL connection string (overrides options)
  PGHOST / PGPORT       Server address (default: 127.0.0.1:5432)
  PGUSER / PGPASSWORD   Credentials (default user: postgres)
  PGSSLMODE             SSL mode, passed through when set
  PGSSLROOTCERT         SSL root certificate, passed through when set
  LOG_FORMAT=json       JSON logs on stderr
        """
    )
    parser.add_argument("dbname", help="Database to export")
    parser.add_argument("-U", "--user", help="PostgreSQL user name")
    parser.add_argument("-W", "--password", help="PostgreSQL user password")
    parser.add_argument("-h", "--host", help="Host of the PostgreSQL server")
    parser.add_argument("-p", "--port", type=int, help="Port of the PostgreSQL server")
    parser.add_argument(
        "--table",
        action="append",
        dest="tables",
        help="Only export this table (schema.table or table); repeatable",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--help", action="help", help="Show this help and exit")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(level="DEBUG" if args.verbose else "WARNING")

    defaults = get_defaults()
    connection_defaults: ConnectionDefaults = defaults.connection.with_overrides(
        dbname=args.dbname,
        user=args.user,
        password=args.password,
        host=args.host,
        port=args.port,
    )

    connection = PostgreSQLConnection(connection_defaults)
    try:
        with connection.get_connection() as conn:
            service = SchemaExportService(conn, defaults.catalog)
            ddl = service.export(tables=args.tables)
    except RepositoryError as e:
        logger.error(f"Export failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(ddl)
    return 0


if __name__ == "__main__":
    sys.exit(main())
