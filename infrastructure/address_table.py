"""Script to create or drop the address table for local or deployed databases."""

import argparse
import sys

from sqlalchemy import Engine, Table, inspect

from cep_loader.repositories.address_repository import build_address_table
from cep_loader.repositories.base import build_engine


def create_address_table(
    engine: Engine,
    table_name: str | None = None,
    schema: str | None = None,
) -> Table:
    """
    Create the address table if it does not exist.

    Args:
        engine: SQLAlchemy engine
        table_name: Table name (defaults to TARGET_TABLE setting)
        schema: Optional schema

    Returns:
        The Table that was created or already existed
    """
    table = build_address_table(table_name, schema)
    if inspect(engine).has_table(table.name, schema=table.schema):
        print(f"→ Table already exists: {table.fullname}")
        return table

    table.metadata.create_all(engine, tables=[table])
    print(f"✓ Created table: {table.fullname}")
    return table


def drop_address_table(
    engine: Engine,
    table_name: str | None = None,
    schema: str | None = None,
) -> None:
    """
    Drop the address table if it exists.

    Args:
        engine: SQLAlchemy engine
        table_name: Table name (defaults to TARGET_TABLE setting)
        schema: Optional schema
    """
    table = build_address_table(table_name, schema)
    if not inspect(engine).has_table(table.name, schema=table.schema):
        print(f"→ Table does not exist: {table.fullname}")
        return

    table.metadata.drop_all(engine, tables=[table])
    print(f"✓ Dropped table: {table.fullname}")


def main(argv: list[str] | None = None) -> None:
    """Create or drop the configured address table."""
    from cep_loader.config import settings

    parser = argparse.ArgumentParser(description="Manage the address table")
    parser.add_argument("command", choices=["create", "drop"], help="Command")
    parser.add_argument(
        "--table",
        type=str,
        default=settings.target_table,
        help=f"Table name (default: {settings.target_table})",
    )
    parser.add_argument(
        "--schema",
        type=str,
        default=settings.target_schema,
        help="Schema name (default: TARGET_SCHEMA setting)",
    )
    args = parser.parse_args(argv)

    engine = build_engine()
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")

    try:
        if args.command == "create":
            create_address_table(engine, args.table, args.schema)
        else:
            drop_address_table(engine, args.table, args.schema)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main(sys.argv[1:])
