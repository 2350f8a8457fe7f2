#!/usr/bin/env python3
"""
Main CLI entry point for the memberql server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from memberql import __version__
from memberql.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="memberql")
def cli() -> None:
    """memberql CLI - run the server and manage the database."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8000, type=int, help="Port to bind to (default: 8000)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the GraphQL API server."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info("Starting memberql API server", host=host, port=port, reload=reload)

    # The app reads its settings at import time, so pass them through the environment
    if log_level == "debug":
        os.environ["MEMBERQL_DEBUG"] = "true"
    else:
        os.environ.setdefault("MEMBERQL_DEBUG", "false")
    os.environ["MEMBERQL_LOG_LEVEL"] = log_level

    try:
        uvicorn.run(
            "memberql.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("schema")
def print_schema() -> None:
    """Print the GraphQL schema in SDL form."""
    from memberql.graphql.schema import schema

    click.echo(schema.as_str())


@cli.group()
def db() -> None:
    """Manage the database."""
    pass


@db.command("init")
def init_db() -> None:
    """Create all tables."""
    from memberql.database.connection import create_all, dispose_database

    configure_logging()

    async def do_init():
        try:
            await create_all()
        finally:
            await dispose_database()

    try:
        asyncio.run(do_init())
    except Exception as e:
        logger.error("Failed to create tables", error=str(e))
        click.echo(f"✗ Error creating tables: {e}", err=True)
        sys.exit(1)
    click.echo("✓ Tables created")


@db.command("seed")
def seed_db() -> None:
    """Insert the BASIC and BUSINESS membership tiers if missing."""
    from memberql.database.connection import dispose_database, get_async_session
    from memberql.database.seed_data import ensure_member_types

    configure_logging()

    async def do_seed() -> list[str]:
        try:
            async with get_async_session() as session:
                return await ensure_member_types(session)
        finally:
            await dispose_database()

    try:
        created = asyncio.run(do_seed())
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)

    if created:
        click.echo(f"✓ Member types created: {', '.join(created)}")
    else:
        click.echo("✓ Member types already present")


@db.command("check")
def check_db() -> None:
    """Check that the database is reachable."""
    from memberql.database.connection import (
        DatabaseNotInitializedError,
        check_database_connection,
        dispose_database,
        init_database,
    )

    configure_logging()

    async def do_check() -> tuple[bool, str | None]:
        init_database()
        try:
            return await check_database_connection()
        finally:
            await dispose_database()

    try:
        ok, error = asyncio.run(do_check())
    except DatabaseNotInitializedError as e:
        ok, error = False, str(e)
    if not ok:
        click.echo(f"✗ {error}", err=True)
        sys.exit(1)
    click.echo("✓ Database connection OK")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
