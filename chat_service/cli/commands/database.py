"""Database management commands.

Tables are created from the SQLAlchemy models; there are no migrations.

Example:bash
    # Create missing tables
    chat-service db init

    # Load sample users, groups and messages
    chat-service db seed

    # Drop all tables (development only!)
    chat-service db drop --yes
"""

import sys

import click
from sqlalchemy.exc import SQLAlchemyError

from chat_service.cli.utils import coro, error, info, section, success, warning
from chat_service.core.settings import get_db_settings
from chat_service.infra.database import (
    close_database,
    drop_database,
    init_database,
    session_scope,
)


def _safe_url() -> str:
    db_settings = get_db_settings()
    if db_settings.dsn:
        return db_settings.dsn.split("@")[-1]
    return f"{db_settings.host}:{db_settings.port}/{db_settings.name}"


@click.group(name="db")
def db() -> None:
    """Database management commands."""


@db.command()
@coro
async def init() -> None:
    """Verify connectivity and create any missing tables."""
    info(f"Connecting to: {_safe_url()}")
    try:
        await init_database()
    except SQLAlchemyError as e:
        error(f"Failed to initialize database: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success("Database initialized")


@db.command()
@click.option("--yes", is_flag=True, help="Confirm dropping every table")
@coro
async def drop(yes: bool) -> None:
    """Drop all tables (development only!)."""
    if not yes:
        warning("This deletes all data. Re-run with --yes to confirm.")
        sys.exit(1)
    try:
        await drop_database()
    except SQLAlchemyError as e:
        error(f"Failed to drop tables: {e}")
        sys.exit(1)
    finally:
        await close_database()
    success("All tables dropped")


@db.command()
@coro
async def seed() -> None:
    """Create tables if needed and load deterministic sample data."""
    from chat_service.features.seed import seed_database

    try:
        await init_database()
        async with session_scope() as session:
            counts = await seed_database(session)
    except SQLAlchemyError as e:
        error(f"Failed to seed database: {e}")
        sys.exit(1)
    finally:
        await close_database()

    if not any(counts.values()):
        warning("Database already has users; nothing seeded")
        return
    section("Seeded", counts)
    success("Sample data loaded")
