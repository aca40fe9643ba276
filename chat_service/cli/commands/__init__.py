"""CLI command modules."""

from chat_service.cli.commands import database, schema, server

__all__ = ["database", "schema", "server"]
