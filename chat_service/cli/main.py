"""Main CLI entry point for chat-service management commands."""

import click

from chat_service.cli.commands import database, schema, server
from chat_service.infra.logging.config import setup_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="chat-service")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Chat Service CLI - Management commands for the GraphQL chat API.

    \b
    Command Groups:
      db         Create, drop and seed the database
      schema     Print the SDL and validate request documents
      server     Run the API server

    \b
    Quick Start:
      chat-service db seed                  # Create tables and sample data
      chat-service schema check-documents   # Validate client documents
      chat-service server run --reload      # Serve on http://0.0.0.0:8000
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(schema.schema)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
