"""GraphQL schema commands.

Example:bash
    # Print the SDL
    chat-service schema print > schema.graphql

    # Validate every client request document against the schema
    chat-service schema check-documents
"""

import sys

import click

from chat_service.cli.utils import error, header, info, success


@click.group(name="schema")
def schema() -> None:
    """GraphQL schema commands."""


@schema.command(name="print")
def print_schema() -> None:
    """Print the schema in SDL form."""
    from chat_service.features.graphql.schema import schema as graphql_schema

    click.echo(graphql_schema.as_str())


@schema.command(name="check-documents")
@click.option("--show", is_flag=True, help="Print each rendered document")
def check_documents(show: bool) -> None:
    """Validate the client request catalog against the schema."""
    from chat_service.client import CATALOG, check_catalog
    from chat_service.features.graphql.schema import schema as graphql_schema

    if show:
        for name, request in CATALOG.items():
            header(name)
            click.echo(request.render())

    failures = check_catalog(graphql_schema)
    for name, messages in failures.items():
        for message in messages:
            error(f"{name}: {message}")

    if failures:
        sys.exit(1)
    info(f"Checked {len(CATALOG)} documents")
    success("All request documents are valid")
