"""Tests for the GraphQL schema shape: input types, arguments and defaults."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chat_service.core.settings.graphql import GraphQLSettings
from chat_service.features.graphql.schema import create_schema

if TYPE_CHECKING:
    from chat_service.features.graphql.schema import ChatSchema


def _field_types(schema: ChatSchema, type_name: str) -> dict[str, str]:
    graphql_type = schema._schema.type_map[type_name]
    return {name: str(field.type) for name, field in graphql_type.fields.items()}


def test_connection_input_keeps_flat_argument_names_and_types(schema: ChatSchema) -> None:
    """ConnectionInput bundles first/after/last/before, all optional."""
    assert _field_types(schema, "ConnectionInput") == {
        "first": "Int",
        "after": "String",
        "last": "Int",
        "before": "String",
    }


def test_group_messages_takes_single_connection_argument(schema: ChatSchema) -> None:
    """Group.messages has exactly one argument, optional, defaulting to {}."""
    messages = schema._schema.type_map["Group"].fields["messages"]

    assert list(messages.args) == ["messageConnection"]
    assert str(messages.args["messageConnection"].type) == "ConnectionInput"
    assert str(messages.type) == "MessageConnection!"
    assert "messages(messageConnection: ConnectionInput = {}): MessageConnection!" in schema.as_str()


def test_mutation_payloads_are_required_input_objects(schema: ChatSchema) -> None:
    """Each mutation receives its payload as one required input argument."""
    mutation = schema._schema.type_map["Mutation"].fields

    assert {name: str(arg.type) for name, arg in mutation["createMessage"].args.items()} == {
        "message": "CreateMessageInput!",
    }
    assert {name: str(arg.type) for name, arg in mutation["createGroup"].args.items()} == {
        "group": "CreateGroupInput!",
    }
    assert {name: str(arg.type) for name, arg in mutation["updateGroup"].args.items()} == {
        "group": "UpdateGroupInput!",
    }


def test_mutation_input_types(schema: ChatSchema) -> None:
    assert _field_types(schema, "CreateMessageInput") == {
        "groupId": "Int!",
        "userId": "Int!",
        "text": "String!",
    }
    assert _field_types(schema, "CreateGroupInput") == {
        "name": "String!",
        "userIds": "[Int!]!",
        "userId": "Int",
    }
    assert _field_types(schema, "UpdateGroupInput") == {
        "id": "Int!",
        "name": "String",
        "userIds": "[Int!]",
    }


def test_create_group_input_declares_empty_user_ids_default(schema: ChatSchema) -> None:
    assert "userIds: [Int!]! = []" in schema.as_str()


def test_connection_types(schema: ChatSchema) -> None:
    assert _field_types(schema, "MessageConnection") == {
        "edges": "[MessageEdge!]!",
        "pageInfo": "PageInfo!",
    }
    assert _field_types(schema, "MessageEdge") == {"cursor": "String!", "node": "Message!"}
    assert _field_types(schema, "PageInfo") == {
        "hasNextPage": "Boolean!",
        "hasPreviousPage": "Boolean!",
        "startCursor": "String",
        "endCursor": "String",
    }


def test_root_fields(schema: ChatSchema) -> None:
    assert set(schema._schema.type_map["Query"].fields) == {"user", "users", "group", "messages"}
    assert set(schema._schema.type_map["Mutation"].fields) == {
        "createMessage",
        "createGroup",
        "updateGroup",
        "deleteGroup",
        "leaveGroup",
    }
    assert set(schema._schema.type_map["Subscription"].fields) == {"messageAdded", "groupAdded"}


def test_message_exposes_from_and_to(schema: ChatSchema) -> None:
    fields = _field_types(schema, "Message")

    assert fields["from"] == "User!"
    assert fields["to"] == "Group!"


@pytest.mark.asyncio
async def test_introspection_can_be_disabled() -> None:
    """GRAPHQL_INTROSPECTION_ENABLED=false rejects __schema queries."""
    schema = create_schema(GraphQLSettings(introspection_enabled=False), production=False)

    result = await schema.execute("{ __schema { queryType { name } } }")

    assert result.errors is not None
    assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"
