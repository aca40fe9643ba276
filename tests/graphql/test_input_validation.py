"""Tests for input validation, error codes and error masking."""

from __future__ import annotations

import pytest

from chat_service.client.documents import CREATE_GROUP_MUTATION, GROUP_QUERY, MESSAGES_QUERY
from chat_service.features.graphql.error_handler import MASKED_MESSAGE
from chat_service.features.graphql.schema import create_schema
from chat_service.features.messages.service import MessageService
from chat_service.infra.database import session_scope


@pytest.mark.asyncio
async def test_unknown_connection_input_field_is_rejected(execute, chat_data) -> None:
    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"size": 5}},
    )

    assert result.data is None
    assert result.errors is not None
    assert "Field 'size' is not defined by type 'ConnectionInput'." in result.errors[0].message
    assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_unknown_field_in_inline_literal_is_rejected(execute, chat_data) -> None:
    result = await execute(
        """
        query {
          group(id: 1) {
            messages(messageConnection: {size: 5}) { edges { cursor } }
          }
        }
        """,
    )

    assert result.data is None
    assert "Field 'size' is not defined by type 'ConnectionInput'." in result.errors[0].message


@pytest.mark.asyncio
async def test_connection_input_type_mismatch_is_rejected(execute, chat_data) -> None:
    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"first": "five"}},
    )

    assert result.data is None
    assert result.errors is not None
    assert "Int cannot represent" in result.errors[0].message


@pytest.mark.asyncio
async def test_negative_first_is_a_validation_error(execute, chat_data) -> None:
    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"first": -1}},
    )

    assert result.errors is not None
    error = result.errors[0]
    assert error.extensions["code"] == "VALIDATION_ERROR"
    assert error.extensions["field"] == "first"
    assert error.path == ["group", "messages"]


@pytest.mark.asyncio
async def test_invalid_cursor_is_a_validation_error(execute, chat_data) -> None:
    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"first": 2, "after": "not-a-cursor"}},
    )

    assert result.errors is not None
    assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"
    assert "Invalid cursor" in result.errors[0].message


@pytest.mark.asyncio
async def test_query_deeper_than_limit_is_rejected(execute, chat_data) -> None:
    nested = "id"
    for _ in range(6):
        nested = f"users {{ groups {{ {nested} }} }}"

    result = await execute(f"query deep {{ group(id: 1) {{ {nested} }} }}")

    assert result.data is None
    assert result.errors[0].extensions["code"] == "DEPTH_LIMIT_EXCEEDED"


@pytest.mark.asyncio
async def test_internal_errors_keep_details_outside_production(
    execute,
    chat_data,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def boom(self, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(MessageService, "list_messages", boom)

    result = await execute(MESSAGES_QUERY, {"groupId": chat_data.general})

    error = result.errors[0]
    assert error.message == "database exploded"
    assert error.extensions["code"] == "INTERNAL_ERROR"
    assert error.extensions["debug"]["exception_type"] == "RuntimeError"


@pytest.mark.asyncio
async def test_internal_errors_are_masked_in_production(
    graphql_settings,
    make_context,
    session_factory,
    chat_data,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    async def boom(self, **kwargs):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(MessageService, "list_messages", boom)
    production_schema = create_schema(graphql_settings, production=True)

    async with session_scope(session_factory) as session:
        result = await production_schema.execute(
            MESSAGES_QUERY.render(),
            variable_values={"groupId": chat_data.general},
            context_value=make_context(session),
        )

    error = result.errors[0]
    assert error.message == MASKED_MESSAGE
    assert error.extensions["code"] == "INTERNAL_ERROR"
    assert "debug" not in error.extensions
    assert error.path == ["messages"]


@pytest.mark.asyncio
async def test_user_facing_errors_survive_production_masking(
    graphql_settings,
    make_context,
    session_factory,
    chat_data,
) -> None:
    production_schema = create_schema(graphql_settings, production=True)

    async with session_scope(session_factory) as session:
        result = await production_schema.execute(
            GROUP_QUERY.render(),
            variable_values={"groupId": chat_data.general, "messageConnection": {"first": -3}},
            context_value=make_context(session),
        )

    assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"
    assert "non-negative" in result.errors[0].message


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("request_definition", "variables", "expected"),
    [
        (
            GROUP_QUERY,
            {"groupId": 1, "messageConnection": {"size": 5}},
            "Field 'size' is not defined by type 'ConnectionInput'.",
        ),
        (
            CREATE_GROUP_MUTATION,
            {"group": {"name": "Team", "userIds": ["x"]}},
            "Int cannot represent",
        ),
    ],
)
async def test_malformed_variables_are_not_masked_in_production(
    graphql_settings,
    make_context,
    session_factory,
    chat_data,
    request_definition,
    variables,
    expected,
) -> None:
    production_schema = create_schema(graphql_settings, production=True)

    async with session_scope(session_factory) as session:
        result = await production_schema.execute(
            request_definition.render(),
            variable_values=variables,
            context_value=make_context(session),
            operation_name=request_definition.name,
        )

    assert result.data is None
    error = result.errors[0]
    assert error.message != MASKED_MESSAGE
    assert expected in error.message
    assert error.extensions["code"] == "VALIDATION_ERROR"
