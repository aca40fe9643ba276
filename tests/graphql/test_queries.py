"""Tests for GraphQL query resolvers."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chat_service.client.documents import GROUP_QUERY, MESSAGES_QUERY, USER_QUERY

if TYPE_CHECKING:
    from .conftest import Execute


def _message_ids(group: dict) -> list[int]:
    return [edge["node"]["id"] for edge in group["messages"]["edges"]]


@pytest.mark.asyncio
async def test_group_query_without_connection_input_returns_default_page(
    execute: Execute,
    chat_data,
) -> None:
    """Omitting messageConnection returns exactly one message, the newest."""
    result = await execute(GROUP_QUERY, {"groupId": chat_data.general})

    assert result.errors is None
    group = result.data["group"]
    assert group["id"] == chat_data.general
    assert group["name"] == "General"
    assert [user["username"] for user in group["users"]] == ["alice", "bob", "carol"]
    assert set(group["users"][0]) == {"id", "username"}

    edges = group["messages"]["edges"]
    assert len(edges) == 1
    node = edges[0]["node"]
    assert node["id"] == chat_data.message_ids[-1]
    assert set(node) == {"id", "to", "from", "createdAt", "text"}
    assert node["to"] == {"id": chat_data.general}
    assert node["from"] == {"id": chat_data.alice, "username": "alice"}
    assert group["messages"]["pageInfo"] == {"hasNextPage": True, "hasPreviousPage": False}


@pytest.mark.asyncio
async def test_group_query_with_empty_connection_input_uses_default(
    execute: Execute,
    chat_data,
) -> None:
    """An explicit empty object behaves like an omitted argument."""
    result = await execute(GROUP_QUERY, {"groupId": chat_data.general, "messageConnection": {}})

    assert result.errors is None
    assert _message_ids(result.data["group"]) == [chat_data.message_ids[-1]]


@pytest.mark.asyncio
async def test_group_query_with_first_returns_requested_page(
    execute: Execute,
    chat_data,
) -> None:
    """{first: 5} returns five messages, newest first, in the same shape."""
    default = await execute(GROUP_QUERY, {"groupId": chat_data.general})
    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"first": 5}},
    )

    assert result.errors is None
    group = result.data["group"]
    assert _message_ids(group) == list(reversed(chat_data.message_ids))[:5]
    assert set(group) == set(default.data["group"])
    assert set(group["messages"]["edges"][0]["node"]) == set(
        default.data["group"]["messages"]["edges"][0]["node"]
    )


@pytest.mark.asyncio
async def test_first_larger_than_collection_returns_everything(
    execute: Execute,
    chat_data,
) -> None:
    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"first": 50}},
    )

    assert result.errors is None
    messages = result.data["group"]["messages"]
    assert len(messages["edges"]) == 7
    assert messages["pageInfo"]["hasNextPage"] is False


@pytest.mark.asyncio
async def test_forward_pages_do_not_overlap(execute: Execute, chat_data) -> None:
    """Following endCursor yields the next, disjoint window."""
    query = """
        query page($groupId: Int!, $messageConnection: ConnectionInput) {
          group(id: $groupId) {
            messages(messageConnection: $messageConnection) {
              edges { cursor node { id } }
              pageInfo { hasNextPage hasPreviousPage startCursor endCursor }
            }
          }
        }
    """
    first_page = await execute(
        query,
        {"groupId": chat_data.general, "messageConnection": {"first": 3}},
    )
    end_cursor = first_page.data["group"]["messages"]["pageInfo"]["endCursor"]
    second_page = await execute(
        query,
        {"groupId": chat_data.general, "messageConnection": {"first": 3, "after": end_cursor}},
    )

    assert second_page.errors is None
    first_ids = _message_ids(first_page.data["group"])
    second_ids = _message_ids(second_page.data["group"])
    newest_first = list(reversed(chat_data.message_ids))
    assert first_ids == newest_first[:3]
    assert second_ids == newest_first[3:6]
    assert not set(first_ids) & set(second_ids)
    assert second_page.data["group"]["messages"]["pageInfo"]["hasPreviousPage"] is True


@pytest.mark.asyncio
async def test_last_before_returns_preceding_window(execute: Execute, chat_data) -> None:
    """{last: 2, before: c} returns the two messages just ahead of c, newest first."""
    everything = await execute(
        """
        query all($groupId: Int!) {
          group(id: $groupId) {
            messages(messageConnection: {first: 10}) { edges { cursor node { id } } }
          }
        }
        """,
        {"groupId": chat_data.general},
    )
    edges = everything.data["group"]["messages"]["edges"]
    # Newest first: edges[3] is the fourth newest message
    cursor = edges[3]["cursor"]

    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"last": 2, "before": cursor}},
    )

    assert result.errors is None
    messages = result.data["group"]["messages"]
    assert _message_ids(result.data["group"]) == [edges[1]["node"]["id"], edges[2]["node"]["id"]]
    assert messages["pageInfo"] == {"hasNextPage": True, "hasPreviousPage": True}


@pytest.mark.asyncio
async def test_before_without_size_pages_backward_by_default(execute: Execute, chat_data) -> None:
    everything = await execute(
        """
        query all($groupId: Int!) {
          group(id: $groupId) {
            messages(messageConnection: {first: 10}) { edges { cursor node { id } } }
          }
        }
        """,
        {"groupId": chat_data.general},
    )
    edges = everything.data["group"]["messages"]["edges"]

    result = await execute(
        GROUP_QUERY,
        {"groupId": chat_data.general, "messageConnection": {"before": edges[3]["cursor"]}},
    )

    assert result.errors is None
    assert _message_ids(result.data["group"]) == [edges[2]["node"]["id"]]


@pytest.mark.asyncio
async def test_group_without_messages_has_empty_connection(execute: Execute, chat_data) -> None:
    result = await execute(GROUP_QUERY, {"groupId": chat_data.empty})

    assert result.errors is None
    messages = result.data["group"]["messages"]
    assert messages["edges"] == []
    assert messages["pageInfo"] == {"hasNextPage": False, "hasPreviousPage": False}


@pytest.mark.asyncio
async def test_group_query_returns_none_for_missing(execute: Execute, chat_data) -> None:
    result = await execute(GROUP_QUERY, {"groupId": 9999})

    assert result.errors is None
    assert result.data["group"] is None


@pytest.mark.asyncio
async def test_user_query_by_id_and_by_email(execute: Execute, chat_data) -> None:
    by_id = await execute(USER_QUERY, {"id": chat_data.alice})
    by_email = await execute(USER_QUERY, {"email": "alice@example.com"})

    assert by_id.errors is None
    assert by_email.errors is None
    assert by_id.data == by_email.data
    user = by_id.data["user"]
    assert user["username"] == "alice"
    assert [group["name"] for group in user["groups"]] == ["General", "Quiet"]
    assert user["friends"] == [{"id": chat_data.bob, "username": "bob"}]


@pytest.mark.asyncio
async def test_user_query_with_mismatched_id_and_email_returns_none(
    execute: Execute,
    chat_data,
) -> None:
    result = await execute(USER_QUERY, {"id": chat_data.alice, "email": "bob@example.com"})

    assert result.errors is None
    assert result.data["user"] is None


@pytest.mark.asyncio
async def test_user_query_requires_id_or_email(execute: Execute, chat_data) -> None:
    result = await execute(USER_QUERY, {})

    assert result.errors is not None
    assert result.errors[0].extensions["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_users_query_lists_everyone(execute: Execute, chat_data) -> None:
    result = await execute("{ users { id username } }")

    assert result.errors is None
    assert [user["username"] for user in result.data["users"]] == ["alice", "bob", "carol"]


@pytest.mark.asyncio
async def test_messages_query_filters_by_group_and_sender(execute: Execute, chat_data) -> None:
    result = await execute(MESSAGES_QUERY, {"groupId": chat_data.general, "userId": chat_data.bob})

    assert result.errors is None
    messages = result.data["messages"]
    # bob sent messages 2 and 5
    assert [message["text"] for message in messages] == ["message 5", "message 2"]
    assert all(message["from"]["id"] == chat_data.bob for message in messages)
