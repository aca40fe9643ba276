"""Mutation input types.

Each mutation takes its whole payload as one required input argument.
"""

from __future__ import annotations

import strawberry


@strawberry.input(description="Input for sending a message to a group")
class CreateMessageInput:
    """Input for the createMessage mutation."""

    group_id: int = strawberry.field(description="Group receiving the message")
    user_id: int = strawberry.field(description="User sending the message")
    text: str = strawberry.field(description="Message body")


@strawberry.input(description="Input for creating a group")
class CreateGroupInput:
    """Input for the createGroup mutation.

    ``userId`` is the creator; they are added to the members alongside ``userIds``.
    """

    name: str = strawberry.field(description="Group name (max 200 characters)")
    user_ids: list[int] = strawberry.field(
        default_factory=list,
        description="Initial members",
    )
    user_id: int | None = strawberry.field(
        default=None,
        description="Creator of the group; always made a member",
    )


@strawberry.input(description="Input for updating a group; omitted fields are left unchanged")
class UpdateGroupInput:
    """Input for the updateGroup mutation."""

    id: int = strawberry.field(description="Group to update")
    name: str | None = strawberry.field(default=None, description="New group name")
    user_ids: list[int] | None = strawberry.field(
        default=None,
        description="Complete new member list",
    )


__all__ = ["CreateGroupInput", "CreateMessageInput", "UpdateGroupInput"]
