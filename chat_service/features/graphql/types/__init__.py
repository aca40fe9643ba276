"""GraphQL type definitions.

This package contains Strawberry types for:
- Base types (PageInfo)
- Pagination input (ConnectionInput)
- Entity types (User, Group, Message and the message connection)
- Mutation inputs
"""

from __future__ import annotations

from chat_service.features.graphql.types.base import PageInfoType
from chat_service.features.graphql.types.chat import (
    GroupType,
    MessageConnection,
    MessageEdge,
    MessageType,
    UserType,
)
from chat_service.features.graphql.types.inputs import (
    CreateGroupInput,
    CreateMessageInput,
    UpdateGroupInput,
)
from chat_service.features.graphql.types.pagination import ConnectionInput

__all__ = [
    # Base types
    "PageInfoType",
    # Inputs
    "ConnectionInput",
    "CreateGroupInput",
    "CreateMessageInput",
    "UpdateGroupInput",
    # Entity types
    "GroupType",
    "MessageConnection",
    "MessageEdge",
    "MessageType",
    "UserType",
]
