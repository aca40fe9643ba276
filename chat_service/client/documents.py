"""Request definitions for every operation the chat client sends.

A request declares its variables with GraphQL types and spreads shared
fragments for its result shape. Structured arguments travel as one
input-typed variable (``$message: CreateMessageInput!``) rather than a
list of scalars, and optional inputs such as ``$messageConnection`` carry no
default here: the schema declares the default once.
"""

from __future__ import annotations

from dataclasses import dataclass
import textwrap
from typing import Literal

from chat_service.client.fragments import DEFAULT_LIBRARY, FragmentLibrary

OperationType = Literal["query", "mutation", "subscription"]


@dataclass(frozen=True, slots=True)
class Variable:
    """An operation variable declaration, e.g. ``$group: CreateGroupInput!``."""

    name: str
    type: str
    default: str | None = None

    def render(self) -> str:
        declaration = f"${self.name}: {self.type}"
        if self.default is not None:
            declaration += f" = {self.default}"
        return declaration


@dataclass(frozen=True, slots=True)
class RequestDefinition:
    """A named GraphQL operation plus the fragments its body spreads.

    Attributes:
        operation: ``query``, ``mutation`` or ``subscription``.
        name: Operation name, sent as ``operationName``.
        variables: Declared variables in declaration order.
        body: Root selection without the surrounding braces.
        fragments: Names of fragments spread directly in ``body``.
    """

    operation: OperationType
    name: str
    variables: tuple[Variable, ...]
    body: str
    fragments: tuple[str, ...] = ()

    def signature(self) -> str:
        """Operation header, e.g. ``query group($groupId: Int!)``."""
        if not self.variables:
            return f"{self.operation} {self.name}"
        declared = ", ".join(variable.render() for variable in self.variables)
        return f"{self.operation} {self.name}({declared})"

    def render(self, library: FragmentLibrary | None = None) -> str:
        """Render the full document: the operation then every required fragment."""
        library = DEFAULT_LIBRARY if library is None else library
        body = textwrap.indent(textwrap.dedent(self.body).strip(), "  ")
        parts = [f"{self.signature()} {{\n{body}\n}}"]
        parts.extend(fragment.render() for fragment in library.collect(self.fragments))
        return "\n\n".join(parts) + "\n"


_MESSAGE_CONNECTION = Variable("messageConnection", "ConnectionInput")

USER_QUERY = RequestDefinition(
    operation="query",
    name="user",
    variables=(Variable("id", "Int"), Variable("email", "String")),
    body="""
        user(id: $id, email: $email) {
          ...UserProfileFragment
        }
    """,
    fragments=("UserProfileFragment",),
)

GROUP_QUERY = RequestDefinition(
    operation="query",
    name="group",
    variables=(Variable("groupId", "Int!"), _MESSAGE_CONNECTION),
    body="""
        group(id: $groupId) {
          ...GroupFragment
        }
    """,
    fragments=("GroupFragment",),
)

MESSAGES_QUERY = RequestDefinition(
    operation="query",
    name="messages",
    variables=(Variable("groupId", "Int"), Variable("userId", "Int")),
    body="""
        messages(groupId: $groupId, userId: $userId) {
          ...MessageFragment
        }
    """,
    fragments=("MessageFragment",),
)

CREATE_MESSAGE_MUTATION = RequestDefinition(
    operation="mutation",
    name="createMessage",
    variables=(Variable("message", "CreateMessageInput!"),),
    body="""
        createMessage(message: $message) {
          ...MessageFragment
        }
    """,
    fragments=("MessageFragment",),
)

CREATE_GROUP_MUTATION = RequestDefinition(
    operation="mutation",
    name="createGroup",
    variables=(Variable("group", "CreateGroupInput!"), _MESSAGE_CONNECTION),
    body="""
        createGroup(group: $group) {
          ...GroupFragment
        }
    """,
    fragments=("GroupFragment",),
)

UPDATE_GROUP_MUTATION = RequestDefinition(
    operation="mutation",
    name="updateGroup",
    variables=(Variable("group", "UpdateGroupInput!"), _MESSAGE_CONNECTION),
    body="""
        updateGroup(group: $group) {
          ...GroupFragment
        }
    """,
    fragments=("GroupFragment",),
)

DELETE_GROUP_MUTATION = RequestDefinition(
    operation="mutation",
    name="deleteGroup",
    variables=(Variable("id", "Int!"),),
    body="""
        deleteGroup(id: $id) {
          ...GroupSummaryFragment
        }
    """,
    fragments=("GroupSummaryFragment",),
)

LEAVE_GROUP_MUTATION = RequestDefinition(
    operation="mutation",
    name="leaveGroup",
    variables=(Variable("id", "Int!"), Variable("userId", "Int!")),
    body="""
        leaveGroup(id: $id, userId: $userId) {
          ...GroupSummaryFragment
        }
    """,
    fragments=("GroupSummaryFragment",),
)

MESSAGE_ADDED_SUBSCRIPTION = RequestDefinition(
    operation="subscription",
    name="messageAdded",
    variables=(Variable("groupIds", "[Int!]"),),
    body="""
        messageAdded(groupIds: $groupIds) {
          ...MessageFragment
        }
    """,
    fragments=("MessageFragment",),
)

GROUP_ADDED_SUBSCRIPTION = RequestDefinition(
    operation="subscription",
    name="groupAdded",
    variables=(Variable("userId", "Int"), _MESSAGE_CONNECTION),
    body="""
        groupAdded(userId: $userId) {
          ...GroupFragment
        }
    """,
    fragments=("GroupFragment",),
)

CATALOG: dict[str, RequestDefinition] = {
    request.name: request
    for request in (
        USER_QUERY,
        GROUP_QUERY,
        MESSAGES_QUERY,
        CREATE_MESSAGE_MUTATION,
        CREATE_GROUP_MUTATION,
        UPDATE_GROUP_MUTATION,
        DELETE_GROUP_MUTATION,
        LEAVE_GROUP_MUTATION,
        MESSAGE_ADDED_SUBSCRIPTION,
        GROUP_ADDED_SUBSCRIPTION,
    )
}


__all__ = [
    "CATALOG",
    "CREATE_GROUP_MUTATION",
    "CREATE_MESSAGE_MUTATION",
    "DELETE_GROUP_MUTATION",
    "GROUP_ADDED_SUBSCRIPTION",
    "GROUP_QUERY",
    "LEAVE_GROUP_MUTATION",
    "MESSAGES_QUERY",
    "MESSAGE_ADDED_SUBSCRIPTION",
    "UPDATE_GROUP_MUTATION",
    "USER_QUERY",
    "OperationType",
    "RequestDefinition",
    "Variable",
]
