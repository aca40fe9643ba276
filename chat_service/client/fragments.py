"""Named, reusable selection sets for the chat entities.

Every request document that returns a group, message or user spreads one of
these fragments instead of repeating the field list, so a change to a
fragment reaches every query, mutation and subscription that uses it.

Fragments refer to the fragments they spread by name (``requires``) and are
resolved through a ``FragmentLibrary`` when a document is rendered.

Example:
    library = DEFAULT_LIBRARY.with_fragment(
        Fragment("GroupFragment", "Group", "id name createdAt", requires=()),
    )
    print(GROUP_QUERY.render(library))
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import textwrap


class FragmentError(Exception):
    """Base class for fragment library errors."""


class FragmentConflictError(FragmentError):
    """A different fragment is already registered under the same name."""

    def __init__(self, existing: Fragment, incoming: Fragment) -> None:
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Fragment '{incoming.name}' is already defined on '{existing.on_type}' "
            "with a different selection; give the new shape its own name",
        )


class UnknownFragmentError(FragmentError, LookupError):
    """A request or fragment references a name the library does not define."""


@dataclass(frozen=True, slots=True)
class Fragment:
    """A named selection set on one GraphQL type.

    Attributes:
        name: Fragment name, unique within a library.
        on_type: Type condition (``Group``, ``Message``, ``User``).
        selection: Field selection without the surrounding braces.
        requires: Names of fragments spread inside ``selection``.
    """

    name: str
    on_type: str
    selection: str
    requires: tuple[str, ...] = ()

    @property
    def spread(self) -> str:
        return f"...{self.name}"

    def render(self) -> str:
        """Render the ``fragment ... on ...`` definition."""
        body = textwrap.indent(textwrap.dedent(self.selection).strip(), "  ")
        return f"fragment {self.name} on {self.on_type} {{\n{body}\n}}"


class FragmentLibrary:
    """Registry holding one canonical fragment per name."""

    def __init__(self, fragments: Iterable[Fragment] = ()) -> None:
        self._fragments: dict[str, Fragment] = {}
        for fragment in fragments:
            self.register(fragment)

    def register(self, fragment: Fragment) -> Fragment:
        """Add ``fragment``; re-registering an identical fragment is a no-op.

        Raises:
            FragmentConflictError: If another fragment already uses the name.
        """
        existing = self._fragments.get(fragment.name)
        if existing is not None and existing != fragment:
            raise FragmentConflictError(existing, fragment)
        self._fragments[fragment.name] = fragment
        return fragment

    def with_fragment(self, fragment: Fragment) -> FragmentLibrary:
        """Copy of this library with ``fragment`` replacing any same-named entry."""
        library = FragmentLibrary()
        library._fragments = {**self._fragments, fragment.name: fragment}
        return library

    def get(self, name: str) -> Fragment:
        try:
            return self._fragments[name]
        except KeyError:
            raise UnknownFragmentError(f"Unknown fragment '{name}'") from None

    def collect(self, names: Iterable[str]) -> list[Fragment]:
        """Resolve ``names`` and everything they require, each exactly once.

        Required fragments come before the fragments that spread them.

        Raises:
            UnknownFragmentError: If a name is not registered.
            FragmentError: If fragments require each other in a cycle.
        """
        ordered: dict[str, Fragment] = {}
        visiting: list[str] = []

        def visit(name: str) -> None:
            if name in ordered:
                return
            if name in visiting:
                cycle = " -> ".join([*visiting[visiting.index(name) :], name])
                raise FragmentError(f"Fragment cycle: {cycle}")
            visiting.append(name)
            fragment = self.get(name)
            for required in fragment.requires:
                visit(required)
            visiting.pop()
            ordered[name] = fragment

        for name in names:
            visit(name)
        return list(ordered.values())

    def __contains__(self, name: object) -> bool:
        return name in self._fragments

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self._fragments.values())

    def __len__(self) -> int:
        return len(self._fragments)


USER_SUMMARY_FRAGMENT = Fragment(
    name="UserSummaryFragment",
    on_type="User",
    selection="""
        id
        username
    """,
)

USER_PROFILE_FRAGMENT = Fragment(
    name="UserProfileFragment",
    on_type="User",
    selection="""
        id
        email
        username
        createdAt
        groups {
          id
          name
        }
        friends {
          ...UserSummaryFragment
        }
    """,
    requires=("UserSummaryFragment",),
)

MESSAGE_FRAGMENT = Fragment(
    name="MessageFragment",
    on_type="Message",
    selection="""
        id
        to {
          id
        }
        from {
          ...UserSummaryFragment
        }
        createdAt
        text
    """,
    requires=("UserSummaryFragment",),
)

# Spreading GroupFragment obliges the operation to declare
# $messageConnection: ConnectionInput (left unset, the schema default applies).
GROUP_FRAGMENT = Fragment(
    name="GroupFragment",
    on_type="Group",
    selection="""
        id
        name
        users {
          ...UserSummaryFragment
        }
        messages(messageConnection: $messageConnection) {
          edges {
            cursor
            node {
              ...MessageFragment
            }
          }
          pageInfo {
            hasNextPage
            hasPreviousPage
          }
        }
    """,
    requires=("UserSummaryFragment", "MessageFragment"),
)

# Group shape for mutations whose group may no longer exist (delete, leave).
GROUP_SUMMARY_FRAGMENT = Fragment(
    name="GroupSummaryFragment",
    on_type="Group",
    selection="""
        id
        name
        users {
          ...UserSummaryFragment
        }
    """,
    requires=("UserSummaryFragment",),
)

DEFAULT_LIBRARY = FragmentLibrary(
    [
        USER_SUMMARY_FRAGMENT,
        USER_PROFILE_FRAGMENT,
        MESSAGE_FRAGMENT,
        GROUP_FRAGMENT,
        GROUP_SUMMARY_FRAGMENT,
    ],
)


__all__ = [
    "DEFAULT_LIBRARY",
    "GROUP_FRAGMENT",
    "GROUP_SUMMARY_FRAGMENT",
    "MESSAGE_FRAGMENT",
    "USER_PROFILE_FRAGMENT",
    "USER_SUMMARY_FRAGMENT",
    "Fragment",
    "FragmentConflictError",
    "FragmentError",
    "FragmentLibrary",
    "UnknownFragmentError",
]
