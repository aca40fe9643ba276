"""Tests for the fragment library, request rendering and catalog validation."""

from __future__ import annotations

from graphql import FieldNode, FragmentSpreadNode, OperationDefinitionNode, get_named_type, parse
import pytest

from chat_service.client.documents import (
    CATALOG,
    CREATE_GROUP_MUTATION,
    GROUP_ADDED_SUBSCRIPTION,
    GROUP_QUERY,
    MESSAGES_QUERY,
    UPDATE_GROUP_MUTATION,
    RequestDefinition,
    Variable,
)
from chat_service.client.fragments import (
    DEFAULT_LIBRARY,
    GROUP_FRAGMENT,
    Fragment,
    FragmentConflictError,
    FragmentError,
    FragmentLibrary,
    UnknownFragmentError,
)
from chat_service.client.validation import (
    DocumentValidationError,
    check_catalog,
    fragment_usage_errors,
    selection_signature,
    validate_document,
)

GROUP_REQUESTS = [GROUP_QUERY, CREATE_GROUP_MUTATION, UPDATE_GROUP_MUTATION, GROUP_ADDED_SUBSCRIPTION]


def _group_fragment_with_created_at() -> Fragment:
    return Fragment(
        name=GROUP_FRAGMENT.name,
        on_type=GROUP_FRAGMENT.on_type,
        selection=GROUP_FRAGMENT.selection + "\n        createdAt\n",
        requires=GROUP_FRAGMENT.requires,
    )


class TestFragmentLibrary:
    """Registration and resolution of named fragments."""

    def test_default_library_holds_every_fragment(self) -> None:
        assert len(DEFAULT_LIBRARY) == 5
        for name in (
            "UserSummaryFragment",
            "UserProfileFragment",
            "MessageFragment",
            "GroupFragment",
            "GroupSummaryFragment",
        ):
            assert name in DEFAULT_LIBRARY

    def test_reregistering_identical_fragment_is_allowed(self) -> None:
        library = FragmentLibrary([GROUP_FRAGMENT])

        assert library.register(GROUP_FRAGMENT) is GROUP_FRAGMENT
        assert len(library) == 1

    def test_conflicting_definition_is_rejected(self) -> None:
        library = FragmentLibrary([GROUP_FRAGMENT])

        with pytest.raises(FragmentConflictError) as exc_info:
            library.register(_group_fragment_with_created_at())

        assert exc_info.value.existing is GROUP_FRAGMENT
        assert "GroupFragment" in str(exc_info.value)

    def test_collect_orders_dependencies_first_without_duplicates(self) -> None:
        collected = DEFAULT_LIBRARY.collect(["GroupFragment", "MessageFragment"])

        assert [fragment.name for fragment in collected] == [
            "UserSummaryFragment",
            "MessageFragment",
            "GroupFragment",
        ]

    def test_unknown_fragment(self) -> None:
        with pytest.raises(UnknownFragmentError):
            DEFAULT_LIBRARY.collect(["ChannelFragment"])

    def test_cycle_is_reported(self) -> None:
        library = FragmentLibrary(
            [
                Fragment("A", "Group", "...B", requires=("B",)),
                Fragment("B", "Group", "...A", requires=("A",)),
            ],
        )

        with pytest.raises(FragmentError, match="A -> B -> A"):
            library.collect(["A"])

    def test_with_fragment_leaves_original_untouched(self) -> None:
        replacement = _group_fragment_with_created_at()

        library = DEFAULT_LIBRARY.with_fragment(replacement)

        assert library.get("GroupFragment") is replacement
        assert DEFAULT_LIBRARY.get("GroupFragment") is GROUP_FRAGMENT


class TestRequestRendering:
    """Rendered request documents."""

    def test_group_query_document(self) -> None:
        document = GROUP_QUERY.render()

        assert document.startswith(
            "query group($groupId: Int!, $messageConnection: ConnectionInput) {\n"
            "  group(id: $groupId) {\n"
            "    ...GroupFragment\n"
        )
        assert document.count("fragment GroupFragment on Group") == 1
        assert document.count("fragment UserSummaryFragment on User") == 1
        assert document.count("fragment MessageFragment on Message") == 1

    def test_message_connection_variable_has_no_default(self) -> None:
        for request in GROUP_REQUESTS:
            assert "$messageConnection: ConnectionInput)" in request.signature()
            assert "$messageConnection: ConnectionInput =" not in request.render()

    def test_documents_parse(self) -> None:
        for request in CATALOG.values():
            parse(request.render())

    def test_variable_default_is_rendered(self) -> None:
        assert Variable("first", "Int", "10").render() == "$first: Int = 10"

    def test_explicit_empty_library_is_not_replaced(self) -> None:
        with pytest.raises(UnknownFragmentError):
            GROUP_QUERY.render(FragmentLibrary())

    def test_requests_without_fragments_render_with_empty_library(self) -> None:
        request = RequestDefinition(operation="query", name="ping", variables=(), body="users { id }")

        assert request.render(FragmentLibrary()) == "query ping {\n  users { id }\n}\n"


class TestSharedSelections:
    """Group-returning operations share one result shape."""

    def test_group_requests_share_a_selection(self) -> None:
        signatures = {selection_signature(request) for request in GROUP_REQUESTS}

        assert len(signatures) == 1
        assert selection_signature(MESSAGES_QUERY) not in signatures

    def test_fragment_change_reaches_every_group_request(self) -> None:
        library = DEFAULT_LIBRARY.with_fragment(_group_fragment_with_created_at())

        for request in GROUP_REQUESTS:
            before = request.render()
            after = request.render(library)
            assert after != before
            assert "createdAt" in after.split("fragment GroupFragment on Group", 1)[1]

        assert MESSAGES_QUERY.render(library) == MESSAGES_QUERY.render()

    @pytest.mark.asyncio
    async def test_fragment_change_reaches_query_results(self, execute, chat_data) -> None:
        library = DEFAULT_LIBRARY.with_fragment(_group_fragment_with_created_at())

        default_result = await execute(GROUP_QUERY, {"groupId": chat_data.general})
        extended_result = await execute(GROUP_QUERY, {"groupId": chat_data.general}, library=library)

        assert default_result.errors is None
        assert extended_result.errors is None
        assert "createdAt" not in default_result.data["group"]
        assert extended_result.data["group"]["createdAt"]
        extended = dict(extended_result.data["group"])
        extended.pop("createdAt")
        assert extended == default_result.data["group"]


class TestCatalogValidation:
    """Request documents validated against the served schema."""

    def test_catalog_is_valid(self, schema) -> None:
        assert check_catalog(schema) == {}

    def test_catalog_with_extended_fragment_is_valid(self, schema) -> None:
        library = DEFAULT_LIBRARY.with_fragment(_group_fragment_with_created_at())

        assert check_catalog(schema, library=library) == {}

    def test_unknown_field_fails_validation(self, schema) -> None:
        request = RequestDefinition(
            operation="query",
            name="groupColor",
            variables=(Variable("groupId", "Int!"),),
            body="group(id: $groupId) { color }",
        )

        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(schema, request)

        assert exc_info.value.request_name == "groupColor"
        assert any("color" in message for message in exc_info.value.errors)

    def test_undeclared_fragment_variable_fails_validation(self, schema) -> None:
        request = RequestDefinition(
            operation="query",
            name="groupWithoutConnection",
            variables=(Variable("groupId", "Int!"),),
            body="group(id: $groupId) { ...GroupFragment }",
            fragments=("GroupFragment",),
        )

        failures = check_catalog(schema, {request.name: request})

        assert list(failures) == ["groupWithoutConnection"]
        assert any("$messageConnection" in message for message in failures["groupWithoutConnection"])

    def test_syntax_error_fails_validation(self, schema) -> None:
        request = RequestDefinition(
            operation="query",
            name="broken",
            variables=(),
            body="group(id: 1) {",
        )

        with pytest.raises(DocumentValidationError):
            validate_document(schema, request)

    def test_inline_entity_selection_fails_validation(self, schema) -> None:
        request = RequestDefinition(
            operation="mutation",
            name="deleteGroupInline",
            variables=(Variable("id", "Int!"),),
            body="deleteGroup(id: $id) { id name }",
        )

        with pytest.raises(DocumentValidationError) as exc_info:
            validate_document(schema, request)

        [message] = exc_info.value.errors
        assert "'deleteGroup' returns Group" in message
        assert "GroupFragment, GroupSummaryFragment" in message

    def test_root_fields_without_entity_fragments_are_not_checked(self, schema) -> None:
        document = parse("query { users { id } }")

        assert fragment_usage_errors(schema._schema, document, FragmentLibrary()) == []

    @pytest.mark.parametrize("request_definition", list(CATALOG.values()), ids=list(CATALOG))
    def test_entity_requests_spread_a_registered_fragment(self, schema, request_definition) -> None:
        graphql_schema = schema._schema
        document = parse(request_definition.render())
        operation = next(d for d in document.definitions if isinstance(d, OperationDefinitionNode))
        root_type = {
            "query": graphql_schema.query_type,
            "mutation": graphql_schema.mutation_type,
            "subscription": graphql_schema.subscription_type,
        }[request_definition.operation]
        [root] = operation.selection_set.selections
        assert isinstance(root, FieldNode)

        entity = get_named_type(root_type.fields[root.name.value].type).name
        [selection] = root.selection_set.selections

        assert isinstance(selection, FragmentSpreadNode)
        assert DEFAULT_LIBRARY.get(selection.name.value).on_type == entity
