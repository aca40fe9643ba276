"""Check request documents against the served schema with graphql-core."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import TYPE_CHECKING, Any

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLObjectType,
    GraphQLSchema,
    OperationDefinitionNode,
    OperationType,
    get_named_type,
    parse,
    print_ast,
    validate,
)

from chat_service.client.documents import CATALOG
from chat_service.client.fragments import DEFAULT_LIBRARY

if TYPE_CHECKING:
    from chat_service.client.documents import RequestDefinition
    from chat_service.client.fragments import FragmentLibrary

logger = logging.getLogger(__name__)


class DocumentValidationError(Exception):
    """A rendered request document is not valid against the schema."""

    def __init__(self, request_name: str, errors: list[str]) -> None:
        self.request_name = request_name
        self.errors = errors
        super().__init__(f"{request_name}: " + "; ".join(errors))


def _graphql_schema(schema: Any) -> GraphQLSchema:
    """Accept a graphql-core schema or a Strawberry schema wrapping one."""
    if isinstance(schema, GraphQLSchema):
        return schema
    return schema._schema


def validate_document(
    schema: Any,
    request: RequestDefinition,
    library: FragmentLibrary | None = None,
) -> DocumentNode:
    """Parse and validate ``request`` against ``schema``.

    Returns:
        The parsed document.

    Raises:
        DocumentValidationError: On syntax errors, schema validation errors,
            or an entity selected without one of its fragments.
    """
    library = DEFAULT_LIBRARY if library is None else library
    source = request.render(library)
    try:
        document = parse(source)
    except GraphQLError as e:
        raise DocumentValidationError(request.name, [e.message]) from e

    graphql_schema = _graphql_schema(schema)
    errors = validate(graphql_schema, document)
    if errors:
        raise DocumentValidationError(request.name, [error.message for error in errors])

    usage_errors = fragment_usage_errors(graphql_schema, document, library)
    if usage_errors:
        raise DocumentValidationError(request.name, usage_errors)
    return document


def fragment_usage_errors(
    schema: GraphQLSchema,
    document: DocumentNode,
    library: FragmentLibrary,
) -> list[str]:
    """Root fields returning an entity must select it through one registered fragment.

    An entity is an object type with at least one fragment in ``library``.
    Root fields returning other types (scalars, types without fragments)
    are not checked.
    """
    root_types = {
        OperationType.QUERY: schema.query_type,
        OperationType.MUTATION: schema.mutation_type,
        OperationType.SUBSCRIPTION: schema.subscription_type,
    }
    errors: list[str] = []
    for definition in document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        root_type = root_types[definition.operation]
        if root_type is None:
            continue
        for selection in definition.selection_set.selections:
            if not isinstance(selection, FieldNode):
                continue
            field = root_type.fields.get(selection.name.value)
            if field is None:
                continue
            entity = get_named_type(field.type)
            if not isinstance(entity, GraphQLObjectType):
                continue
            allowed = sorted(f.name for f in library if f.on_type == entity.name)
            if not allowed:
                continue
            selections = selection.selection_set.selections if selection.selection_set else ()
            if len(selections) != 1 or not (
                isinstance(selections[0], FragmentSpreadNode)
                and selections[0].name.value in allowed
            ):
                errors.append(
                    f"Field '{selection.name.value}' returns {entity.name} and must select "
                    f"exactly one of its fragments ({', '.join(allowed)})."
                )
    return errors


def check_catalog(
    schema: Any,
    catalog: Mapping[str, RequestDefinition] | None = None,
    library: FragmentLibrary | None = None,
) -> dict[str, list[str]]:
    """Validate every request in ``catalog``.

    Returns:
        Error messages keyed by request name; empty when every document is valid.
    """
    catalog = CATALOG if catalog is None else catalog
    failures: dict[str, list[str]] = {}
    for name, request in catalog.items():
        try:
            validate_document(schema, request, library)
        except DocumentValidationError as e:
            failures[name] = e.errors
            logger.warning("Request document invalid", extra={"request": name, "errors": e.errors})
    return failures


def selection_signature(request: RequestDefinition, library: FragmentLibrary | None = None) -> str:
    """Printed selection set of the operation's root field.

    Two requests whose root fields select the same thing (for instance both
    spread ``GroupFragment``) have equal signatures regardless of the root
    field's name and arguments.
    """
    document = parse(request.render(library))
    operation = next(
        definition
        for definition in document.definitions
        if isinstance(definition, OperationDefinitionNode)
    )
    root = operation.selection_set.selections[0]
    if not isinstance(root, FieldNode) or root.selection_set is None:
        return ""
    return print_ast(root.selection_set)


__all__ = [
    "DocumentValidationError",
    "check_catalog",
    "fragment_usage_errors",
    "selection_signature",
    "validate_document",
]
