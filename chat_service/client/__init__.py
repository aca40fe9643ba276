"""Client-side request documents, shared fragments and HTTP transport."""

from chat_service.client.documents import CATALOG, RequestDefinition, Variable
from chat_service.client.fragments import (
    DEFAULT_LIBRARY,
    Fragment,
    FragmentConflictError,
    FragmentLibrary,
)
from chat_service.client.transport import ChatClient, GraphQLRequestError
from chat_service.client.validation import (
    DocumentValidationError,
    check_catalog,
    selection_signature,
    validate_document,
)

__all__ = [
    "CATALOG",
    "DEFAULT_LIBRARY",
    "ChatClient",
    "DocumentValidationError",
    "Fragment",
    "FragmentConflictError",
    "FragmentLibrary",
    "GraphQLRequestError",
    "RequestDefinition",
    "Variable",
    "check_catalog",
    "selection_signature",
    "validate_document",
]
