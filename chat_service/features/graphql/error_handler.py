"""GraphQL error handling and production error masking.

Every error leaving the schema goes through ``process_graphql_errors``,
which:
1. Adds a structured ``extensions.code`` (VALIDATION_ERROR, NOT_FOUND, ...)
2. Logs the error with full details server-side
3. Preserves user-facing errors
4. Masks internal errors in production

Domain exceptions (``AppException`` subclasses) raised by services and
resolvers contribute their ``error_code`` and ``extra`` fields.
"""

from __future__ import annotations

from datetime import UTC, datetime
import logging
import traceback
from typing import TYPE_CHECKING, Any

from graphql import GraphQLError

from chat_service.core.database import NotFoundError, RepositoryError
from chat_service.core.exceptions import AppException

if TYPE_CHECKING:
    from strawberry.types import ExecutionContext

logger = logging.getLogger(__name__)

__all__ = [
    "ErrorCategory",
    "classify_error",
    "is_user_facing_error",
    "mask_internal_error",
    "process_graphql_errors",
    "root_cause",
]

MASKED_MESSAGE = "An internal error occurred. Please try again later."


# ============================================================================
# Error Categories
# ============================================================================


class ErrorCategory:
    """Error categories for classification."""

    VALIDATION = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    DEPTH_LIMIT = "DEPTH_LIMIT_EXCEEDED"
    INTERNAL = "INTERNAL_ERROR"


USER_FACING_CODES = frozenset(
    {
        ErrorCategory.VALIDATION,
        ErrorCategory.NOT_FOUND,
        ErrorCategory.CONFLICT,
        ErrorCategory.DEPTH_LIMIT,
    }
)


# ============================================================================
# Main Error Processing
# ============================================================================


def process_graphql_errors(
    errors: list[GraphQLError],
    execution_context: ExecutionContext | None = None,
    *,
    production: bool = False,
) -> list[GraphQLError]:
    """Process GraphQL errors before returning them to the client.

    Args:
        errors: Errors from parsing, validation or execution
        execution_context: Execution context with operation info
        production: Replace internal errors with a generic message

    Returns:
        Errors safe to return to the client, in the original order
    """
    processed: list[GraphQLError] = []

    for error in errors:
        code, extra = classify_error(error)
        error.extensions = {**extra, **(error.extensions or {}), "code": code}

        log_error(error, execution_context)

        if is_user_facing_error(error):
            processed.append(error)
        elif production:
            processed.append(mask_internal_error(error))
        else:
            if error.original_error is not None:
                error.extensions["debug"] = {
                    "exception_type": type(error.original_error).__name__,
                    "exception_message": str(error.original_error),
                }
            processed.append(error)

    return processed


# ============================================================================
# Error Classification
# ============================================================================


def root_cause(error: GraphQLError) -> Exception | None:
    """Follow nested ``GraphQLError`` wrappers down to the underlying exception.

    graphql-core reports variable coercion failures as a ``GraphQLError``
    whose ``original_error`` is the ``GraphQLError`` naming the offending
    input field.
    """
    original = error.original_error
    while isinstance(original, GraphQLError) and original.original_error is not None:
        original = original.original_error
    return original


def classify_error(error: GraphQLError) -> tuple[str, dict[str, Any]]:
    """Determine the error code and any extra extensions for an error.

    Errors without an underlying exception come from graphql-core itself
    (syntax errors, unknown fields, input type mismatches) and are
    validation errors. So are wrapped errors raised before execution,
    such as a scalar rejecting a variable value.
    """
    existing = (error.extensions or {}).get("code")
    original = root_cause(error)

    if isinstance(original, AppException):
        return original.error_code, dict(original.extra)
    if isinstance(original, NotFoundError):
        return ErrorCategory.NOT_FOUND, dict(original.details)
    if isinstance(original, RepositoryError):
        return ErrorCategory.VALIDATION, {}
    if existing:
        return existing, {}
    if original is None or isinstance(original, GraphQLError):
        if "depth" in error.message.lower() and "exceeds" in error.message.lower():
            return ErrorCategory.DEPTH_LIMIT, {}
        return ErrorCategory.VALIDATION, {}
    if isinstance(error.original_error, GraphQLError) and error.path is None:
        return ErrorCategory.VALIDATION, {}
    return ErrorCategory.INTERNAL, {}


def is_user_facing_error(error: GraphQLError) -> bool:
    """Determine if an error should be shown to the user as-is.

    User-facing errors are intentional errors that provide useful feedback:
    validation errors, missing resources, conflicts and depth limits.
    Everything else is internal and may be masked.
    """
    extensions = error.extensions or {}
    return extensions.get("code") in USER_FACING_CODES


# ============================================================================
# Error Masking
# ============================================================================


def mask_internal_error(error: GraphQLError) -> GraphQLError:
    """Replace internal error details with a generic message.

    The location and path are preserved so clients can still tell which
    field failed.
    """
    return GraphQLError(
        MASKED_MESSAGE,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        extensions={
            "code": ErrorCategory.INTERNAL,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


# ============================================================================
# Error Logging
# ============================================================================


def log_error(error: GraphQLError, execution_context: ExecutionContext | None) -> None:
    """Log an error with full details for server-side debugging."""
    log_context: dict[str, Any] = {
        "error_message": error.message,
        "error_code": (error.extensions or {}).get("code"),
        "error_path": error.path,
    }

    if execution_context is not None:
        if execution_context.operation_name:
            log_context["operation_name"] = execution_context.operation_name
        correlation_id = getattr(execution_context.context, "correlation_id", None)
        if correlation_id:
            log_context["correlation_id"] = correlation_id

    original = error.original_error
    if original is not None:
        log_context["exception_type"] = type(original).__name__
        if not is_user_facing_error(error):
            log_context["stack_trace"] = "".join(
                traceback.format_exception(type(original), original, original.__traceback__)
            )

    if is_user_facing_error(error):
        logger.info("GraphQL user-facing error", extra=log_context)
    else:
        logger.error("GraphQL internal error", extra=log_context)
