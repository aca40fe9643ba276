"""Tests for core exceptions."""

from chat_service.core import exceptions as exc
from chat_service.core.database import InvalidCursorError, NotFoundError


def test_app_exception_defaults_title() -> None:
    error = exc.AppException(status_code=400, detail="bad")
    assert error.title == "Bad Request"
    assert error.extra == {}
    assert error.error_code == "INTERNAL_ERROR"
    assert str(error) == "bad"


def test_not_found_exception_fields() -> None:
    error = exc.NotFoundException(detail="missing")
    assert error.status_code == 404
    assert error.type == "not-found"
    assert error.title == "Not Found"
    assert error.error_code == "NOT_FOUND"


def test_validation_exception_fields() -> None:
    error = exc.ValidationException(detail="first must be non-negative", extra={"field": "first"})
    assert error.status_code == 422
    assert error.error_code == "VALIDATION_ERROR"
    assert error.extra["field"] == "first"


def test_conflict_exception_fields() -> None:
    error = exc.ConflictException(detail="not a member")
    assert error.status_code == 409
    assert error.title == "Conflict"
    assert error.error_code == "CONFLICT"


def test_service_unavailable_exception_fields() -> None:
    error = exc.ServiceUnavailableException(detail="Database is unavailable")
    assert error.status_code == 503
    assert error.error_code == "SERVICE_UNAVAILABLE"


def test_problem_detail_merges_extra() -> None:
    error = exc.NotFoundException(
        detail="Group 12 not found",
        instance="/graphql",
        extra={"group_id": 12},
    )

    assert error.to_problem_detail() == {
        "type": "not-found",
        "title": "Not Found",
        "status": 404,
        "detail": "Group 12 not found",
        "instance": "/graphql",
        "group_id": 12,
    }


def test_problem_detail_omits_missing_instance() -> None:
    body = exc.AppException(status_code=500, detail="boom").to_problem_detail()
    assert "instance" not in body
    assert body["title"] == "Internal Server Error"


def test_repository_not_found_error_message() -> None:
    error = NotFoundError("Group", {"id": 3})
    assert str(error) == "Group not found with id=3 (model='Group', id=3)"
    assert error.details == {"model": "Group", "id": 3}


def test_invalid_cursor_error_keeps_cursor() -> None:
    error = InvalidCursorError("abc", "cannot be decoded")
    assert error.cursor == "abc"
    assert error.message == "Invalid cursor: cannot be decoded"
