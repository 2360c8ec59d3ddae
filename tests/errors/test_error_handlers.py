# tests/errors/test_error_handlers.py
"""Tests for application error classes and their JSON handlers."""

from logging import getLogger
from unittest.mock import MagicMock

import pytest
from fastapi.exceptions import RequestValidationError
from orjson import loads
from starlette.requests import Request

from blogapp.errors import (
    ImageTooLargeError,
    InvalidCredentialsError,
    MissingImageError,
    UserNotFoundError,
    create_exception_handler,
    create_unhandled_exception_handler,
    validation_exception_handler,
)
from blogapp.errors.validation import body_or_empty, format_validation_errors
from blogapp.schemas import BlogCreate, LoginRequest


@pytest.fixture
def request_() -> Request:
    return Request(
        {
            "type": "http",
            "method": "POST",
            "path": "/api/blogs/add",
            "headers": [],
            "query_string": b"",
            "server": ("test", 80),
            "scheme": "http",
            "client": ("127.0.0.1", 5000),
        },
    )


class TestErrorClasses:
    @pytest.mark.parametrize(
        ("error", "status_code", "detail"),
        [
            (UserNotFoundError(), 404, "User not found"),
            (InvalidCredentialsError(), 400, "Incorrect password!"),
            (MissingImageError(), 400, "No image file provided"),
        ],
    )
    def test_status_and_detail(self, error, status_code: int, detail: str) -> None:
        assert error.status_code == status_code
        assert str(error) == detail


class TestExceptionHandler:
    @pytest.mark.asyncio
    async def test_detail_and_extras(self, request_: Request) -> None:
        handler = create_exception_handler(getLogger("test"))

        response = await handler(request_, ImageTooLargeError(max_size_mb=5, actual_size_mb=7.5))

        assert response.status_code == 400
        assert loads(response.body) == {
            "detail": "File size too large. Maximum size is 5MB.",
            "max_size_mb": 5,
            "actual_size_mb": 7.5,
        }

    @pytest.mark.asyncio
    async def test_unhandled_is_generic(self, request_: Request) -> None:
        logger = MagicMock()
        handler = create_unhandled_exception_handler(logger)

        response = await handler(request_, RuntimeError("secret connection string"))

        assert response.status_code == 500
        assert loads(response.body) == {"detail": "Something went wrong!"}
        logger.error.assert_called_once()


class TestValidationHandler:
    def test_format_strips_prefix(self) -> None:
        errors = [
            {"loc": ("body", "title"), "msg": "Value error, Title is required", "type": "value_error"},
            {"loc": ("query", "limit"), "msg": "Input should be less than or equal to 100"},
        ]

        assert format_validation_errors(errors) == [
            {"field": "title", "message": "Title is required", "type": "value_error"},
            {
                "field": "limit",
                "message": "Input should be less than or equal to 100",
                "type": "validation_error",
            },
        ]

    @pytest.mark.asyncio
    async def test_value_error_detail(self, request_: Request) -> None:
        exc = RequestValidationError(
            [{"loc": ("body", "content"), "msg": "Value error, Content is required", "type": "value_error"}],
        )

        response = await validation_exception_handler(request_, exc)

        assert response.status_code == 400
        assert loads(response.body)["detail"] == "Content is required"

    @pytest.mark.asyncio
    async def test_other_error_detail_names_field(self, request_: Request) -> None:
        exc = RequestValidationError(
            [{"loc": ("query", "page"), "msg": "Input should be a valid integer", "type": "int_parsing"}],
        )

        response = await validation_exception_handler(request_, exc)

        assert loads(response.body)["detail"] == "page: Input should be a valid integer"


class TestBodyOrEmpty:
    def test_keeps_parsed_payload(self) -> None:
        payload = BlogCreate(title="Title", content="Body")

        assert body_or_empty(BlogCreate, payload) is payload

    def test_empty_body_is_valid_when_fields_are_optional(self) -> None:
        payload = body_or_empty(LoginRequest, None)

        assert payload.email is None
        assert payload.password is None

    def test_empty_body_raises_request_validation_error(self) -> None:
        with pytest.raises(RequestValidationError) as exc_info:
            body_or_empty(BlogCreate, None)

        (error, *_) = exc_info.value.errors()
        assert error["loc"] == ("body", "title")
        assert format_validation_errors([error])[0]["message"] == "Title is required"
