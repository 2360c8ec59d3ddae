"""Custom validation error handling for FastAPI."""

from logging import getLogger
from typing import Any, cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel, ValidationError
from starlette.status import HTTP_400_BAD_REQUEST

from blogapp.configs import file_logger
from blogapp.utils.helpers import host

logger = file_logger(getLogger(__name__))

VALUE_ERROR_PREFIX = "Value error, "


def body_or_empty[ModelT: BaseModel](model: type[ModelT], payload: ModelT | None) -> ModelT:
    """
    Treat a request sent without a JSON body as an empty object.

    The field validators then report what is missing, for example
    "Title is required", through the usual 400 response.

    Raises:
        RequestValidationError: If the empty object is not a valid ``model``.
    """
    if payload is not None:
        return payload
    try:
        return model.model_validate({})
    except ValidationError as e:
        errors = [{**error, "loc": ("body", *error["loc"])} for error in e.errors()]
        raise RequestValidationError(errors) from e


def _clean_message(message: str) -> str:
    return message.removeprefix(VALUE_ERROR_PREFIX)


def format_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Flatten pydantic error dicts into ``{field, message, type}`` entries.

    Args:
        errors: Output of ``RequestValidationError.errors()``.

    Returns:
        List of serializable error descriptions.
    """
    formatted_errors = []
    for error in errors:
        loc = error.get("loc", [])
        formatted_errors.append(
            {
                # Skip the 'body' / 'query' / 'path' prefix
                "field": ".".join(str(part) for part in loc[1:]) or ".".join(map(str, loc)),
                "message": _clean_message(error.get("msg", "Invalid value")),
                "type": error.get("type", "validation_error"),
            },
        )
    return formatted_errors


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors as 400 responses.

    The first error's message becomes ``detail`` so clients can show a
    single human readable line; every error is listed under ``errors``.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)
    formatted_errors = format_validation_errors(list(exec_error.errors()))

    detail = "Validation failed"
    if formatted_errors:
        first = formatted_errors[0]
        message = first["message"]
        detail = message if first["type"] == "value_error" else f"{first['field']}: {message}"

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "detail": detail,
            "errors": formatted_errors,
        },
    )
