import json
from http import HTTPStatus
from types import SimpleNamespace
from typing import Any, cast

import pytest

from core.models.errors import (
    DuplicatePictureError,
    FileSizeError,
    NotFoundError,
    S3Error,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import JsonDict, ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    """Parse JSON body from API Gateway response."""
    body = resp.get("body")
    if not body:
        return {}
    return cast(dict[str, Any], json.loads(body))


def _raising(exc: Exception):
    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        raise exc

    return handler


def test_api_handler_success() -> None:
    """Successful handler execution returns response unchanged."""

    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:
        return ResponseBuilder.ok({"msg": "ok"}, request_id=context.aws_request_id)

    resp = handler({}, SimpleNamespace(aws_request_id="req-ok"))

    assert resp["statusCode"] == HTTPStatus.OK
    assert parse_body(resp)["request_id"] == "req-ok"


def test_api_handler_options_preflight() -> None:
    """OPTIONS request returns 204 with CORS headers."""

    @api_gateway_handler
    def handler(event: Any, context: Any) -> JsonDict:  # pragma: no cover
        raise AssertionError("Should not be called")

    resp = handler({"httpMethod": "OPTIONS"}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.NO_CONTENT
    assert resp["body"] == ""
    assert "Access-Control-Allow-Origin" in resp["headers"]


@pytest.mark.parametrize(
    "exc,status,error",
    [
        (FileSizeError(message="Picture too large"), HTTPStatus.UNPROCESSABLE_ENTITY, "FILE_SIZE_EXCEEDED"),
        (NotFoundError(message="Picture not found"), HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (
            DuplicatePictureError(message="Duplicate picture"),
            HTTPStatus.CONFLICT,
            "DUPLICATE_PICTURE_ERROR",
        ),
        (S3Error(message="Storage down"), HTTPStatus.INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR"),
    ],
)
def test_domain_errors_are_mapped(exc, status, error) -> None:
    resp = _raising(exc)({}, SimpleNamespace(aws_request_id="req-domain"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == error
    assert parsed["message"] == exc.message


def test_value_error_returns_400_with_friendly_message() -> None:
    resp = _raising(ValueError("Invalid input data"))({}, SimpleNamespace(aws_request_id="req-400"))
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.BAD_REQUEST
    assert parsed["message"] == "Invalid input data"
    assert parsed["request_id"] == "req-400"


def test_technical_value_error_is_rewritten() -> None:
    resp = _raising(ValueError("int() got xyz"))({}, SimpleNamespace())

    assert parse_body(resp)["message"] == "The provided data is invalid. Please check your input and try again."


def test_permission_error_returns_403() -> None:
    resp = _raising(PermissionError("no access"))({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.FORBIDDEN


def test_memory_error_returns_413() -> None:
    resp = _raising(MemoryError())({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.REQUEST_ENTITY_TOO_LARGE


def test_timeout_returns_504() -> None:
    resp = _raising(TimeoutError("slow"))({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.GATEWAY_TIMEOUT


def test_connection_error_returns_503() -> None:
    resp = _raising(ConnectionError("down"))({}, SimpleNamespace())

    assert resp["statusCode"] == HTTPStatus.SERVICE_UNAVAILABLE


def test_unexpected_error_returns_500() -> None:
    resp = _raising(RuntimeError("boom"))({}, SimpleNamespace())
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.INTERNAL_SERVER_ERROR
    assert parsed["message"] == "Unexpected error occurred. Please try again in a few moments."
