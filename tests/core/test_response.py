import base64
import json
from http import HTTPStatus
from typing import Any, cast

import pytest

from core.utils.response import ResponseBuilder


def parse_body(resp: dict[str, Any]) -> dict[str, Any]:
    body = resp.get("body")
    if not body:
        return {}

    return cast(dict[str, Any], json.loads(body))


def test_ok_response() -> None:
    resp = ResponseBuilder.ok({"foo": "bar"}, request_id="req-1", cors_origin="*")
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.OK
    assert parsed["foo"] == "bar"
    assert parsed["request_id"] == "req-1"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"


def test_created_response() -> None:
    resp = ResponseBuilder.created({"id": 1})
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.CREATED
    assert parsed["id"] == 1


@pytest.mark.parametrize(
    "func,status,error_name",
    [
        (ResponseBuilder.bad_request, HTTPStatus.BAD_REQUEST, "BAD_REQUEST"),
        (ResponseBuilder.forbidden, HTTPStatus.FORBIDDEN, "FORBIDDEN"),
        (ResponseBuilder.not_found, HTTPStatus.NOT_FOUND, "NOT_FOUND"),
        (ResponseBuilder.conflict, HTTPStatus.CONFLICT, "CONFLICT"),
        (
            ResponseBuilder.internal_error,
            HTTPStatus.INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
        ),
    ],
)
def test_error_responses_use_explicit_message(func, status, error_name) -> None:
    resp = func("bad", request_id="req-x", cors_origin="*")
    parsed = parse_body(resp)

    assert resp["statusCode"] == status
    assert parsed["error"] == error_name
    assert parsed["message"] == "bad"
    assert parsed["request_id"] == "req-x"
    assert "timestamp" in parsed


def test_default_error_messages() -> None:
    assert parse_body(ResponseBuilder.forbidden())["message"] == "Forbidden"
    assert parse_body(ResponseBuilder.not_found())["message"] == "Resource not found"
    assert parse_body(ResponseBuilder.internal_error())["message"] == "Internal server error"


def test_validation_error() -> None:
    resp = ResponseBuilder.validation_error(
        message="Invalid input",
        details={"field": "seo_filename"},
        request_id="req-val",
    )
    parsed = parse_body(resp)

    assert resp["statusCode"] == HTTPStatus.UNPROCESSABLE_ENTITY
    assert parsed["error"] == "VALIDATION_ERROR"
    assert parsed["message"] == "Invalid input"
    assert parsed["details"]["field"] == "seo_filename"
    assert parsed["request_id"] == "req-val"


def test_validation_error_with_specific_code() -> None:
    resp = ResponseBuilder.validation_error(message="Too large", error="FILE_SIZE_EXCEEDED")

    assert parse_body(resp)["error"] == "FILE_SIZE_EXCEEDED"


def test_conflict_carries_details() -> None:
    resp = ResponseBuilder.conflict(
        "Duplicate",
        error="DUPLICATE_PICTURE_ERROR",
        details={"picture_id": "pic_1"},
    )
    parsed = parse_body(resp)

    assert parsed["error"] == "DUPLICATE_PICTURE_ERROR"
    assert parsed["details"] == {"picture_id": "pic_1"}


def test_binary_response() -> None:
    content = b"binary-data"

    resp = ResponseBuilder.binary_response(
        content,
        content_type="image/png",
        headers={"Content-Disposition": 'attachment; filename="a.png"'},
        cors_origin="*",
    )

    assert resp["statusCode"] == HTTPStatus.OK
    assert resp["isBase64Encoded"] is True
    assert base64.b64decode(resp["body"]) == content
    assert resp["headers"]["Content-Type"] == "image/png"
    assert resp["headers"]["Content-Length"] == str(len(content))
    assert resp["headers"]["Content-Disposition"] == 'attachment; filename="a.png"'
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"
