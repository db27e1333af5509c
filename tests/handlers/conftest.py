import base64
import json
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


@pytest.fixture
def get_picture_event() -> dict[str, Any]:
    return {
        "pathParameters": {"picture_id": "pic_abc123"},
        "queryStringParameters": {"target_size": "100"},
        "headers": {"x-api-key": "test-api-key"},
    }


@pytest.fixture
def list_pictures_event() -> dict[str, Any]:
    return {
        "queryStringParameters": {
            "page_index": "0",
            "page_size": "20",
        },
        "headers": {"x-api-key": "test-api-key"},
    }


@pytest.fixture
def delete_picture_event() -> dict[str, Any]:
    return {
        "pathParameters": {"picture_id": "pic_abc123"},
        "headers": {"x-api-key": "test-api-key"},
    }


@pytest.fixture
def upload_picture_event(sample_png_binary) -> dict[str, Any]:
    return {
        "body": json.dumps(
            {
                "file": base64.b64encode(sample_png_binary).decode("utf-8"),
                "mime_type": "image/png",
                "seo_filename": "Red Square",
            }
        ),
        "headers": {
            "Content-Type": "application/json",
            "x-api-key": "test-api-key",
        },
    }
