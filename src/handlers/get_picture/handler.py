"""
Lambda handler responsible for picture URL resolution and download.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import (
    MetadataOperationFailedError,
    NotFoundError,
    S3Error,
)
from core.models.picture import PictureInfo
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import query_flag, validate_request

from .models import GetPictureRequest, GetPictureResponse
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle picture URL and download requests.

    This function:
     - Default: return the picture URL at `target_size`
        - download=true: return the picture binary
        - metadata=true: include picture metadata in the response
    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    logger.info(
        "Received picture get request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}

    params: dict[str, Any] = {
        "picture_id": path_params.get("picture_id"),
        "target_size": query_params.get("target_size") or 0,
        "store_location": query_params.get("store_location"),
        "show_default": query_flag(query_params, "show_default", default=True),
        "metadata": query_flag(query_params, "metadata"),
        "download": query_flag(query_params, "download"),
    }
    if query_params.get("default_type"):
        params["default_type"] = query_params["default_type"]

    is_valid, result = validate_request(GetPictureRequest, params)
    if not is_valid:
        logger.error("Request validation failed")
        return result

    request: GetPictureRequest = result
    service = GetService()

    try:
        if request.download:
            picture, picture_binary = service.download_picture(request.picture_id)

            headers = {
                "Content-Disposition": f'attachment; filename="{service.download_filename(picture)}"',
            }
            if request.metadata:
                headers["X-Picture-Metadata"] = json.dumps(PictureInfo.from_picture(picture).model_dump())

            return ResponseBuilder.binary_response(
                picture_binary,
                content_type=picture.mime_type,
                headers=headers,
            )

        url, resolved = service.resolve_picture_url(
            request.picture_id,
            target_size=request.target_size,
            show_default_picture=request.show_default,
            store_location=request.store_location,
            default_picture_type=request.default_type,
        )

    except NotFoundError:
        logger.warning(
            "Picture not found",
            extra={"picture_id": request.picture_id},
        )
        return ResponseBuilder.not_found(f"Picture not found: {request.picture_id}")

    except (S3Error, MetadataOperationFailedError) as exc:
        logger.exception(
            "Get picture failed",
            extra={"picture_id": request.picture_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    response = GetPictureResponse(
        picture_id=request.picture_id,
        target_size=request.target_size,
        url=url,
        metadata=PictureInfo.from_picture(resolved) if request.metadata and resolved else None,
    )

    return ResponseBuilder.ok(response.model_dump(exclude_none=True))
