"""
Lambda handler responsible for replacing or renaming a picture.
"""

import base64
import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import (
    MetadataOperationFailedError,
    NotFoundError,
    S3Error,
    ValidationError,
)
from core.models.picture import PictureInfo
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import UpdatePictureRequest, UpdatePictureResponse
from .service import UpdateService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle picture update requests.

    The body may carry a base64 `file` replacing the binary, a
    `seo_filename` renaming the picture, or both.
    """
    logger.info(
        "Received picture update request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    path_params = event.get("pathParameters") or {}
    body["picture_id"] = path_params.get("picture_id")

    is_valid, result = validate_request(UpdatePictureRequest, body)
    if not is_valid:
        logger.error("Request validation failed")
        return result

    request: UpdatePictureRequest = result
    service = UpdateService()

    try:
        picture = service.update_picture(
            request.picture_id,
            file_data=base64.b64decode(request.file) if request.file else None,
            mime_type=request.mime_type,
            seo_filename=request.seo_filename,
            is_new=request.is_new,
        )

    except NotFoundError:
        logger.warning("Picture not found during update", extra={"picture_id": request.picture_id})
        return ResponseBuilder.not_found(f"Picture not found: {request.picture_id}")

    except ValidationError as exc:
        logger.exception(
            "Validation error during picture update",
            extra={"picture_id": request.picture_id},
        )
        return ResponseBuilder.validation_error(
            message=exc.message,
            error=exc.error_code,
            details=exc.details,
        )

    except (S3Error, MetadataOperationFailedError) as exc:
        logger.exception(
            "Picture update failed",
            extra={"picture_id": request.picture_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    response = UpdatePictureResponse(
        picture=PictureInfo.from_picture(picture),
        message="Picture updated successfully",
    )

    return ResponseBuilder.ok(response.model_dump())
