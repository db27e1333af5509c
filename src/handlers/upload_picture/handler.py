"""
Lambda handler responsible for picture upload.
"""

import json
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import (
    DuplicatePictureError,
    MetadataOperationFailedError,
    S3Error,
    ValidationError,
)
from core.models.picture import PictureInfo
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import PictureUploadRequest, PictureUploadResponse
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle picture upload requests.

    The handler decodes base64-encoded picture data, validates the incoming
    payload, stores the picture and optionally attaches it to a product.

    Expected API Gateway event structure:
    {
        "body": "{...}",           # JSON string containing upload data
        "isBase64Encoded": false
    }

    Args:
        event: API Gateway Lambda proxy event containing the upload payload
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the created picture
    """
    logger.info(
        "Received picture upload request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    try:
        body = json.loads(event.get("body") or "{}")
    except json.JSONDecodeError as exc:
        logger.exception("Invalid JSON body received", exc_info=exc)
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    if not isinstance(body, dict):
        return ResponseBuilder.bad_request(message="Invalid JSON body")

    is_valid, result = validate_request(PictureUploadRequest, body)
    if not is_valid:
        logger.error("Request validation failed")
        return result

    request: PictureUploadRequest = result

    try:
        file_data = UploadService.decode_file(request.file)
        service = UploadService()

        picture = service.upload_picture(
            file_data=file_data,
            mime_type=request.mime_type,
            seo_filename=request.seo_filename,
            is_new=request.is_new,
            product_id=request.product_id,
            display_order=request.display_order,
        )

    except ValidationError as exc:
        logger.exception(
            "Validation error during picture upload",
            extra={"product_id": request.product_id},
        )
        return ResponseBuilder.validation_error(
            message=exc.message,
            error=exc.error_code,
            details=exc.details,
        )

    except DuplicatePictureError as exc:
        logger.info(
            "Duplicate picture upload attempted",
            extra={"product_id": request.product_id},
        )
        return ResponseBuilder.conflict(
            exc.message,
            error=exc.error_code,
            details=exc.details,
        )

    except (S3Error, MetadataOperationFailedError) as exc:
        logger.exception(
            "Infrastructure error during picture upload",
            extra={"product_id": request.product_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    metrics.add_metric(name="PictureUploaded", unit=MetricUnit.Count, value=1)

    response = PictureUploadResponse(
        picture=PictureInfo.from_picture(picture),
        product_id=request.product_id,
        message="Picture uploaded successfully",
    )

    return ResponseBuilder.created(response.model_dump())
