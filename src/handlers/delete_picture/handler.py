"""
Lambda handler responsible for deleting a picture.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import (
    MetadataOperationFailedError,
    NotFoundError,
    S3Error,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import DeletePictureRequest, DeletePictureResponse
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle picture deletion requests.

    This function:
    - Extracts the picture identifier from API Gateway path parameters
    - Validates the request
    - Delegates deletion to the service layer
    - Translates domain errors into HTTP responses

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received picture delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    path_params = event.get("pathParameters") or {}

    is_valid, result = validate_request(
        DeletePictureRequest,
        {"picture_id": path_params.get("picture_id")},
    )
    if not is_valid:
        logger.error("Request validation failed")
        return result

    request: DeletePictureRequest = result
    service = DeleteService()

    try:
        delete_result = service.delete_picture(request.picture_id)

    except NotFoundError:
        logger.warning(
            "Picture not found during delete",
            extra={"picture_id": request.picture_id},
        )
        return ResponseBuilder.not_found(f"Picture not found: {request.picture_id}")

    except (S3Error, MetadataOperationFailedError) as exc:
        logger.exception(
            "Deletion failed",
            extra={"picture_id": request.picture_id},
        )
        return ResponseBuilder.internal_error(exc.message)

    metrics.add_metric(name="PictureDeleted", unit=MetricUnit.Count, value=1)

    response = DeletePictureResponse(
        picture_id=delete_result["picture_id"],
        message="Picture deleted successfully",
        deleted_at=delete_result["deleted_at"],
    )

    return ResponseBuilder.ok(response.model_dump())
