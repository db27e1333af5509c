"""
Lambda handler responsible for listing pictures.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.errors import FilterError, MetadataOperationFailedError
from core.models.picture import PictureInfo
from core.services.default_picture_service import DefaultPictureService
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ListPicturesRequest, ListPicturesResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list pictures.

    Supports:
    - Paged listing, newest first
    - Pictures attached to a product, by display order
    - Pictures by id, in the requested order
    """
    params = event.get("queryStringParameters") or {}

    logger.info(
        "Received list pictures request",
        extra={
            "query_params": params,
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    is_valid, result = validate_request(ListPicturesRequest, params)
    if not is_valid:
        return result

    request: ListPicturesRequest = result
    service = DefaultPictureService()

    try:
        if request.product_id:
            pictures = service.get_pictures_by_product_id(request.product_id, request.records)
            response = ListPicturesResponse(
                pictures=[PictureInfo.from_picture(p) for p in pictures],
                total_count=len(pictures),
                returned_count=len(pictures),
            )
        elif request.ids:
            pictures = service.get_pictures_by_ids(request.ids)
            response = ListPicturesResponse(
                pictures=[PictureInfo.from_picture(p) for p in pictures],
                total_count=len(pictures),
                returned_count=len(pictures),
            )
        else:
            page = service.get_pictures(request.page_index, request.page_size)
            response = ListPicturesResponse(
                pictures=[PictureInfo.from_picture(p) for p in page.items],
                total_count=page.total_count,
                returned_count=len(page.items),
                pagination=page.pagination_info(),
            )
    except FilterError as exc:
        logger.warning("Invalid list parameters", extra={"error": exc.message})
        return ResponseBuilder.bad_request(exc.message, details=exc.details)
    except MetadataOperationFailedError as exc:
        logger.exception("Internal error listing pictures")
        return ResponseBuilder.internal_error(exc.message)

    return ResponseBuilder.ok(response.model_dump(exclude_none=True))
