"""
Scheduled Lambda handler that removes stale transient pictures.

Transient pictures were uploaded but never attached to a product.
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.services.default_picture_service import DefaultPictureService
from core.utils.constants import (
    ENV_TRANSIENT_PICTURE_MAX_AGE_HOURS,
    TRANSIENT_PICTURE_MAX_AGE_HOURS,
)
from core.utils.time import to_utc_iso

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


def _max_age_hours(event: dict[str, Any]) -> int:
    raw = event.get("older_than_hours")
    if raw is None:
        raw = os.getenv(ENV_TRANSIENT_PICTURE_MAX_AGE_HOURS)
    hours = int(raw) if raw not in (None, "") else TRANSIENT_PICTURE_MAX_AGE_HOURS
    if hours < 0:
        raise ValueError("older_than_hours must be zero or positive")
    return hours


@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Delete transient pictures older than the configured age.

    Expected EventBridge event (all fields optional):
    {
        "older_than_hours": 24
    }
    """
    older_than = datetime.now(timezone.utc) - timedelta(hours=_max_age_hours(event or {}))

    logger.info(
        "Starting transient picture cleanup",
        extra={
            "older_than": to_utc_iso(older_than),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    deleted = DefaultPictureService().delete_transient_pictures(older_than)

    metrics.add_metric(name="TransientPicturesDeleted", unit=MetricUnit.Count, value=deleted)

    return {
        "deleted_count": deleted,
        "older_than": to_utc_iso(older_than),
    }
