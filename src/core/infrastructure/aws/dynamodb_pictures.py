"""DynamoDB-backed implementations of the picture repositories."""

from decimal import Decimal
from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr, Key
from boto3.dynamodb.types import Binary
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import (
    DuplicatePictureError,
    DynamoDBError,
    NotFoundError,
)
from core.models.picture import Picture, ProductPicture
from core.repositories.picture_repository import PictureRepository, ProductPictureRepository
from core.utils.constants import (
    ENV_PRODUCT_PICTURE_TABLE_NAME,
    ERROR_CODE_MAPPING_CREATE_FAILED,
    ERROR_CODE_MAPPING_DELETE_FAILED,
    ERROR_CODE_MAPPING_LIST_FAILED,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_INVALID_FORMAT,
    ERROR_CODE_METADATA_LIST_FAILED,
    ERROR_CODE_METADATA_UPDATE_FAILED,
    PRODUCT_PICTURE_INDEX_NAME,
)

Item = dict[str, Any]

logger = Logger(UTC=True)


def _is_conditional_check_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"


def _from_dynamodb(value: Any) -> Any:
    """Convert boto3 deserialized values back to plain Python types."""
    if isinstance(value, Decimal):
        return int(value)
    if isinstance(value, Binary):
        return value.value
    return value


def _to_picture(item: Item) -> Picture:
    try:
        return Picture.model_validate({key: _from_dynamodb(value) for key, value in item.items()})
    except PydanticValidationError as exc:
        raise DynamoDBError(
            message="Invalid picture record format",
            error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
            details={"picture_id": item.get("picture_id")},
        ) from exc


def _to_product_picture(item: Item) -> ProductPicture:
    return ProductPicture.model_validate({key: _from_dynamodb(value) for key, value in item.items()})


def _scan_all(db: DynamoDBAdapterProtocol, **kwargs: Any) -> list[Item]:
    """Scan every page of a table."""
    items: list[Item] = []
    last_evaluated_key: Item | None = None

    while True:
        if last_evaluated_key:
            kwargs["ExclusiveStartKey"] = last_evaluated_key

        response = db.scan(**kwargs)
        items.extend(response.get("Items", []))

        last_evaluated_key = response.get("LastEvaluatedKey")
        if not last_evaluated_key:
            return items


def _query_all(db: DynamoDBAdapterProtocol, **kwargs: Any) -> list[Item]:
    """Query every page of a key condition."""
    items: list[Item] = []
    last_evaluated_key: Item | None = None

    while True:
        if last_evaluated_key:
            kwargs["ExclusiveStartKey"] = last_evaluated_key

        response = db.query(**kwargs)
        items.extend(response.get("Items", []))

        last_evaluated_key = response.get("LastEvaluatedKey")
        if not last_evaluated_key:
            return items


class DynamoDBPictures(PictureRepository):
    """DynamoDB-backed picture record storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def create_picture(self, *, picture: Picture) -> None:
        item = picture.model_dump(exclude_none=True)

        logger.debug("Creating picture record", extra={"picture_id": picture.picture_id})

        try:
            self._db.put_item(
                item=item,
                condition_expression="attribute_not_exists(picture_id)",
            )
        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"picture_id": picture.picture_id})

            if _is_conditional_check_failure(exc):
                raise DuplicatePictureError(
                    message="Picture already exists",
                    details={"picture_id": picture.picture_id},
                ) from exc

            raise DynamoDBError(
                message="Unable to save picture at this time",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"picture_id": picture.picture_id},
            ) from exc

        logger.info("Picture record created", extra={"picture_id": picture.picture_id})

    def update_picture(self, *, picture: Picture) -> None:
        item = picture.model_dump(exclude_none=True)

        logger.debug("Updating picture record", extra={"picture_id": picture.picture_id})

        try:
            self._db.put_item(
                item=item,
                condition_expression="attribute_exists(picture_id)",
            )
        except ClientError as exc:
            if _is_conditional_check_failure(exc):
                raise NotFoundError(
                    message="Picture not found",
                    details={"picture_id": picture.picture_id},
                ) from exc

            logger.error("DynamoDB update failed", extra={"picture_id": picture.picture_id})
            raise DynamoDBError(
                message="Unable to update picture at this time",
                error_code=ERROR_CODE_METADATA_UPDATE_FAILED,
                details={"picture_id": picture.picture_id},
            ) from exc

        logger.info("Picture record updated", extra={"picture_id": picture.picture_id})

    def fetch_picture(self, *, picture_id: str) -> Picture | None:
        logger.debug("Fetching picture record", extra={"picture_id": picture_id})

        try:
            response = self._db.get_item(key={"picture_id": picture_id})
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"picture_id": picture_id})
            raise DynamoDBError(
                message="Unable to retrieve picture",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"picture_id": picture_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        if not isinstance(item, dict):
            raise DynamoDBError(
                message="Invalid picture record format",
                error_code=ERROR_CODE_METADATA_INVALID_FORMAT,
                details={"picture_id": picture_id},
            )

        return _to_picture(item)

    def fetch_pictures(self, *, picture_ids: list[str]) -> list[Picture]:
        pictures: list[Picture] = []

        for picture_id in picture_ids:
            picture = self.fetch_picture(picture_id=picture_id)
            if picture is not None:
                pictures.append(picture)

        return pictures

    def remove_picture(self, *, picture_id: str) -> None:
        logger.debug("Removing picture record", extra={"picture_id": picture_id})

        try:
            self._db.delete_item(key={"picture_id": picture_id})
        except ClientError as exc:
            logger.error("DynamoDB delete_item failed", extra={"picture_id": picture_id})
            raise DynamoDBError(
                message="Unable to delete picture",
                error_code=ERROR_CODE_METADATA_DELETE_FAILED,
                details={"picture_id": picture_id},
            ) from exc

        logger.info("Picture record removed", extra={"picture_id": picture_id})

    def list_pictures(self) -> list[Picture]:
        try:
            items = _scan_all(self._db)
        except ClientError as exc:
            logger.error("DynamoDB scan failed")
            raise DynamoDBError(
                message="Unable to list pictures",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
            ) from exc

        pictures = [_to_picture(item) for item in items]
        # ISO-8601 UTC strings sort chronologically; id breaks ties
        pictures.sort(key=lambda p: (p.created_at, p.picture_id), reverse=True)

        logger.debug("Pictures listed", extra={"count": len(pictures)})
        return pictures

    def list_transient_pictures(self, *, created_before: str) -> list[Picture]:
        try:
            items = _scan_all(
                self._db,
                FilterExpression=Attr("is_transient").eq(True) & Attr("created_at").lt(created_before),
            )
        except ClientError as exc:
            logger.error("DynamoDB transient scan failed", extra={"created_before": created_before})
            raise DynamoDBError(
                message="Unable to list transient pictures",
                error_code=ERROR_CODE_METADATA_LIST_FAILED,
                details={"created_before": created_before},
            ) from exc

        return [_to_picture(item) for item in items]


class DynamoDBProductPictures(ProductPictureRepository):
    """DynamoDB-backed product picture mappings.

    Table key: product_id (HASH) + picture_id (RANGE), with a
    `picture-product-index` GSI keyed by picture_id.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter(ENV_PRODUCT_PICTURE_TABLE_NAME)

    def create_mapping(self, *, mapping: ProductPicture) -> None:
        try:
            self._db.put_item(item=mapping.model_dump())
        except ClientError as exc:
            logger.error("DynamoDB mapping put_item failed", extra=mapping.model_dump())
            raise DynamoDBError(
                message="Unable to map picture to product",
                error_code=ERROR_CODE_MAPPING_CREATE_FAILED,
                details=mapping.model_dump(),
            ) from exc

        logger.info("Product picture mapped", extra=mapping.model_dump())

    def remove_mapping(self, *, product_id: str, picture_id: str) -> None:
        key = {"product_id": product_id, "picture_id": picture_id}

        try:
            self._db.delete_item(key=key)
        except ClientError as exc:
            logger.error("DynamoDB mapping delete_item failed", extra=key)
            raise DynamoDBError(
                message="Unable to remove product picture",
                error_code=ERROR_CODE_MAPPING_DELETE_FAILED,
                details=key,
            ) from exc

    def list_product_pictures(self, *, product_id: str) -> list[ProductPicture]:
        try:
            items = _query_all(
                self._db,
                KeyConditionExpression=Key("product_id").eq(product_id),
            )
        except ClientError as exc:
            logger.error("DynamoDB mapping query failed", extra={"product_id": product_id})
            raise DynamoDBError(
                message="Unable to list product pictures",
                error_code=ERROR_CODE_MAPPING_LIST_FAILED,
                details={"product_id": product_id},
            ) from exc

        mappings = [_to_product_picture(item) for item in items]
        mappings.sort(key=lambda m: (m.display_order, m.picture_id))
        return mappings

    def list_picture_products(self, *, picture_id: str) -> list[ProductPicture]:
        try:
            items = _query_all(
                self._db,
                IndexName=PRODUCT_PICTURE_INDEX_NAME,
                KeyConditionExpression=Key("picture_id").eq(picture_id),
            )
        except ClientError as exc:
            logger.error("DynamoDB mapping index query failed", extra={"picture_id": picture_id})
            raise DynamoDBError(
                message="Unable to list picture products",
                error_code=ERROR_CODE_MAPPING_LIST_FAILED,
                details={"picture_id": picture_id},
            ) from exc

        return [_to_product_picture(item) for item in items]
