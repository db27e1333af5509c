"""Picture service backed by DynamoDB records and S3 objects.

This module coordinates validation, binary storage, thumbnail generation
and record persistence for pictures while translating failures into
domain-specific errors.
"""

import hashlib
import os
import uuid
from collections.abc import Sequence
from datetime import datetime

from aws_lambda_powertools import Logger

from core.filters.offset_pagination import OffsetPagination
from core.infrastructure.aws.dynamodb_pictures import DynamoDBPictures, DynamoDBProductPictures
from core.infrastructure.aws.s3_picture_storage import S3PictureStorage
from core.models.errors import (
    FileSizeError,
    FilterError,
    ImageDimensionsError,
    MIMETypeError,
    NotFoundError,
    PictureServiceError,
    ValidationError,
)
from core.models.pagination import PagedList
from core.models.picture import (
    DEFAULT_PICTURE_FILES,
    Picture,
    PictureSize,
    PictureType,
    ProductPicture,
)
from core.repositories.picture_repository import PictureRepository, ProductPictureRepository
from core.repositories.storage_repository import PictureStorageRepository
from core.services.picture_service import PictureService
from core.utils import imaging
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    DEFAULT_PAGE_INDEX,
    DEFAULT_PAGE_SIZE,
    DEFAULTS_KEY_PREFIX,
    DEFAULTS_URL_PATH,
    ERROR_CODE_PICTURE_NOT_FOUND,
    ERROR_CODE_THUMBNAIL_FAILED,
    PICTURE_ID_PREFIX,
    PICTURE_KEY_PREFIX,
    THUMBS_KEY_PREFIX,
    THUMBS_URL_PATH,
    format_file_size,
)
from core.utils.mime import detect_mime_type
from core.utils.seo import get_se_name
from core.utils.settings import MediaSettings
from core.utils.time import to_utc_iso, utc_now_iso

logger = Logger(UTC=True)


class DefaultPictureService(PictureService):
    """Application service responsible for pictures.

    This service orchestrates:
    - Picture validation against the media settings
    - Storing binaries in the record or in object storage
    - Generating and caching thumbnails
    - Persisting picture records and product mappings
    """

    def __init__(
        self,
        *,
        pictures: PictureRepository | None = None,
        product_pictures: ProductPictureRepository | None = None,
        storage: PictureStorageRepository | None = None,
        settings: MediaSettings | None = None,
    ) -> None:
        """Initialize the service with its infrastructure dependencies."""
        self.pictures = pictures or DynamoDBPictures()
        self.product_pictures = product_pictures or DynamoDBProductPictures()
        self.storage = storage or S3PictureStorage()
        self.settings = settings or MediaSettings.from_env()

    @staticmethod
    def generate_picture_id() -> str:
        """Generate a unique picture identifier."""
        return f"{PICTURE_ID_PREFIX}{uuid.uuid4().hex}"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_picture(self, picture_binary: bytes) -> bytes:
        if not picture_binary:
            raise ValidationError(message="Picture binary is empty")

        if len(picture_binary) > self.settings.max_file_size:
            logger.warning(
                "Picture exceeds maximum file size",
                extra={"size": len(picture_binary), "max_file_size": self.settings.max_file_size},
            )
            raise FileSizeError(
                message=(
                    "Picture exceeds the maximum file size of "
                    f"{format_file_size(self.settings.max_file_size)}"
                ),
                details={"size": len(picture_binary), "max_file_size": self.settings.max_file_size},
            )

        size = imaging.get_picture_size(picture_binary)
        if size.longest_side > self.settings.maximum_image_size:
            logger.warning(
                "Picture exceeds maximum dimensions",
                extra={"width": size.width, "height": size.height},
            )
            raise ImageDimensionsError(
                message=(
                    "Picture dimensions exceed the maximum of "
                    f"{self.settings.maximum_image_size} pixels"
                ),
                details={
                    "width": size.width,
                    "height": size.height,
                    "maximum_image_size": self.settings.maximum_image_size,
                },
            )

        # Pixel data is decoded only once the dimensions are known to be bounded
        imaging.check_picture_data(picture_binary)

        return picture_binary

    def find_equal_picture(
        self,
        picture_binary: bytes,
        pictures: Sequence[Picture],
    ) -> tuple[bytes | None, str | None]:
        file_hash = hashlib.sha256(picture_binary).hexdigest()

        for picture in pictures:
            if picture.file_hash:
                equal = picture.file_hash == file_hash
            else:
                equal = self.load_picture_binary(picture) == picture_binary

            if equal:
                logger.info("Equal picture found", extra={"picture_id": picture.picture_id})
                return None, picture.picture_id

        return picture_binary, None

    # ------------------------------------------------------------------
    # Naming and binaries
    # ------------------------------------------------------------------

    def get_picture_se_name(self, name: str | None) -> str:
        return get_se_name(name)

    def set_seo_filename(self, picture_id: str, seo_filename: str) -> Picture | None:
        picture = self.get_picture_by_id(picture_id)
        if picture is None:
            return None

        seo_filename = get_se_name(seo_filename)
        if seo_filename != (picture.seo_filename or ""):
            # Existing thumbnails carry the old name in their URL
            self._delete_picture_thumbs(picture)

            picture.seo_filename = seo_filename or None
            picture.updated_at = utc_now_iso()
            self.pictures.update_picture(picture=picture)

            logger.info(
                "Picture SEO filename updated",
                extra={"picture_id": picture_id, "seo_filename": seo_filename},
            )

        return picture

    def load_picture_binary(self, picture: Picture) -> bytes:
        if self.settings.store_in_db or not picture.storage_key:
            return picture.picture_binary or b""

        data = self.storage.download_object(key=picture.storage_key)
        if data is None:
            logger.warning(
                "Stored picture binary is missing",
                extra={"picture_id": picture.picture_id, "storage_key": picture.storage_key},
            )
            return picture.picture_binary or b""

        return data

    def get_picture_size(self, picture: Picture) -> PictureSize:
        if picture.size is not None:
            return picture.size

        picture_binary = self.load_picture_binary(picture)
        if not picture_binary:
            return PictureSize(width=0, height=0)

        return imaging.get_picture_size(picture_binary)

    # ------------------------------------------------------------------
    # URLs and thumbnails
    # ------------------------------------------------------------------

    def get_picture_url(
        self,
        picture_or_id: Picture | str | None,
        target_size: int = 0,
        show_default_picture: bool = True,
        store_location: str | None = None,
        default_picture_type: PictureType = PictureType.ENTITY,
    ) -> str:
        if isinstance(picture_or_id, Picture):
            picture: Picture | None = picture_or_id
        else:
            picture = self.get_picture_by_id(picture_or_id or "")

        picture_binary = self.load_picture_binary(picture) if picture is not None else b""

        if picture is None or not picture_binary:
            if not show_default_picture:
                return ""
            return self.get_default_picture_url(
                target_size,
                default_picture_type,
                store_location,
            )

        if picture.is_new:
            self._delete_picture_thumbs(picture)

            picture.is_new = False
            picture.updated_at = utc_now_iso()
            self.pictures.update_picture(picture=picture)

        thumb_file_name = self._thumb_file_name(picture, target_size)
        thumb_key = f"{THUMBS_KEY_PREFIX}/{thumb_file_name}"

        if not self.storage.object_exists(key=thumb_key):
            thumb_binary = (
                picture_binary
                if target_size == 0
                else self._resize(picture_binary, target_size, picture.mime_type, thumb_key)
            )
            self.storage.upload_object(
                key=thumb_key,
                file_data=thumb_binary,
                mime_type=picture.mime_type,
            )
            logger.info(
                "Thumbnail generated",
                extra={"picture_id": picture.picture_id, "target_size": target_size, "key": thumb_key},
            )

        return f"{self._store_location(store_location)}{THUMBS_URL_PATH}{thumb_file_name}"

    def get_default_picture_url(
        self,
        target_size: int = 0,
        default_picture_type: PictureType = PictureType.ENTITY,
        store_location: str | None = None,
    ) -> str:
        file_name = DEFAULT_PICTURE_FILES.get(
            default_picture_type,
            DEFAULT_PICTURE_FILES[PictureType.ENTITY],
        )
        default_key = f"{DEFAULTS_KEY_PREFIX}/{file_name}"
        base_url = self._store_location(store_location)

        if target_size == 0:
            if not self.storage.object_exists(key=default_key):
                logger.warning("Default picture is missing", extra={"key": default_key})
                return ""
            return f"{base_url}{DEFAULTS_URL_PATH}{file_name}"

        stem, ext = os.path.splitext(file_name)
        thumb_file_name = f"{stem}_{target_size}{ext}"
        thumb_key = f"{THUMBS_KEY_PREFIX}/{thumb_file_name}"

        if not self.storage.object_exists(key=thumb_key):
            default_binary = self.storage.download_object(key=default_key)
            if not default_binary:
                logger.warning("Default picture is missing", extra={"key": default_key})
                return ""

            mime_type = detect_mime_type(default_binary)
            self.storage.upload_object(
                key=thumb_key,
                file_data=self._resize(default_binary, target_size, mime_type, thumb_key),
                mime_type=mime_type,
            )

        return f"{base_url}{THUMBS_URL_PATH}{thumb_file_name}"

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_picture_by_id(self, picture_id: str) -> Picture | None:
        if not picture_id:
            return None
        return self.pictures.fetch_picture(picture_id=picture_id)

    def get_pictures(
        self,
        page_index: int = DEFAULT_PAGE_INDEX,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> PagedList[Picture]:
        is_valid, error_message = OffsetPagination.validate(page_index, page_size)
        if not is_valid:
            raise FilterError(
                message=error_message,
                details={"page_index": page_index, "page_size": page_size},
            )

        return OffsetPagination.paginate(
            self.pictures.list_pictures(),
            page_index=page_index,
            page_size=page_size,
        )

    def get_pictures_by_product_id(self, product_id: str, records_to_return: int = 0) -> list[Picture]:
        if not product_id:
            return []

        mappings = self.product_pictures.list_product_pictures(product_id=product_id)
        if records_to_return > 0:
            mappings = mappings[:records_to_return]

        return self.pictures.fetch_pictures(picture_ids=[m.picture_id for m in mappings])

    def get_pictures_by_ids(self, picture_ids: Sequence[str]) -> list[Picture]:
        if not picture_ids:
            return []
        return self.pictures.fetch_pictures(picture_ids=list(picture_ids))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def delete_picture(self, picture: Picture) -> None:
        """Delete a picture and everything stored for it.

        The deletion flow is:
        1. Delete generated thumbnails
        2. Delete the stored binary from object storage
        3. Delete product mappings referencing the picture
        4. Delete the picture record
        """
        picture_id = picture.picture_id
        logger.debug("Starting picture deletion", extra={"picture_id": picture_id})

        # Step 1: Thumbnails
        self._delete_picture_thumbs(picture)

        # Step 2: Stored binary
        if picture.storage_key:
            self.storage.remove_object(key=picture.storage_key)

        # Step 3: Product mappings
        for mapping in self.product_pictures.list_picture_products(picture_id=picture_id):
            self.product_pictures.remove_mapping(
                product_id=mapping.product_id,
                picture_id=picture_id,
            )

        # Step 4: Record
        self.pictures.remove_picture(picture_id=picture_id)

        logger.info("Picture deleted successfully", extra={"picture_id": picture_id})

    def insert_picture(
        self,
        picture_binary: bytes,
        mime_type: str,
        seo_filename: str | None,
        is_new: bool,
        is_transient: bool = True,
        validate_binary: bool = True,
    ) -> Picture:
        """Store a new picture.

        The insert flow is:
        1. Validate MIME type and binary
        2. Store the binary in object storage unless stored in the record
        3. Persist the picture record
        4. Roll back storage if record persistence fails
        """
        logger.debug("Starting picture insert", extra={"size": len(picture_binary)})

        # Step 1: Validate
        mime_type = self._resolve_mime_type(picture_binary, mime_type)
        if validate_binary:
            self._check_mime_type(mime_type)
            picture_binary = self.validate_picture(picture_binary)

        picture_id = self.generate_picture_id()
        size = self._measure(picture_binary)

        picture = Picture(
            picture_id=picture_id,
            mime_type=mime_type,
            seo_filename=get_se_name(seo_filename) or None,
            is_new=is_new,
            is_transient=is_transient,
            file_size=len(picture_binary),
            file_hash=hashlib.sha256(picture_binary).hexdigest(),
            width=size.width if size else None,
            height=size.height if size else None,
            created_at=utc_now_iso(),
        )

        # Step 2: Store binary
        if self.settings.store_in_db:
            picture.picture_binary = picture_binary
        else:
            picture.storage_key = self.storage.upload_object(
                key=self._storage_key(picture),
                file_data=picture_binary,
                mime_type=mime_type,
                metadata={"picture_id": picture_id},
            )

        # Step 3: Persist record (rollback storage on failure)
        try:
            self.pictures.create_picture(picture=picture)
        except PictureServiceError:
            logger.exception("Failed to persist picture record", extra={"picture_id": picture_id})

            # Best-effort cleanup to avoid orphaned storage objects
            if picture.storage_key:
                try:
                    self.storage.remove_object(key=picture.storage_key)
                except PictureServiceError:
                    logger.warning(
                        "Failed to clean up stored picture after record failure",
                        extra={"storage_key": picture.storage_key},
                    )
            raise

        logger.info("Picture inserted successfully", extra={"picture_id": picture_id})
        return picture

    def update_picture(
        self,
        picture: Picture,
        picture_binary: bytes,
        mime_type: str,
        seo_filename: str | None,
        is_new: bool,
        validate_binary: bool = True,
    ) -> None:
        """Replace the binary and attributes of a picture.

        The update flow is:
        1. Validate MIME type and binary
        2. Delete thumbnails of the previous binary
        3. Store the binary and drop the previous storage object
        4. Persist the picture record
        """
        picture_id = picture.picture_id
        logger.debug("Starting picture update", extra={"picture_id": picture_id})

        # Step 1: Validate
        mime_type = self._resolve_mime_type(picture_binary, mime_type)
        if validate_binary:
            self._check_mime_type(mime_type)
            picture_binary = self.validate_picture(picture_binary)

        seo_filename = get_se_name(seo_filename)

        # Step 2: Stale thumbnails (every cached size shows the previous binary)
        self._delete_picture_thumbs(picture)

        previous_key = picture.storage_key
        size = self._measure(picture_binary)

        picture.mime_type = mime_type
        picture.seo_filename = seo_filename or None
        picture.is_new = is_new
        picture.file_size = len(picture_binary)
        picture.file_hash = hashlib.sha256(picture_binary).hexdigest()
        picture.width = size.width if size else None
        picture.height = size.height if size else None
        picture.updated_at = utc_now_iso()

        # Step 3: Store binary
        if self.settings.store_in_db:
            picture.picture_binary = picture_binary
            picture.storage_key = None
        else:
            picture.picture_binary = None
            picture.storage_key = self.storage.upload_object(
                key=self._storage_key(picture),
                file_data=picture_binary,
                mime_type=mime_type,
                metadata={"picture_id": picture_id},
            )

        if previous_key and previous_key != picture.storage_key:
            try:
                self.storage.remove_object(key=previous_key)
            except PictureServiceError:
                logger.warning(
                    "Failed to remove previous picture binary",
                    extra={"picture_id": picture_id, "storage_key": previous_key},
                )

        # Step 4: Persist record
        self.pictures.update_picture(picture=picture)

        logger.info("Picture updated successfully", extra={"picture_id": picture_id})

    def insert_product_picture(
        self,
        product_id: str,
        picture_id: str,
        display_order: int = 0,
    ) -> ProductPicture:
        picture = self.get_picture_by_id(picture_id)
        if picture is None:
            raise NotFoundError(
                message="Picture not found",
                error_code=ERROR_CODE_PICTURE_NOT_FOUND,
                details={"picture_id": picture_id},
            )

        mapping = ProductPicture(
            product_id=product_id,
            picture_id=picture_id,
            display_order=display_order,
        )
        self.product_pictures.create_mapping(mapping=mapping)

        if picture.is_transient:
            picture.is_transient = False
            picture.updated_at = utc_now_iso()
            self.pictures.update_picture(picture=picture)

        return mapping

    def delete_product_picture(self, product_id: str, picture_id: str) -> None:
        self.product_pictures.remove_mapping(product_id=product_id, picture_id=picture_id)

    def delete_transient_pictures(self, older_than: datetime) -> int:
        created_before = to_utc_iso(older_than)
        deleted = 0

        for picture in self.pictures.list_transient_pictures(created_before=created_before):
            try:
                self.delete_picture(picture)
                deleted += 1
            except PictureServiceError:
                logger.warning(
                    "Failed to delete transient picture",
                    extra={"picture_id": picture.picture_id},
                )

        logger.info(
            "Transient pictures deleted",
            extra={"count": deleted, "created_before": created_before},
        )
        return deleted

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _store_location(self, store_location: str | None) -> str:
        location = store_location or self.settings.store_location
        return location if location.endswith("/") else f"{location}/"

    @staticmethod
    def _storage_key(picture: Picture) -> str:
        return f"{PICTURE_KEY_PREFIX}/{picture.picture_id}.{picture.extension}"

    @staticmethod
    def _thumb_file_name(picture: Picture, target_size: int) -> str:
        parts = [picture.picture_id]
        if picture.seo_filename:
            parts.append(picture.seo_filename)
        if target_size > 0:
            parts.append(str(target_size))
        return f"{'_'.join(parts)}.{picture.extension}"

    def _delete_picture_thumbs(self, picture: Picture) -> None:
        picture_id = picture.picture_id

        for key in self.storage.list_keys(prefix=f"{THUMBS_KEY_PREFIX}/{picture_id}"):
            file_name = key.rsplit("/", 1)[-1]
            # Only "<id>.<ext>" and "<id>_..." belong to this picture
            if file_name[len(picture_id) : len(picture_id) + 1] in ("_", "."):
                self.storage.remove_object(key=key)

        logger.debug("Picture thumbnails deleted", extra={"picture_id": picture_id})

    def _resize(self, picture_binary: bytes, target_size: int, mime_type: str, key: str) -> bytes:
        try:
            return imaging.resize_picture(
                picture_binary,
                target_size=target_size,
                mime_type=mime_type,
                quality=self.settings.default_image_quality,
            )
        except ValidationError as exc:
            logger.exception("Failed to generate thumbnail", extra={"key": key})
            raise PictureServiceError(
                message="Unable to generate thumbnail",
                error_code=ERROR_CODE_THUMBNAIL_FAILED,
                details={"key": key},
            ) from exc

    @staticmethod
    def _resolve_mime_type(picture_binary: bytes, mime_type: str | None) -> str:
        mime_type = (mime_type or "").strip().lower()
        if mime_type:
            return mime_type

        try:
            return detect_mime_type(picture_binary)
        except ValueError as exc:
            raise MIMETypeError(message="Unsupported or unknown picture type") from exc

    @staticmethod
    def _check_mime_type(mime_type: str) -> None:
        if mime_type not in ALLOWED_MIME_TYPES:
            logger.warning("Unsupported MIME type", extra={"mime_type": mime_type})
            raise MIMETypeError(
                message="Unsupported picture type",
                details={"mime_type": mime_type},
            )

    @staticmethod
    def _measure(picture_binary: bytes) -> PictureSize | None:
        if not picture_binary:
            return None
        try:
            return imaging.get_picture_size(picture_binary)
        except ValidationError:
            logger.warning("Picture dimensions unavailable", extra={"size": len(picture_binary)})
            return None
