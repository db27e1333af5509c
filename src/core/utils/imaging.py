"""Pillow helpers for reading picture dimensions and building thumbnails."""

import io

from aws_lambda_powertools import Logger
from PIL import Image, UnidentifiedImageError

from core.models.errors import ImageDimensionsError, ValidationError
from core.models.picture import PictureSize
from core.utils.constants import ERROR_CODE_INVALID_IMAGE, PIL_FORMAT_BY_MIME_TYPE

logger = Logger(UTC=True)


def _open(picture_binary: bytes, *, decode: bool = True) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(picture_binary))
        if decode:
            image.load()
        return image
    except Image.DecompressionBombError as exc:
        logger.warning(
            "Picture exceeds the decompression pixel limit",
            extra={"size": len(picture_binary), "error": str(exc)},
        )
        raise ImageDimensionsError(
            message="Picture dimensions exceed the supported pixel count",
            details={"max_pixels": Image.MAX_IMAGE_PIXELS},
        ) from exc
    except (UnidentifiedImageError, OSError) as exc:
        logger.warning(
            "Unreadable picture binary",
            extra={"size": len(picture_binary), "error": str(exc)},
        )
        raise ValidationError(
            message="Invalid picture data",
            error_code=ERROR_CODE_INVALID_IMAGE,
            details={"size": len(picture_binary)},
        ) from exc


def get_picture_size(picture_binary: bytes) -> PictureSize:
    """Return pixel dimensions of an encoded picture.

    Only the header is parsed; pixel data is not decoded.

    Raises:
        ImageDimensionsError: If the pixel count exceeds Pillow's bomb limit
        ValidationError: If the binary is not a readable image
    """
    with _open(picture_binary, decode=False) as image:
        width, height = image.size
    return PictureSize(width=width, height=height)


def check_picture_data(picture_binary: bytes) -> None:
    """Decode the full picture, raising ValidationError when it is corrupt."""
    with _open(picture_binary):
        pass


def resize_picture(
    picture_binary: bytes,
    *,
    target_size: int,
    mime_type: str,
    quality: int,
) -> bytes:
    """Scale a picture so its longest side equals `target_size`.

    Aspect ratio is preserved. Pictures already within the target size are
    re-encoded unchanged in dimensions. GIF, PNG and BMP keep their format;
    anything Pillow cannot write back falls back to JPEG.
    """
    with _open(picture_binary) as image:
        width, height = image.size
        longest = max(width, height)

        if longest > target_size:
            ratio = target_size / longest
            new_size = (max(1, round(width * ratio)), max(1, round(height * ratio)))
            resized = image.resize(new_size, Image.Resampling.LANCZOS)
        else:
            resized = image.copy()

    fmt = PIL_FORMAT_BY_MIME_TYPE.get(mime_type.lower(), "JPEG")
    if fmt == "JPEG" and resized.mode not in ("RGB", "L"):
        resized = resized.convert("RGB")

    buffer = io.BytesIO()
    save_kwargs: dict[str, object] = {}
    if fmt in ("JPEG", "WEBP"):
        save_kwargs["quality"] = quality
    resized.save(buffer, format=fmt, **save_kwargs)

    logger.debug(
        "Picture resized",
        extra={"original": [width, height], "resized": list(resized.size), "format": fmt},
    )
    return buffer.getvalue()
