"""Image decoding and checks for uploaded food photos.

Core Functions:
- decode_image_data(): plain base64 or data: URI -> bytes
- detect_mime_type(): sniff the real format from magic bytes
- validate_image_size(): enforce MAX_IMAGE_SIZE_MB
- load_image_attachment(): full pipeline used by the handler
"""

import base64
import binascii

import filetype

from recipe_snap.models.models import ImageAttachment
from recipe_snap.utils.errors import ClientInputError
from recipe_snap.utils.logger import logger

# Formats the completion API accepts as inline image data
SUPPORTED_MIME_TYPES = ("image/jpeg", "image/png", "image/webp", "image/heic", "image/heif")

# Browsers upload JPEG; bytes filetype cannot identify are sent under this type
DEFAULT_MIME_TYPE = "image/jpeg"


def decode_image_data(image_data: str) -> bytes:
    """Decode a base64 image string.

    Accepts plain base64 or a data URL (data:image/jpeg;base64,...), with or
    without line breaks.

    Raises:
        ClientInputError: If the payload is not valid base64 or decodes to nothing.
    """
    encoded = image_data
    if image_data.startswith("data:"):
        _, _, encoded = image_data.partition(",")
    # MIME-style base64 wraps lines every 76 chars
    encoded = "".join(encoded.split())

    try:
        image_bytes = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.info(f"Rejected image payload: {e}")
        raise ClientInputError("Invalid image data") from e

    if not image_bytes:
        raise ClientInputError("Invalid image data")
    return image_bytes


def detect_mime_type(image_bytes: bytes) -> str:
    """Detect MIME type from magic bytes.

    Returns DEFAULT_MIME_TYPE when the format cannot be identified.

    Raises:
        ClientInputError: If the bytes are a recognised, unsupported format (GIF, PDF, ...).
    """
    kind = filetype.guess(image_bytes)
    if kind is None:
        return DEFAULT_MIME_TYPE
    if kind.mime not in SUPPORTED_MIME_TYPES:
        logger.info(f"Rejected image format: {kind.mime}")
        raise ClientInputError("Unsupported image format")
    return kind.mime


def validate_image_size(image_bytes: bytes, max_size_mb: int) -> None:
    """Reject images above the configured limit.

    Raises:
        ClientInputError: If the decoded image exceeds max_size_mb.
    """
    size_mb = len(image_bytes) / (1024 * 1024)
    if size_mb > max_size_mb:
        logger.info(f"Image size {size_mb:.2f}MB exceeds limit of {max_size_mb}MB")
        raise ClientInputError(f"Image too large. Maximum size is {max_size_mb}MB")


def load_image_attachment(image_data: str, max_size_mb: int) -> ImageAttachment:
    """Decode, size-check and type an uploaded image."""
    image_bytes = decode_image_data(image_data)
    validate_image_size(image_bytes, max_size_mb)
    mime_type = detect_mime_type(image_bytes)

    attachment = ImageAttachment(data=image_bytes, mime_type=mime_type)
    logger.debug(f"Loaded image: {len(image_bytes) / 1024:.1f}KB ({mime_type})")
    return attachment
