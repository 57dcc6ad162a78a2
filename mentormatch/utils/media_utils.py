# mentormatch/utils/media_utils.py
import base64
import binascii
import re
from typing import Tuple

from ..constants import BusinessRules, ErrorMessages
from ..exceptions import UnsupportedMediaTypeError

DATA_URL_PATTERN = re.compile(r"^data:(image/(?:jpeg|png));base64,(.+)$", re.DOTALL)

# Leading bytes of each accepted encoding
MAGIC_BYTES = {
    "image/jpeg": b"\xff\xd8\xff",
    "image/png": b"\x89PNG\r\n\x1a\n",
}

def validate_avatar(data: bytes, content_type: str, max_bytes: int) -> Tuple[bytes, str]:
    """Checks the declared type, the actual leading bytes and the size ceiling."""
    content_type = (content_type or "").lower()
    if content_type == "image/jpg":
        content_type = "image/jpeg"
    if content_type not in BusinessRules.ALLOWED_AVATAR_TYPES:
        raise UnsupportedMediaTypeError(ErrorMessages.UNSUPPORTED_IMAGE)
    if not data or not data.startswith(MAGIC_BYTES[content_type]):
        raise UnsupportedMediaTypeError(ErrorMessages.UNSUPPORTED_IMAGE)
    if len(data) > max_bytes:
        raise UnsupportedMediaTypeError(ErrorMessages.IMAGE_TOO_LARGE.format(limit=max_bytes))
    return data, content_type

def decode_data_url(data_url: str) -> Tuple[bytes, str]:
    """Splits a base64 data URL into raw bytes and content type."""
    match = DATA_URL_PATTERN.match(data_url.strip())
    if not match:
        raise UnsupportedMediaTypeError(ErrorMessages.UNSUPPORTED_IMAGE)
    content_type, payload = match.groups()
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise UnsupportedMediaTypeError(ErrorMessages.UNSUPPORTED_IMAGE)
    return data, content_type
