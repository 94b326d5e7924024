"""
Image file helpers for GetImg requests and responses.
"""

import base64
import binascii
from typing import Union
from pathlib import Path

from getimg.exceptions.getimg_exceptions import ImageFileError, InvalidImageDataError
from utils.logging_config import get_logger

logger = get_logger(__name__)


def encode_image(data: bytes) -> str:
    """Base64-encode raw image bytes for a request body"""
    return base64.b64encode(data).decode("ascii")


def decode_image(image_data: str) -> bytes:
    """
    Decode a base64 image payload from a response.

    Args:
        image_data: Base64-encoded image string

    Returns:
        Raw image bytes

    Raises:
        InvalidImageDataError: If the payload is empty or not valid base64
    """
    if not image_data:
        raise InvalidImageDataError("Image payload is empty")
    try:
        return base64.b64decode(image_data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageDataError(f"Image payload is not valid base64: {e}") from e


def save_image(image_data: bytes, filename: Union[str, Path]) -> Path:
    """
    Write decoded image bytes to a file.

    Args:
        image_data: Raw image bytes
        filename: Destination path

    Returns:
        The path that was written

    Raises:
        ImageFileError: If the path cannot be written
    """
    path = Path(filename)
    try:
        path.write_bytes(image_data)
    except OSError as e:
        raise ImageFileError(f"Could not write image to {path}: {e.strerror or e}") from e
    logger.info(f"Image saved as: {path}")
    return path


def load_and_encode_image(image_path: Union[str, Path]) -> str:
    """
    Load the image at the given path and encode it as a base64 string.

    Raises:
        ImageFileError: If the file is missing or unreadable
    """
    path = Path(image_path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageFileError(f"Could not read image {path}: {e.strerror or e}") from e
    logger.debug(f"Loaded {len(data)} bytes from {path}")
    return encode_image(data)
