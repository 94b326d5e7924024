"""GetImg API client"""

from .clients.async_client import AsyncGetImgClient
from .models.image_models import ToImageResponse
from .exceptions.getimg_exceptions import (
    GetImgError,
    APIError,
    AuthenticationError,
    RateLimitError,
    TransportError,
    ResponseParseError,
    InvalidImageDataError,
    ValidationError,
    ImageFileError,
)

__version__ = "0.1.0"

__all__ = [
    'AsyncGetImgClient', 'ToImageResponse',
    'GetImgError', 'APIError', 'AuthenticationError', 'RateLimitError',
    'TransportError', 'ResponseParseError', 'InvalidImageDataError',
    'ValidationError', 'ImageFileError',
]
