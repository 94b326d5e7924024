from .getimg_exceptions import (
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

__all__ = [
    'GetImgError', 'APIError', 'AuthenticationError', 'RateLimitError',
    'TransportError', 'ResponseParseError', 'InvalidImageDataError',
    'ValidationError', 'ImageFileError',
]
