"""Custom exceptions for the GetImg API"""
from typing import Optional


class GetImgError(Exception):
    """Base exception for GetImg API errors"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class APIError(GetImgError):
    """Exception for non-success HTTP responses"""
    pass


class AuthenticationError(APIError):
    """Exception for rejected or missing API keys (401/403)"""
    pass


class RateLimitError(APIError):
    """Exception for rate limit errors (429)"""
    pass


class TransportError(GetImgError):
    """Exception for network, DNS, TLS and timeout failures"""
    pass


class ResponseParseError(GetImgError):
    """Exception for malformed or unexpected response bodies"""
    pass


class InvalidImageDataError(ResponseParseError):
    """Exception for image payloads that are not valid base64"""
    pass


class ValidationError(GetImgError):
    """Exception for validation errors"""
    pass


class ImageFileError(GetImgError):
    """Exception for image files that cannot be read or written"""
    pass
