"""
Error handling utilities for the getimg command line.
"""

import re
from enum import Enum
from typing import Optional

from getimg.exceptions.getimg_exceptions import (
    GetImgError,
    AuthenticationError,
    RateLimitError,
    APIError,
    TransportError,
    ResponseParseError,
    ValidationError,
    ImageFileError,
)
from utils.logging_config import get_logger

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Error categories."""
    USER_INPUT = "user_input"
    FILE = "file"
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    API = "api"
    RESPONSE = "response"
    UNKNOWN = "unknown"


# Checked in order; subclasses come before their bases
_CATEGORY_BY_TYPE = [
    (ValidationError, ErrorCategory.USER_INPUT),
    (ImageFileError, ErrorCategory.FILE),
    (TransportError, ErrorCategory.NETWORK),
    (AuthenticationError, ErrorCategory.AUTHENTICATION),
    (RateLimitError, ErrorCategory.RATE_LIMIT),
    (APIError, ErrorCategory.API),
    (ResponseParseError, ErrorCategory.RESPONSE),
]

_HINTS = {
    ErrorCategory.AUTHENTICATION: "check --api-key or GETIMG_API_KEY",
    ErrorCategory.RATE_LIMIT: "wait a moment before trying again",
    ErrorCategory.NETWORK: "check your internet connection",
}


def sanitize_error_message(error_message: str, secret: Optional[str] = None) -> str:
    """
    Remove credentials from error messages.

    Args:
        error_message: Raw error message
        secret: API key to mask wherever it appears

    Returns:
        Sanitized error message
    """
    if not error_message:
        return "An error occurred"

    sanitized = error_message
    if secret:
        sanitized = sanitized.replace(secret, "[KEY]")

    # Bearer tokens and key=value style credentials
    sanitized = re.sub(r'(?i)bearer\s+\S+', 'Bearer [KEY]', sanitized)
    sanitized = re.sub(r'(?i)(api[_-]?key["\']?\s*[=:]\s*["\']?)[^\s"\',]+', r'\1[KEY]', sanitized)

    sanitized = re.sub(r'\s+', ' ', sanitized).strip()
    if len(sanitized) > 500:
        sanitized = sanitized[:497] + "..."

    return sanitized or "Sanitized error message"


def categorize_error(error: Exception) -> ErrorCategory:
    """Categorize an error by its exception type."""
    for error_type, category in _CATEGORY_BY_TYPE:
        if isinstance(error, error_type):
            return category
    return ErrorCategory.UNKNOWN


def handle_error(error: GetImgError, secret: Optional[str] = None) -> str:
    """
    Log an error and return the one-line message shown to the user.

    Args:
        error: The exception to handle
        secret: API key to keep out of the message

    Returns:
        User-facing error message
    """
    category = categorize_error(error)
    message = sanitize_error_message(str(error), secret)

    hint = _HINTS.get(category)
    if hint:
        message = f"{message} ({hint})"

    logger.debug(f"{category.value} error: {type(error).__name__}: {message}")
    # Keep the cause chain in debug output only
    if error.__cause__ is not None:
        logger.debug("Caused by", exc_info=error.__cause__)

    return message
