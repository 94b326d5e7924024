# utils package initialization

from .error_handler import handle_error, categorize_error, sanitize_error_message, ErrorCategory
from .image_io import save_image, load_and_encode_image, decode_image, encode_image

__all__ = [
    'handle_error', 'categorize_error', 'sanitize_error_message', 'ErrorCategory',
    'save_image', 'load_and_encode_image', 'decode_image', 'encode_image',
]
