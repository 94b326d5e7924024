from .image_models import (
    ImageRequest,
    TextToImageRequest,
    ImageToImageRequest,
    EditImageRequest,
    RepaintImageRequest,
    ControlNetRequest,
    ToImageResponse,
)

__all__ = [
    'ImageRequest', 'TextToImageRequest', 'ImageToImageRequest',
    'EditImageRequest', 'RepaintImageRequest', 'ControlNetRequest',
    'ToImageResponse',
]
