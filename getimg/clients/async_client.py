"""Async client for the GetImg API with Pydantic models"""
import httpx
from typing import Any, Dict, Optional, Type, Union
from pydantic import ValidationError as PydanticValidationError

from getimg.models.image_models import (
    ImageRequest,
    TextToImageRequest,
    ImageToImageRequest,
    EditImageRequest,
    RepaintImageRequest,
    ControlNetRequest,
    ToImageResponse,
)
from getimg.exceptions.getimg_exceptions import (
    APIError,
    AuthenticationError,
    RateLimitError,
    TransportError,
    ResponseParseError,
    ValidationError,
)
from config import GETIMG_API_KEY, GETIMG_API_URL, GETIMG_TIMEOUT, DEFAULT_MODEL, EDIT_MODEL, INPAINT_MODEL, CONTROLNET_MODEL
from utils.image_io import encode_image
from utils.logging_config import get_logger

logger = get_logger(__name__)

# Endpoint paths, relative to the API base URL
TEXT_TO_IMAGE_PATH = "/latent-consistency/text-to-image"
IMAGE_TO_IMAGE_PATH = "/latent-consistency/image-to-image"
EDIT_PATH = "/stable-diffusion/instruct"
INPAINT_PATH = "/stable-diffusion/inpaint"
CONTROLNET_PATH = "/stable-diffusion/controlnet"

# Upstream defaults
DEFAULT_WIDTH = 512
DEFAULT_HEIGHT = 512
DEFAULT_LCM_STEPS = 4
DEFAULT_SD_STEPS = 25
DEFAULT_GUIDANCE = 7.5
DEFAULT_IMAGE_GUIDANCE = 1.5
DEFAULT_OUTPUT_FORMAT = "jpeg"

ImageInput = Union[str, bytes]


def _image_payload(image: ImageInput) -> str:
    """Accept raw bytes or an already base64-encoded string"""
    if isinstance(image, (bytes, bytearray)):
        return encode_image(bytes(image))
    return image


def _describe_validation_error(error: PydanticValidationError) -> str:
    problems = []
    for err in error.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "request"
        problems.append(f"{field}: {err.get('msg')}")
    return "; ".join(problems)


class AsyncGetImgClient:
    """
    Binding for the GetImg generation endpoints.

    Each generate_* call validates its parameters, sends exactly one POST and
    returns a ToImageResponse. Failures raise a GetImgError subclass; nothing
    is retried.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 api_url: Optional[str] = None, timeout: Optional[float] = None,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key if api_key is not None else (GETIMG_API_KEY or "")
        self.model = model or DEFAULT_MODEL
        self.api_url = (api_url or GETIMG_API_URL).rstrip("/")

        # HTTP client
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else GETIMG_TIMEOUT
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self):
        """Close the underlying HTTP client if this instance created it"""
        if self._owns_client:
            await self._client.aclose()

    def __repr__(self):
        return f"{type(self).__name__}(model={self.model!r}, api_url={self.api_url!r})"

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    @staticmethod
    def _build(request_cls: Type[ImageRequest], **fields: Any) -> ImageRequest:
        try:
            return request_cls(**fields)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid {request_cls.__name__}: {_describe_validation_error(e)}") from e

    @staticmethod
    def _status_error(response: httpx.Response) -> APIError:
        """Map a non-success response onto the exception hierarchy"""
        status = response.status_code
        detail = response.reason_phrase or "request failed"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                detail = error["message"]
            elif isinstance(error, str) and error:
                detail = error
            elif isinstance(body.get("message"), str):
                detail = body["message"]

        message = f"HTTP {status}: {detail}"
        if status in (401, 403):
            return AuthenticationError(message, status_code=status)
        if status == 429:
            return RateLimitError(message, status_code=status)
        return APIError(message, status_code=status)

    async def _post(self, path: str, request: ImageRequest) -> ToImageResponse:
        url = f"{self.api_url}{path}"
        payload = request.to_payload()

        logger.debug(f"📤 Sending request to {url}")
        logger.debug(f"📤 Model: {request.model}")

        try:
            response = await self._client.post(url, headers=self._headers(), json=payload)
        except httpx.TimeoutException as e:
            logger.warning(f"GetImg API timeout on {path}")
            raise TransportError(f"Request to {path} timed out") from e
        except httpx.RequestError as e:
            logger.warning(f"Connection error on {path}: {e}")
            raise TransportError(f"Request to {path} failed: {e}") from e

        if not response.is_success:
            error = self._status_error(response)
            logger.error(f"GetImg API error on {path}: {error.message}")
            raise error

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseParseError(f"Response from {path} is not valid JSON", status_code=response.status_code) from e

        try:
            result = ToImageResponse.model_validate(data)
        except PydanticValidationError as e:
            raise ResponseParseError(
                f"Unexpected response from {path}: {_describe_validation_error(e)}",
                status_code=response.status_code,
            ) from e

        # Decode once so bad base64 surfaces here rather than at save time
        image_size = len(result.image_bytes)
        logger.debug(f"📥 Received {image_size} image bytes (seed={result.seed}, cost={result.cost})")
        return result

    async def generate_image_from_text(self, prompt: str, width: int = DEFAULT_WIDTH,
                                       height: int = DEFAULT_HEIGHT, steps: int = DEFAULT_LCM_STEPS,
                                       output_format: str = DEFAULT_OUTPUT_FORMAT,
                                       negative_prompt: Optional[str] = None,
                                       seed: Optional[int] = None) -> ToImageResponse:
        """Generate an image from a text prompt with the client's latent-consistency model"""
        request = self._build(
            TextToImageRequest,
            model=self.model,
            prompt=prompt,
            negative_prompt=negative_prompt,
            width=width,
            height=height,
            steps=steps,
            output_format=output_format,
            seed=seed,
        )
        return await self._post(TEXT_TO_IMAGE_PATH, request)

    async def generate_image_from_image(self, prompt: str, image: ImageInput,
                                        steps: int = DEFAULT_LCM_STEPS, seed: Optional[int] = None,
                                        output_format: str = DEFAULT_OUTPUT_FORMAT,
                                        negative_prompt: Optional[str] = None,
                                        strength: Optional[float] = None) -> ToImageResponse:
        """Generate an image guided by a source image and a text prompt"""
        request = self._build(
            ImageToImageRequest,
            model=self.model,
            prompt=prompt,
            negative_prompt=negative_prompt,
            image=_image_payload(image),
            strength=strength,
            steps=steps,
            output_format=output_format,
            seed=seed,
        )
        return await self._post(IMAGE_TO_IMAGE_PATH, request)

    async def generate_image_using_controlnet(self, controlnet: str, prompt: str, image: ImageInput,
                                              negative_prompt: Optional[str] = None,
                                              strength: float = 1.0, width: int = DEFAULT_WIDTH,
                                              height: int = DEFAULT_HEIGHT, steps: int = DEFAULT_SD_STEPS,
                                              guidance: float = DEFAULT_GUIDANCE,
                                              seed: Optional[int] = None, scheduler: str = "euler",
                                              output_format: str = DEFAULT_OUTPUT_FORMAT,
                                              model: Optional[str] = None) -> ToImageResponse:
        """
        Generate an image conditioned on a control image.

        controlnet names the conditioning type (e.g. "canny-1.1") and is
        passed through unmodified.
        """
        request = self._build(
            ControlNetRequest,
            controlnet=controlnet,
            model=model or CONTROLNET_MODEL,
            prompt=prompt,
            negative_prompt=negative_prompt,
            image=_image_payload(image),
            strength=strength,
            width=width,
            height=height,
            steps=steps,
            guidance=guidance,
            seed=seed,
            scheduler=scheduler,
            output_format=output_format,
        )
        return await self._post(CONTROLNET_PATH, request)

    async def generate_repainted_image(self, prompt: str, image: ImageInput, mask_image: ImageInput,
                                       negative_prompt: Optional[str] = None,
                                       strength: Optional[float] = None, width: int = DEFAULT_WIDTH,
                                       height: int = DEFAULT_HEIGHT, steps: int = DEFAULT_SD_STEPS,
                                       guidance: float = DEFAULT_GUIDANCE, seed: Optional[int] = None,
                                       scheduler: str = "ddim", output_format: str = DEFAULT_OUTPUT_FORMAT,
                                       model: Optional[str] = None) -> ToImageResponse:
        """Repaint the white area of mask_image within image (inpainting)"""
        request = self._build(
            RepaintImageRequest,
            model=model or INPAINT_MODEL,
            prompt=prompt,
            negative_prompt=negative_prompt,
            image=_image_payload(image),
            mask_image=_image_payload(mask_image),
            strength=strength,
            width=width,
            height=height,
            steps=steps,
            guidance=guidance,
            seed=seed,
            scheduler=scheduler,
            output_format=output_format,
        )
        return await self._post(INPAINT_PATH, request)

    async def generate_edited_image(self, prompt: str, image: ImageInput,
                                    negative_prompt: Optional[str] = None,
                                    image_guidance: float = DEFAULT_IMAGE_GUIDANCE,
                                    steps: int = DEFAULT_SD_STEPS, guidance: float = DEFAULT_GUIDANCE,
                                    seed: Optional[int] = None, scheduler: str = "euler_a",
                                    output_format: str = DEFAULT_OUTPUT_FORMAT,
                                    model: Optional[str] = None) -> ToImageResponse:
        """
        Edit an image following a written instruction.

        Higher image_guidance keeps the result closer to the source image.
        """
        request = self._build(
            EditImageRequest,
            model=model or EDIT_MODEL,
            prompt=prompt,
            negative_prompt=negative_prompt,
            image=_image_payload(image),
            image_guidance=image_guidance,
            steps=steps,
            guidance=guidance,
            seed=seed,
            scheduler=scheduler,
            output_format=output_format,
        )
        return await self._post(EDIT_PATH, request)
