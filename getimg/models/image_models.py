"""Pydantic models for GetImg image generation requests and responses"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from utils.image_io import decode_image


class ImageRequest(BaseModel):
    """Fields shared by every generation endpoint"""
    model_config = ConfigDict(extra="forbid", protected_namespaces=(), allow_inf_nan=False)

    model: str = Field(min_length=1)
    prompt: str = Field(min_length=1, pattern=r"\S")
    negative_prompt: Optional[str] = None
    steps: int = Field(gt=0)
    seed: Optional[int] = Field(default=None, ge=0)
    output_format: str = Field(min_length=1)

    def to_payload(self) -> dict:
        """JSON body for the request; unset optional fields are sent as null"""
        return self.model_dump()


class TextToImageRequest(ImageRequest):
    """Request model for /latent-consistency/text-to-image"""
    width: int = Field(gt=0)
    height: int = Field(gt=0)


class ImageToImageRequest(ImageRequest):
    """Request model for /latent-consistency/image-to-image"""
    image: str = Field(min_length=1)
    strength: Optional[float] = Field(default=None, ge=0.0, le=1.0)


class EditImageRequest(ImageRequest):
    """Request model for /stable-diffusion/instruct"""
    image: str = Field(min_length=1)
    image_guidance: float = Field(gt=0)
    guidance: float = Field(gt=0)
    scheduler: str = Field(min_length=1)


class RepaintImageRequest(ImageRequest):
    """Request model for /stable-diffusion/inpaint"""
    image: str = Field(min_length=1)
    mask_image: str = Field(min_length=1)
    strength: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    guidance: float = Field(gt=0)
    scheduler: str = Field(min_length=1)


class ControlNetRequest(ImageRequest):
    """Request model for /stable-diffusion/controlnet"""
    controlnet: str = Field(min_length=1)
    image: str = Field(min_length=1)
    strength: float = Field(ge=0.0)
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    guidance: float = Field(gt=0)
    scheduler: str = Field(min_length=1)


class ToImageResponse(BaseModel):
    """Response model shared by all generation endpoints"""
    model_config = ConfigDict(extra="allow")

    image: str
    seed: Optional[int] = None
    cost: Optional[float] = None

    @property
    def image_bytes(self) -> bytes:
        return decode_image(self.image)
