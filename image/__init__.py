"""Image generation module."""
from image.models import GenerationRequest, GenerationResponse
from image.services import build_generation_config, generate_images, generate_and_store

__all__ = [
    "GenerationRequest",
    "GenerationResponse",
    "build_generation_config",
    "generate_images",
    "generate_and_store"
]
