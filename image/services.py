"""Image generation services - Imagen integration and S3 fan-out."""
from typing import Optional, List

from google.genai import types

from assets.services import build_object_key, build_public_url, key_timestamp, upload_image
from common.context import ServiceContext
from common.error_messages import ClientError, ErrorCode, UpstreamError
from image.models import GenerationRequest, GenerationResponse
from utils.logger import get_logger

logger = get_logger("image.services")

# Friendly names accepted from callers, mapped to the ratios Imagen understands
ASPECT_RATIOS = {
    "SQUARE": "1:1",
    "PORTRAIT": "3:4",
    "LANDSCAPE": "4:3",
    "TALL": "9:16",
    "WIDE": "16:9",
}


def resolve_aspect_ratio(aspect_ratio: str) -> str:
    """Translate a friendly aspect name; anything else is passed through for the API to validate."""
    return ASPECT_RATIOS.get(aspect_ratio.upper(), aspect_ratio)


def resolve_person_generation(person_generation: str) -> str:
    """Canonical PersonGeneration value; unknown policies are a ClientError."""
    allowed = [member.value for member in types.PersonGeneration]
    value = person_generation.upper()
    if value not in allowed:
        raise ClientError(
            ErrorCode.INVALID_PARAMETER,
            f"personGeneration must be one of {', '.join(allowed)}",
        )
    return value


def build_generation_config(
    number_of_images: int,
    aspect_ratio: str,
    person_generation: Optional[str] = None
) -> types.GenerateImagesConfig:
    """Build the Imagen request config. An absent person policy leaves the upstream default."""
    kwargs = {
        "number_of_images": number_of_images,
        "aspect_ratio": resolve_aspect_ratio(aspect_ratio),
    }
    if person_generation:
        kwargs["person_generation"] = resolve_person_generation(person_generation)
    return types.GenerateImagesConfig(**kwargs)


def generate_images(client, model: str, prompt: str, config: types.GenerateImagesConfig) -> List[bytes]:
    """
    Call Imagen once and return the raw image bytes in generation order.

    Every failure (network, auth, quota, malformed response) is raised as
    UpstreamError with the upstream text kept for logging.
    """
    try:
        response = client.models.generate_images(model=model, prompt=prompt, config=config)
    except Exception as e:
        logger.error(f"GenAI error from {model}: {e}")
        raise UpstreamError(f"image generation failed: {e}") from e

    images = []
    for idx, generated in enumerate(response.generated_images or []):
        image = getattr(generated, "image", None)
        data = getattr(image, "image_bytes", None)
        if not data:
            reason = getattr(generated, "rai_filtered_reason", None) or "no image bytes"
            logger.error(f"GenAI returned an unusable image at index {idx}: {reason}")
            raise UpstreamError(f"malformed upstream response at index {idx}: {reason}")
        images.append(data)

    logger.info(f"GenAI returned {len(images)} image(s) from {model}")
    return images


def generate_and_store(ctx: ServiceContext, req: GenerationRequest) -> GenerationResponse:
    """
    Validate the request, generate images and upload each one in order.

    Uploads are sequential and the first failure aborts the request; objects
    already written stay in the bucket.
    """
    req = req.normalized()
    if not req.prompt.strip():
        raise ClientError(ErrorCode.MISSING_FIELD)

    config = build_generation_config(req.number_of_images, req.aspect_ratio, req.person_generation)
    logger.info(
        f"Generating {req.number_of_images} image(s), aspect={req.aspect_ratio}, "
        f"prompt: {req.prompt[:50]}..."
    )
    images = generate_images(ctx.genai_client, ctx.model, req.prompt, config)

    timestamp = key_timestamp()
    urls = []
    for idx, data in enumerate(images):
        key = build_object_key(ctx.folder_prefix, idx, timestamp, unique=ctx.unique_keys)
        upload_image(ctx.s3_client, ctx.bucket, key, data)
        urls.append(build_public_url(ctx.bucket, ctx.region, key))

    return GenerationResponse(image_urls=urls)
