"""Image generation routes."""
from fastapi import APIRouter, Depends, Request

from common.context import ServiceContext
from image.models import GenerationRequest, GenerationResponse
from image.services import generate_and_store
from utils.logger import get_logger

logger = get_logger("image")
router = APIRouter(tags=["image"])


def get_context(request: Request) -> ServiceContext:
    """Shared context built at startup and stored on the app."""
    return request.app.state.context


@router.post("/api/generate", response_model=GenerationResponse, response_model_by_alias=True)
def generate(req: GenerationRequest, ctx: ServiceContext = Depends(get_context)):
    """
    Generate images from a prompt with Imagen and store them in S3.

    Accepts:
      { prompt: "...", numberOfImages?: 1, aspectRatio?: "SQUARE", personGeneration?: "..." }

    Returns:
      { imageUrls: ["https://<bucket>.s3.<region>.amazonaws.com/<key>", ...] }

    Errors are plain text: 400 for bad input, 500 when generation or an upload fails.
    """
    result = generate_and_store(ctx, req)
    logger.info(f"Stored {len(result.image_urls)} image(s) in {ctx.bucket}")
    return result
