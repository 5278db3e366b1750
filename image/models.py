"""Image generation Pydantic models."""
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ASPECT_RATIO = "SQUARE"
# numberOfImages is a 32-bit integer on the wire
MAX_IMAGE_COUNT = 2**31 - 1


class GenerationRequest(BaseModel):
    """Body of POST /api/generate. Field names follow the JSON camelCase keys.

    Strict mode: "3" or true for numberOfImages is a malformed payload, not a number.
    """
    model_config = ConfigDict(populate_by_name=True, strict=True)

    prompt: Optional[str] = Field(None, description="Text prompt (required, non-empty)")
    number_of_images: Optional[int] = Field(1, alias="numberOfImages", ge=-MAX_IMAGE_COUNT - 1, le=MAX_IMAGE_COUNT, description="Images to generate; values <= 0 mean 1")
    aspect_ratio: Optional[str] = Field(DEFAULT_ASPECT_RATIO, alias="aspectRatio")
    person_generation: Optional[str] = Field(None, alias="personGeneration")

    def normalized(self) -> "GenerationRequest":
        """Return a copy with the default-filling rules applied. The prompt is kept as sent."""
        count = self.number_of_images or 0
        return GenerationRequest(
            prompt=self.prompt or "",
            number_of_images=count if count > 0 else 1,
            aspect_ratio=self.aspect_ratio or DEFAULT_ASPECT_RATIO,
            person_generation=self.person_generation or None,
        )


class GenerationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image_urls: List[str] = Field(default_factory=list, alias="imageUrls")
