"""Process-wide service context: settings plus the shared API clients."""
from dataclasses import dataclass
from typing import Any

import boto3
from google import genai

from config import Config
from utils.logger import get_logger

logger = get_logger("context")


@dataclass(frozen=True)
class ServiceContext:
    """
    Immutable bundle built once at startup and shared by every request.

    The genai and boto3 clients are safe to use from concurrent requests;
    nothing here is mutated after construction.
    """
    bucket: str
    region: str
    genai_client: Any
    s3_client: Any
    folder_prefix: str = ""
    model: str = Config.IMAGEN_MODEL
    unique_keys: bool = False


def build_context() -> ServiceContext:
    """Validate configuration and create the long-lived clients."""
    Config.validate()

    s3_client = boto3.client("s3", region_name=Config.OUTPUT_BUCKET_REGION)
    genai_client = genai.Client(api_key=Config.get_api_key())

    logger.info(
        f"Service context ready: bucket={Config.OUTPUT_BUCKET} "
        f"region={Config.OUTPUT_BUCKET_REGION} prefix={Config.OUTPUT_FOLDER!r} model={Config.IMAGEN_MODEL}"
    )
    return ServiceContext(
        bucket=Config.OUTPUT_BUCKET,
        region=Config.OUTPUT_BUCKET_REGION,
        genai_client=genai_client,
        s3_client=s3_client,
        folder_prefix=Config.OUTPUT_FOLDER,
        model=Config.IMAGEN_MODEL,
        unique_keys=Config.UNIQUE_OBJECT_KEYS,
    )
