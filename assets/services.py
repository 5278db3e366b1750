"""Object store persistence for generated images."""
import posixpath
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import quote
from uuid import uuid4

from botocore.exceptions import BotoCoreError, ClientError

from common.error_messages import StorageError
from utils.logger import get_logger

logger = get_logger("assets.services")

KEY_TIMESTAMP_FORMAT = "%Y%m%dT%H%M%S"
PNG_CONTENT_TYPE = "image/png"


def key_timestamp(now: Optional[datetime] = None) -> str:
    """Second-resolution UTC timestamp used in object keys."""
    now = now or datetime.now(timezone.utc)
    return now.strftime(KEY_TIMESTAMP_FORMAT)


def build_object_key(prefix: str, index: int, timestamp: str, unique: bool = False) -> str:
    """
    Build the storage key for the index-th image of a request.

    Keys look like ``{prefix}/imagen_{index}_{timestamp}.png``; without a
    prefix the folder part is dropped. With ``unique`` a short random suffix
    keeps same-second requests from overwriting each other.
    """
    name = f"imagen_{index}_{timestamp}"
    if unique:
        name = f"{name}_{uuid4().hex[:8]}"
    folder = posixpath.normpath(prefix).strip("/") if prefix else ""
    if folder == ".":
        folder = ""
    return posixpath.join(folder, f"{name}.png")


def build_public_url(bucket: str, region: str, key: str) -> str:
    """Virtual-hosted style S3 URL for an object."""
    return f"https://{bucket}.s3.{region}.amazonaws.com/{quote(key, safe='/')}"


def upload_image(s3_client, bucket: str, key: str, data: bytes, content_type: str = PNG_CONTENT_TYPE) -> None:
    """Write one object in a single put_object call. Raises StorageError on failure."""
    try:
        s3_client.put_object(
            Bucket=bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
    except (ClientError, BotoCoreError) as e:
        logger.error(f"S3 upload failed for s3://{bucket}/{key}: {e}")
        raise StorageError(f"failed to upload {key}: {e}", key=key) from e
    logger.info(f"Uploaded s3://{bucket}/{key} ({len(data)} bytes)")
