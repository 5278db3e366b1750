"""Assets module."""
from assets.services import (
    build_object_key,
    build_public_url,
    key_timestamp,
    upload_image
)

__all__ = [
    "build_object_key",
    "build_public_url",
    "key_timestamp",
    "upload_image"
]
