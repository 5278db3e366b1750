"""Shared pytest fixtures for the Imagen relay tests."""

import os

# Keep test runs from writing rotating log files into the working tree.
os.environ.setdefault("LOG_TO_FILE", "false")

from typing import Callable, List
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError as BotoClientError
from fastapi.testclient import TestClient
from google.genai import types

from app import create_app
from common.context import ServiceContext


def make_generate_response(images: List[bytes]) -> types.GenerateImagesResponse:
    """Build an Imagen response carrying the given raw image buffers."""
    return types.GenerateImagesResponse(
        generated_images=[types.GeneratedImage(image=types.Image(image_bytes=data)) for data in images]
    )


def make_s3_error(code: str = "AccessDenied") -> BotoClientError:
    """A botocore ClientError as raised by put_object."""
    return BotoClientError({"Error": {"Code": code, "Message": "Access Denied"}}, "PutObject")


@pytest.fixture
def fake_genai() -> MagicMock:
    """genai.Client stand-in that returns two PNG buffers by default."""
    client = MagicMock()
    client.models.generate_images.return_value = make_generate_response([b"png-0", b"png-1"])
    return client


@pytest.fixture
def fake_s3() -> MagicMock:
    """boto3 S3 client stand-in whose put_object always succeeds."""
    client = MagicMock()
    client.put_object.return_value = {"ETag": '"abc"'}
    return client


@pytest.fixture
def make_context(fake_genai: MagicMock, fake_s3: MagicMock) -> Callable[..., ServiceContext]:
    """Factory for service contexts wired to the fake clients."""

    def _make(**overrides) -> ServiceContext:
        values = {
            "bucket": "bucket",
            "region": "us-east-1",
            "genai_client": fake_genai,
            "s3_client": fake_s3,
            "folder_prefix": "",
            "model": "imagen-test",
        }
        values.update(overrides)
        return ServiceContext(**values)

    return _make


@pytest.fixture
def context(make_context) -> ServiceContext:
    """Default service context: bucket 'bucket' in us-east-1, no prefix."""
    return make_context()


@pytest.fixture
def test_client(context: ServiceContext) -> TestClient:
    """TestClient for an app built around the fake context."""
    return TestClient(create_app(context))
