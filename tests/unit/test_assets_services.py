"""Tests for assets.services — object keys, public URLs and S3 uploads."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import EndpointConnectionError

from assets.services import build_object_key, build_public_url, key_timestamp, upload_image
from common.error_messages import StorageError
from tests.conftest import make_s3_error


class TestKeyTimestamp:
    def test_format(self):
        now = datetime(2025, 6, 6, 14, 3, 9, tzinfo=timezone.utc)
        assert key_timestamp(now) == "20250606T140309"

    def test_default_is_current_utc(self):
        assert re.fullmatch(r"\d{8}T\d{6}", key_timestamp())


class TestBuildObjectKey:
    def test_without_prefix(self):
        assert build_object_key("", 0, "20250606T140309") == "imagen_0_20250606T140309.png"

    def test_with_prefix(self):
        assert build_object_key("generated-images", 2, "20250606T140309") == "generated-images/imagen_2_20250606T140309.png"

    @pytest.mark.parametrize("prefix", ["/out", "out/", "/out/"])
    def test_prefix_slashes_normalized(self, prefix):
        assert build_object_key(prefix, 1, "ts") == "out/imagen_1_ts.png"

    def test_nested_prefix(self):
        assert build_object_key("a/b", 0, "ts") == "a/b/imagen_0_ts.png"

    @pytest.mark.parametrize("prefix", ["a//b", "/a//b//", "a/./b"])
    def test_inner_slashes_collapsed(self, prefix):
        assert build_object_key(prefix, 0, "ts") == "a/b/imagen_0_ts.png"

    @pytest.mark.parametrize("prefix", ["/", "//", "."])
    def test_degenerate_prefix_dropped(self, prefix):
        assert build_object_key(prefix, 0, "ts") == "imagen_0_ts.png"

    def test_unique_suffix(self):
        first = build_object_key("out", 0, "ts", unique=True)
        second = build_object_key("out", 0, "ts", unique=True)
        assert re.fullmatch(r"out/imagen_0_ts_[0-9a-f]{8}\.png", first)
        assert first != second


class TestBuildPublicUrl:
    def test_virtual_hosted_url(self):
        url = build_public_url("bucket", "us-east-1", "imagen_0_ts.png")
        assert url == "https://bucket.s3.us-east-1.amazonaws.com/imagen_0_ts.png"

    def test_key_is_quoted_but_slashes_kept(self):
        url = build_public_url("bucket", "eu-west-1", "my images/imagen_0_ts.png")
        assert url == "https://bucket.s3.eu-west-1.amazonaws.com/my%20images/imagen_0_ts.png"


class TestUploadImage:
    def test_single_put_object_call(self):
        s3 = MagicMock()
        upload_image(s3, "bucket", "imagen_0_ts.png", b"\x89PNG")
        s3.put_object.assert_called_once_with(
            Bucket="bucket",
            Key="imagen_0_ts.png",
            Body=b"\x89PNG",
            ContentType="image/png",
        )

    def test_bytes_passed_through_untouched(self):
        s3 = MagicMock()
        data = bytes(range(256))
        upload_image(s3, "bucket", "k.png", data)
        assert s3.put_object.call_args.kwargs["Body"] is data

    def test_client_error_becomes_storage_error(self):
        s3 = MagicMock()
        s3.put_object.side_effect = make_s3_error("NoSuchBucket")
        with pytest.raises(StorageError) as exc_info:
            upload_image(s3, "bucket", "k.png", b"x")
        assert exc_info.value.key == "k.png"
        assert "NoSuchBucket" in exc_info.value.detail
        assert exc_info.value.status_code == 500

    def test_connection_error_becomes_storage_error(self):
        s3 = MagicMock()
        s3.put_object.side_effect = EndpointConnectionError(endpoint_url="https://s3.amazonaws.com")
        with pytest.raises(StorageError):
            upload_image(s3, "bucket", "k.png", b"x")
        assert s3.put_object.call_count == 1
