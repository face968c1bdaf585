"""
Unit Tests: Storage Adapter

Tests:
    - Presigned by default, public on request
    - Prefix joining
    - Unsupported signer option
"""

import pytest

from s3presign.core.errors import ConfigError, ErrorCode
from s3presign.storage.adapter import S3UrlStorage
from s3presign.tests.conftest import ACCESS_KEY_ID, BUCKET_NAME, SECRET_ACCESS_KEY


@pytest.fixture
def make_storage():
    def factory(**overrides):
        params = {
            "bucket": BUCKET_NAME,
            "region": "eu-west-1",
            "access_key_id": ACCESS_KEY_ID,
            "secret_access_key": SECRET_ACCESS_KEY,
        }
        params.update(overrides)
        return S3UrlStorage(**params)

    return factory


class TestS3UrlStorage:
    """Tests for S3UrlStorage."""

    def test_presigned_by_default(self, make_storage, fixed_time):
        storage = make_storage()
        url = storage.url("image.jpg", time=fixed_time)

        assert storage.public is False
        assert url == storage.builder.presigned_url("image.jpg", time=fixed_time)
        assert "X-Amz-Signature=" in url

    def test_public_on_request(self, make_storage):
        storage = make_storage()
        assert storage.url("image.jpg", public=True) == (
            "https://my-bucket.s3.eu-west-1.amazonaws.com/image.jpg"
        )

    def test_public_storage(self, make_storage):
        storage = make_storage(public=True)
        assert storage.url("image.jpg") == storage.builder.public_url("image.jpg")

    def test_prefix(self, make_storage, fixed_time):
        storage = make_storage(prefix="cache")
        assert storage.object_key("image.jpg") == "cache/image.jpg"
        assert storage.url("image.jpg", public=True).endswith("/cache/image.jpg")
        assert storage.url("image.jpg", time=fixed_time) == (
            storage.builder.presigned_url("cache/image.jpg", time=fixed_time)
        )

    def test_empty_prefix(self, make_storage):
        assert make_storage(prefix="").object_key("image.jpg") == "image.jpg"

    def test_options_forwarded(self, make_storage, fixed_time):
        storage = make_storage()
        url = storage.url(
            "image.jpg",
            time=fixed_time,
            expires_in=60,
            response_content_disposition="attachment",
        )
        assert "X-Amz-Expires=60" in url
        assert "response-content-disposition=attachment" in url

    def test_endpoint(self, make_storage):
        storage = make_storage(endpoint="http://127.0.0.1:9000")
        assert storage.url("image.jpg", public=True) == (
            "http://127.0.0.1:9000/my-bucket/image.jpg"
        )

    def test_signer_unsupported(self, make_storage):
        with pytest.raises(ConfigError) as exc_info:
            make_storage(signer=lambda *args, **kwargs: "")
        assert exc_info.value.code is ErrorCode.CONFIG_UNSUPPORTED_OPTION
        assert exc_info.value.context["option"] == "signer"
