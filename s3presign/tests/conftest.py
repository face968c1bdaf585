"""Shared fixtures for the s3presign test suite."""

from datetime import datetime, timezone

import pytest

from s3presign.signing.builder import UrlBuilder

ACCESS_KEY_ID = "fakeExampleAccessKeyId"
SECRET_ACCESS_KEY = "fakeExampleSecretAccessKey"
BUCKET_NAME = "my-bucket"
OBJECT_KEY = "some/directory/file.jpg"


@pytest.fixture
def fixed_time():
    return datetime(2024, 3, 9, 14, 5, 27, tzinfo=timezone.utc)


@pytest.fixture
def make_builder():
    def factory(**overrides):
        params = {
            "bucket_name": BUCKET_NAME,
            "region": "us-east-1",
            "access_key_id": ACCESS_KEY_ID,
            "secret_access_key": SECRET_ACCESS_KEY,
        }
        params.update(overrides)
        return UrlBuilder(**params)

    return factory


@pytest.fixture
def builder(make_builder):
    return make_builder()
