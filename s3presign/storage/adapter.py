"""
Storage Adapter
===============

Maps a generic "URL for stored file id" call onto UrlBuilder, the way an
upload/attachment library's S3 storage would.

Differences from UrlBuilder:
- file ids are joined under an optional key prefix
- URLs are presigned by default (``public=False``)
- a custom ``signer`` callable is not supported

Example:
    >>> storage = S3UrlStorage(
    ...     bucket="my-app",
    ...     region="eu-west-1",
    ...     access_key_id="abc",
    ...     secret_access_key="xyz",
    ...     prefix="cache",
    ... )
    >>> storage.url("image.jpg", public=True)
    'https://my-app.s3.eu-west-1.amazonaws.com/cache/image.jpg'
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from s3presign.core.errors import ConfigError
from s3presign.signing.builder import UrlBuilder


class S3UrlStorage:
    """URL generation for files kept under an optional prefix in one bucket."""

    __slots__ = ("_builder", "_prefix", "_public")

    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        session_token: Optional[str] = None,
        host: Optional[str] = None,
        endpoint: Optional[str] = None,
        prefix: Optional[str] = None,
        public: bool = False,
        cache_signing_keys: bool = False,
        signer: Optional[Callable[..., str]] = None,
    ) -> None:
        if signer is not None:
            raise ConfigError.unsupported_option("signer", type(self).__name__)

        self._prefix = prefix
        self._public = public
        self._builder = UrlBuilder(
            bucket_name=bucket,
            region=region,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            host=host,
            endpoint=endpoint,
            default_public=public,
            cache_signing_keys=cache_signing_keys,
        )

    @property
    def builder(self) -> UrlBuilder:
        return self._builder

    @property
    def prefix(self) -> Optional[str]:
        return self._prefix

    @property
    def public(self) -> bool:
        return self._public

    def object_key(self, id: str) -> str:
        """Bucket key for a stored file id."""
        if self._prefix:
            return f"{self._prefix}/{id}"
        return id

    def url(self, id: str, public: Optional[bool] = None, **options: Any) -> str:
        """
        URL for a stored file.

        Presign options are forwarded unchanged and ignored for public URLs.
        """
        if public is None:
            public = self._public
        return self._builder.url(self.object_key(id), public=public, **options)
