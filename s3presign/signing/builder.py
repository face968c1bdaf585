"""
S3 URL Builder
==============

Produces GET URLs for objects in one bucket:

- ``public_url``: unsigned URL, no cryptographic work
- ``presigned_url``: SigV4 query-string presigned URL with expiry
- ``url``: dispatches on a public flag (default from configuration)

Everything that does not depend on the object key or the clock (address,
canonical host header, credential prefix, escaped session token) is computed
once at construction. With ``cache_signing_keys`` the derived signing key is
reused for every presign on the same calendar date.

Presign Algorithm:
------------------
1. Validate 0 < expires_in <= MAX_EXPIRES_IN
2. amz_date = YYYYMMDD'T'HHMMSS'Z', datestamp = YYYYMMDD (UTC)
3. scope = {datestamp}/{region}/s3/aws4_request
4. Query parameters (absent options omitted), sorted by name
5. canonical request = GET, URI, query, "host:{authority}\\n", "host",
   UNSIGNED-PAYLOAD joined by newlines
6. string to sign = algorithm, amz_date, scope, hex(sha256(canonical request))
7. signature = hex(hmac(signing_key, string to sign))

Complexity:
-----------
| Operation     | Time       | Notes                                  |
|---------------|------------|----------------------------------------|
| public_url    | O(len key) | escaping only                          |
| presigned_url | O(len key) | one SHA-256, one HMAC; +4 HMAC on miss |

Thread Safety:
--------------
Without the signing key cache, all instance state is read-only after
construction and one builder may be shared between threads. With the cache
enabled the builder is NOT thread-safe; serialize access with one lock or
use one builder per thread.

Example:
    >>> builder = UrlBuilder(
    ...     bucket_name="my-bucket",
    ...     region="us-east-1",
    ...     access_key_id="AKIA...",
    ...     secret_access_key="...",
    ... )
    >>> builder.public_url("some/directory/file.jpg")
    'https://my-bucket.s3.amazonaws.com/some/directory/file.jpg'
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from operator import itemgetter
from typing import Any, Optional

from s3presign.core.config import SignerConfig
from s3presign.core.constants import (
    ALGORITHM,
    AMZ_DATE_FORMAT,
    DEFAULT_EXPIRES_IN,
    MAX_EXPIRES_IN,
    METHOD,
    RESPONSE_EXPIRES_PARAM,
    RESPONSE_OVERRIDES,
    SERVICE,
    SIGNED_HEADERS,
    TERMINATOR,
    UNSIGNED_PAYLOAD,
    VERSION_ID_PARAM,
)
from s3presign.core.errors import InvalidArgument
from s3presign.signing.address import ResolvedAddress, resolve_address
from s3presign.signing.escape import escape_component, escape_object_key
from s3presign.signing.httpdate import DateLike, httpdate, to_utc
from s3presign.signing.keys import SigningKeyCache, derive_signing_key

logger = logging.getLogger(__name__)

_by_name = itemgetter(0)


# =============================================================================
# PRESIGN OPTIONS
# =============================================================================
@dataclass(frozen=True, slots=True)
class PresignOptions:
    """
    Per-call presign parameters. Every field is optional.

    Attributes:
        time: Signing time; naive datetimes are taken as UTC. Defaults to now.
        expires_in: Validity in seconds, 1..MAX_EXPIRES_IN.
        response_cache_control: Override Cache-Control of the response.
        response_content_disposition: Override Content-Disposition.
        response_content_encoding: Override Content-Encoding.
        response_content_language: Override Content-Language.
        response_content_type: Override Content-Type.
        response_expires: Override Expires; any value httpdate() accepts.
        version_id: Object version to fetch.
    """
    time: Optional[datetime] = None
    expires_in: int = DEFAULT_EXPIRES_IN
    response_cache_control: Optional[str] = None
    response_content_disposition: Optional[str] = None
    response_content_encoding: Optional[str] = None
    response_content_language: Optional[str] = None
    response_content_type: Optional[str] = None
    response_expires: Optional[DateLike] = None
    version_id: Optional[str] = None


def validate_expires_in(expires_in: Any) -> int:
    """
    Check an expiry in seconds.

    Raises:
        InvalidArgument: Not an integer, or outside (0, MAX_EXPIRES_IN].
    """
    if isinstance(expires_in, bool) or not isinstance(expires_in, int):
        raise InvalidArgument.expires_not_integer(expires_in)
    if not 0 < expires_in <= MAX_EXPIRES_IN:
        raise InvalidArgument.expires_out_of_range(expires_in)
    return expires_in


# =============================================================================
# URL BUILDER
# =============================================================================
class UrlBuilder:
    """
    Public and presigned GET URL generator for one bucket.

    Construct once per configuration and reuse; construction resolves the
    address and precomputes the per-bucket parts of every URL.

    Raises (construction):
        ConfigError: Missing bucket/region/credentials, both host and
            endpoint supplied, or malformed endpoint.
    """

    __slots__ = (
        "_config",
        "_address",
        "_base_url",
        "_canonical_headers",
        "_credential_prefix",
        "_scope_suffix",
        "_security_token",
        "_cache",
    )

    def __init__(
        self,
        bucket_name: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        session_token: Optional[str] = None,
        host: Optional[str] = None,
        endpoint: Optional[str] = None,
        default_public: bool = True,
        cache_signing_keys: bool = False,
    ) -> None:
        config = SignerConfig(
            bucket_name=bucket_name,
            region=region,
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token,
            host=host,
            endpoint=endpoint,
            default_public=default_public,
            cache_signing_keys=cache_signing_keys,
        )
        address = resolve_address(bucket_name, region, host=host, endpoint=endpoint)

        self._config = config
        self._address = address
        self._base_url = address.base_url
        self._canonical_headers = f"host:{address.authority}\n"
        self._credential_prefix = f"{access_key_id}/"
        self._scope_suffix = f"/{region}/{SERVICE}/{TERMINATOR}"
        self._security_token = escape_component(session_token)
        self._cache: Optional[SigningKeyCache] = (
            SigningKeyCache() if cache_signing_keys else None
        )

        logger.debug(
            f"UrlBuilder for bucket {bucket_name!r} in {region}: "
            f"{address.style.value} addressing at {address.scheme}://{address.authority}"
            f"{address.path_prefix}, signing key cache "
            f"{'on' if cache_signing_keys else 'off'}"
        )

    @classmethod
    def from_config(cls, config: SignerConfig) -> UrlBuilder:
        """Build from an already validated SignerConfig."""
        return cls(**{f.name: getattr(config, f.name) for f in fields(config)})

    # -------------------------------------------------------------------------
    # CONFIGURATION ACCESSORS
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SignerConfig:
        return self._config

    @property
    def bucket_name(self) -> str:
        return self._config.bucket_name

    @property
    def region(self) -> str:
        return self._config.region

    @property
    def address(self) -> ResolvedAddress:
        return self._address

    @property
    def default_public(self) -> bool:
        return self._config.default_public

    @property
    def signing_key_cache(self) -> Optional[SigningKeyCache]:
        """The signing key cache, or None when caching is disabled."""
        return self._cache

    def __repr__(self) -> str:
        return (
            f"UrlBuilder(bucket_name={self.bucket_name!r}, region={self.region!r}, "
            f"base_url={self._base_url!r}, default_public={self.default_public}, "
            f"cache_signing_keys={self._cache is not None})"
        )

    # -------------------------------------------------------------------------
    # URL GENERATION
    # -------------------------------------------------------------------------

    def url(self, key: str, public: Optional[bool] = None, **options: Any) -> str:
        """
        Public or presigned URL for a key.

        ``public`` defaults to the configured default. Public URLs ignore
        every presign option, so callers may pass the same options either way.
        """
        if public is None:
            public = self._config.default_public
        if public:
            return self.public_url(key)
        return self.presigned_url(key, **options)

    def public_url(self, key: str) -> str:
        """Unsigned URL: {scheme}://{authority}{path prefix}/{escaped key}."""
        return f"{self._base_url}/{escape_object_key(key)}"

    def presigned_url(
        self,
        key: str,
        *,
        options: Optional[PresignOptions] = None,
        time: Optional[datetime] = None,
        expires_in: Optional[int] = None,
        response_cache_control: Optional[str] = None,
        response_content_disposition: Optional[str] = None,
        response_content_encoding: Optional[str] = None,
        response_content_language: Optional[str] = None,
        response_content_type: Optional[str] = None,
        response_expires: Optional[DateLike] = None,
        version_id: Optional[str] = None,
    ) -> str:
        """
        SigV4 presigned GET URL.

        Options may come as a PresignOptions value, as keywords, or both;
        keywords that are not None override fields of ``options``.

        Raises:
            InvalidArgument: expires_in outside (0, MAX_EXPIRES_IN], or an
                uninterpretable response_expires.
        """
        overrides = {
            name: value
            for name, value in (
                ("time", time),
                ("expires_in", expires_in),
                ("response_cache_control", response_cache_control),
                ("response_content_disposition", response_content_disposition),
                ("response_content_encoding", response_content_encoding),
                ("response_content_language", response_content_language),
                ("response_content_type", response_content_type),
                ("response_expires", response_expires),
                ("version_id", version_id),
            )
            if value is not None
        }
        opts = options or PresignOptions()
        if overrides:
            opts = replace(opts, **overrides)
        return self.sign(key, opts)

    def sign(self, key: str, options: PresignOptions) -> str:
        """Presign ``key`` with a fully assembled PresignOptions."""
        expires_in = validate_expires_in(options.expires_in)

        now = datetime.now(timezone.utc) if options.time is None else to_utc(options.time)
        amz_date = AMZ_DATE_FORMAT.format(
            now.year, now.month, now.day, now.hour, now.minute, now.second
        )
        datestamp = amz_date[:8]
        credential_scope = datestamp + self._scope_suffix

        params = [
            ("X-Amz-Algorithm", ALGORITHM),
            ("X-Amz-Credential", escape_component(self._credential_prefix + credential_scope)),
            ("X-Amz-Date", amz_date),
            ("X-Amz-Expires", str(expires_in)),
            ("X-Amz-SignedHeaders", SIGNED_HEADERS),
        ]
        if self._security_token is not None:
            params.append(("X-Amz-Security-Token", self._security_token))
        for attr, name in RESPONSE_OVERRIDES:
            value = getattr(options, attr)
            if value is not None:
                params.append((name, escape_component(value)))
        if options.response_expires is not None:
            params.append(
                (RESPONSE_EXPIRES_PARAM, escape_component(httpdate(options.response_expires)))
            )
        if options.version_id is not None:
            params.append((VERSION_ID_PARAM, escape_component(options.version_id)))
        params.sort(key=_by_name)
        canonical_query = "&".join(f"{name}={value}" for name, value in params)

        canonical_uri = f"{self._address.path_prefix}/{escape_object_key(key)}"
        canonical_request = "\n".join((
            METHOD,
            canonical_uri,
            canonical_query,
            self._canonical_headers,
            SIGNED_HEADERS,
            UNSIGNED_PAYLOAD,
        ))
        string_to_sign = "\n".join((
            ALGORITHM,
            amz_date,
            credential_scope,
            hashlib.sha256(canonical_request.encode("utf-8")).hexdigest(),
        ))

        signature = hmac.new(
            self._signing_key(datestamp),
            string_to_sign.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()

        return (
            f"{self._address.scheme}://{self._address.authority}{canonical_uri}"
            f"?{canonical_query}&X-Amz-Signature={signature}"
        )

    # -------------------------------------------------------------------------
    # SIGNING KEY
    # -------------------------------------------------------------------------

    def _signing_key(self, datestamp: str) -> bytes:
        if self._cache is None:
            return self._derive(datestamp)
        return self._cache.get_or_derive(datestamp, self._derive)

    def _derive(self, datestamp: str) -> bytes:
        return derive_signing_key(
            self._config.secret_access_key,
            datestamp,
            self._config.region,
        )
