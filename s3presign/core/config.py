"""
Signer Configuration

Validated, immutable construction parameters for a UrlBuilder.

Design:
- Immutable after validation
- Fail-fast on invalid configuration (ConfigError from __post_init__)
- Environment loading reports failure as a Result
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Any, Optional

from s3presign.core.errors import ConfigError
from s3presign.core.types import Result, Ok, Err

_REQUIRED = ("bucket_name", "region", "access_key_id", "secret_access_key")
_MASKED = ("secret_access_key", "session_token")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class SignerConfig:
    """
    Construction parameters for a signer.

    Attributes:
        bucket_name: Target bucket (required).
        region: Region code used in the credential scope (required).
        access_key_id: Access key id (required).
        secret_access_key: Secret signing key (required).
        session_token: STS session token, added to presigned URLs when set.
        host: Explicit host; forces https and no path prefix.
        endpoint: Endpoint URL for S3-compatible services (MinIO, R2, ...).
        default_public: Whether url() produces public URLs by default.
        cache_signing_keys: Keep derived signing keys per calendar date.

    Thread Safety:
        Frozen dataclass - immutable after construction.
    """

    bucket_name: str
    region: str
    access_key_id: str
    secret_access_key: str
    session_token: Optional[str] = None
    host: Optional[str] = None
    endpoint: Optional[str] = None
    default_public: bool = True
    cache_signing_keys: bool = False

    def __post_init__(self) -> None:
        """
        Validate configuration invariants.

        Raises:
            ConfigError: Missing required value, or both host and endpoint set.
        """
        for name in _REQUIRED:
            if not getattr(self, name):
                raise ConfigError.missing_parameter(name)

        if self.host and self.endpoint:
            raise ConfigError.conflicting_address(self.host, self.endpoint)

    def __repr__(self) -> str:
        parts = []
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _MASKED and value:
                value = "***"
            parts.append(f"{f.name}={value!r}")
        return f"SignerConfig({', '.join(parts)})"

    @classmethod
    def from_env(
        cls,
        prefix: str = "S3PRESIGN",
        **overrides: Any,
    ) -> Result[SignerConfig, str]:
        """
        Load configuration from environment variables.

        Environment Variables:
        - {prefix}_BUCKET: Bucket name (required)
        - {prefix}_REGION: Region code (required)
        - {prefix}_ACCESS_KEY_ID: Access key id (required)
        - {prefix}_SECRET_ACCESS_KEY: Secret key (required)
        - {prefix}_SESSION_TOKEN: STS session token
        - {prefix}_HOST: Explicit host override
        - {prefix}_ENDPOINT: Endpoint URL override
        - {prefix}_DEFAULT_PUBLIC: true/false (default: true)
        - {prefix}_CACHE_SIGNING_KEYS: true/false (default: false)

        Only these variables are read. Keyword overrides that are not None
        take precedence over the environment.
        """
        def env(name: str) -> Optional[str]:
            return os.getenv(f"{prefix}_{name}") or None

        unknown = set(overrides) - {f.name for f in fields(cls)}
        if unknown:
            return Err(f"Configuration error: unknown fields {sorted(unknown)}")

        try:
            values: dict[str, Any] = {
                "bucket_name": env("BUCKET") or "",
                "region": env("REGION") or "",
                "access_key_id": env("ACCESS_KEY_ID") or "",
                "secret_access_key": env("SECRET_ACCESS_KEY") or "",
                "session_token": env("SESSION_TOKEN"),
                "host": env("HOST"),
                "endpoint": env("ENDPOINT"),
                "default_public": _parse_bool(
                    f"{prefix}_DEFAULT_PUBLIC", env("DEFAULT_PUBLIC"), True
                ),
                "cache_signing_keys": _parse_bool(
                    f"{prefix}_CACHE_SIGNING_KEYS", env("CACHE_SIGNING_KEYS"), False
                ),
            }
            values.update({k: v for k, v in overrides.items() if v is not None})
            return Ok(cls(**values))
        except ConfigError as e:
            return Err(f"Configuration error: {e.message}")


def _parse_bool(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError.invalid_value(name, raw, "expected a boolean")
