"""
s3presign: Fast Public and Presigned S3 GET URLs

Generates unsigned public URLs and SigV4 query-string presigned URLs for
objects in S3 and S3-compatible stores, without network I/O:
- Signing: escaping, address resolution, signing key derivation and cache
- Storage: adapter exposing the builder behind a storage-style url() call
- Core: configuration, errors, constants
- Observability: structured logging

License: MIT
"""

__version__ = "1.0.0"

# =============================================================================
# PUBLIC API EXPORTS
# =============================================================================
from s3presign.core.types import Result, Ok, Err
from s3presign.core.errors import (
    ErrorCode,
    S3PresignError,
    ConfigError,
    InvalidArgument,
)
from s3presign.core.config import SignerConfig
from s3presign.core.constants import DEFAULT_EXPIRES_IN, MAX_EXPIRES_IN
from s3presign.signing import (
    AddressingStyle,
    PresignOptions,
    ResolvedAddress,
    SigningKeyCache,
    UrlBuilder,
    escape_component,
    escape_object_key,
    httpdate,
    resolve_address,
)
from s3presign.storage import S3UrlStorage

__all__ = [
    "__version__",
    # Result type
    "Result",
    "Ok",
    "Err",
    # Errors
    "ErrorCode",
    "S3PresignError",
    "ConfigError",
    "InvalidArgument",
    # Config
    "SignerConfig",
    "DEFAULT_EXPIRES_IN",
    "MAX_EXPIRES_IN",
    # Signing
    "AddressingStyle",
    "PresignOptions",
    "ResolvedAddress",
    "SigningKeyCache",
    "UrlBuilder",
    "escape_component",
    "escape_object_key",
    "httpdate",
    "resolve_address",
    # Storage
    "S3UrlStorage",
]
