"""
Signing module: escaping, address resolution, signing keys and the builder.
"""

from s3presign.signing.escape import escape_component, escape_object_key
from s3presign.signing.address import (
    AddressingStyle,
    ResolvedAddress,
    default_host,
    resolve_address,
)
from s3presign.signing.keys import CacheStats, SigningKeyCache, derive_signing_key
from s3presign.signing.httpdate import httpdate
from s3presign.signing.builder import PresignOptions, UrlBuilder, validate_expires_in

__all__ = [
    "escape_component",
    "escape_object_key",
    "AddressingStyle",
    "ResolvedAddress",
    "default_host",
    "resolve_address",
    "CacheStats",
    "SigningKeyCache",
    "derive_signing_key",
    "httpdate",
    "PresignOptions",
    "UrlBuilder",
    "validate_expires_in",
]
