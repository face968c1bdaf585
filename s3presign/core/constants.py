"""
Constants for S3 URL Generation

All protocol literals and validation limits centralized here. The expiry
limits participate in the presign validation contract, so they are exposed
as named constants rather than buried in the builder.
"""

from typing import Final

# =============================================================================
# TIME UNITS
# =============================================================================
MINUTE_S: Final[int] = 60
HOUR_S: Final[int] = 60 * MINUTE_S
DAY_S: Final[int] = 24 * HOUR_S
WEEK_S: Final[int] = 7 * DAY_S

# =============================================================================
# PRESIGN EXPIRY
# =============================================================================
DEFAULT_EXPIRES_IN: Final[int] = 15 * MINUTE_S
MAX_EXPIRES_IN: Final[int] = WEEK_S

# =============================================================================
# SIGV4 PROTOCOL LITERALS
# =============================================================================
ALGORITHM: Final[str] = "AWS4-HMAC-SHA256"
SERVICE: Final[str] = "s3"
TERMINATOR: Final[str] = "aws4_request"
KEY_PREFIX: Final[str] = "AWS4"
METHOD: Final[str] = "GET"
SIGNED_HEADERS: Final[str] = "host"
UNSIGNED_PAYLOAD: Final[str] = "UNSIGNED-PAYLOAD"

# str.format template over year..second, year zero-padded to four digits
AMZ_DATE_FORMAT: Final[str] = "{0:04d}{1:02d}{2:02d}T{3:02d}{4:02d}{5:02d}Z"

# =============================================================================
# SIGNING KEY CACHE
# =============================================================================
SIGNING_KEY_CACHE_SIZE: Final[int] = 5

# =============================================================================
# ADDRESSING
# =============================================================================
# S3 still serves this region from the host without a region segment
LEGACY_GLOBAL_REGION: Final[str] = "us-east-1"
DEFAULT_SCHEME: Final[str] = "https"
DEFAULT_PORTS: Final[dict[str, int]] = {"http": 80, "https": 443}

# =============================================================================
# RESPONSE HEADER OVERRIDES
# =============================================================================
# (keyword argument, query parameter name)
RESPONSE_OVERRIDES: Final[tuple[tuple[str, str], ...]] = (
    ("response_cache_control", "response-cache-control"),
    ("response_content_disposition", "response-content-disposition"),
    ("response_content_encoding", "response-content-encoding"),
    ("response_content_language", "response-content-language"),
    ("response_content_type", "response-content-type"),
)
RESPONSE_EXPIRES_PARAM: Final[str] = "response-expires"
VERSION_ID_PARAM: Final[str] = "versionId"
