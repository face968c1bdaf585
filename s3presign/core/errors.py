"""
Error Hierarchy for S3 URL Generation

Two failure families exist, both fatal and surfaced immediately:
- ConfigError: conflicting or missing construction parameters
- InvalidArgument: per-call values outside their accepted domain

Nothing is retried or recovered internally. Free-form strings (object keys,
response header overrides) are never rejected; they are escaped instead.

Each error carries:
- Unique error code for programmatic handling
- Human-readable message for logging
- Optional cause for root cause analysis
- Timestamp and error id for correlation

Secrets are never placed in messages or context.

Usage:
    try:
        builder = UrlBuilder(bucket_name="b", region="r", ...)
    except ConfigError as e:
        log.error("bad signer config", **e.to_dict())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from s3presign.core.constants import MAX_EXPIRES_IN
from s3presign.core.types import Timestamp


# =============================================================================
# ERROR CODE ENUMERATION
# =============================================================================
class ErrorCode(Enum):
    """
    Unique error codes for programmatic error handling.

    Codes are grouped by subsystem:
    - 1xxx: Configuration errors (construction time)
    - 2xxx: Argument errors (call time)
    """

    # Configuration errors (1xxx)
    CONFIG_CONFLICTING_ADDRESS = 1001
    CONFIG_MISSING_PARAMETER = 1002
    CONFIG_MALFORMED_ENDPOINT = 1003
    CONFIG_UNSUPPORTED_OPTION = 1004
    CONFIG_INVALID_VALUE = 1005

    # Argument errors (2xxx)
    ARGUMENT_EXPIRES_OUT_OF_RANGE = 2001
    ARGUMENT_EXPIRES_NOT_INTEGER = 2002
    ARGUMENT_UNPARSEABLE_DATE = 2003


# =============================================================================
# BASE ERROR CLASS
# =============================================================================
@dataclass
class S3PresignError(Exception):
    """
    Base class for all s3presign errors.

    Provides a unique error id, an error code, a creation timestamp and an
    optional cause. Instances are not mutated after creation.
    """

    code: ErrorCode
    message: str
    error_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: Timestamp = field(default_factory=Timestamp.now)
    cause: Optional[Exception] = None
    context: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize error to dictionary for structured logging."""
        return {
            "error_id": self.error_id,
            "code": self.code.name,
            "code_value": self.code.value,
            "message": self.message,
            "timestamp_nanos": self.timestamp.nanos,
            "context": self.context,
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message} (id={self.error_id[:8]})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"code={self.code.name}, "
            f"message={self.message!r}, "
            f"error_id={self.error_id!r})"
        )


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================
@dataclass(repr=False)
class ConfigError(S3PresignError):
    """
    Invalid signer or storage construction parameters.

    Raised eagerly from constructors; never raised by URL generation.
    """

    @classmethod
    def conflicting_address(cls, host: str, endpoint: str) -> ConfigError:
        """Both an explicit host and an endpoint were supplied."""
        return cls(
            code=ErrorCode.CONFIG_CONFLICTING_ADDRESS,
            message="host and endpoint are mutually exclusive; supply at most one",
            context={"host": host, "endpoint": endpoint},
        )

    @classmethod
    def missing_parameter(cls, name: str) -> ConfigError:
        """A required parameter was absent or empty."""
        return cls(
            code=ErrorCode.CONFIG_MISSING_PARAMETER,
            message=f"Missing required parameter '{name}'",
            context={"parameter": name},
        )

    @classmethod
    def malformed_endpoint(
        cls,
        endpoint: str,
        reason: str,
        cause: Optional[Exception] = None,
    ) -> ConfigError:
        """Endpoint override could not be parsed as an http(s) URL."""
        return cls(
            code=ErrorCode.CONFIG_MALFORMED_ENDPOINT,
            message=f"Malformed endpoint {endpoint!r}: {reason}",
            cause=cause,
            context={"endpoint": endpoint},
        )

    @classmethod
    def unsupported_option(cls, name: str, owner: str) -> ConfigError:
        """An option accepted by similar APIs is not supported here."""
        return cls(
            code=ErrorCode.CONFIG_UNSUPPORTED_OPTION,
            message=f"{owner} does not support the '{name}' option",
            context={"option": name, "owner": owner},
        )

    @classmethod
    def invalid_value(cls, name: str, value: Any, reason: str) -> ConfigError:
        """A parameter was present but unusable."""
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{name}': {reason}",
            context={"parameter": name, "value": repr(value)},
        )


# =============================================================================
# ARGUMENT ERRORS
# =============================================================================
@dataclass(repr=False)
class InvalidArgument(S3PresignError):
    """Per-call argument outside its accepted domain."""

    @classmethod
    def expires_out_of_range(cls, value: int) -> InvalidArgument:
        return cls(
            code=ErrorCode.ARGUMENT_EXPIRES_OUT_OF_RANGE,
            message=(
                f"expires_in must be greater than 0 and at most "
                f"{MAX_EXPIRES_IN} seconds, got {value}"
            ),
            context={"expires_in": value, "max": MAX_EXPIRES_IN},
        )

    @classmethod
    def expires_not_integer(cls, value: Any) -> InvalidArgument:
        return cls(
            code=ErrorCode.ARGUMENT_EXPIRES_NOT_INTEGER,
            message=f"expires_in must be an integer number of seconds, got {value!r}",
            context={"expires_in": repr(value)},
        )

    @classmethod
    def unparseable_date(
        cls,
        value: Any,
        cause: Optional[Exception] = None,
    ) -> InvalidArgument:
        """response_expires could not be interpreted as a point in time."""
        return cls(
            code=ErrorCode.ARGUMENT_UNPARSEABLE_DATE,
            message=f"Cannot interpret {value!r} as an HTTP date",
            cause=cause,
            context={"value": repr(value)},
        )
