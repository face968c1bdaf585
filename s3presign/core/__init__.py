"""
Core module: Type definitions, error hierarchy, constants and configuration.
"""

from s3presign.core.types import Result, Ok, Err, Timestamp
from s3presign.core.errors import (
    ErrorCode,
    S3PresignError,
    ConfigError,
    InvalidArgument,
)
from s3presign.core.config import SignerConfig

__all__ = [
    "Result",
    "Ok",
    "Err",
    "Timestamp",
    "ErrorCode",
    "S3PresignError",
    "ConfigError",
    "InvalidArgument",
    "SignerConfig",
]
