#!/usr/bin/env python3
"""
s3presign CLI Entrypoint

Commands:
    s3presign public KEY     Print the unsigned URL for KEY
    s3presign presign KEY    Print a presigned GET URL for KEY

Signer configuration comes from S3PRESIGN_* environment variables
(see SignerConfig.from_env); flags override them.

Usage:
    S3PRESIGN_BUCKET=my-bucket S3PRESIGN_REGION=us-east-1 \\
    S3PRESIGN_ACCESS_KEY_ID=... S3PRESIGN_SECRET_ACCESS_KEY=... \\
        python -m s3presign presign some/file.jpg --expires-in 3600
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from s3presign import __version__
from s3presign.core.config import SignerConfig
from s3presign.core.errors import S3PresignError
from s3presign.observability.logging import LogLevel, StructuredLogger, setup_logging
from s3presign.signing.builder import PresignOptions, UrlBuilder

logger = StructuredLogger("s3presign.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="s3presign",
        description="Generate public and presigned S3 GET URLs",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--env-prefix",
        default="S3PRESIGN",
        help="Environment variable prefix (default: S3PRESIGN)",
    )
    parser.add_argument("--bucket", help="Bucket name")
    parser.add_argument("--region", help="Region code")
    address = parser.add_mutually_exclusive_group()
    address.add_argument("--host", help="Explicit host (https, used verbatim)")
    address.add_argument("--endpoint", help="Endpoint URL of an S3-compatible service")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=[level.name for level in LogLevel],
        help="Log level (default: WARNING)",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON lines",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    public_parser = subparsers.add_parser("public", help="Print the unsigned URL")
    public_parser.add_argument("key", help="Object key")

    presign_parser = subparsers.add_parser("presign", help="Print a presigned GET URL")
    presign_parser.add_argument("key", help="Object key")
    presign_parser.add_argument(
        "--expires-in",
        type=int,
        default=None,
        help="Validity in seconds (default: 900, max: 604800)",
    )
    presign_parser.add_argument(
        "--time",
        type=datetime.fromisoformat,
        default=None,
        help="Signing time, ISO-8601 (default: now, naive values are UTC)",
    )
    presign_parser.add_argument("--response-cache-control")
    presign_parser.add_argument("--response-content-disposition")
    presign_parser.add_argument("--response-content-encoding")
    presign_parser.add_argument("--response-content-language")
    presign_parser.add_argument("--response-content-type")
    presign_parser.add_argument("--response-expires", help="Any parseable date")
    presign_parser.add_argument("--version-id")

    return parser


def _presign_options(args: argparse.Namespace) -> PresignOptions:
    options = PresignOptions(
        time=args.time,
        response_cache_control=args.response_cache_control,
        response_content_disposition=args.response_content_disposition,
        response_content_encoding=args.response_content_encoding,
        response_content_language=args.response_content_language,
        response_content_type=args.response_content_type,
        response_expires=args.response_expires,
        version_id=args.version_id,
    )
    if args.expires_in is not None:
        options = replace(options, expires_in=args.expires_in)
    return options


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entrypoint. Returns the process exit code."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    setup_logging(LogLevel.parse(args.log_level), json_output=args.json_logs)

    config_result = SignerConfig.from_env(
        args.env_prefix,
        bucket_name=args.bucket,
        region=args.region,
        host=args.host,
        endpoint=args.endpoint,
    )
    if config_result.is_err():
        print(config_result.error, file=sys.stderr)
        return 1

    config = config_result.unwrap()
    with logger.context(bucket=config.bucket_name, command=args.command):
        try:
            builder = UrlBuilder.from_config(config)
            if args.command == "public":
                url = builder.public_url(args.key)
            else:
                url = builder.sign(args.key, _presign_options(args))
        except S3PresignError as e:
            logger.error("URL generation failed", error_id=e.error_id, code=e.code.name)
            print(e.message, file=sys.stderr)
            return 1

    print(url)
    return 0


if __name__ == "__main__":
    sys.exit(main())
