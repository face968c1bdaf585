"""
Bucket Address Resolution

Turns (bucket, region, host override, endpoint override) into the concrete
scheme, host, optional port and path prefix every URL is built from.

Precedence:
-----------
| Input          | Scheme        | Host                        | Path prefix |
|----------------|---------------|-----------------------------|-------------|
| host           | https         | host, verbatim              | ""          |
| endpoint (IP)  | from endpoint | endpoint host               | "/{bucket}" |
| endpoint       | from endpoint | "{bucket}.{endpoint host}"  | ""          |
| neither        | https         | "{bucket}.s3[.{region}].amazonaws.com" | "" |

The port is kept only when it differs from the scheme's default. Any path,
query or fragment on the endpoint is ignored.

Resolution happens once, at builder construction.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urlsplit

from s3presign.core.constants import (
    DEFAULT_PORTS,
    DEFAULT_SCHEME,
    LEGACY_GLOBAL_REGION,
)
from s3presign.core.errors import ConfigError


class AddressingStyle(Enum):
    """How the bucket is encoded in the URL."""
    DEFAULT = "default"   # AWS virtual-hosted host derived from region
    HOST = "host"         # explicit host, used verbatim
    VIRTUAL = "virtual"   # bucket as subdomain of endpoint host
    PATH = "path"         # bucket as first path segment


@dataclass(frozen=True, slots=True)
class ResolvedAddress:
    """
    Fixed address components for one bucket.

    Attributes:
        scheme: "http" or "https".
        host: Host name; IPv6 literals are kept in brackets.
        port: Explicit port, None when it is the scheme default.
        path_prefix: "" or "/{bucket}" for path-style addressing.
        style: Which precedence rule produced this address.
    """
    scheme: str
    host: str
    port: Optional[int] = None
    path_prefix: str = ""
    style: AddressingStyle = AddressingStyle.DEFAULT

    @property
    def authority(self) -> str:
        """host, or host:port when a non-default port is recorded."""
        if self.port is None:
            return self.host
        return f"{self.host}:{self.port}"

    @property
    def base_url(self) -> str:
        """Everything before the "/" that starts the object key."""
        return f"{self.scheme}://{self.authority}{self.path_prefix}"


def default_host(bucket_name: str, region: str) -> str:
    """AWS host for a bucket in virtual-hosted style."""
    if region == LEGACY_GLOBAL_REGION:
        return f"{bucket_name}.s3.amazonaws.com"
    return f"{bucket_name}.s3.{region}.amazonaws.com"


def resolve_address(
    bucket_name: str,
    region: str,
    host: Optional[str] = None,
    endpoint: Optional[str] = None,
) -> ResolvedAddress:
    """
    Resolve the address for a bucket.

    Raises:
        ConfigError: Both host and endpoint given, or endpoint malformed.
    """
    if host and endpoint:
        raise ConfigError.conflicting_address(host, endpoint)

    if host:
        return ResolvedAddress(
            scheme=DEFAULT_SCHEME,
            host=host,
            style=AddressingStyle.HOST,
        )

    if endpoint:
        return _resolve_endpoint(bucket_name, endpoint)

    return ResolvedAddress(
        scheme=DEFAULT_SCHEME,
        host=default_host(bucket_name, region),
        style=AddressingStyle.DEFAULT,
    )


def _resolve_endpoint(bucket_name: str, endpoint: str) -> ResolvedAddress:
    try:
        parts = urlsplit(endpoint)
        port = parts.port
    except ValueError as e:
        raise ConfigError.malformed_endpoint(endpoint, str(e), cause=e) from e

    scheme = parts.scheme
    if scheme not in DEFAULT_PORTS:
        raise ConfigError.malformed_endpoint(endpoint, "scheme must be http or https")

    hostname = parts.hostname
    if not hostname:
        raise ConfigError.malformed_endpoint(endpoint, "no host component")

    if port == DEFAULT_PORTS[scheme]:
        port = None

    if _is_ip_literal(hostname):
        if ":" in hostname:
            hostname = f"[{hostname}]"
        return ResolvedAddress(
            scheme=scheme,
            host=hostname,
            port=port,
            path_prefix=f"/{bucket_name}",
            style=AddressingStyle.PATH,
        )

    return ResolvedAddress(
        scheme=scheme,
        host=f"{bucket_name}.{hostname}",
        port=port,
        style=AddressingStyle.VIRTUAL,
    )


def _is_ip_literal(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        return False
    return True
