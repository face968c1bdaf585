"""
Signing Key Derivation and Cache

SigV4 signing keys come from a four-step HMAC-SHA256 chain:

    kDate    = HMAC("AWS4" + secret, datestamp)
    kRegion  = HMAC(kDate, region)
    kService = HMAC(kRegion, "s3")
    kSigning = HMAC(kService, "aws4_request")

The result depends only on (secret, datestamp, region), so a signer that
presigns many URLs on the same day can keep it. SigningKeyCache holds at
most SIGNING_KEY_CACHE_SIZE dates.

Eviction Policy:
----------------
Insertion order (FIFO). A cache hit does not move the entry; once the map
grows past capacity, the oldest-inserted dates are dropped until it is back
at capacity. Same-day batch signing hits a single entry, so recency tracking
would buy nothing there.

Thread Safety:
--------------
SigningKeyCache is NOT safe for unsynchronized concurrent use: lookup,
derive, insert and evict are separate steps. Share a cached signer across
threads only behind one lock, or give each thread its own signer. Signers
without a cache hold no mutable state and need no locking.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from s3presign.core.constants import (
    KEY_PREFIX,
    SERVICE,
    SIGNING_KEY_CACHE_SIZE,
    TERMINATOR,
)
from s3presign.core.errors import ConfigError

logger = logging.getLogger(__name__)


def hmac_sha256(key: bytes, msg: str) -> bytes:
    """Raw HMAC-SHA256 digest of a UTF-8 message."""
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(
    secret_access_key: str,
    datestamp: str,
    region: str,
    service: str = SERVICE,
) -> bytes:
    """
    Derive the 32-byte SigV4 signing key.

    Args:
        secret_access_key: Secret key of the signing credentials.
        datestamp: Calendar date as YYYYMMDD.
        region: Region code of the credential scope.
        service: Service name of the credential scope.
    """
    k_date = hmac_sha256((KEY_PREFIX + secret_access_key).encode("utf-8"), datestamp)
    k_region = hmac_sha256(k_date, region)
    k_service = hmac_sha256(k_region, service)
    return hmac_sha256(k_service, TERMINATOR)


# =============================================================================
# CACHE STATISTICS
# =============================================================================
@dataclass(slots=True)
class CacheStats:
    """Signing key cache counters."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total


# =============================================================================
# SIGNING KEY CACHE
# =============================================================================
class SigningKeyCache:
    """
    Bounded date -> signing key map with insertion-ordered eviction.

    Owned by exactly one signer; entries are added lazily on the first
    presign for a date and never cleared explicitly.

    Example:
        >>> cache = SigningKeyCache()
        >>> key = cache.get_or_derive("20240101", lambda d: derive(d))
    """

    __slots__ = ("_capacity", "_entries", "_stats")

    def __init__(self, capacity: int = SIGNING_KEY_CACHE_SIZE) -> None:
        if capacity < 1:
            raise ConfigError.invalid_value("capacity", capacity, "must be >= 1")
        self._capacity = capacity
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._stats = CacheStats()

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def stats(self) -> CacheStats:
        return self._stats

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, datestamp: object) -> bool:
        return datestamp in self._entries

    def dates(self) -> tuple[str, ...]:
        """Stored dates, oldest insertion first (next to be evicted)."""
        return tuple(self._entries)

    def lookup(self, datestamp: str) -> Optional[bytes]:
        """Return the stored key without changing eviction order."""
        key = self._entries.get(datestamp)
        if key is None:
            self._stats.misses += 1
        else:
            self._stats.hits += 1
        return key

    def store(self, datestamp: str, signing_key: bytes) -> None:
        """Insert a key, then evict oldest insertions down to capacity."""
        self._entries[datestamp] = signing_key
        while len(self._entries) > self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            self._stats.evictions += 1
            logger.debug(f"Evicted signing key for {evicted}")

    def get_or_derive(
        self,
        datestamp: str,
        derive: Callable[[str], bytes],
    ) -> bytes:
        """Return the cached key for a date, deriving and storing on miss."""
        key = self.lookup(datestamp)
        if key is None:
            key = derive(datestamp)
            self.store(datestamp, key)
        return key
