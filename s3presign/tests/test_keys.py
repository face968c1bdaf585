"""
Unit Tests: Signing Key Derivation and Cache

Tests:
    - Derivation matches the documented HMAC chain
    - Cache hits, misses and insertion-ordered eviction
    - Builder-level cache behavior across dates
"""

import hashlib
import hmac
from datetime import datetime, timedelta, timezone

import pytest

from s3presign.core.errors import ConfigError
from s3presign.signing.keys import SigningKeyCache, derive_signing_key


def _chain(secret, datestamp, region):
    key = ("AWS4" + secret).encode("utf-8")
    for msg in (datestamp, region, "s3", "aws4_request"):
        key = hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()
    return key


class TestDeriveSigningKey:
    """Tests for the four-step key derivation."""

    def test_matches_hmac_chain(self):
        key = derive_signing_key("secret", "20240309", "us-east-1")
        assert key == _chain("secret", "20240309", "us-east-1")
        assert len(key) == 32

    def test_depends_on_each_input(self):
        base = derive_signing_key("secret", "20240309", "us-east-1")
        assert derive_signing_key("other", "20240309", "us-east-1") != base
        assert derive_signing_key("secret", "20240310", "us-east-1") != base
        assert derive_signing_key("secret", "20240309", "eu-west-1") != base


class TestSigningKeyCache:
    """Tests for the bounded date cache."""

    @staticmethod
    def _derive(datestamp):
        return derive_signing_key("secret", datestamp, "us-east-1")

    def test_miss_then_hit(self):
        cache = SigningKeyCache()
        calls = []

        def derive(datestamp):
            calls.append(datestamp)
            return self._derive(datestamp)

        first = cache.get_or_derive("20240309", derive)
        second = cache.get_or_derive("20240309", derive)

        assert first == second
        assert calls == ["20240309"]
        assert cache.stats.misses == 1
        assert cache.stats.hits == 1
        assert cache.stats.hit_rate == 0.5

    def test_never_exceeds_capacity(self):
        cache = SigningKeyCache()
        for day in range(1, 13):
            cache.get_or_derive(f"202403{day:02d}", self._derive)
            assert len(cache) <= 5

        assert len(cache) == 5
        assert cache.dates() == tuple(f"202403{day:02d}" for day in range(8, 13))
        assert cache.stats.evictions == 7

    def test_eviction_ignores_recency(self):
        cache = SigningKeyCache()
        dates = [f"2024030{day}" for day in range(1, 6)]
        for datestamp in dates:
            cache.get_or_derive(datestamp, self._derive)

        # Re-reading the oldest entry does not protect it
        cache.get_or_derive("20240301", self._derive)
        cache.get_or_derive("20240306", self._derive)

        assert "20240301" not in cache
        assert "20240302" in cache
        assert cache.dates() == ("20240302", "20240303", "20240304", "20240305", "20240306")

    def test_custom_capacity(self):
        cache = SigningKeyCache(capacity=2)
        for datestamp in ("20240301", "20240302", "20240303"):
            cache.get_or_derive(datestamp, self._derive)
        assert cache.capacity == 2
        assert cache.dates() == ("20240302", "20240303")

    def test_invalid_capacity(self):
        with pytest.raises(ConfigError):
            SigningKeyCache(capacity=0)

    def test_lookup_does_not_insert(self):
        cache = SigningKeyCache()
        assert cache.lookup("20240309") is None
        assert len(cache) == 0


class TestBuilderCache:
    """Tests for the cache as used by UrlBuilder."""

    def test_disabled_by_default(self, builder):
        assert builder.signing_key_cache is None

    def test_same_day_reuses_key(self, make_builder, fixed_time):
        cached = make_builder(cache_signing_keys=True)
        plain = make_builder()

        later = fixed_time + timedelta(hours=3)
        for at in (fixed_time, later):
            assert cached.presigned_url("a.jpg", time=at) == plain.presigned_url("a.jpg", time=at)

        cache = cached.signing_key_cache
        assert cache.dates() == ("20240309",)
        assert cache.stats.misses == 1
        assert cache.stats.hits == 1

    def test_bounded_across_many_dates(self, make_builder):
        cached = make_builder(cache_signing_keys=True)
        start = datetime(2024, 1, 1, 12, tzinfo=timezone.utc)
        for offset in range(20):
            cached.presigned_url("a.jpg", time=start + timedelta(days=offset))
            assert len(cached.signing_key_cache) <= 5
        assert cached.signing_key_cache.dates()[-1] == "20240120"
