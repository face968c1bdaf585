"""
Benchmark: URL Generation Throughput

Measures:
    1. public_url
    2. presigned_url, plain and with response overrides
    3. presigned_url with the signing key cache enabled
    4. a new UrlBuilder per presign

Usage:
    python -m s3presign.examples.benchmark --iterations 50000
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from typing import Callable

from s3presign.signing.builder import UrlBuilder

ACCESS_KEY_ID = "fakeExampleAccessKeyId"
SECRET_ACCESS_KEY = "fakeExampleSecretAccessKey"
BUCKET_NAME = "my-bucket"
OBJECT_KEY = "some/directory/file.jpg"
REGION = "us-east-1"

OVERRIDES = {
    "response_content_type": "image/jpeg",
    "response_content_disposition": "attachment; filename=\"foo bar.baz\"; filename*=UTF-8''foo%20bar.baz",
}


@dataclass
class BenchmarkResult:
    """Timing for one scenario."""
    name: str
    iterations: int
    elapsed_s: float

    @property
    def ops_per_second(self) -> float:
        if self.iterations == 0:
            return 0.0
        if self.elapsed_s == 0:
            return float("inf")
        return self.iterations / self.elapsed_s

    @property
    def micros_per_op(self) -> float:
        if self.iterations == 0:
            return 0.0
        return self.elapsed_s * 1_000_000 / self.iterations


def _new_builder(cache_signing_keys: bool = False) -> UrlBuilder:
    return UrlBuilder(
        bucket_name=BUCKET_NAME,
        region=REGION,
        access_key_id=ACCESS_KEY_ID,
        secret_access_key=SECRET_ACCESS_KEY,
        cache_signing_keys=cache_signing_keys,
    )


def _time(name: str, iterations: int, fn: Callable[[], object]) -> BenchmarkResult:
    for _ in range(min(iterations, 1000)):
        fn()
    start = time.perf_counter()
    for _ in range(iterations):
        fn()
    return BenchmarkResult(name, iterations, time.perf_counter() - start)


def run(iterations: int) -> list[BenchmarkResult]:
    builder = _new_builder()
    cached = _new_builder(cache_signing_keys=True)
    return [
        _time("public_url", iterations, lambda: builder.public_url(OBJECT_KEY)),
        _time("presigned_url", iterations, lambda: builder.presigned_url(OBJECT_KEY)),
        _time(
            "presigned_url with overrides",
            iterations,
            lambda: builder.presigned_url(OBJECT_KEY, **OVERRIDES),
        ),
        _time(
            "presigned_url, cached signing key",
            iterations,
            lambda: cached.presigned_url(OBJECT_KEY),
        ),
        _time(
            "new UrlBuilder each time",
            iterations,
            lambda: _new_builder().presigned_url(OBJECT_KEY),
        ),
    ]


def main() -> None:
    parser = argparse.ArgumentParser(description="s3presign throughput benchmark")
    parser.add_argument("--iterations", "-n", type=int, default=50_000)
    args = parser.parse_args()

    print(f"{'scenario':<36} {'ops/s':>12} {'us/op':>8}")
    for result in run(args.iterations):
        print(f"{result.name:<36} {result.ops_per_second:>12,.0f} {result.micros_per_op:>8.2f}")


if __name__ == "__main__":
    main()
