from typing import NamedTuple

from s3_latency_bench.constants import (
    DEFAULT_BUCKET,
    DEFAULT_KEY_PREFIX,
    DEFAULT_READ_SIZE,
    DEFAULT_REGION,
    DEFAULT_SAMPLES,
    DEFAULT_WORKERS,
    KEYSPACE_SIZE,
)


class BenchmarkConfig(NamedTuple):
    region: str = DEFAULT_REGION
    bucket: str = DEFAULT_BUCKET
    key_prefix: str = DEFAULT_KEY_PREFIX
    workers: int = DEFAULT_WORKERS
    samples: int = DEFAULT_SAMPLES
    keyspace_size: int = KEYSPACE_SIZE
    read_size: int = DEFAULT_READ_SIZE
    hostname: str | None = None
    protocol: str = "https"
    use_path_style: bool = False

    def validate(self) -> "BenchmarkConfig":
        """
        Check that the numeric settings describe a runnable benchmark.

        Returns:
            self for method chaining

        Raises:
            ValueError: If a count or size is not positive
        """
        for name in ("workers", "samples", "keyspace_size", "read_size"):
            value = getattr(self, name)
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")
        return self


class Measurement(NamedTuple):
    bytes_read: int
    first_byte_ns: int
    last_byte_ns: int


class AggregateSums(NamedTuple):
    sample_count: int
    total_bytes: int
    sum_first_byte_ns: int
    sum_last_byte_ns: int
    total_elapsed_ns: int


class AggregateResult(NamedTuple):
    total_elapsed_s: float
    total_bytes: int
    throughput_mbps: float
    avg_first_byte_ms: float
    avg_last_byte_ms: float


class SeedResult(NamedTuple):
    files: int
    total_bytes: int
    total_time: float
