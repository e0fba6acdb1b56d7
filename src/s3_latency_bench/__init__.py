"""S3 GET latency and throughput benchmark tool."""

import asyncio
import sys

from s3_latency_bench.cli import cli
from s3_latency_bench.errors import BenchmarkError, RetrievalError, StreamReadError
from s3_latency_bench.harness import BenchmarkHarness
from s3_latency_bench.structs import AggregateResult, BenchmarkConfig

__all__ = [
    "AggregateResult",
    "BenchmarkConfig",
    "BenchmarkError",
    "BenchmarkHarness",
    "RetrievalError",
    "StreamReadError",
    "main",
]


def main(argv=None):
    """Console entry point; diagnostics go to stderr so stdout only holds the report."""
    try:
        asyncio.run(cli(argv))
    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)
