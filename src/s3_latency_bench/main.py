#!/usr/bin/env python3
"""
S3 Latency Benchmark Tool

Measures first-byte latency, last-byte latency and aggregate throughput of
whole-object GET requests against S3 or an S3-compatible server, using a fixed
pool of asyncio workers. A seed mode uploads the test objects beforehand.
"""

import logging

import httpx

from s3_latency_bench.download import PresignedObjectRetriever
from s3_latency_bench.harness import BenchmarkHarness
from s3_latency_bench.report import format_header, format_result
from s3_latency_bench.structs import AggregateResult, BenchmarkConfig, SeedResult
from s3_latency_bench.upload import ObjectSeeder
from s3_latency_bench.utils import PresignedUrlGenerator, get_s3_client

logger = logging.getLogger(__name__)


def _client_kwargs(max_connections: int) -> dict:
    # No timeouts: a hung request blocks its worker
    return {
        "timeout": httpx.Timeout(None),
        "follow_redirects": True,
        "limits": httpx.Limits(max_connections=max_connections),
    }


async def run_download_benchmark(boto_session, config: BenchmarkConfig) -> AggregateResult:
    """
    Run a single download benchmark with a specific configuration.

    Args:
        boto_session: boto3 session
        config: BenchmarkConfig for this run

    Returns:
        AggregateResult of the run

    Raises:
        BenchmarkError: If any request or body read fails
    """
    s3_client = get_s3_client(
        boto_session, config.hostname, config.protocol, config.region, config.use_path_style
    )
    url_generator = PresignedUrlGenerator(s3_client)

    async with httpx.AsyncClient(**_client_kwargs(config.workers)) as client:
        retriever = PresignedObjectRetriever(url_generator, client)
        harness = BenchmarkHarness(config, retriever)
        return await harness.run()


async def run_seed(
    boto_session, config: BenchmarkConfig, num_files: int, file_size: int
) -> SeedResult:
    """
    Upload the test objects for the download benchmark.

    Args:
        boto_session: boto3 session
        config: BenchmarkConfig naming the endpoint, bucket and key prefix
        num_files: Number of objects to upload
        file_size: Size of each object in bytes

    Returns:
        SeedResult of the upload
    """
    s3_client = get_s3_client(
        boto_session, config.hostname, config.protocol, config.region, config.use_path_style
    )
    url_generator = PresignedUrlGenerator(s3_client)

    async with httpx.AsyncClient(**_client_kwargs(config.workers)) as client:
        seeder = ObjectSeeder(
            url_generator=url_generator, client=client, max_concurrent=config.workers
        )
        return await seeder.seed(config.bucket, config.key_prefix, num_files, file_size)


def print_results(results: list[AggregateResult]):
    """
    Print the report header once, then one line per benchmark run.

    Args:
        results: AggregateResults in run order
    """
    print(format_header())
    for result in results:
        print(format_result(result))
