"""
Worker-pool engine of the download benchmark.

A dispatcher feeds sample indices into a task queue bounded by the worker
count, a fixed pool of workers turns each index into one timed GET, and the
aggregator sums the resulting measurements from an unbounded result queue.
"""

import asyncio
import logging
import time
from collections.abc import Callable

from s3_latency_bench.errors import StreamReadError
from s3_latency_bench.report import summarize
from s3_latency_bench.structs import (
    AggregateResult,
    AggregateSums,
    BenchmarkConfig,
    Measurement,
)
from s3_latency_bench.utils import modulo_key_strategy

logger = logging.getLogger(__name__)


async def submit_samples(tasks: asyncio.Queue, sample_count: int, worker_count: int):
    """
    Push sample indices ``1..sample_count`` and then close the queue.

    ``put`` blocks while the queue is full. The queue is closed by pushing one
    ``None`` sentinel per worker.
    """
    for sample in range(1, sample_count + 1):
        await tasks.put(sample)
    for _ in range(worker_count):
        await tasks.put(None)
    logger.debug("Submitted %d samples", sample_count)


class Worker:
    """Turn sample indices into timed whole-object downloads."""

    def __init__(
        self,
        worker_id: int,
        retriever,
        bucket: str,
        key_strategy: Callable[[int], str],
        read_size: int,
        clock: Callable[[], int] = time.perf_counter_ns,
    ):
        self.worker_id = worker_id
        self.retriever = retriever
        self.bucket = bucket
        self.key_strategy = key_strategy
        self.read_size = read_size
        self.clock = clock

    async def measure(self, sample: int) -> Measurement:
        """
        Download the object for one sample and time it.

        Raises:
            RetrievalError: If the GET request fails
            StreamReadError: If the body cannot be drained, or its length
                differs from the declared content length
        """
        key = self.key_strategy(sample)
        start = self.clock()

        stream = await self.retriever.retrieve(self.bucket, key)
        first_byte_ns = self.clock() - start

        bytes_read = 0
        try:
            while chunk := await stream.read(self.read_size):
                bytes_read += len(chunk)
        finally:
            await stream.aclose()

        last_byte_ns = self.clock() - start

        if bytes_read != stream.content_length:
            raise StreamReadError(
                f"Error reading body of {key}: expected {stream.content_length} bytes, "
                f"read {bytes_read}"
            )

        return Measurement(
            bytes_read=bytes_read,
            first_byte_ns=first_byte_ns,
            last_byte_ns=last_byte_ns,
        )

    async def run(self, tasks: asyncio.Queue, results: asyncio.Queue):
        """Process samples until the sentinel arrives; forward any failure as a result."""
        while (sample := await tasks.get()) is not None:
            try:
                measurement = await self.measure(sample)
            except Exception as exc:
                logger.debug("Worker %d failed on sample %d: %s", self.worker_id, sample, exc)
                await results.put(exc)
                return
            await results.put(measurement)


async def collect_results(
    results: asyncio.Queue,
    sample_count: int,
    started_ns: int,
    clock: Callable[[], int] = time.perf_counter_ns,
) -> AggregateSums:
    """
    Sum exactly ``sample_count`` measurements.

    Args:
        results: Queue receiving Measurements or worker exceptions
        sample_count: Number of measurements to wait for
        started_ns: Clock reading taken when dispatching started
        clock: Nanosecond clock, same source as ``started_ns``

    Returns:
        AggregateSums, with the elapsed time taken at the last measurement

    Raises:
        BenchmarkError: The first error forwarded by a worker
    """
    total_bytes = 0
    sum_first_byte_ns = 0
    sum_last_byte_ns = 0

    for _ in range(sample_count):
        item = await results.get()
        if isinstance(item, BaseException):
            raise item
        total_bytes += item.bytes_read
        sum_first_byte_ns += item.first_byte_ns
        sum_last_byte_ns += item.last_byte_ns

    return AggregateSums(
        sample_count=sample_count,
        total_bytes=total_bytes,
        sum_first_byte_ns=sum_first_byte_ns,
        sum_last_byte_ns=sum_last_byte_ns,
        total_elapsed_ns=clock() - started_ns,
    )


class BenchmarkHarness:
    """Run the download benchmark for one immutable configuration."""

    def __init__(
        self,
        config: BenchmarkConfig,
        retriever,
        key_strategy: Callable[[int], str] | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ):
        """
        Initialize the harness.

        Args:
            config: Validated BenchmarkConfig
            retriever: Object with ``async retrieve(bucket, key)`` returning a
                stream with ``content_length``, ``read(size)`` and ``aclose()``
            key_strategy: Maps a sample index to an object key (default:
                ``prefix-(i % keyspace_size)``)
            clock: Nanosecond clock used for all timings
        """
        self.config = config.validate()
        self.retriever = retriever
        self.key_strategy = key_strategy or modulo_key_strategy(
            config.key_prefix, config.keyspace_size
        )
        self.clock = clock

    async def collect(self) -> AggregateSums:
        """Run every sample and return the raw sums."""
        config = self.config
        tasks = asyncio.Queue(maxsize=config.workers)
        results = asyncio.Queue()

        workers = [
            Worker(
                worker_id,
                self.retriever,
                config.bucket,
                self.key_strategy,
                config.read_size,
                self.clock,
            )
            for worker_id in range(1, config.workers + 1)
        ]
        logger.info(
            "Downloading %d samples from s3://%s/%s-* with %d workers",
            config.samples,
            config.bucket,
            config.key_prefix,
            config.workers,
        )

        started_ns = self.clock()
        running = [
            asyncio.create_task(worker.run(tasks, results)) for worker in workers
        ]
        running.append(
            asyncio.create_task(submit_samples(tasks, config.samples, config.workers))
        )

        try:
            return await collect_results(results, config.samples, started_ns, self.clock)
        finally:
            for task in running:
                task.cancel()
            await asyncio.gather(*running, return_exceptions=True)

    async def run(self) -> AggregateResult:
        """
        Run the benchmark.

        Returns:
            AggregateResult for all samples

        Raises:
            BenchmarkError: If any retrieval or body read fails; no partial
                result is produced
        """
        return summarize(await self.collect())
