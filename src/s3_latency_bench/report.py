from s3_latency_bench.constants import BYTES_PER_MB, NS_PER_MS, NS_PER_S, REPORT_HEADER
from s3_latency_bench.structs import AggregateResult, AggregateSums


def summarize(sums: AggregateSums) -> AggregateResult:
    """
    Derive throughput and average latencies from the aggregated sums.

    Args:
        sums: AggregateSums collected over all samples

    Returns:
        AggregateResult
    """
    total_elapsed_s = sums.total_elapsed_ns / NS_PER_S
    if total_elapsed_s > 0:
        throughput_mbps = sums.total_bytes / total_elapsed_s / BYTES_PER_MB
    else:
        throughput_mbps = 0.0

    return AggregateResult(
        total_elapsed_s=total_elapsed_s,
        total_bytes=sums.total_bytes,
        throughput_mbps=throughput_mbps,
        avg_first_byte_ms=sums.sum_first_byte_ns / sums.sample_count / NS_PER_MS,
        avg_last_byte_ms=sums.sum_last_byte_ns / sums.sample_count / NS_PER_MS,
    )


def format_header() -> str:
    return REPORT_HEADER


def format_result(result: AggregateResult) -> str:
    """Render one result line matching the columns of the header."""
    return (
        f"{result.total_elapsed_s:9.4f} s, "
        f"{result.total_bytes} B, "
        f"{result.throughput_mbps:6.1f} MB/s, "
        f"{result.avg_first_byte_ms:5.0f} ms, "
        f"{result.avg_last_byte_ms:5.0f} ms"
    )
