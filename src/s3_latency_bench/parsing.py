import argparse

from s3_latency_bench.constants import (
    DEFAULT_BUCKET,
    DEFAULT_KEY_PREFIX,
    DEFAULT_REGION,
    DEFAULT_SAMPLES,
    DEFAULT_SEED_FILE_SIZE,
    DEFAULT_WORKERS,
    KEYSPACE_SIZE,
    MODE_DOWNLOAD,
    MODE_SEED,
)
from s3_latency_bench.structs import BenchmarkConfig
from s3_latency_bench.utils import parse_size


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Benchmark first-byte/last-byte latency and throughput of S3 GET requests."
    )

    # Mode selection
    parser.add_argument(
        "mode",
        choices=[MODE_DOWNLOAD, MODE_SEED],
        help="Operation mode: download (benchmark) or seed (upload test objects)",
    )

    # Object location
    parser.add_argument("--bucket", default=DEFAULT_BUCKET, help="S3 bucket name")
    parser.add_argument(
        "--key-prefix",
        default=DEFAULT_KEY_PREFIX,
        help=f"Common prefix of the test objects (default: {DEFAULT_KEY_PREFIX})",
    )

    # Download mode arguments
    download_group = parser.add_argument_group("Download mode arguments")
    download_group.add_argument(
        "--workers",
        type=int,
        nargs="+",
        default=[DEFAULT_WORKERS],
        help=f"Worker counts to benchmark, one run each (e.g., '1 5 10'). Default: {DEFAULT_WORKERS}",
    )
    download_group.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Number of downloads per run. Default: {DEFAULT_SAMPLES}",
    )
    download_group.add_argument(
        "--read-size",
        type=str,
        default="64KB",
        help="Size of each body read call. Accepts suffixes KB, MB, GB.",
    )

    # Seed mode arguments
    seed_group = parser.add_argument_group("Seed mode arguments")
    seed_group.add_argument(
        "--num-files",
        type=int,
        default=KEYSPACE_SIZE,
        help=f"Number of test objects to upload. Default: {KEYSPACE_SIZE}",
    )
    seed_group.add_argument(
        "--file-size",
        type=str,
        default=DEFAULT_SEED_FILE_SIZE,
        help="Size of each test object (e.g., '8MB'). Accepts suffixes KB, MB, GB.",
    )

    parser.add_argument(
        "--hostname", type=str, help="Custom S3 server hostname (default: AWS S3)"
    )

    parser.add_argument(
        "--protocol",
        type=str,
        default="https",
        choices=["http", "https"],
        help="Protocol to use with custom hostname (default: https)",
    )

    parser.add_argument(
        "--region",
        type=str,
        default=DEFAULT_REGION,
        help=f"AWS region or custom region for S3-compatible server (default: {DEFAULT_REGION})",
    )

    parser.add_argument(
        "--use-path-style",
        action="store_true",
        help="Use path-style addressing instead of virtual-hosted style",
    )

    parser.add_argument("--debug", action="store_true", help="Enable debug output")

    parser.add_argument(
        "--ask-credentials",
        action="store_true",
        help="Prompt for AWS keys instead of using the default credential chain",
    )

    parser.add_argument(
        "--session-token", type=str, help="AWS session token for authentication"
    )

    return parser


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if any(workers < 1 for workers in args.workers):
        parser.error("--workers values must be at least 1")
    if args.samples < 1:
        parser.error("--samples must be at least 1")
    if args.num_files < 1:
        parser.error("--num-files must be at least 1")

    try:
        args.read_size_bytes = parse_size(args.read_size)
        args.file_size_bytes = parse_size(args.file_size)
    except ValueError as e:
        parser.error(str(e))

    if args.read_size_bytes < 1:
        parser.error("--read-size must be at least 1 byte")

    return args


def build_configs(args) -> list[BenchmarkConfig]:
    """
    Build one immutable BenchmarkConfig per requested worker count.

    Args:
        args: Parsed command line arguments

    Returns:
        List of validated BenchmarkConfig values, in the order given
    """
    return [
        BenchmarkConfig(
            region=args.region,
            bucket=args.bucket,
            key_prefix=args.key_prefix,
            workers=workers,
            samples=args.samples,
            read_size=args.read_size_bytes,
            hostname=args.hostname,
            protocol=args.protocol,
            use_path_style=args.use_path_style,
        ).validate()
        for workers in args.workers
    ]
