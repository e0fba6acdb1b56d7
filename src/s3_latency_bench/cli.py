import logging
import sys

from s3_latency_bench.constants import MODE_DOWNLOAD, MODE_SEED
from s3_latency_bench.errors import BenchmarkError
from s3_latency_bench.main import print_results, run_download_benchmark, run_seed
from s3_latency_bench.parsing import build_configs, parse_arguments
from s3_latency_bench.utils import CredentialManager, format_size

logger = logging.getLogger(__name__)


def configure_logging(debug: bool):
    # Diagnostics go to stderr so stdout only carries the report
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def cli(argv=None):
    """Main entry point for the benchmark tool."""
    # Parse command line arguments
    args = parse_arguments(argv)
    configure_logging(args.debug)

    # Collect AWS credentials
    credentials = CredentialManager(session_token=args.session_token)
    if args.ask_credentials:
        credentials.collect_credentials()
    session = credentials.get_boto_session(args.region)

    try:
        if args.mode == MODE_DOWNLOAD:
            await download(args, session)
        elif args.mode == MODE_SEED:
            await seed(args, session)
    except BenchmarkError as e:
        print(f"\nError: {e}", file=sys.stderr)
        sys.exit(1)


async def download(args, session):
    """Run the download benchmark once per requested worker count."""
    benchmark_results = []

    for config in build_configs(args):
        logger.info(
            "Benchmarking download: %d workers, %d samples", config.workers, config.samples
        )
        result = await run_download_benchmark(session, config)
        benchmark_results.append(result)

    # Print results once every run has succeeded
    print_results(benchmark_results)


async def seed(args, session):
    """Upload the test objects the download benchmark reads."""
    config = build_configs(args)[0]
    logger.info(
        "Uploading %d objects of %s to s3://%s/%s-*",
        args.num_files,
        format_size(args.file_size_bytes),
        config.bucket,
        config.key_prefix,
    )

    result = await run_seed(session, config, args.num_files, args.file_size_bytes)

    print(
        f"Uploaded {result.files} objects, {format_size(result.total_bytes)} "
        f"in {result.total_time:.2f} seconds"
    )
