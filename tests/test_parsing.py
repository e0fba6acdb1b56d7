"""Tests for command line parsing and configuration."""

import pytest

from s3_latency_bench.constants import KEYSPACE_SIZE
from s3_latency_bench.parsing import build_configs, parse_arguments
from s3_latency_bench.structs import BenchmarkConfig


class TestParseArguments:
    """Tests for parse_arguments()."""

    def test_defaults(self):
        args = parse_arguments(["download"])

        assert args.region == "us-east-1"
        assert args.bucket == "abk-test-rusoto-download"
        assert args.key_prefix == "test-object-8388608"
        assert args.workers == [3]
        assert args.samples == 10
        assert args.read_size_bytes == 65536
        assert args.num_files == KEYSPACE_SIZE

    def test_worker_sweep(self):
        args = parse_arguments(["download", "--workers", "1", "5", "10", "--samples", "50"])

        configs = build_configs(args)

        assert [c.workers for c in configs] == [1, 5, 10]
        assert all(c.samples == 50 for c in configs)

    @pytest.mark.parametrize(
        "argv",
        [
            ["download", "--workers", "0"],
            ["download", "--samples", "0"],
            ["download", "--read-size", "big"],
            ["seed", "--file-size", "1TB"],
            ["upload"],
        ],
    )
    def test_invalid_arguments_exit(self, argv):
        with pytest.raises(SystemExit) as excinfo:
            parse_arguments(argv)

        assert excinfo.value.code == 2

    def test_seed_arguments(self):
        args = parse_arguments(["seed", "--num-files", "4", "--file-size", "1MB"])

        assert args.num_files == 4
        assert args.file_size_bytes == 1024 * 1024


class TestBenchmarkConfig:
    """Tests for BenchmarkConfig."""

    def test_is_immutable(self):
        config = BenchmarkConfig()

        with pytest.raises(AttributeError):
            config.workers = 10

    def test_validate_returns_self(self):
        config = BenchmarkConfig(workers=2, samples=4)

        assert config.validate() is config

    @pytest.mark.parametrize("field", ["workers", "samples", "keyspace_size", "read_size"])
    def test_validate_rejects_non_positive(self, field):
        with pytest.raises(ValueError, match=field):
            BenchmarkConfig(**{field: 0}).validate()
