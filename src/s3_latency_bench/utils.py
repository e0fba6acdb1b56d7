import logging
import re
from collections.abc import Callable
from functools import lru_cache

import boto3
from botocore.config import Config

from s3_latency_bench.constants import DEFAULT_REGION, DEFAULT_URL_EXPIRATION

logger = logging.getLogger(__name__)


class CredentialManager:
    """Handle AWS credentials collection and management."""

    def __init__(self, session_token: str | None = None):
        self.access_key = None
        self.secret_key = None
        self.session_token = session_token

    def collect_credentials(self):
        """
        Prompt user for AWS credentials.

        Returns:
            self for method chaining
        """
        print("Enter AWS credentials:")
        self.access_key = input("AWS Access Key ID: ").strip()
        self.secret_key = input("AWS Secret Access Key: ").strip()

        return self

    def get_boto_session(self, region: str = DEFAULT_REGION):
        """
        Create and return a boto3 session.

        Keys that were not collected are left unset so boto3 falls back to
        its default credential chain (environment, config files, roles).

        Returns:
            boto3.Session: Configured boto3 session
        """
        session_kwargs = {"region_name": region}
        if self.access_key and self.secret_key:
            session_kwargs["aws_access_key_id"] = self.access_key
            session_kwargs["aws_secret_access_key"] = self.secret_key
        if self.session_token:
            session_kwargs["aws_session_token"] = self.session_token

        return boto3.Session(**session_kwargs)


def get_s3_client(
    boto_session,
    hostname=None,
    protocol="https",
    region=DEFAULT_REGION,
    use_path_style=False,
) -> boto3.client:
    """
    Create and return a boto3 S3 client with optional custom configuration.

    Args:
        boto_session: boto3.Session object
        hostname: Optional custom S3 server hostname (default: AWS S3)
        protocol: Protocol to use with a custom hostname (http or https)
        region: AWS region or custom region for S3-compatible server
        use_path_style: Whether to use path-style addressing

    Returns:
        boto3 S3 client
    """
    endpoint_url = f"{protocol}://{hostname}" if hostname else None
    logger.info("Endpoint: %s", endpoint_url or "AWS S3")
    logger.info("Region: %s", region)
    logger.info("Path-style addressing: %s", use_path_style)

    s3_client = boto_session.client(
        "s3",
        endpoint_url=endpoint_url,
        region_name=region,
        config=Config(s3={"addressing_style": "path" if use_path_style else "auto"}),
    )

    return s3_client


class PresignedUrlGenerator:
    """Generate pre-signed URLs for whole-object GET and PUT requests."""

    def __init__(self, s3_client: boto3.client, expiration: int = DEFAULT_URL_EXPIRATION):
        self.s3_client = s3_client
        self.expiration = expiration

    def download_url(self, bucket: str, key: str) -> str:
        return self.s3_client.generate_presigned_url(
            "get_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=self.expiration,
        )

    def upload_url(self, bucket: str, key: str) -> str:
        return self.s3_client.generate_presigned_url(
            "put_object",
            Params={"Bucket": bucket, "Key": key},
            ExpiresIn=self.expiration,
        )


def modulo_key_strategy(prefix: str, keyspace_size: int) -> Callable[[int], str]:
    """
    Build the default sample-index to object-key mapping.

    Sample ``i`` maps to ``f"{prefix}-{i % keyspace_size}"`` so that a small
    pool of pre-seeded objects serves any number of samples.

    Args:
        prefix: Common prefix of the test objects
        keyspace_size: Number of distinct test objects

    Returns:
        A pure function from sample index to object key
    """
    if keyspace_size < 1:
        raise ValueError(f"keyspace_size must be at least 1, got {keyspace_size}")

    def key_for(sample: int) -> str:
        return f"{prefix}-{sample % keyspace_size}"

    return key_for


@lru_cache
def generate_content(size) -> bytes:
    """Generate fixed content of the given size for test objects."""
    return b"1" * size


def format_size(size: int) -> str:
    """
    Format size in bytes to human-readable format.

    Args:
        size: Size in bytes

    Returns:
        Formatted size string
    """
    units = ["B", "KB", "MB", "GB", "TB"]
    unit_index = 0

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.2f} {units[unit_index]}"


def parse_size(size_str: str) -> int:
    """
    Parse a size string with optional suffix (KB, MB, GB) to bytes.

    Args:
        size_str: Size string (e.g., "5MB", "10KB", "1GB")

    Returns:
        Size in bytes
    """
    match = re.match(r"^(\d+)([KMG]B)?$", size_str, re.IGNORECASE)
    if not match:
        raise ValueError(
            f"Invalid size format: {size_str}. Expected format: NUMBER[KB|MB|GB]"
        )

    value, unit = match.groups()
    value = int(value)

    if unit:
        unit = unit.upper()
        if unit == "KB":
            value *= 1024
        elif unit == "MB":
            value *= 1024**2
        elif unit == "GB":
            value *= 1024**3

    return value
