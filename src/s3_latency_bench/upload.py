import asyncio
import logging
import time

import httpx
from botocore.exceptions import BotoCoreError, ClientError

from s3_latency_bench.errors import SeedError
from s3_latency_bench.structs import SeedResult
from s3_latency_bench.utils import PresignedUrlGenerator, generate_content

logger = logging.getLogger(__name__)


class ObjectSeeder:
    """Upload the pool of test objects the download benchmark reads from."""

    def __init__(
        self,
        *,
        url_generator: PresignedUrlGenerator,
        client: httpx.AsyncClient,
        max_concurrent: int = 4,
    ):
        """
        Initialize with a URL generator and a shared client.

        Args:
            url_generator: PresignedUrlGenerator for the target endpoint
            client: httpx.AsyncClient used for the PUT requests
            max_concurrent: Maximum number of concurrent uploads guarded by Semaphore
        """
        self.url_generator = url_generator
        self.client = client
        self.semaphore = asyncio.Semaphore(max_concurrent)

    async def upload_object(self, bucket: str, key: str, size: int) -> int:
        """
        Upload a single test object.

        Returns:
            Number of bytes uploaded

        Raises:
            SeedError: If signing or the PUT request fails
        """
        async with self.semaphore:
            content = generate_content(size)
            try:
                url = self.url_generator.upload_url(bucket, key)
                response = await self.client.put(
                    url, headers={"Content-Length": str(size)}, content=content
                )
                response.raise_for_status()
            except (BotoCoreError, ClientError, httpx.HTTPError) as exc:
                raise SeedError(f"Error uploading {key}: {exc}") from exc

            logger.info("Uploaded %s (%d bytes)", key, size)
            return size

    async def seed(self, bucket: str, prefix: str, num_files: int, file_size: int) -> SeedResult:
        """
        Upload ``prefix-0`` .. ``prefix-(num_files - 1)``, each ``file_size`` bytes.

        Args:
            bucket: S3 bucket name
            prefix: Common key prefix of the test objects
            num_files: Number of objects to create
            file_size: Size of every object in bytes

        Returns:
            SeedResult with the number of files, bytes and elapsed seconds
        """
        start_time = time.time()
        tasks = [
            asyncio.create_task(self.upload_object(bucket, f"{prefix}-{i}", file_size))
            for i in range(num_files)
        ]
        try:
            sizes = await asyncio.gather(*tasks)
        finally:
            # A failed upload leaves its siblings running otherwise
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        return SeedResult(
            files=len(sizes),
            total_bytes=sum(sizes),
            total_time=time.time() - start_time,
        )
