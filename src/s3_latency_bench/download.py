import logging

import httpx
from botocore.exceptions import BotoCoreError, ClientError

from s3_latency_bench.errors import RetrievalError, StreamReadError
from s3_latency_bench.utils import PresignedUrlGenerator

logger = logging.getLogger(__name__)


class ObjectStream:
    """An open GET response whose body is drained with bounded-size reads."""

    def __init__(self, key: str, response: httpx.Response, content_length: int):
        self.key = key
        self.content_length = content_length
        self._response = response
        self._chunks = response.aiter_bytes()
        self._buffer = b""

    async def read(self, size: int) -> bytes:
        """
        Read up to ``size`` bytes of the body.

        Returns:
            The next chunk, or ``b""`` once the end of the stream is reached

        Raises:
            StreamReadError: If the body cannot be read
        """
        if not self._buffer:
            try:
                self._buffer = await anext(self._chunks, b"")
            except (httpx.HTTPError, httpx.StreamError) as exc:
                raise StreamReadError(f"Error reading body of {self.key}: {exc}") from exc

        chunk, self._buffer = self._buffer[:size], self._buffer[size:]
        return chunk

    async def aclose(self):
        await self._response.aclose()


class PresignedObjectRetriever:
    """Retrieve whole objects through pre-signed GET URLs using httpx."""

    def __init__(self, url_generator: PresignedUrlGenerator, client: httpx.AsyncClient):
        """
        Initialize with a URL generator and a shared client.

        Args:
            url_generator: PresignedUrlGenerator for the target endpoint
            client: httpx.AsyncClient used for every request; never times out
        """
        self.url_generator = url_generator
        self.client = client

    async def retrieve(self, bucket: str, key: str) -> ObjectStream:
        """
        Send a GET for an object and return once the response headers arrive.

        Args:
            bucket: S3 bucket name
            key: S3 object key

        Returns:
            ObjectStream positioned at the start of the body

        Raises:
            RetrievalError: If signing, sending or the response status fails
        """
        try:
            url = self.url_generator.download_url(bucket, key)
        except (BotoCoreError, ClientError) as exc:
            raise RetrievalError(f"Failed to sign GET for {key}: {exc}") from exc

        try:
            # Identity encoding keeps decoded body bytes equal to Content-Length
            request = self.client.build_request(
                "GET", url, headers={"Accept-Encoding": "identity"}
            )
            response = await self.client.send(request, stream=True)
        except httpx.HTTPError as exc:
            raise RetrievalError(f"Failed to get object {key}: {exc}") from exc

        if response.is_error:
            await response.aclose()
            raise RetrievalError(
                f"Failed to get object {key}: status code {response.status_code}"
            )

        header = response.headers.get("Content-Length")
        if header is None:
            await response.aclose()
            raise RetrievalError(f"Failed to get object {key}: no Content-Length header")

        try:
            content_length = int(header)
        except ValueError:
            content_length = -1
        if content_length < 0:
            await response.aclose()
            raise RetrievalError(
                f"Failed to get object {key}: invalid Content-Length {header!r}"
            )

        logger.debug("GET %s returned %d bytes", key, content_length)
        return ObjectStream(key, response, content_length)
