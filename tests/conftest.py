import asyncio

import pytest

from s3_latency_bench.errors import RetrievalError, StreamReadError


class FakeStream:
    """In-memory object body served in bounded-size reads."""

    def __init__(self, key, payload, content_length=None, fail_at=None, on_close=None):
        self.key = key
        self.content_length = len(payload) if content_length is None else content_length
        self.closed = False
        self.read_sizes = []
        self._payload = payload
        self._offset = 0
        self._fail_at = fail_at
        self._on_close = on_close

    async def read(self, size):
        self.read_sizes.append(size)
        await asyncio.sleep(0)
        if self._fail_at is not None and self._offset >= self._fail_at:
            raise StreamReadError(f"Error reading body of {self.key}: connection reset")
        chunk = self._payload[self._offset:self._offset + size]
        self._offset += len(chunk)
        return chunk

    async def aclose(self):
        self.closed = True
        if self._on_close:
            self._on_close()


class FakeRetriever:
    """Retriever double that records requests and tracks requests in flight."""

    def __init__(
        self,
        object_size=1024,
        delay=0.0,
        fail_keys=(),
        fail_read_keys=(),
        short_keys=(),
        gate=None,
    ):
        self.object_size = object_size
        self.delay = delay
        self.fail_keys = set(fail_keys)
        self.fail_read_keys = set(fail_read_keys)
        self.short_keys = set(short_keys)
        self.gate = gate
        self.requested = []
        self.streams = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _release(self):
        self.in_flight -= 1

    async def retrieve(self, bucket, key):
        self.requested.append((bucket, key))
        if key in self.fail_keys:
            raise RetrievalError(f"Failed to get object {key}: status code 404")

        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        await asyncio.sleep(self.delay)
        if self.gate is not None:
            await self.gate.wait()

        payload = b"x" * self.object_size
        content_length = None
        if key in self.short_keys:
            content_length = self.object_size + 10
        stream = FakeStream(
            key,
            payload,
            content_length=content_length,
            fail_at=self.object_size // 2 if key in self.fail_read_keys else None,
            on_close=self._release,
        )
        self.streams.append(stream)
        return stream


@pytest.fixture
def retriever():
    return FakeRetriever(object_size=8 * 1024, delay=0.001)
