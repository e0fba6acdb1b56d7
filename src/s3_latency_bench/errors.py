class BenchmarkError(Exception):
    """Base class for errors that abort a benchmark run."""


class RetrievalError(BenchmarkError):
    """The GET request for an object failed (network, auth, not found, ...)."""


class StreamReadError(BenchmarkError):
    """Draining a response body failed before a clean end of stream."""


class SeedError(BenchmarkError):
    """Uploading a test object failed."""
