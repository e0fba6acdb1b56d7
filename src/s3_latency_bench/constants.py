# Constants
DEFAULT_REGION = "us-east-1"
DEFAULT_BUCKET = "abk-test-rusoto-download"
DEFAULT_KEY_PREFIX = "test-object-8388608"
DEFAULT_WORKERS = 3
DEFAULT_SAMPLES = 10
DEFAULT_READ_SIZE = 64 * 1024  # 64 KB per read call
DEFAULT_SEED_FILE_SIZE = "8MB"
DEFAULT_URL_EXPIRATION = 3600  # seconds

# Number of distinct pre-seeded test objects reused across samples
KEYSPACE_SIZE = 40

BYTES_PER_MB = 1024 * 1024
NS_PER_MS = 1_000_000
NS_PER_S = 1_000_000_000

# Operation modes
MODE_DOWNLOAD = "download"
MODE_SEED = "seed"

REPORT_HEADER = "Total time, Total bytes, Throughput, Avg first byte, Avg last byte"
