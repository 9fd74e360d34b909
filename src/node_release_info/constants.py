"""Release server locations and naming constants."""
import os

# Node.js release server
RELEASE_SERVER_BASE = os.environ.get(
    "NODE_RELEASE_INFO_BASE_URL", "https://nodejs.org/download/release"
)
MANIFEST_FILENAME = "SHASUMS256.txt"
ARCHIVE_PREFIX = "node"
VERSION_PREFIX = "v"

LOG_LEVEL = os.environ.get("NODE_RELEASE_INFO_LOG_LEVEL", "INFO").upper()

SHA256_HEX_LENGTH = 64
