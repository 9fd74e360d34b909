"""Resolve Node.js release filenames, checksums and download URLs."""

__version__ = "0.1.0"

from node_release_info.types import (
    NodeOS,
    NodeArch,
    PackageExt,
    PlatformSpec,
    ReleaseInfo,
)
from node_release_info.version import Version
from node_release_info.platforms import (
    SUPPORT_MATRIX,
    PlatformSelector,
    all_platforms,
    is_supported,
)
from node_release_info.urls import ReleaseURLFormatter
from node_release_info.manifest import ChecksumManifest, fetch_manifest, parse_manifest
from node_release_info.resolver import ReleaseInfoResolver, resolve, resolve_all
from node_release_info.errors import (
    ReleaseInfoError,
    InvalidVersionError,
    UnsupportedPlatformError,
    UnsupportedCombinationError,
    NetworkError,
    HttpStatusError,
    ManifestParseError,
    ChecksumNotFoundError,
)

__all__ = [
    # Types
    "NodeOS",
    "NodeArch",
    "PackageExt",
    "PlatformSpec",
    "ReleaseInfo",
    "Version",

    # Platforms
    "SUPPORT_MATRIX",
    "PlatformSelector",
    "all_platforms",
    "is_supported",

    # Resolution
    "ReleaseURLFormatter",
    "ChecksumManifest",
    "fetch_manifest",
    "parse_manifest",
    "ReleaseInfoResolver",
    "resolve",
    "resolve_all",

    # Error types
    "ReleaseInfoError",
    "InvalidVersionError",
    "UnsupportedPlatformError",
    "UnsupportedCombinationError",
    "NetworkError",
    "HttpStatusError",
    "ManifestParseError",
    "ChecksumNotFoundError",
]
