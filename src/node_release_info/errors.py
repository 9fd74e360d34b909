"""Error types for Node.js release resolution."""
from typing import Any, Dict, Optional

from mcp.types import (
    ErrorData,
    INVALID_REQUEST,
    INVALID_PARAMS,
    INTERNAL_ERROR
)

from node_release_info.logging import get_logger

logger = get_logger(__name__)


def log_error(
    error: Exception,
    context: Optional[Dict[str, Any]] = None,
) -> None:
    """Log an error with context."""
    error_info: Dict[str, Any] = {
        "error_type": error.__class__.__name__,
        "error_message": str(error)
    }
    if context:
        error_info["context"] = context
    if isinstance(error, ReleaseInfoError):
        error_info["code"] = error.code
        error_info["details"] = error.details

    logger.error("release_info_error", **error_info)


class ReleaseInfoError(Exception):
    """Base error class for release resolution."""
    def __init__(
        self,
        message: str,
        code: int = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.details = details or {}

    def to_error_data(self) -> ErrorData:
        """Convert to ErrorData format."""
        return ErrorData(
            code=self.code,
            message=str(self),
            data=self.details
        )


class InvalidVersionError(ReleaseInfoError):
    """Version string is not a valid semantic version."""
    def __init__(self, version: str):
        super().__init__(
            f"Invalid version: {version!r}",
            code=INVALID_PARAMS,
            details={"version": version}
        )


class UnsupportedPlatformError(ReleaseInfoError):
    """Operating system or architecture is unknown or was never selected."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=INVALID_PARAMS, details=details)


class UnsupportedCombinationError(ReleaseInfoError):
    """Selected configuration is not part of the support matrix."""
    def __init__(self, os: str, arch: str, ext: str):
        super().__init__(
            f"Unsupported configuration: {os}-{arch} ({ext})",
            code=INVALID_PARAMS,
            details={"os": os, "arch": arch, "ext": ext}
        )


class NetworkError(ReleaseInfoError):
    """Transport failure while reaching the release server."""
    def __init__(self, url: str, reason: str):
        super().__init__(
            f"Failed to reach {url}: {reason}",
            code=INTERNAL_ERROR,
            details={"url": url, "reason": reason}
        )


class HttpStatusError(ReleaseInfoError):
    """Release server answered with a non-success status."""
    def __init__(self, url: str, status: int):
        super().__init__(
            f"Request to {url} failed with status {status}",
            code=INVALID_REQUEST,
            details={"url": url, "status": status}
        )
        self.status = status


class ManifestParseError(ReleaseInfoError):
    """Checksum manifest does not follow the `<sha256>  <filename>` format."""
    def __init__(self, message: str, line_number: Optional[int] = None, line: Optional[str] = None):
        details: Dict[str, Any] = {}
        if line_number is not None:
            details["line_number"] = line_number
            details["line"] = line
        super().__init__(message, code=INTERNAL_ERROR, details=details)


class ChecksumNotFoundError(ReleaseInfoError):
    """Manifest was fetched but does not list the requested file."""
    def __init__(self, filename: str, version: str):
        super().__init__(
            f"No checksum listed for {filename}",
            code=INVALID_REQUEST,
            details={"filename": filename, "version": version}
        )
        self.filename = filename
