"""SHASUMS256.txt retrieval and parsing."""
import re
from dataclasses import dataclass, field
from typing import Dict, NamedTuple, Optional

from node_release_info.constants import SHA256_HEX_LENGTH
from node_release_info.errors import ManifestParseError
from node_release_info.logging import get_logger
from node_release_info.urls import ReleaseURLFormatter
from node_release_info.utils.fetching import TextFetcher, fetch_text
from node_release_info.version import Version

logger = get_logger(__name__)

SHA256_PATTERN = re.compile(rf"^[0-9a-fA-F]{{{SHA256_HEX_LENGTH}}}$")


class ManifestEntry(NamedTuple):
    """One `<sha256>  <filename>` line."""
    sha256: str
    filename: str


def parse_line(line: str, line_number: int) -> ManifestEntry:
    """Parse a single non-blank manifest line."""
    parts = line.strip().split(None, 1)
    if len(parts) != 2:
        raise ManifestParseError(
            f"Line {line_number}: expected '<sha256> <filename>'",
            line_number=line_number,
            line=line
        )

    sha256, filename = parts
    # sha256sum -b marks binary-mode entries with a leading '*'
    filename = filename.strip().lstrip("*")

    if not SHA256_PATTERN.match(sha256):
        raise ManifestParseError(
            f"Line {line_number}: invalid sha256 {sha256!r}",
            line_number=line_number,
            line=line
        )
    if not filename:
        raise ManifestParseError(
            f"Line {line_number}: missing filename",
            line_number=line_number,
            line=line
        )

    return ManifestEntry(sha256=sha256.lower(), filename=filename)


def parse_manifest(body: str) -> Dict[str, str]:
    """Parse a manifest body into a filename -> sha256 mapping.

    Blank lines are skipped. When a filename is listed more than once the last
    line wins.
    """
    entries: Dict[str, str] = {}
    for line_number, line in enumerate(body.splitlines(), start=1):
        if not line.strip():
            continue
        entry = parse_line(line, line_number)
        entries[entry.filename] = entry.sha256

    if not entries:
        raise ManifestParseError("Manifest contains no entries")

    return entries


@dataclass(frozen=True)
class ChecksumManifest:
    """Checksums published for one release version."""
    version: Version
    url: str
    entries: Dict[str, str] = field(default_factory=dict)

    def get(self, filename: str) -> Optional[str]:
        return self.entries.get(filename)

    def __contains__(self, filename: object) -> bool:
        return filename in self.entries

    def __len__(self) -> int:
        return len(self.entries)


async def fetch_manifest(
    version: Version,
    urls: Optional[ReleaseURLFormatter] = None,
    fetch: Optional[TextFetcher] = None,
) -> ChecksumManifest:
    """Download and parse the checksum manifest for a version.

    Issues exactly one request. Transport errors propagate unchanged.
    """
    urls = urls or ReleaseURLFormatter()
    fetch = fetch or fetch_text
    url = urls.manifest(version)

    body = await fetch(url)
    entries = parse_manifest(body)

    logger.debug("manifest_fetched", version=str(version), url=url, entries=len(entries))
    return ChecksumManifest(version=version, url=url, entries=entries)
