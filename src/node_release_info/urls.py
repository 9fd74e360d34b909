"""Release server URL formatting."""
from dataclasses import dataclass

from node_release_info.constants import MANIFEST_FILENAME, RELEASE_SERVER_BASE
from node_release_info.version import Version


@dataclass(frozen=True)
class ReleaseURLFormatter:
    """Builds manifest and package URLs below a release server base."""
    base_url: str = RELEASE_SERVER_BASE

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def release_folder(self, version: Version) -> str:
        return f"{self.base_url}/{version.canonical}"

    def manifest(self, version: Version) -> str:
        return f"{self.release_folder(version)}/{MANIFEST_FILENAME}"

    def package(self, version: Version, filename: str) -> str:
        return f"{self.release_folder(version)}/{filename}"
