"""Node.js release info resolution."""
from typing import List, Optional, Union

from node_release_info.errors import ChecksumNotFoundError
from node_release_info.logging import get_logger
from node_release_info.manifest import ChecksumManifest, fetch_manifest
from node_release_info.platforms import PlatformChoices, PlatformSelector, all_platforms
from node_release_info.types import NodeArch, NodeOS, PackageExt, PlatformSpec, ReleaseInfo
from node_release_info.urls import ReleaseURLFormatter
from node_release_info.utils.fetching import TextFetcher
from node_release_info.version import Version

logger = get_logger(__name__)


def resolve_from_manifest(
    version: Version,
    spec: PlatformSpec,
    manifest: ChecksumManifest,
    urls: ReleaseURLFormatter,
) -> ReleaseInfo:
    """Look up one configuration in an already fetched manifest."""
    filename = spec.filename(version.value)
    sha256 = manifest.get(filename)
    if sha256 is None:
        raise ChecksumNotFoundError(filename, version.value)

    return ReleaseInfo(
        version=version.value,
        os=spec.os,
        arch=spec.arch,
        ext=spec.ext,
        filename=filename,
        sha256=sha256,
        url=urls.package(version, filename),
    )


class ReleaseInfoResolver(PlatformChoices):
    """Resolves release filenames, checksums and URLs for a Node.js version.

    Platform choices chain like `PlatformSelector`:

        info = await ReleaseInfoResolver("20.6.1").macos().arm64().fetch()

    Nothing is cached; every `fetch` or `fetch_all` call downloads the
    version's manifest exactly once.
    """

    def __init__(
        self,
        version: str,
        selector: Optional[PlatformSelector] = None,
        urls: Optional[ReleaseURLFormatter] = None,
        fetch_text: Optional[TextFetcher] = None,
    ):
        self.version = version
        self.selector = selector or PlatformSelector()
        self.urls = urls or ReleaseURLFormatter()
        self.fetch_text = fetch_text

    @classmethod
    def from_host(cls, version: str, **kwargs) -> "ReleaseInfoResolver":
        """Resolver targeting the machine it runs on."""
        return cls(version, selector=PlatformSelector.from_host(), **kwargs)

    def with_os(self, os: Union[NodeOS, str]) -> "ReleaseInfoResolver":
        self.selector.with_os(os)
        return self

    def with_arch(self, arch: Union[NodeArch, str]) -> "ReleaseInfoResolver":
        self.selector.with_arch(arch)
        return self

    def with_ext(self, ext: Union[PackageExt, str]) -> "ReleaseInfoResolver":
        self.selector.with_ext(ext)
        return self

    async def fetch(self) -> ReleaseInfo:
        """Resolve the selected configuration.

        The version and platform selection are validated before any request
        is made.

        Raises:
            InvalidVersionError: If the version string is malformed
            UnsupportedPlatformError: If the OS or architecture is missing
            UnsupportedCombinationError: If the configuration is not supported
            NetworkError: If the release server cannot be reached
            HttpStatusError: If the manifest request fails, e.g. unknown version
            ManifestParseError: If the manifest is malformed
            ChecksumNotFoundError: If the manifest does not list the file
        """
        version = Version.parse(self.version)
        spec = self.selector.validate()

        manifest = await fetch_manifest(version, self.urls, self.fetch_text)
        info = resolve_from_manifest(version, spec, manifest, self.urls)

        logger.debug("release_resolved", version=info.version, filename=info.filename)
        return info

    async def fetch_all(self) -> List[ReleaseInfo]:
        """Resolve every supported configuration published for the version.

        Results follow the support matrix order. Configurations the manifest
        does not list are left out. Platform selections are ignored.
        """
        version = Version.parse(self.version)
        manifest = await fetch_manifest(version, self.urls, self.fetch_text)

        results: List[ReleaseInfo] = []
        for spec in all_platforms():
            try:
                results.append(resolve_from_manifest(version, spec, manifest, self.urls))
            except ChecksumNotFoundError as e:
                logger.debug(
                    "configuration_not_published",
                    version=version.value,
                    filename=e.filename,
                )

        logger.debug("releases_resolved", version=version.value, count=len(results))
        return results


async def resolve(
    version: str,
    os: Union[NodeOS, str],
    arch: Union[NodeArch, str],
    ext: Union[PackageExt, str, None] = None,
    **kwargs,
) -> ReleaseInfo:
    """Resolve a single configuration."""
    resolver = ReleaseInfoResolver(version, **kwargs).with_os(os).with_arch(arch)
    if ext is not None:
        resolver.with_ext(ext)
    return await resolver.fetch()


async def resolve_all(version: str, **kwargs) -> List[ReleaseInfo]:
    """Resolve every published configuration of a version."""
    return await ReleaseInfoResolver(version, **kwargs).fetch_all()
