"""Platform support matrix and selection."""
import platform
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from node_release_info.errors import (
    UnsupportedCombinationError,
    UnsupportedPlatformError,
)
from node_release_info.types import NodeArch, NodeOS, PackageExt, PlatformSpec

OS = NodeOS
Arch = NodeArch
Ext = PackageExt

# Ordered as the release server lists them in SHASUMS256.txt. Batch results
# follow this order.
SUPPORT_MATRIX: Tuple[PlatformSpec, ...] = (
    PlatformSpec(OS.AIX, Arch.PPC64, Ext.TAR_GZ),
    PlatformSpec(OS.WINDOWS, Arch.ARM64, Ext.MSI),
    PlatformSpec(OS.DARWIN, Arch.ARM64, Ext.TAR_GZ),
    PlatformSpec(OS.DARWIN, Arch.ARM64, Ext.TAR_XZ),
    PlatformSpec(OS.DARWIN, Arch.X64, Ext.TAR_GZ),
    PlatformSpec(OS.DARWIN, Arch.X64, Ext.TAR_XZ),
    PlatformSpec(OS.LINUX, Arch.ARM64, Ext.TAR_GZ),
    PlatformSpec(OS.LINUX, Arch.ARM64, Ext.TAR_XZ),
    PlatformSpec(OS.LINUX, Arch.ARMV7L, Ext.TAR_GZ),
    PlatformSpec(OS.LINUX, Arch.ARMV7L, Ext.TAR_XZ),
    PlatformSpec(OS.LINUX, Arch.PPC64LE, Ext.TAR_GZ),
    PlatformSpec(OS.LINUX, Arch.PPC64LE, Ext.TAR_XZ),
    PlatformSpec(OS.LINUX, Arch.S390X, Ext.TAR_GZ),
    PlatformSpec(OS.LINUX, Arch.S390X, Ext.TAR_XZ),
    PlatformSpec(OS.LINUX, Arch.X64, Ext.TAR_GZ),
    PlatformSpec(OS.LINUX, Arch.X64, Ext.TAR_XZ),
    PlatformSpec(OS.WINDOWS, Arch.ARM64, Ext.SEVEN_Z),
    PlatformSpec(OS.WINDOWS, Arch.ARM64, Ext.ZIP),
    PlatformSpec(OS.WINDOWS, Arch.X64, Ext.SEVEN_Z),
    PlatformSpec(OS.WINDOWS, Arch.X64, Ext.ZIP),
    PlatformSpec(OS.WINDOWS, Arch.X86, Ext.SEVEN_Z),
    PlatformSpec(OS.WINDOWS, Arch.X86, Ext.ZIP),
    PlatformSpec(OS.WINDOWS, Arch.X64, Ext.MSI),
    PlatformSpec(OS.WINDOWS, Arch.X86, Ext.MSI),
)

# Archive format used when a selection names no extension
DEFAULT_EXTENSIONS: Dict[NodeOS, PackageExt] = {
    OS.LINUX: Ext.TAR_GZ,
    OS.DARWIN: Ext.TAR_GZ,
    OS.WINDOWS: Ext.ZIP,
    OS.AIX: Ext.TAR_GZ,
}

# platform.system() -> NodeOS
HOST_SYSTEMS: Dict[str, NodeOS] = {
    "Linux": OS.LINUX,
    "Darwin": OS.DARWIN,
    "Windows": OS.WINDOWS,
    "AIX": OS.AIX,
}

_SUPPORTED = frozenset(SUPPORT_MATRIX)


def all_platforms() -> Tuple[PlatformSpec, ...]:
    """Every supported configuration, in matrix order."""
    return SUPPORT_MATRIX


def is_supported(
    os: Union[NodeOS, str],
    arch: Union[NodeArch, str],
    ext: Union[PackageExt, str, None] = None,
) -> bool:
    """Check whether a configuration is in the support matrix.

    Without `ext` this answers whether the OS/arch pair is published in any
    format. Unrecognized tokens are reported as unsupported.
    """
    try:
        os = NodeOS.parse(os)
        arch = NodeArch.parse(arch)
        if ext is None:
            return any(s.os is os and s.arch is arch for s in SUPPORT_MATRIX)
        return PlatformSpec(os, arch, PackageExt.parse(ext)) in _SUPPORTED
    except UnsupportedPlatformError:
        return False


def detect_host_os() -> NodeOS:
    system = platform.system()
    if system not in HOST_SYSTEMS:
        raise UnsupportedPlatformError(
            f"Unsupported operating system: {system}",
            details={"os": system}
        )
    return HOST_SYSTEMS[system]


def detect_host_arch() -> NodeArch:
    return NodeArch.parse(platform.machine())


class PlatformChoices(ABC):
    """Chained selection shortcuts shared by selectors and resolvers.

    Subclasses store a choice in `with_os`, `with_arch` and `with_ext` and
    return themselves so calls can be chained.
    """

    @abstractmethod
    def with_os(self, os: Union[NodeOS, str]) -> "PlatformChoices":
        ...

    @abstractmethod
    def with_arch(self, arch: Union[NodeArch, str]) -> "PlatformChoices":
        ...

    @abstractmethod
    def with_ext(self, ext: Union[PackageExt, str]) -> "PlatformChoices":
        ...

    def linux(self) -> "PlatformChoices":
        return self.with_os(NodeOS.LINUX)

    def macos(self) -> "PlatformChoices":
        return self.with_os(NodeOS.DARWIN)

    def windows(self) -> "PlatformChoices":
        return self.with_os(NodeOS.WINDOWS)

    def aix(self) -> "PlatformChoices":
        return self.with_os(NodeOS.AIX)

    def x64(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.X64)

    def x86(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.X86)

    def arm64(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.ARM64)

    def armv7l(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.ARMV7L)

    def ppc64(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.PPC64)

    def ppc64le(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.PPC64LE)

    def s390x(self) -> "PlatformChoices":
        return self.with_arch(NodeArch.S390X)

    def tar_gz(self) -> "PlatformChoices":
        return self.with_ext(PackageExt.TAR_GZ)

    def tar_xz(self) -> "PlatformChoices":
        return self.with_ext(PackageExt.TAR_XZ)

    def zip(self) -> "PlatformChoices":
        return self.with_ext(PackageExt.ZIP)

    def msi(self) -> "PlatformChoices":
        return self.with_ext(PackageExt.MSI)

    def seven_z(self) -> "PlatformChoices":
        return self.with_ext(PackageExt.SEVEN_Z)


@dataclass
class PlatformSelector(PlatformChoices):
    """Accumulates an OS, architecture and optional archive format.

    Nothing is checked against the support matrix until `validate()`.
    """
    os: Optional[NodeOS] = None
    arch: Optional[NodeArch] = None
    ext: Optional[PackageExt] = None

    def __post_init__(self):
        if self.os is not None:
            self.os = NodeOS.parse(self.os)
        if self.arch is not None:
            self.arch = NodeArch.parse(self.arch)
        if self.ext is not None:
            self.ext = PackageExt.parse(self.ext)

    @classmethod
    def from_host(cls) -> "PlatformSelector":
        """Selector preset to the running machine."""
        return cls(os=detect_host_os(), arch=detect_host_arch())

    def with_os(self, os: Union[NodeOS, str]) -> "PlatformSelector":
        self.os = NodeOS.parse(os)
        return self

    def with_arch(self, arch: Union[NodeArch, str]) -> "PlatformSelector":
        self.arch = NodeArch.parse(arch)
        return self

    def with_ext(self, ext: Union[PackageExt, str]) -> "PlatformSelector":
        self.ext = PackageExt.parse(ext)
        return self

    def validate(self) -> PlatformSpec:
        """Resolve the selection to a supported configuration.

        Raises:
            UnsupportedPlatformError: If the OS or architecture was never chosen
            UnsupportedCombinationError: If the configuration is not published
        """
        missing = [name for name in ("os", "arch") if getattr(self, name) is None]
        if missing:
            raise UnsupportedPlatformError(
                f"Platform selection incomplete, missing: {', '.join(missing)}",
                details={"missing": missing}
            )

        ext = self.ext or DEFAULT_EXTENSIONS[self.os]
        spec = PlatformSpec(self.os, self.arch, ext)
        if spec not in _SUPPORTED:
            raise UnsupportedCombinationError(self.os.value, self.arch.value, ext.value)
        return spec
