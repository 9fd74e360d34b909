"""Core type definitions"""

import json
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Type, TypeVar, Union

from node_release_info.constants import ARCHIVE_PREFIX, VERSION_PREFIX
from node_release_info.errors import UnsupportedPlatformError

T = TypeVar("T", bound="_TokenEnum")


class _TokenEnum(Enum):
    """Enum whose values are the tokens used in release filenames."""

    @classmethod
    def aliases(cls) -> Dict[str, str]:
        return {}

    @classmethod
    def parse(cls: Type[T], value: Union[T, str]) -> T:
        if isinstance(value, cls):
            return value
        token = str(value).strip().lower()
        token = cls.aliases().get(token, token)
        try:
            return cls(token)
        except ValueError:
            raise UnsupportedPlatformError(
                f"Unrecognized {cls.kind()}: {value!r}",
                details={cls.kind(): str(value)}
            ) from None

    @classmethod
    def kind(cls) -> str:
        return cls.__name__.lower()

    def __str__(self) -> str:
        return self.value


class NodeOS(_TokenEnum):
    """Operating systems Node.js publishes binaries for."""
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "win"
    AIX = "aix"

    @classmethod
    def aliases(cls) -> Dict[str, str]:
        return {"macos": "darwin", "windows": "win"}

    @classmethod
    def kind(cls) -> str:
        return "os"


class NodeArch(_TokenEnum):
    """CPU architectures Node.js publishes binaries for."""
    X64 = "x64"
    X86 = "x86"
    ARM64 = "arm64"
    ARMV7L = "armv7l"
    PPC64 = "ppc64"
    PPC64LE = "ppc64le"
    S390X = "s390x"

    @classmethod
    def aliases(cls) -> Dict[str, str]:
        return {
            "x86_64": "x64",
            "amd64": "x64",
            "aarch64": "arm64",
            "arm": "armv7l",
            "powerpc64": "ppc64",
        }

    @classmethod
    def kind(cls) -> str:
        return "arch"


class PackageExt(_TokenEnum):
    """Archive and installer formats."""
    TAR_GZ = "tar.gz"
    TAR_XZ = "tar.xz"
    ZIP = "zip"
    MSI = "msi"
    SEVEN_Z = "7z"

    @classmethod
    def aliases(cls) -> Dict[str, str]:
        return {"tgz": "tar.gz", ".tar.gz": "tar.gz", ".tar.xz": "tar.xz", ".zip": "zip"}

    @classmethod
    def kind(cls) -> str:
        return "ext"


@dataclass(frozen=True)
class PlatformSpec:
    """One published release configuration"""
    os: NodeOS
    arch: NodeArch
    ext: PackageExt

    def filename(self, version: str) -> str:
        """Release filename for a normalized (unprefixed) version."""
        stem = f"{ARCHIVE_PREFIX}-{VERSION_PREFIX}{version}"
        # Windows installers carry no OS token
        if self.ext is PackageExt.MSI:
            return f"{stem}-{self.arch}.{self.ext}"
        return f"{stem}-{self.os}-{self.arch}.{self.ext}"

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}.{self.ext}"


@dataclass(frozen=True)
class ReleaseInfo:
    """Resolved release artifact"""
    version: str
    os: NodeOS
    arch: NodeArch
    ext: PackageExt
    filename: str
    sha256: str
    url: str

    @property
    def platform(self) -> PlatformSpec:
        return PlatformSpec(self.os, self.arch, self.ext)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("os", "arch", "ext"):
            data[key] = data[key].value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReleaseInfo":
        return cls(
            version=data["version"],
            os=NodeOS.parse(data["os"]),
            arch=NodeArch.parse(data["arch"]),
            ext=PackageExt.parse(data["ext"]),
            filename=data["filename"],
            sha256=data["sha256"],
            url=data["url"],
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, text: str) -> "ReleaseInfo":
        return cls.from_dict(json.loads(text))
