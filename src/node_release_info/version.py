"""Release version parsing."""
import re
from dataclasses import dataclass

from node_release_info.constants import VERSION_PREFIX
from node_release_info.errors import InvalidVersionError

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
SEMVER_PATTERN = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<build>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@dataclass(frozen=True)
class Version:
    """A validated Node.js release version, stored without its `v` prefix."""
    value: str

    @classmethod
    def parse(cls, raw: str) -> "Version":
        """Normalize and validate a version string.

        Surrounding whitespace and a single leading `v` are stripped, so both
        `20.6.1` and `v20.6.1` are accepted. Strict semver rejects the `v`;
        it is allowed here because Node.js tags and release folders carry it.

        Raises:
            InvalidVersionError: If the input is empty or not MAJOR.MINOR.PATCH
                with optional pre-release and build metadata
        """
        if not isinstance(raw, str):
            raise InvalidVersionError(repr(raw))

        value = raw.strip()
        if value.startswith(VERSION_PREFIX):
            value = value[len(VERSION_PREFIX):]

        if not value or not SEMVER_PATTERN.match(value):
            raise InvalidVersionError(raw)

        return cls(value)

    @property
    def canonical(self) -> str:
        """Version as it appears in release paths and filenames."""
        return f"{VERSION_PREFIX}{self.value}"

    def __str__(self) -> str:
        return self.value
