import pytest

from node_release_info.errors import InvalidVersionError
from node_release_info.version import Version


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("20.6.1", "20.6.1"),
        ("  20.6.1\n", "20.6.1"),
        ("v20.6.1", "20.6.1"),
        ("0.0.0", "0.0.0"),
        ("21.0.0-rc.1", "21.0.0-rc.1"),
        ("1.2.3-beta+build.5", "1.2.3-beta+build.5"),
    ],
)
def test_parse_valid_versions(raw, expected):
    """Valid versions are trimmed and stored without their prefix"""
    assert Version.parse(raw).value == expected


@pytest.mark.parametrize(
    "raw",
    ["", "   ", "abc", "20.6", "20", "NOPE!", "01.2.3", "1.2.3.4", "v", "vv20.6.1", "1.2.3-"],
)
def test_parse_invalid_versions(raw):
    """Malformed versions fail with InvalidVersionError"""
    with pytest.raises(InvalidVersionError) as exc_info:
        Version.parse(raw)
    assert exc_info.value.details["version"] == raw


def test_parse_rejects_non_strings():
    with pytest.raises(InvalidVersionError):
        Version.parse(None)


def test_canonical_form():
    """Canonical form carries the v prefix used on the release server"""
    version = Version.parse("20.6.1")
    assert version.canonical == "v20.6.1"
    assert str(version) == "20.6.1"


def test_versions_are_immutable_values():
    assert Version.parse("v20.6.1") == Version.parse("20.6.1")
    with pytest.raises(AttributeError):
        Version.parse("20.6.1").value = "1.0.0"
