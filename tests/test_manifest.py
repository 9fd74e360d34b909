import pytest

from node_release_info.errors import HttpStatusError, ManifestParseError, NetworkError
from node_release_info.manifest import (
    ManifestEntry,
    fetch_manifest,
    parse_line,
    parse_manifest,
)
from node_release_info.urls import ReleaseURLFormatter
from node_release_info.version import Version

SHA_A = "a" * 64
SHA_B = "b" * 64


def test_parse_real_manifest(manifest_body):
    """The v20.6.1 manifest parses completely"""
    entries = parse_manifest(manifest_body)
    assert len(entries) == 41
    assert entries["node-v20.6.1-darwin-arm64.tar.gz"] == (
        "d8ba8018d45b294429b1a7646ccbeaeb2af3cdf45b5c91dabbd93e2a2035cb46"
    )
    # Non-archive files are kept but never matched by release filenames
    assert "win-x64/node.exe" in entries


def test_parse_line_splits_on_first_whitespace_run():
    entry = parse_line(f"{SHA_A} \t node-v1.0.0-linux-x64.tar.gz  ", 1)
    assert entry == ManifestEntry(sha256=SHA_A, filename="node-v1.0.0-linux-x64.tar.gz")


def test_parse_line_binary_marker():
    entry = parse_line(f"{SHA_A} *node-v1.0.0-linux-x64.tar.gz", 1)
    assert entry.filename == "node-v1.0.0-linux-x64.tar.gz"


def test_parse_line_normalizes_hash_case():
    entry = parse_line(f"{'ABCDEF12' * 8}  node-v1.0.0-linux-x64.tar.gz", 1)
    assert entry.sha256 == "abcdef12" * 8


@pytest.mark.parametrize(
    "line",
    [
        "NOPE",
        f"{SHA_A}",
        f"FAKESHA  node-v1.0.0-linux-x64.tar.gz",
        f"{SHA_A[:-1]}  node-v1.0.0-linux-x64.tar.gz",
        f"{SHA_A}0  node-v1.0.0-linux-x64.tar.gz",
        f"{'z' * 64}  node-v1.0.0-linux-x64.tar.gz",
        f"{SHA_A}  *",
    ],
)
def test_parse_line_rejects_malformed(line):
    with pytest.raises(ManifestParseError) as exc_info:
        parse_line(line, 7)
    assert exc_info.value.details["line_number"] == 7


def test_parse_manifest_skips_blank_lines():
    body = f"\n{SHA_A}  one.tar.gz\n   \n\n{SHA_B}  two.tar.gz\n"
    assert parse_manifest(body) == {"one.tar.gz": SHA_A, "two.tar.gz": SHA_B}


def test_parse_manifest_last_duplicate_wins():
    body = f"{SHA_A}  one.tar.gz\n{SHA_B}  one.tar.gz\n"
    assert parse_manifest(body) == {"one.tar.gz": SHA_B}


def test_parse_manifest_reports_line_number():
    body = f"{SHA_A}  one.tar.gz\n\nNOPE\n"
    with pytest.raises(ManifestParseError) as exc_info:
        parse_manifest(body)
    assert exc_info.value.details["line_number"] == 3
    assert exc_info.value.details["line"] == "NOPE"


@pytest.mark.parametrize("body", ["", "\n\n  \n"])
def test_parse_manifest_rejects_empty_body(body):
    with pytest.raises(ManifestParseError):
        parse_manifest(body)


@pytest.mark.asyncio
async def test_fetch_manifest_single_request(fetcher):
    """The manifest for a version is fetched with one request"""
    version = Version.parse("20.6.1")
    manifest = await fetch_manifest(version, fetch=fetcher)

    assert fetcher.urls == ["https://nodejs.org/download/release/v20.6.1/SHASUMS256.txt"]
    assert manifest.version == version
    assert manifest.url == fetcher.urls[0]
    assert len(manifest) == 41
    assert "node-v20.6.1-linux-x64.tar.xz" in manifest
    assert manifest.get("node-v20.6.1-linux-x86.tar.gz") is None


@pytest.mark.asyncio
async def test_fetch_manifest_propagates_transport_errors(make_fetcher):
    error = NetworkError("https://example.invalid", "boom")
    with pytest.raises(NetworkError):
        await fetch_manifest(Version.parse("20.6.1"), fetch=make_fetcher(error=error))


@pytest.mark.asyncio
async def test_fetch_manifest_over_http(release_server):
    manifest = await fetch_manifest(Version.parse("20.6.1"), urls=release_server.urls)
    assert len(manifest) == 41
    assert release_server.requests == ["/download/release/v20.6.1/SHASUMS256.txt"]


@pytest.mark.asyncio
async def test_fetch_manifest_unpublished_version(release_server):
    with pytest.raises(HttpStatusError) as exc_info:
        await fetch_manifest(Version.parse("1.0.0"), urls=release_server.urls)
    assert exc_info.value.status == 404


def test_url_formatter():
    urls = ReleaseURLFormatter("https://mirror.example.com/node/")
    version = Version.parse("1.0.0")
    assert urls.manifest(version) == "https://mirror.example.com/node/v1.0.0/SHASUMS256.txt"
    assert urls.package(version, "fake-filename") == "https://mirror.example.com/node/v1.0.0/fake-filename"
    assert ReleaseURLFormatter().manifest(version) == (
        "https://nodejs.org/download/release/v1.0.0/SHASUMS256.txt"
    )
