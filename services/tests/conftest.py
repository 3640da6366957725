"""
Top-level test configuration for the registry.

Provides an in-memory Artifact Registry REST fake served through
httpx.MockTransport, and pgpy signing keys generated once per session.
"""

import os

# Ensure test-friendly defaults
os.environ.setdefault("ARREGISTRY_JSON_LOGS", "false")
os.environ.setdefault("ARREGISTRY_LOG_LEVEL", "DEBUG")
os.environ.setdefault("ARREGISTRY_ARTIFACT_REGISTRY__PROJECT_ID", "test-project")

import base64  # noqa: E402
from collections.abc import AsyncGenerator, AsyncIterator  # noqa: E402
from dataclasses import dataclass, field  # noqa: E402

import httpx  # noqa: E402
import pgpy  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from pgpy.constants import HashAlgorithm, KeyFlags, PubKeyAlgorithm  # noqa: E402
from pgpy.types import Armorable  # noqa: E402

from arregistry.storage.artifactregistry import ArtifactRegistryClient  # noqa: E402
from arregistry.storage.resources import RegistryScope  # noqa: E402

API_URL = "https://artifactregistry.test"


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records whether it was released."""

    def __init__(self, data: bytes, chunk_size: int = 5) -> None:
        self._data = data
        self._chunk_size = chunk_size
        self.closed = False

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for start in range(0, len(self._data), self._chunk_size):
            yield self._data[start : start + self._chunk_size]

    async def aclose(self) -> None:
        self.closed = True


@dataclass
class FakeArtifactRegistry:
    """Enough of the Artifact Registry REST API for the stores."""

    scope: RegistryScope = field(
        default_factory=lambda: RegistryScope(project_id="test-project", location="us")
    )
    versions: dict[tuple[str, str], list[str]] = field(default_factory=dict)
    files: dict[str, dict[str, tuple[str, bytes]]] = field(default_factory=dict)
    download_status: dict[str, int] = field(default_factory=dict)
    listing_status: int = 200
    requests: list[httpx.Request] = field(default_factory=list)
    streams: list[TrackingStream] = field(default_factory=list)

    def add_version(self, namespace: str, package: str, version_id: str) -> None:
        self.versions.setdefault((namespace, package), []).append(version_id)

    def add_file(self, namespace: str, package: str, file_id: str, content: bytes) -> None:
        self.files.setdefault(namespace, {})[file_id] = (package, content)

    @property
    def downloads(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith("/download/")]

    def _page(self, request: httpx.Request, field_name: str, names: list[str]) -> httpx.Response:
        page_size = int(request.url.params.get("pageSize", "1000"))
        start = int(request.url.params.get("pageToken") or 0)
        chunk = names[start : start + page_size]
        body: dict = {field_name: [{"name": n} for n in chunk]}
        if start + page_size < len(names):
            body["nextPageToken"] = str(start + page_size)
        return httpx.Response(200, json=body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        repo_prefix = f"{self.scope.name}/repositories/"

        if path.startswith("/v1/"):
            if self.listing_status != 200:
                return httpx.Response(self.listing_status, json={"error": {}})
            resource = path.removeprefix("/v1/").removeprefix(repo_prefix)

            if resource.endswith("/versions"):
                namespace, _, package, _ = resource.split("/")
                key = (namespace, package)
                if key not in self.versions:
                    return httpx.Response(404, json={"error": {}})
                parent = f"{self.scope.package(namespace, package)}/versions"
                names = [f"{parent}/{v}" for v in self.versions[key]]
                return self._page(request, "versions", names)

            if resource.endswith("/files"):
                namespace = resource.split("/")[0]
                owner = request.url.params.get("filter", "")
                names = [
                    self.scope.file(namespace, file_id)
                    for file_id, (package, _) in self.files.get(namespace, {}).items()
                    if owner == f'owner="{self.scope.package(namespace, package)}"'
                ]
                return self._page(request, "files", names)

        if path.startswith("/download/v1/") and path.endswith(":download"):
            resource = path.removeprefix("/download/v1/").removeprefix(repo_prefix)
            namespace, _, file_id = resource.removesuffix(":download").split("/", 2)
            status = self.download_status.get(file_id, 200)
            entry = self.files.get(namespace, {}).get(file_id)
            if entry is None:
                status = 404
            body = entry[1] if status == 200 and entry else b'{"error": "denied"}'
            stream = TrackingStream(body)
            self.streams.append(stream)
            return httpx.Response(
                status,
                stream=stream,
                headers={"Content-Length": str(len(body))},
            )

        return httpx.Response(404)


@pytest.fixture
def fake_registry() -> FakeArtifactRegistry:
    return FakeArtifactRegistry()


@pytest_asyncio.fixture
async def ar_client(fake_registry: FakeArtifactRegistry) -> AsyncGenerator[ArtifactRegistryClient]:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake_registry.handler))
    client = ArtifactRegistryClient(http_client, api_url=API_URL, download_url=API_URL)
    yield client
    await client.close()


# --- Signing keys ---


def _new_key(name: str) -> pgpy.PGPKey:
    key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    uid = pgpy.PGPUID.new(name, email=f"{name.lower().replace(' ', '-')}@example.com")
    key.add_uid(uid, usage={KeyFlags.Sign}, hashes=[HashAlgorithm.SHA256])
    return key


def armor_public_keys(*keys: pgpy.PGPKey) -> str:
    """Armor one or more public keys into a single key block."""
    data = b"".join(bytes(k.pubkey) for k in keys)
    body = base64.b64encode(data).decode("ascii")
    lines = [body[i : i + 64] for i in range(0, len(body), 64)]
    checksum = base64.b64encode(Armorable.crc24(data).to_bytes(3, "big")).decode("ascii")
    return (
        "-----BEGIN PGP PUBLIC KEY BLOCK-----\n\n"
        + "\n".join(lines)
        + f"\n={checksum}\n"
        + "-----END PGP PUBLIC KEY BLOCK-----\n"
    )


@pytest.fixture(scope="session")
def signing_key() -> pgpy.PGPKey:
    return _new_key("Registry Signer")


@pytest.fixture(scope="session")
def second_signing_key() -> pgpy.PGPKey:
    return _new_key("Other Signer")


@pytest.fixture(scope="session")
def public_key_armor(signing_key: pgpy.PGPKey) -> str:
    return str(signing_key.pubkey)


@pytest.fixture(scope="session")
def key_with_subkey() -> pgpy.PGPKey:
    key = _new_key("Subkey Signer")
    subkey = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    key.add_subkey(subkey, usage={KeyFlags.Sign})
    return key
