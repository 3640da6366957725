"""
Tests for the Artifact Registry REST client.

Unit tests against httpx.MockTransport. No live Artifact Registry calls.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest
from conftest import API_URL, FakeArtifactRegistry, TrackingStream

from arregistry.registry.errors import DownloadFailedError, ListingTransportError
from arregistry.storage.artifactregistry import ArtifactRegistryClient, GoogleTokenAuth
from arregistry.storage.protocol import ArtifactStore

PACKAGE = "projects/test-project/locations/us/repositories/acme/packages/foo"
FILE = "projects/test-project/locations/us/repositories/acme/files/foo.zip"


def _client(handler) -> ArtifactRegistryClient:  # type: ignore[no-untyped-def]
    return ArtifactRegistryClient(
        httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        api_url=API_URL,
        download_url=API_URL,
    )


class TestArtifactRegistryClient:
    def test_satisfies_protocol(self, ar_client: ArtifactRegistryClient) -> None:
        assert isinstance(ar_client, ArtifactStore)

    async def test_list_versions_request(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "versions": [{"name": f"{PACKAGE}/versions/1.0.0-linux-amd64"}],
                    "nextPageToken": "next",
                },
            )

        client = _client(handler)
        page = await client.list_versions(PACKAGE, page_size=10)
        await client.close()

        assert page.names == [f"{PACKAGE}/versions/1.0.0-linux-amd64"]
        assert page.next_page_token == "next"
        assert seen[0].url.path == f"/v1/{PACKAGE}/versions"
        assert seen[0].url.params["pageSize"] == "10"
        assert "pageToken" not in seen[0].url.params

    async def test_list_files_sends_filter_and_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        client = _client(handler)
        page = await client.list_files(
            "projects/p/locations/us/repositories/acme", 'owner="x"', 5, page_token="abc"
        )
        await client.close()

        assert page.names == []
        assert page.next_page_token == ""
        assert seen[0].url.params["filter"] == 'owner="x"'
        assert seen[0].url.params["pageToken"] == "abc"

    async def test_list_error_status(self) -> None:
        client = _client(lambda request: httpx.Response(403, json={"error": {}}))
        with pytest.raises(ListingTransportError) as exc_info:
            await client.list_versions(PACKAGE, page_size=10)
        await client.close()
        assert exc_info.value.status_code == 403

    async def test_list_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(handler)
        with pytest.raises(ListingTransportError) as exc_info:
            await client.list_versions(PACKAGE, page_size=10)
        await client.close()
        assert exc_info.value.status_code is None

    async def test_download_streams_body(self) -> None:
        tracking = TrackingStream(b"0123456789abcdef")
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, stream=tracking, headers={"Content-Length": "16"})

        client = _client(handler)
        stream = await client.download(FILE)

        assert not tracking.closed
        assert stream.content_length == 16
        assert stream.file_name == "foo.zip"
        chunks = [chunk async for chunk in stream.iter_bytes()]
        assert b"".join(chunks) == b"0123456789abcdef"
        assert tracking.closed
        assert seen[0].url.path == f"/download/v1/{FILE}:download"
        assert seen[0].url.params["alt"] == "media"
        await client.close()

    async def test_download_non_200_closes_response(self) -> None:
        tracking = TrackingStream(b"denied")
        client = _client(lambda request: httpx.Response(500, stream=tracking))

        with pytest.raises(DownloadFailedError) as exc_info:
            await client.download(FILE)
        await client.close()

        assert exc_info.value.status_code == 500
        assert tracking.closed

    async def test_download_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client = _client(handler)
        with pytest.raises(DownloadFailedError) as exc_info:
            await client.download(FILE)
        await client.close()
        assert exc_info.value.status_code is None

    async def test_partial_read_then_close(
        self, fake_registry: FakeArtifactRegistry, ar_client: ArtifactRegistryClient
    ) -> None:
        fake_registry.add_file("acme", "foo", "foo.zip", b"x" * 100)
        stream = await ar_client.download(fake_registry.scope.file("acme", "foo.zip"))
        async with stream:
            async for _chunk in stream.iter_bytes():
                break
        assert fake_registry.streams[0].closed

    async def test_close_releases_token(self) -> None:
        token = AsyncMock()
        client = ArtifactRegistryClient(
            httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200))),
            token=token,
        )
        await client.close()
        token.close.assert_awaited_once()


class TestGoogleTokenAuth:
    async def test_sets_bearer_header(self) -> None:
        token = AsyncMock()
        token.get.return_value = "ya29.token"
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), auth=GoogleTokenAuth(token)
        ) as client:
            await client.get("https://artifactregistry.test/v1/x")

        assert seen[0].headers["Authorization"] == "Bearer ya29.token"
        token.get.assert_awaited_once()
