"""
Artifact Registry backend for the registry.

Talks to the Artifact Registry REST API through one long-lived httpx client.
Auth via Application Default Credentials (Workload Identity on GKE / Cloud Run):
gcloud-aio-auth mints and refreshes the access token, an httpx auth flow
attaches it to every request.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any
from urllib.parse import unquote

import httpx

from arregistry.logging_config import get_logger
from arregistry.registry.errors import DownloadFailedError, ListingTransportError
from arregistry.storage.protocol import AssetStream, ListPage

logger = get_logger(__name__)

DEFAULT_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class GoogleTokenAuth(httpx.Auth):
    """Attach a bearer token from a gcloud-aio-auth `Token` to each request."""

    def __init__(self, token: Any) -> None:
        self._token = token

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        access_token = await self._token.get()
        request.headers["Authorization"] = f"Bearer {access_token}"
        yield request


class ArtifactRegistryClient:
    """Artifact store backed by Artifact Registry generic repositories.

    Built once at startup and shared by every store; holds no per-request state.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_url: str = "https://artifactregistry.googleapis.com",
        download_url: str = "https://artifactregistry.googleapis.com",
        token: Any = None,
    ) -> None:
        self._client = http_client
        self._api_url = api_url.rstrip("/")
        self._download_url = download_url.rstrip("/")
        self._token = token

    @classmethod
    def from_credentials(
        cls,
        api_url: str = "https://artifactregistry.googleapis.com",
        download_url: str = "https://artifactregistry.googleapis.com",
        scopes: list[str] | None = None,
    ) -> ArtifactRegistryClient:
        """Build a client authenticated with the ambient Google identity."""
        from gcloud.aio.auth import Token

        token = Token(scopes=scopes or DEFAULT_SCOPES)
        http_client = httpx.AsyncClient(
            auth=GoogleTokenAuth(token),
            follow_redirects=True,
            timeout=httpx.Timeout(30.0, read=None),
        )
        logger.info("Artifact Registry client initialized", api_url=api_url)
        return cls(http_client, api_url=api_url, download_url=download_url, token=token)

    async def _list(self, path: str, field: str, params: dict[str, Any]) -> ListPage:
        url = f"{self._api_url}/v1/{path}"
        query = {k: v for k, v in params.items() if v}

        try:
            resp = await self._client.get(url, params=query)
        except httpx.HTTPError as e:
            raise ListingTransportError(f"listing {path} failed: {e}") from e

        if resp.status_code != 200:
            raise ListingTransportError(
                f"listing {path} returned status {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise ListingTransportError(f"listing {path} returned invalid JSON") from e

        return ListPage(
            names=[item["name"] for item in body.get(field, []) if item.get("name")],
            next_page_token=body.get("nextPageToken", ""),
        )

    async def list_versions(
        self,
        parent: str,
        page_size: int,
        page_token: str = "",
    ) -> ListPage:
        return await self._list(
            f"{parent}/versions",
            "versions",
            {"pageSize": page_size, "pageToken": page_token},
        )

    async def list_files(
        self,
        parent: str,
        filter: str,
        page_size: int,
        page_token: str = "",
    ) -> ListPage:
        return await self._list(
            f"{parent}/files",
            "files",
            {"filter": filter, "pageSize": page_size, "pageToken": page_token},
        )

    async def download(self, file_resource: str) -> AssetStream:
        url = f"{self._download_url}/download/v1/{file_resource}:download"
        request = self._client.build_request("GET", url, params={"alt": "media"})

        try:
            resp = await self._client.send(request, stream=True)
        except httpx.HTTPError as e:
            raise DownloadFailedError(None, file_resource, detail=str(e)) from e

        if resp.status_code != 200:
            await resp.aclose()
            logger.warning(
                "Artifact download rejected",
                file=file_resource,
                status_code=resp.status_code,
            )
            raise DownloadFailedError(resp.status_code, file_resource)

        return AssetStream(resp, file_name=unquote(file_resource.rsplit("/", 1)[-1]))

    async def close(self) -> None:
        await self._client.aclose()
        if self._token is not None:
            await self._token.close()
            self._token = None
        logger.info("Artifact Registry client closed")
