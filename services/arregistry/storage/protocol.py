"""
Artifact store protocol and types.

Defines the ArtifactStore Protocol the provider and module stores depend on,
along with the listing page record and the caller-owned download stream.
"""

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from types import TracebackType
from typing import Protocol, Self, runtime_checkable

import httpx

# --- Data Types ---


@dataclass(frozen=True)
class ListPage:
    """One page of a paginated listing: resource names plus the continuation token."""

    names: list[str] = field(default_factory=list)
    next_page_token: str = ""


class AssetStream:
    """An open download owned by the caller.

    Wraps a live HTTP response. Must be released with `aclose()` (or by using
    it as an async context manager) on every exit path. `iter_bytes()` releases
    it when iteration finishes, fails, or is cancelled.
    """

    def __init__(self, response: httpx.Response, file_name: str = "") -> None:
        self._response = response
        self.file_name = file_name

    @property
    def content_length(self) -> int | None:
        value = self._response.headers.get("Content-Length")
        return int(value) if value and value.isdigit() else None

    @property
    def closed(self) -> bool:
        return self._response.is_closed

    async def read(self) -> bytes:
        """Read the remaining body into memory. Only for small auxiliary files."""
        return await self._response.aread()

    async def iter_bytes(self, chunk_size: int | None = None) -> AsyncIterator[bytes]:
        try:
            async for chunk in self._response.aiter_bytes(chunk_size):
                yield chunk
        finally:
            await self.aclose()

    async def aclose(self) -> None:
        if not self._response.is_closed:
            await self._response.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


# --- Protocol ---


@runtime_checkable
class ArtifactStore(Protocol):
    """Protocol defining the backing artifact store interface.

    All methods are async. Listing methods return a single page; callers
    follow `next_page_token` until it is empty.
    """

    async def list_versions(
        self,
        parent: str,
        page_size: int,
        page_token: str = "",
    ) -> ListPage:
        """List version resource names under a package.

        Args:
            parent: Package resource name.
            page_size: Maximum number of entries in the page.
            page_token: Continuation token from the previous page.

        Raises:
            ListingTransportError: If the call fails.
        """
        ...

    async def list_files(
        self,
        parent: str,
        filter: str,
        page_size: int,
        page_token: str = "",
    ) -> ListPage:
        """List file resource names under a repository matching `filter`.

        Raises:
            ListingTransportError: If the call fails.
        """
        ...

    async def download(self, file_resource: str) -> AssetStream:
        """Open a download of a file resource.

        Raises:
            DownloadFailedError: If the store answers with a non-200 status.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the client."""
        ...
