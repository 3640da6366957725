"""Shared plumbing for the provider and module stores."""

from collections.abc import Awaitable, Callable

from arregistry.logging_config import get_logger
from arregistry.registry.naming import require_component
from arregistry.storage.protocol import ArtifactStore, AssetStream, ListPage
from arregistry.storage.resources import RegistryScope

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 1000


async def collect_pages(fetch_page: Callable[[str], Awaitable[ListPage]]) -> list[str]:
    """Follow continuation tokens until the store returns an empty one.

    Any listing failure propagates; no partial result is returned.
    """
    names: list[str] = []
    page_token = ""
    pages = 0
    while True:
        page = await fetch_page(page_token)
        pages += 1
        names.extend(page.names)
        if not page.next_page_token:
            break
        page_token = page.next_page_token

    logger.debug("Listing complete", pages=pages, entries=len(names))
    return names


class StoreBase:
    """A store bound to the shared artifact client and the configured scope."""

    def __init__(
        self,
        storage: ArtifactStore,
        scope: RegistryScope,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self._storage = storage
        self._scope = scope
        self._page_size = page_size

    async def _list_versions(self, namespace: str, package: str) -> list[str]:
        parent = self._scope.package(namespace, package)
        return await collect_pages(
            lambda token: self._storage.list_versions(parent, self._page_size, token)
        )

    async def _list_files(self, namespace: str, filter: str) -> list[str]:
        parent = self._scope.repository(namespace)
        return await collect_pages(
            lambda token: self._storage.list_files(parent, filter, self._page_size, token)
        )

    async def _open(self, namespace: str, file_id: str) -> AssetStream:
        return await self._storage.download(self._scope.file(namespace, file_id))

    async def get_asset(self, namespace: str, file_name: str) -> AssetStream:
        """Open a download of one file in a namespace's repository.

        The caller owns the returned stream and must close it.
        """
        require_component("namespace", namespace)
        require_component("file name", file_name)
        return await self._open(namespace, file_name)
