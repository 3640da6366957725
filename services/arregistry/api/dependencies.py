"""FastAPI dependencies wiring the stores to the shared Artifact Registry client.

Stores are cheap request-scoped views over the client built at startup; the
client and scope are the only state shared between requests.
"""

from fastapi import Depends

from arregistry.config import settings
from arregistry.registry import ModuleStore, ProviderStore
from arregistry.storage import get_scope, get_storage
from arregistry.storage.protocol import ArtifactStore
from arregistry.storage.resources import RegistryScope


def get_provider_store(
    storage: ArtifactStore = Depends(get_storage),
    scope: RegistryScope = Depends(get_scope),
) -> ProviderStore:
    return ProviderStore(storage, scope, page_size=settings.artifact_registry.page_size)


def get_module_store(
    storage: ArtifactStore = Depends(get_storage),
    scope: RegistryScope = Depends(get_scope),
) -> ModuleStore:
    return ModuleStore(storage, scope, page_size=settings.artifact_registry.page_size)
