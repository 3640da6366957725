"""
Backing artifact store layer.

Provides init_storage() / close_storage() for app lifespan and
get_storage() as a FastAPI dependency. The client is built once and shared.
"""

from __future__ import annotations

from arregistry.config import ConfigurationError, settings
from arregistry.logging_config import get_logger
from arregistry.storage.protocol import ArtifactStore
from arregistry.storage.resources import RegistryScope

logger = get_logger(__name__)

# Module-level client and scope, set once at startup
_store: ArtifactStore | None = None
_scope: RegistryScope | None = None


async def init_storage() -> None:
    """Initialize the Artifact Registry client based on configuration.

    Called during app startup (lifespan).
    """
    global _store, _scope  # noqa: PLW0603
    cfg = settings.artifact_registry

    if not cfg.project_id:
        raise ConfigurationError("artifact_registry.project_id is required")

    from arregistry.storage.artifactregistry import ArtifactRegistryClient

    _store = ArtifactRegistryClient.from_credentials(
        api_url=cfg.api_url,
        download_url=cfg.download_url,
        scopes=cfg.scopes,
    )
    _scope = RegistryScope(project_id=cfg.project_id, location=cfg.location)
    logger.info("Storage initialized", scope=_scope.name)


async def close_storage() -> None:
    """Close the client and release resources.

    Called during app shutdown (lifespan).
    """
    global _store, _scope  # noqa: PLW0603
    if _store is not None:
        await _store.close()
        _store = None
        _scope = None
        logger.info("Storage closed")


def set_storage(store: ArtifactStore | None, scope: RegistryScope | None = None) -> None:
    """Install a client explicitly (tests, embedding)."""
    global _store, _scope  # noqa: PLW0603
    _store = store
    _scope = scope


def get_storage() -> ArtifactStore:
    """FastAPI dependency that returns the artifact store client.

    Raises RuntimeError if storage has not been initialized.
    """
    if _store is None:
        raise RuntimeError("Storage not initialized - call init_storage() first")
    return _store


def get_scope() -> RegistryScope:
    """FastAPI dependency that returns the configured project/location scope."""
    if _scope is None:
        raise RuntimeError("Storage not initialized - call init_storage() first")
    return _scope


def get_storage_or_none() -> ArtifactStore | None:
    """Return the client if initialized, otherwise None."""
    return _store
