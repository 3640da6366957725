"""
Module store: Terraform module protocol on top of Artifact Registry.

Mapping to Artifact Registry:
- registry namespace           => repository
- terraform-{system}-{name}    => package
- version                      => version
- {package}_{version}.zip      => the single archive file of a version
"""

from arregistry.logging_config import get_logger
from arregistry.registry.base import StoreBase
from arregistry.registry.models import ModuleVersion
from arregistry.registry.naming import (
    asset_download_path,
    module_archive_name,
    module_package_name,
    require_component,
    resource_id,
)

logger = get_logger(__name__)


def _package(namespace: str, name: str, system: str) -> str:
    require_component("namespace", namespace)
    require_component("name", name)
    require_component("system", system)
    return module_package_name(name, system)


def _module_version(namespace: str, package: str, version: str) -> ModuleVersion:
    archive = module_archive_name(package, version)
    return ModuleVersion(
        version=version,
        source_url=asset_download_path("module", namespace, archive),
    )


class ModuleStore(StoreBase):
    """Lists module versions and computes their archive locations."""

    async def list_versions(self, namespace: str, name: str, system: str) -> list[ModuleVersion]:
        package = _package(namespace, name, system)
        raw_versions = await self._list_versions(namespace, package)

        versions = [_module_version(namespace, package, resource_id(r)) for r in raw_versions]
        logger.debug(
            "Listed module versions",
            namespace=namespace,
            package=package,
            versions=len(versions),
        )
        return versions

    def get_version(self, namespace: str, name: str, system: str, version: str) -> ModuleVersion:
        """Archive location of one module version. No store call is made."""
        package = _package(namespace, name, system)
        require_component("version", version)
        return _module_version(namespace, package, version)
