"""Translation between Terraform registry coordinates and Artifact Registry."""

from arregistry.registry.modules import ModuleStore
from arregistry.registry.providers import ProviderStore

__all__ = ["ModuleStore", "ProviderStore"]
