"""
Resource name helpers for Artifact Registry.

Every registry namespace is a generic repository inside one project/location
scope. All names are relative to that scope.
"""

from dataclasses import dataclass
from urllib.parse import quote


@dataclass(frozen=True)
class RegistryScope:
    """The project/location every repository lives under."""

    project_id: str
    location: str

    @property
    def name(self) -> str:
        return f"projects/{self.project_id}/locations/{self.location}"

    def repository(self, namespace: str) -> str:
        """Repository resource name for a registry namespace."""
        return f"{self.name}/repositories/{namespace}"

    def package(self, namespace: str, package: str) -> str:
        """Package resource name."""
        return f"{self.repository(namespace)}/packages/{quote(package, safe='')}"

    def file(self, namespace: str, file_id: str) -> str:
        """File resource name; file ids are URL-encoded as a single segment."""
        return f"{self.repository(namespace)}/files/{quote(file_id, safe='')}"


def owner_filter(package_resource: str) -> str:
    """List filter selecting every file owned by a package (any version)."""
    return f'owner="{package_resource}"'
