"""
Naming helpers mapping registry coordinates onto Artifact Registry ids.

Store layout (one generic repository per registry namespace):

    providers
        package  {name}
        version  {version}-{os}-{arch}
        files    terraform-provider-{name}_{version}_{os}_{arch}.zip
                 terraform-provider-{name}_{version}_SHA256SUMS
                 terraform-provider-{name}_{version}_SHA256SUMS.sig
                 terraform-provider-{name}_{version}_gpg-public-key.pem

    modules
        package  terraform-{system}-{name}
        version  {version}
        files    terraform-{system}-{name}_{version}.zip
"""

from enum import StrEnum
from urllib.parse import quote, unquote

from arregistry.registry.errors import InvalidPackageKeyError, InvalidVersionFormatError

VERSION_DELIMITER = "-"

ASSET_DOWNLOAD_PATH = "/download/{kind}/{namespace}/asset/{file_name}"


class ProviderAssetRole(StrEnum):
    """The four files published with every provider build."""

    BINARY = "provider binary"
    CHECKSUMS = "checksum manifest"
    SIGNATURE = "checksum signature"
    PUBLIC_KEY = "public key"

    def suffix(self, os: str, arch: str) -> str:
        match self:
            case ProviderAssetRole.BINARY:
                return f"_{os}_{arch}.zip"
            case ProviderAssetRole.CHECKSUMS:
                return "_SHA256SUMS"
            case ProviderAssetRole.SIGNATURE:
                return "_SHA256SUMS.sig"
            case ProviderAssetRole.PUBLIC_KEY:
                return "_gpg-public-key.pem"
        raise ValueError(self)


def encode_version(version: str, os: str, arch: str) -> str:
    """Join a provider build triple into a single store version id."""
    for part in (version, os, arch):
        if not part or VERSION_DELIMITER in part:
            raise InvalidVersionFormatError(VERSION_DELIMITER.join((version, os, arch)))
    return VERSION_DELIMITER.join((version, os, arch))


def decode_version(raw_version: str) -> tuple[str, str, str]:
    """Split a store version id back into (version, os, arch)."""
    parts = raw_version.split(VERSION_DELIMITER)
    if len(parts) != 3 or not all(parts):
        raise InvalidVersionFormatError(raw_version)
    return parts[0], parts[1], parts[2]


def provider_file_prefix(name: str, version: str) -> str:
    """Common prefix of every file belonging to one provider version."""
    return f"terraform-provider-{name}_{version}"


def provider_file_name(name: str, version: str, role: ProviderAssetRole, os: str, arch: str) -> str:
    return provider_file_prefix(name, version) + role.suffix(os, arch)


def module_package_name(name: str, system: str) -> str:
    """Store package id for a module (`terraform-{system}-{name}`)."""
    return f"terraform-{system}-{name}"


def module_archive_name(package: str, version: str) -> str:
    """Canonical archive file id of one module version."""
    return f"{package}_{version}.zip"


def asset_download_path(kind: str, namespace: str, file_name: str) -> str:
    """Registry-relative URL that proxies a store file to the client."""
    return ASSET_DOWNLOAD_PATH.format(
        kind=kind,
        namespace=quote(namespace, safe=""),
        file_name=quote(file_name, safe=""),
    )


def resource_id(resource_name: str) -> str:
    """Last segment of an Artifact Registry resource name, URL-decoded."""
    return unquote(resource_name.rsplit("/", 1)[-1])


def require_component(field: str, value: str) -> str:
    """Reject empty components and anything that would escape a resource path."""
    if not value or "/" in value or value in (".", ".."):
        raise InvalidPackageKeyError(field, value)
    return value
