"""
Provider store: Terraform provider protocol on top of Artifact Registry.

Mapping to Artifact Registry:
- registry namespace  => repository
- provider name       => package
- {version}-{os}-{arch} => version
- binary, SHA256SUMS, SHA256SUMS.sig, public key => files in the repository,
  recognized by name (see arregistry.registry.naming)
"""

from collections.abc import Iterable

from arregistry.logging_config import get_logger
from arregistry.registry.base import StoreBase
from arregistry.registry.checksums import parse_checksums
from arregistry.registry.errors import (
    AssetNotFoundError,
    InvalidVersionFormatError,
    VersionDecodeErrors,
)
from arregistry.registry.keyring import parse_signing_key
from arregistry.registry.models import (
    ProviderAssetSet,
    ProviderDownload,
    ProviderVersionSet,
    SigningKey,
)
from arregistry.registry.naming import (
    ProviderAssetRole,
    asset_download_path,
    decode_version,
    provider_file_name,
    provider_file_prefix,
    require_component,
    resource_id,
)
from arregistry.storage.resources import owner_filter

logger = get_logger(__name__)

REQUIRED_ROLES = (
    ProviderAssetRole.BINARY,
    ProviderAssetRole.CHECKSUMS,
    ProviderAssetRole.SIGNATURE,
)


def build_version_set(
    raw_versions: Iterable[str],
) -> tuple[ProviderVersionSet, VersionDecodeErrors | None]:
    """Group decoded store versions by semantic version.

    Undecodable entries are collected rather than raised; the set built from
    the rest is still returned.
    """
    version_set = ProviderVersionSet()
    errors: list[InvalidVersionFormatError] = []

    for raw in raw_versions:
        try:
            version, os, arch = decode_version(raw)
        except InvalidVersionFormatError as e:
            errors.append(e)
            continue
        version_set.add(version, os, arch)

    return version_set, (VersionDecodeErrors(errors) if errors else None)


def classify_assets(
    file_ids: Iterable[str], name: str, version: str, os: str, arch: str
) -> ProviderAssetSet:
    """Pick the four provider files out of a package's file listing."""
    prefix = provider_file_prefix(name, version)
    expected = {
        provider_file_name(name, version, role, os, arch): role for role in ProviderAssetRole
    }

    found: dict[ProviderAssetRole, str] = {}
    for file_id in file_ids:
        if not file_id.startswith(prefix):
            continue
        role = expected.get(file_id)
        if role is not None:
            found[role] = file_id

    for role in REQUIRED_ROLES:
        if role not in found:
            raise AssetNotFoundError(role, f"{name} {version} {os}/{arch}")

    return ProviderAssetSet(
        binary=found[ProviderAssetRole.BINARY],
        checksums=found[ProviderAssetRole.CHECKSUMS],
        signature=found[ProviderAssetRole.SIGNATURE],
        public_key=found.get(ProviderAssetRole.PUBLIC_KEY),
    )


class ProviderStore(StoreBase):
    """Lists and resolves provider builds stored in Artifact Registry."""

    async def list_versions(
        self, namespace: str, name: str
    ) -> tuple[ProviderVersionSet, VersionDecodeErrors | None]:
        """All versions and platforms of a provider.

        Returns the version set plus an aggregate of any version names that
        did not decode. Listing failures raise ListingTransportError.
        """
        require_component("namespace", namespace)
        require_component("name", name)

        raw_versions = await self._list_versions(namespace, name)
        version_set, errors = build_version_set(resource_id(r) for r in raw_versions)

        logger.debug(
            "Listed provider versions",
            namespace=namespace,
            name=name,
            versions=len(version_set),
            undecodable=len(errors.errors) if errors else 0,
        )
        return version_set, errors

    async def resolve_assets(
        self, namespace: str, name: str, version: str, os: str, arch: str
    ) -> ProviderAssetSet:
        for field, value in (
            ("namespace", namespace),
            ("name", name),
            ("version", version),
            ("os", os),
            ("arch", arch),
        ):
            require_component(field, value)

        package = self._scope.package(namespace, name)
        files = await self._list_files(namespace, owner_filter(package))
        return classify_assets((resource_id(f) for f in files), name, version, os, arch)

    async def get_version(
        self, namespace: str, name: str, version: str, os: str, arch: str
    ) -> ProviderDownload:
        """Download descriptor for one provider build.

        Fetches the checksum manifest for the binary's digest and, when
        published, the public key file.
        """
        assets = await self.resolve_assets(namespace, name, version, os, arch)

        stream = await self._open(namespace, assets.checksums)
        async with stream:
            manifest = parse_checksums(await stream.read())
        shasum = manifest.digest_for(assets.binary)

        signing_keys: tuple[SigningKey, ...] = ()
        if assets.public_key is not None:
            stream = await self._open(namespace, assets.public_key)
            async with stream:
                signing_keys = (parse_signing_key(await stream.read()),)
        else:
            logger.info(
                "Provider has no public key file",
                namespace=namespace,
                name=name,
                version=version,
            )

        return ProviderDownload(
            os=os,
            arch=arch,
            filename=assets.binary,
            download_url=asset_download_path("provider", namespace, assets.binary),
            shasums_url=asset_download_path("provider", namespace, assets.checksums),
            shasums_signature_url=asset_download_path("provider", namespace, assets.signature),
            shasum=shasum,
            signing_keys=signing_keys,
        )
