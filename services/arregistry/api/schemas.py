"""Terraform Registry wire-format response models."""

from pydantic import BaseModel, ConfigDict, Field

from arregistry.registry.models import ModuleVersion, ProviderDownload, ProviderVersionSet


class DiscoveryResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    modules_v1: str = Field(default="/v1/modules/", alias="modules.v1")
    providers_v1: str = Field(default="/v1/providers/", alias="providers.v1")


class HealthResponse(BaseModel):
    status: str = "OK"


# --- Modules ---


class ModuleVersionEntry(BaseModel):
    version: str


class ModuleVersionList(BaseModel):
    versions: list[ModuleVersionEntry] = Field(default_factory=list)


class ModuleVersionsResponse(BaseModel):
    modules: list[ModuleVersionList]

    @classmethod
    def from_versions(cls, versions: list[ModuleVersion]) -> "ModuleVersionsResponse":
        entries = [ModuleVersionEntry(version=v.version) for v in versions]
        return cls(modules=[ModuleVersionList(versions=entries)])


# --- Providers ---


class PlatformEntry(BaseModel):
    os: str
    arch: str


class ProviderVersionEntry(BaseModel):
    version: str
    protocols: list[str]
    platforms: list[PlatformEntry]


class ProviderVersionsResponse(BaseModel):
    versions: list[ProviderVersionEntry]

    @classmethod
    def from_version_set(cls, version_set: ProviderVersionSet) -> "ProviderVersionsResponse":
        return cls(
            versions=[
                ProviderVersionEntry(
                    version=v.version,
                    protocols=list(v.protocols),
                    platforms=[PlatformEntry(os=p.os, arch=p.arch) for p in v.platforms],
                )
                for v in version_set.versions.values()
            ]
        )


class GPGPublicKey(BaseModel):
    key_id: str
    ascii_armor: str
    trust_signature: str = ""
    source: str = ""
    source_url: str = ""


class SigningKeys(BaseModel):
    gpg_public_keys: list[GPGPublicKey] = Field(default_factory=list)


class ProviderDownloadResponse(BaseModel):
    protocols: list[str]
    os: str
    arch: str
    filename: str
    download_url: str
    shasums_url: str
    shasums_signature_url: str
    shasum: str
    signing_keys: SigningKeys

    @classmethod
    def from_download(cls, download: ProviderDownload) -> "ProviderDownloadResponse":
        return cls(
            protocols=list(download.protocols),
            os=download.os,
            arch=download.arch,
            filename=download.filename,
            download_url=download.download_url,
            shasums_url=download.shasums_url,
            shasums_signature_url=download.shasums_signature_url,
            shasum=download.shasum,
            signing_keys=SigningKeys(
                gpg_public_keys=[
                    GPGPublicKey(
                        key_id=k.key_id,
                        ascii_armor=k.ascii_armor,
                        trust_signature=k.trust_signature,
                        source=k.source,
                        source_url=k.source_url,
                    )
                    for k in download.signing_keys
                ]
            ),
        )
