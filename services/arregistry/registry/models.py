"""
Request-scoped data types produced by the provider and module stores.
"""

from dataclasses import dataclass, field

# Terraform provider protocol versions advertised for every build.
DEFAULT_PROTOCOLS: tuple[str, ...] = ("5.0",)


@dataclass(frozen=True)
class Platform:
    """One OS/architecture build of a provider version."""

    os: str
    arch: str


@dataclass
class ProviderVersion:
    """A provider version and the platforms it was built for, in listing order."""

    version: str
    protocols: list[str] = field(default_factory=lambda: list(DEFAULT_PROTOCOLS))
    platforms: list[Platform] = field(default_factory=list)

    def add_platform(self, platform: Platform) -> None:
        if platform not in self.platforms:
            self.platforms.append(platform)


@dataclass
class ProviderVersionSet:
    """All versions of a provider keyed by semantic version."""

    versions: dict[str, ProviderVersion] = field(default_factory=dict)

    def add(self, version: str, os: str, arch: str) -> None:
        entry = self.versions.get(version)
        if entry is None:
            entry = self.versions[version] = ProviderVersion(version=version)
        entry.add_platform(Platform(os=os, arch=arch))

    def __len__(self) -> int:
        return len(self.versions)


@dataclass(frozen=True)
class SigningKey:
    """A public key as served to Terraform: id plus the original armor text."""

    key_id: str
    ascii_armor: str
    trust_signature: str = ""
    source: str = ""
    source_url: str = ""


@dataclass(frozen=True)
class ProviderAssetSet:
    """The file ids resolved for one provider version/platform."""

    binary: str
    checksums: str
    signature: str
    public_key: str | None = None


@dataclass(frozen=True)
class ProviderDownload:
    """Everything `terraform init` needs to fetch and verify a provider build."""

    os: str
    arch: str
    filename: str
    download_url: str
    shasums_url: str
    shasums_signature_url: str
    shasum: str
    signing_keys: tuple[SigningKey, ...] = ()
    protocols: tuple[str, ...] = DEFAULT_PROTOCOLS


@dataclass(frozen=True)
class ModuleVersion:
    """A module version and the registry-relative path of its archive."""

    version: str
    source_url: str
