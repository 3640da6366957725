"""
Error taxonomy for the registry translation layer.

Every failure raised by the stores derives from RegistryError. The API layer
maps them onto HTTP status codes; nothing here retries.
"""

from collections.abc import Sequence


class RegistryError(Exception):
    """Base exception for registry operations."""


class InvalidVersionFormatError(RegistryError):
    """A raw store version string does not decode into (version, os, arch)."""

    def __init__(self, raw_version: str) -> None:
        self.raw_version = raw_version
        super().__init__(f"invalid version format: {raw_version}")


class VersionDecodeErrors(RegistryError):
    """Aggregate of every decode failure seen while listing versions.

    Returned alongside a partial result, never raised by the stores.
    """

    def __init__(self, errors: Sequence[InvalidVersionFormatError]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


class InvalidPackageKeyError(RegistryError):
    """A namespace/name/system/version component cannot form a store identifier."""

    def __init__(self, field: str, value: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"invalid {field}: {value!r}")


class AssetNotFoundError(RegistryError):
    """One of the required provider files is missing for a version/platform."""

    def __init__(self, role: str, detail: str = "") -> None:
        self.role = role
        message = f"{role} not found"
        if detail:
            message = f"{message} for {detail}"
        super().__init__(message)


class DigestNotFoundError(RegistryError):
    """The queried file has no entry in a checksum manifest."""

    def __init__(self, file_name: str) -> None:
        self.file_name = file_name
        super().__init__(f"no checksum for {file_name}")


class MalformedKeyRingError(RegistryError):
    """A key file does not hold exactly one public key."""

    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"key ring contains {count} entities, wanted 1")


class DownloadFailedError(RegistryError):
    """The backing store answered a download with a non-200 status.

    `status_code` is None when no response was received at all.
    """

    def __init__(self, status_code: int | None, file_name: str = "", detail: str = "") -> None:
        self.status_code = status_code
        self.file_name = file_name
        if status_code is None:
            message = f"download request failed: {detail}"
        else:
            message = f"unexpected download status code: {status_code}"
        super().__init__(message)


class ListingTransportError(RegistryError):
    """A paginated listing call failed; the whole listing is abandoned."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
