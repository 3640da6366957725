"""Parser for SHA256SUMS manifests published next to provider binaries."""

from collections.abc import Iterator, Mapping

from arregistry.registry.errors import DigestNotFoundError


class ChecksumManifest(Mapping[str, str]):
    """File name -> lowercase hex digest, in manifest order."""

    def __init__(self, entries: dict[str, str] | None = None) -> None:
        self._entries = dict(entries or {})

    def __getitem__(self, file_name: str) -> str:
        return self._entries[file_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def digest_for(self, file_name: str) -> str:
        """Digest of `file_name`, matched exactly or as a path suffix.

        Manifests built from a release directory may list `dist/foo.zip` or
        `./foo.zip`; those still resolve for `foo.zip`. When several entries
        share the suffix the first one in the manifest wins.
        """
        digest = self._entries.get(file_name)
        if digest is not None:
            return digest

        for name, digest in self._entries.items():
            if name.endswith("/" + file_name):
                return digest

        raise DigestNotFoundError(file_name)


def parse_checksums(data: bytes | str) -> ChecksumManifest:
    """Parse `<hex-digest> <file name>` lines. Extra fields are ignored."""
    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data

    entries: dict[str, str] = {}
    for line in text.splitlines():
        fields = line.split()
        if len(fields) < 2:
            continue
        digest, file_name = fields[0], fields[1]
        # `sha256sum -b` marks binary mode with a leading asterisk
        file_name = file_name.removeprefix("*")
        entries[file_name] = digest.lower()

    return ChecksumManifest(entries)
