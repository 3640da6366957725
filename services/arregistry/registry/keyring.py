"""
Parser for the ASCII-armored public key published with a provider.

Uses pgpy (pure Python) to read the key ring. The armor text is returned
verbatim so clients verify signatures against the exact published bytes.
"""

import pgpy
from pgpy.errors import PGPError

from arregistry.logging_config import get_logger
from arregistry.registry.errors import MalformedKeyRingError
from arregistry.registry.models import SigningKey

logger = get_logger(__name__)


def _count_primary_keys(ascii_armor: str) -> tuple[pgpy.PGPKey | None, int]:
    try:
        key, others = pgpy.PGPKey.from_blob(ascii_armor)
    except (PGPError, ValueError) as e:
        logger.debug("Key ring did not parse", error=str(e))
        return None, 0

    if key.fingerprint is None:
        return None, 0

    # `others` holds subkeys and may hold the first primary again
    primaries = {str(key.fingerprint)}
    primaries.update(str(o.fingerprint) for o in others.values() if o.is_primary)
    return key, len(primaries)


def key_id(key: pgpy.PGPKey) -> str:
    """The 16-character key ID (last 16 hex digits of the fingerprint)."""
    return str(key.fingerprint).replace(" ", "")[-16:].upper()


def parse_signing_key(data: bytes | str) -> SigningKey:
    """Parse a key ring that must hold exactly one public key."""
    try:
        ascii_armor = data.decode("utf-8") if isinstance(data, bytes) else data
    except UnicodeDecodeError as e:
        raise MalformedKeyRingError(0) from e

    key, count = _count_primary_keys(ascii_armor)
    if key is None or count != 1:
        raise MalformedKeyRingError(count)

    return SigningKey(key_id=key_id(key), ascii_armor=ascii_armor)
