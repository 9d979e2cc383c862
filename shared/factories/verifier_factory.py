"""Factory for creating hash verifier instances."""

import re
from shared.interfaces.hash_verifier import HashVerifier
from shared.implementations.verifiers import HexDigestVerifier, CryptVerifier
from shared.domain.consts import HashSchemeName, HashDisplay

# Hex digest length -> scheme, used when HASH_SCHEME is "auto"
DIGEST_LENGTHS: dict[int, HashSchemeName] = {
    32: HashSchemeName.MD5,
    40: HashSchemeName.SHA1,
    64: HashSchemeName.SHA256,
    128: HashSchemeName.SHA512,
}

_SCHEME_DIGEST_LENGTHS = {scheme: length for length, scheme in DIGEST_LENGTHS.items()}

_HEX_PATTERN = re.compile(r"^[0-9a-fA-F]+$")


def detect_scheme(target_hash: str) -> HashSchemeName:
    """Guess the verifier scheme from the shape of the target hash.

    Raises:
        ValueError: If the hash is neither crypt-style nor a known hex digest
    """
    if target_hash.startswith("$"):
        return HashSchemeName.CRYPT
    if _HEX_PATTERN.match(target_hash) and len(target_hash) in DIGEST_LENGTHS:
        return DIGEST_LENGTHS[len(target_hash)]
    raise ValueError(
        f"Cannot detect hash scheme for {target_hash[:HashDisplay.PREFIX_LENGTH]}... "
        f"(length {len(target_hash)})"
    )


def create_verifier(target_hash: str, scheme_name: str = HashSchemeName.AUTO) -> HashVerifier:
    """Factory for creating verifiers bound to ``target_hash``.

    Returns:
        HashVerifier instance

    Raises:
        ValueError: If scheme_name is unknown or the hash does not fit it
    """
    try:
        scheme = HashSchemeName(scheme_name)
    except ValueError:
        raise ValueError(f"Unknown hash scheme: {scheme_name}")

    if scheme == HashSchemeName.AUTO:
        scheme = detect_scheme(target_hash)

    if scheme == HashSchemeName.CRYPT:
        return CryptVerifier(target_hash)

    if not _HEX_PATTERN.match(target_hash):
        raise ValueError(f"Invalid {scheme.value} hex digest: {target_hash}")
    expected_length = _SCHEME_DIGEST_LENGTHS[scheme]
    if len(target_hash) != expected_length:
        raise ValueError(
            f"Invalid {scheme.value} hex digest: expected {expected_length} characters, "
            f"got {len(target_hash)}"
        )
    return HexDigestVerifier(target_hash, scheme.value)
