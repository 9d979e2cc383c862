"""crypt(3)-style verifier for ``$id$salt$hash`` targets."""

import logging
from passlib.context import CryptContext
from shared.interfaces.hash_verifier import HashVerifier
from shared.domain.consts import HashDisplay

logger = logging.getLogger(__name__)

CRYPT_CONTEXT = CryptContext(
    schemes=["sha512_crypt", "sha256_crypt", "md5_crypt"],
)


class CryptVerifier(HashVerifier):
    """Verifies candidates against a salted crypt(3) hash.

    The salt and round count are carried inside the target itself, so the
    handler is resolved once here and reused for every candidate.

    Supported prefixes: ``$1$`` (md5-crypt), ``$5$`` (sha256-crypt),
    ``$6$`` (sha512-crypt).
    """

    def __init__(self, target_hash: str) -> None:
        super().__init__(target_hash)
        handler = CRYPT_CONTEXT.identify(target_hash, resolve=True)
        if handler is None:
            raise ValueError(
                f"Unrecognized crypt hash: {target_hash[:HashDisplay.PREFIX_LENGTH]}..."
            )
        # identify() only matches the prefix; a bare $id$salt config string has no checksum
        try:
            parsed = handler.from_string(target_hash)
        except (ValueError, TypeError) as e:
            raise ValueError(
                f"Unrecognized crypt hash: {target_hash[:HashDisplay.PREFIX_LENGTH]}... ({e})"
            )
        if not parsed.checksum:
            raise ValueError(
                f"Unrecognized crypt hash: {target_hash[:HashDisplay.PREFIX_LENGTH]}... "
                f"(no checksum)"
            )
        self._handler = handler
        self.scheme = handler.name
        logger.debug(
            f"Resolved crypt scheme {self.scheme} for hash "
            f"{target_hash[:HashDisplay.PREFIX_LENGTH]}..."
        )

    def matches(self, candidate: str) -> bool:
        return self._handler.verify(candidate, self.target_hash)
