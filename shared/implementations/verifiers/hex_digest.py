"""Unsalted hex digest verifier (md5, sha1, sha256, sha512)."""

import hashlib
from shared.interfaces.hash_verifier import HashVerifier


class HexDigestVerifier(HashVerifier):
    """Compares ``hashlib.<algorithm>(candidate).hexdigest()`` with the target.

    The target is normalized to lowercase once; each candidate costs a
    single digest and a string comparison.
    """

    def __init__(self, target_hash: str, algorithm: str) -> None:
        if algorithm not in hashlib.algorithms_guaranteed:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        super().__init__(target_hash.lower())
        self.algorithm = algorithm
        self._constructor = getattr(hashlib, algorithm)

    def matches(self, candidate: str) -> bool:
        return self._constructor(candidate.encode()).hexdigest() == self.target_hash
