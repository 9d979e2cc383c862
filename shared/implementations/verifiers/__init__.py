"""Candidate verifier implementations.

This package contains concrete implementations of hash verifiers.
"""

from shared.implementations.verifiers.hex_digest import HexDigestVerifier
from shared.implementations.verifiers.crypt_hash import CryptVerifier

__all__ = ["HexDigestVerifier", "CryptVerifier"]
