"""Tests for hash verifier implementations."""

import hashlib
import pytest
from passlib.hash import md5_crypt, sha256_crypt, sha512_crypt
from shared.implementations.verifiers import HexDigestVerifier, CryptVerifier


class TestHexDigestVerifier:
    """Tests for HexDigestVerifier."""

    @pytest.mark.parametrize("algorithm", ["md5", "sha1", "sha256", "sha512"])
    def test_matches_own_digest(self, algorithm):
        """Test that the candidate producing the digest matches."""
        target = hashlib.new(algorithm, b"ab3").hexdigest()
        verifier = HexDigestVerifier(target, algorithm)

        assert verifier.matches("ab3") is True
        assert verifier.matches("ab4") is False

    def test_uppercase_target_normalized(self):
        """Test that an uppercase target still matches."""
        target = hashlib.md5(b"zz").hexdigest().upper()
        verifier = HexDigestVerifier(target, "md5")

        assert verifier.target_hash == target.lower()
        assert verifier.matches("zz") is True

    def test_unknown_algorithm_rejected(self):
        """Test that unsupported algorithms raise ValueError."""
        with pytest.raises(ValueError):
            HexDigestVerifier("a" * 32, "whirlpool9000")


class TestCryptVerifier:
    """Tests for crypt(3)-style verification."""

    def test_md5_crypt(self):
        """Test a $1$ hash."""
        target = md5_crypt.using(salt="saltsalt").hash("ab")
        verifier = CryptVerifier(target)

        assert verifier.scheme == "md5_crypt"
        assert verifier.matches("ab") is True
        assert verifier.matches("ac") is False

    def test_sha256_crypt(self):
        """Test a $5$ hash."""
        target = sha256_crypt.using(rounds=1000, salt="saltsalt").hash("a1")
        verifier = CryptVerifier(target)

        assert verifier.scheme == "sha256_crypt"
        assert verifier.matches("a1") is True

    def test_sha512_crypt(self):
        """Test a $6$ hash as found in shadow files."""
        target = sha512_crypt.using(rounds=1000, salt="saltsalt").hash("z9")
        verifier = CryptVerifier(target)

        assert verifier.scheme == "sha512_crypt"
        assert verifier.matches("z9") is True
        assert verifier.matches("z8") is False

    def test_unrecognized_hash_rejected(self):
        """Test that a non-crypt string raises ValueError."""
        with pytest.raises(ValueError):
            CryptVerifier("$9$nothing$here")

    @pytest.mark.parametrize("config_string", ["$6$saltsalt", "$6$saltsalt$", "$5$abcd", "$1$abcd$"])
    def test_salt_without_checksum_rejected(self, config_string):
        """Test that a $id$salt string with no digest fails at construction, not per candidate."""
        with pytest.raises(ValueError, match="Unrecognized crypt hash"):
            CryptVerifier(config_string)

    def test_malformed_rounds_rejected(self):
        """Test that an unparseable rounds field raises ValueError."""
        with pytest.raises(ValueError, match="Unrecognized crypt hash"):
            CryptVerifier("$6$rounds=abc$saltsalt$" + "x" * 86)
