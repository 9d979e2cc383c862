"""Abstract candidate verification interface."""

from abc import ABC, abstractmethod


class HashVerifier(ABC):
    """Abstract verifier bound to one target hash.

    All verifiers must implement:
    - matches: Check whether a candidate reproduces the target hash

    Implementations sit on the hot path (one call per candidate) and must
    be deterministic and free of shared mutable state.
    """

    def __init__(self, target_hash: str) -> None:
        self.target_hash = target_hash

    @abstractmethod
    def matches(self, candidate: str) -> bool:
        """Check a candidate against the target hash.

        Args:
            candidate: Candidate password

        Returns:
            True if hashing the candidate reproduces the target hash
        """
        pass
