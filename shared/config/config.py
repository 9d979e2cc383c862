"""Configuration loaded from environment variables."""

import os
from shared.domain.consts import Keyspace
from shared.domain.models import SearchConfiguration
from shared.keyspace import KeyspaceCodec


def _get_env_int(key: str, default: str) -> int:
    """Get integer environment variable with validation."""
    try:
        return int(os.getenv(key, default))
    except ValueError:
        raise ValueError(f"Invalid integer value for {key}")


class Config:
    """Centralized configuration from environment variables."""

    # Keyspace
    CHARSET: str = os.getenv("CHARSET", Keyspace.DEFAULT_CHARSET)
    MIN_LENGTH: int = _get_env_int("MIN_LENGTH", "1")
    MAX_LENGTH: int = _get_env_int("MAX_LENGTH", "6")

    # Chunking
    CHUNK_SIZE: int = _get_env_int("CHUNK_SIZE", "10000")
    # At most CHUNK_SIZE // 4 so several stop probes happen per chunk
    STOP_CHECK_EVERY: int = _get_env_int("STOP_CHECK_EVERY", "1000")

    # Process group: worker processes started in local mode (coordinator is extra)
    NUM_WORKERS: int = _get_env_int("NUM_WORKERS", "4")
    TRANSPORT: str = os.getenv("TRANSPORT", "local").strip().lower()

    # Verification: "auto" detects the scheme from the target hash
    HASH_SCHEME: str = os.getenv("HASH_SCHEME", "auto").strip().lower()

    # Output
    PROGRESS_EVERY_CHUNKS: int = _get_env_int("PROGRESS_EVERY_CHUNKS", "100")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()


config = Config()


def build_search_configuration(target_hash: str, cfg: Config = config) -> SearchConfiguration:
    """
    Build the validated search parameters broadcast to every worker.

    Raises:
        ValueError: If MAX_LENGTH would overflow the 63-bit index space.
        pydantic.ValidationError: If the configured keyspace is invalid.
    """
    max_allowed = KeyspaceCodec(cfg.CHARSET).max_length_within()
    if cfg.MAX_LENGTH > max_allowed:
        raise ValueError(
            f"MAX_LENGTH {cfg.MAX_LENGTH} too large for a {len(cfg.CHARSET)}-symbol charset "
            f"(at most {max_allowed})"
        )
    return SearchConfiguration(
        target_hash=target_hash,
        charset=cfg.CHARSET,
        min_length=cfg.MIN_LENGTH,
        max_length=cfg.MAX_LENGTH,
        chunk_size=cfg.CHUNK_SIZE,
        stop_check_every=cfg.STOP_CHECK_EVERY,
        hash_scheme=cfg.HASH_SCHEME,
    )
