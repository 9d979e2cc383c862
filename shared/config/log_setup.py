"""Per-process logging setup."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the current process.

    Worker processes started with the spawn/forkserver methods do not
    inherit the parent's handlers, so every process entry point calls this.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
