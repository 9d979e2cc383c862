"""Constants to avoid string typos and magic numbers."""

from enum import Enum, IntEnum


class MessageKind(IntEnum):
    """Message kinds exchanged between coordinator and workers.

    Values double as MPI tags.
    """
    WORK_REQUEST = 1     # worker -> coordinator, no payload
    WORK_ASSIGNMENT = 2  # coordinator -> worker, payload: start index
    NO_MORE_WORK = 3     # coordinator -> worker, no payload
    FOUND = 4            # worker -> coordinator, payload: candidate
    GLOBAL_STOP = 5      # coordinator -> every worker, no payload


class Rank:
    """Process identities within the group."""
    COORDINATOR = 0
    FIRST_WORKER = 1
    MIN_GROUP_SIZE = 2  # one coordinator plus at least one worker


class HashSchemeName(str, Enum):
    """Verifier selection names."""
    AUTO = "auto"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"
    CRYPT = "crypt"


class TransportName(str, Enum):
    """Process group backends."""
    LOCAL = "local"
    MPI = "mpi"


class Keyspace:
    """Keyspace limits."""
    DEFAULT_CHARSET = "abcdefghijklmnopqrstuvwxyz0123456789"
    # Counts must fit a signed 64-bit integer so they survive MPI/C peers
    MAX_COMBINATIONS = 2 ** 63
    # stop_check_every may be at most chunk_size // this, so a chunk is probed several times
    MIN_STOP_CHECKS_PER_CHUNK = 4


class HashDisplay:
    """Constants for hash display."""
    PREFIX_LENGTH = 8  # Number of characters to show in logs (e.g., "1d0b28c7...")


class ExitCode:
    """Process exit statuses."""
    OK = 0
    CONFIG_ERROR = 1
    WORKER_FAILED = 1


class ScanStatus(str, Enum):
    """Outcome of scanning one chunk."""
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    STOPPED = "STOPPED"
