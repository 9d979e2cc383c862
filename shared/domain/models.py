"""Domain models for the search configuration, work units and messages."""

from dataclasses import dataclass, field
from typing import List, Optional, Union
from pydantic import BaseModel, Field, model_validator, ConfigDict
from shared.domain.consts import HashSchemeName, Keyspace, MessageKind


class SearchConfiguration(BaseModel):
    """Immutable search parameters, broadcast once at startup."""
    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "target_hash": "$6$saltsalt$...",
                "charset": Keyspace.DEFAULT_CHARSET,
                "min_length": 1,
                "max_length": 6,
                "chunk_size": 10000,
                "stop_check_every": 1000,
                "hash_scheme": HashSchemeName.AUTO,
            }
        },
    )

    target_hash: str = Field(..., min_length=1, description="Opaque target hash")
    charset: str = Field(Keyspace.DEFAULT_CHARSET, min_length=2, description="Ordered symbols")
    min_length: int = Field(1, ge=1, description="First candidate length searched")
    max_length: int = Field(6, ge=1, description="Last candidate length searched")
    chunk_size: int = Field(10000, gt=0, description="Candidates per work unit")
    stop_check_every: int = Field(1000, gt=0, description="Iterations between stop probes")
    hash_scheme: HashSchemeName = Field(HashSchemeName.AUTO, description="Verifier selection")

    @model_validator(mode='after')
    def validate_keyspace(self) -> 'SearchConfiguration':
        """Validate length bounds, the 63-bit count limit and the stop-check cadence."""
        if self.max_length < self.min_length:
            raise ValueError(
                f"max_length ({self.max_length}) must be >= min_length ({self.min_length})"
            )
        if len(set(self.charset)) != len(self.charset):
            raise ValueError("charset must not contain duplicate symbols")
        if len(self.charset) ** self.max_length >= Keyspace.MAX_COMBINATIONS:
            raise ValueError(
                f"max_length {self.max_length} overflows the keyspace limit "
                f"for a {len(self.charset)}-symbol charset"
            )
        max_interval = max(1, self.chunk_size // Keyspace.MIN_STOP_CHECKS_PER_CHUNK)
        if self.stop_check_every > max_interval:
            raise ValueError(
                f"stop_check_every ({self.stop_check_every}) must be at most {max_interval} "
                f"for chunk_size {self.chunk_size}"
            )
        return self

    def lengths(self) -> range:
        """Candidate lengths in search order."""
        return range(self.min_length, self.max_length + 1)


@dataclass
class WorkChunk:
    """A contiguous run of keyspace indices for one length."""
    start_index: int
    length: int
    chunk_size: int
    total_combinations: int

    @property
    def end_index(self) -> int:
        """Exclusive end, clipped to the keyspace."""
        return min(self.start_index + self.chunk_size, self.total_combinations)

    def __len__(self) -> int:
        return max(0, self.end_index - self.start_index)


@dataclass
class DistributionCursor:
    """Coordinator-owned distribution state for one length."""
    length: int
    total_combinations: int
    next_start_index: int = 0
    workers_finished: int = 0
    chunks_dispatched: int = 0
    candidates_dispatched: int = 0

    def is_exhausted(self) -> bool:
        """Check if every index of the length has been handed out."""
        return self.next_start_index >= self.total_combinations


@dataclass
class GlobalSearchState:
    """Run-wide outcome; transitions to found at most once."""
    found: bool = False
    matched_candidate: str = ""
    finder_rank: Optional[int] = None

    def commit(self, candidate: str, finder_rank: int) -> bool:
        """
        Record a found report.

        Returns:
            True for the first report of the run, False for every later one.
        """
        if self.found:
            return False
        self.found = True
        self.matched_candidate = candidate
        self.finder_rank = finder_rank
        return True


@dataclass
class WorkerStats:
    """Per-worker counters reported at exit."""
    rank: int
    chunks_scanned: int = 0
    candidates_checked: int = 0
    found: bool = False
    stopped_by_signal: bool = False
    lengths_completed: List[int] = field(default_factory=list)


class Message(BaseModel):
    """One protocol message as delivered to its receiver."""
    model_config = ConfigDict(frozen=True)

    kind: MessageKind = Field(..., description="Message kind (MPI tag)")
    source: int = Field(..., ge=0, description="Sender rank")
    payload: Optional[Union[int, str]] = Field(
        None, description="Start index for WORK_ASSIGNMENT, candidate for FOUND"
    )


class SearchResult(BaseModel):
    """Final outcome reported by the coordinator."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "found": True,
                "candidate": "ab3xyz",
                "finder_rank": 2,
                "elapsed_seconds": 12.5,
                "lengths_searched": [1, 2, 3, 4, 5, 6],
                "chunks_dispatched": 6200,
                "candidates_dispatched": 61_977_600,
            }
        }
    )

    found: bool = Field(..., description="Whether a candidate matched")
    candidate: Optional[str] = Field(None, description="Matched candidate if found")
    finder_rank: Optional[int] = Field(None, description="Rank of the reporting worker")
    elapsed_seconds: float = Field(0.0, ge=0, description="Wall-clock time since start")
    lengths_searched: List[int] = Field(default_factory=list)
    chunks_dispatched: int = Field(0, ge=0)
    candidates_dispatched: int = Field(0, ge=0)
