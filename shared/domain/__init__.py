"""Domain models and entities."""

from shared.domain.models import (
    SearchConfiguration,
    WorkChunk,
    DistributionCursor,
    GlobalSearchState,
    WorkerStats,
    Message,
    SearchResult,
)
from shared.domain.status import CoordinatorState, WorkerState
from shared.domain.consts import (
    MessageKind,
    Rank,
    HashSchemeName,
    TransportName,
    Keyspace,
    HashDisplay,
    ExitCode,
    ScanStatus,
)

__all__ = [
    "SearchConfiguration",
    "WorkChunk",
    "DistributionCursor",
    "GlobalSearchState",
    "WorkerStats",
    "Message",
    "SearchResult",
    "CoordinatorState",
    "WorkerState",
    "MessageKind",
    "Rank",
    "HashSchemeName",
    "TransportName",
    "Keyspace",
    "HashDisplay",
    "ExitCode",
    "ScanStatus",
]
