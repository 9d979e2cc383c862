"""Coordinator services."""

from coordinator.services.chunk_dispatcher import ChunkDispatcher
from coordinator.services.coordinator import Coordinator

__all__ = [
    "ChunkDispatcher",
    "Coordinator",
]
