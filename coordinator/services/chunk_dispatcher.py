"""Chunk dispatcher for handing out keyspace ranges."""

import logging
from typing import Optional
from shared.domain.models import DistributionCursor, WorkChunk

logger = logging.getLogger(__name__)


class ChunkDispatcher:
    """
    Hands out consecutive chunks of one length's keyspace.

    Thread-safety: this class holds only the chunk size. All state lives in
    the DistributionCursor passed in, which belongs to the coordinator's
    per-length iteration and is never shared.
    """

    def __init__(self, chunk_size: int) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        self.chunk_size = chunk_size

    def open_cursor(self, length: int, total_combinations: int) -> DistributionCursor:
        """Create a fresh cursor at index 0 for ``length``."""
        return DistributionCursor(length=length, total_combinations=total_combinations)

    def next_chunk(self, cursor: DistributionCursor) -> Optional[WorkChunk]:
        """
        Take the next chunk and advance the cursor by ``chunk_size``.

        Returns:
            The next WorkChunk, or None if the length is exhausted.
        """
        if cursor.is_exhausted():
            return None

        chunk = WorkChunk(
            start_index=cursor.next_start_index,
            length=cursor.length,
            chunk_size=self.chunk_size,
            total_combinations=cursor.total_combinations,
        )
        cursor.next_start_index += self.chunk_size
        cursor.chunks_dispatched += 1
        cursor.candidates_dispatched += len(chunk)
        logger.debug(
            f"Length {cursor.length}: dispatched chunk [{chunk.start_index}, {chunk.end_index}) "
            f"({cursor.chunks_dispatched}/{self.expected_chunks(cursor.total_combinations)})"
        )
        return chunk

    def retire_worker(self, cursor: DistributionCursor) -> None:
        """Count one more worker told there is no more work for this length."""
        cursor.workers_finished += 1

    def expected_chunks(self, total_combinations: int) -> int:
        """Number of chunks needed to cover ``total_combinations`` (ceiling division)."""
        return -(-total_combinations // self.chunk_size)

    def progress_percent(self, cursor: DistributionCursor) -> float:
        """Share of the length's keyspace handed out so far."""
        if cursor.total_combinations == 0:
            return 100.0
        return cursor.candidates_dispatched / cursor.total_combinations * 100.0
