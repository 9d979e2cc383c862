"""Coordinator loop: distribute chunks per length and propagate the global stop."""

import logging
import time
from typing import Optional
from shared.domain.consts import MessageKind, Rank, HashDisplay
from shared.domain.models import (
    SearchConfiguration,
    DistributionCursor,
    GlobalSearchState,
    Message,
    SearchResult,
)
from shared.domain.status import CoordinatorState
from shared.interfaces.transport import Transport
from shared.keyspace import KeyspaceCodec
from coordinator.services.chunk_dispatcher import ChunkDispatcher

logger = logging.getLogger(__name__)


class Coordinator:
    """
    Rank 0 of the search: owns the distribution cursor and the found flag.

    For every length from ``min_length`` to ``max_length``:

    - DISTRIBUTING: one chunk (or NO_MORE_WORK) to every worker.
    - DRAINING: answer WORK_REQUEST with the next chunk or NO_MORE_WORK;
      on the first FOUND, broadcast GLOBAL_STOP and close the length.
    - LENGTH_DONE: every worker retired; barrier with the group.

    GLOBAL_STOP is terminal: the run ends after the barrier of the length
    in which the match was reported. Only the first FOUND is honored.
    """

    def __init__(
        self,
        transport: Transport,
        search_config: SearchConfiguration,
        codec: Optional[KeyspaceCodec] = None,
        start_time: Optional[float] = None,
        progress_every_chunks: int = 100,
    ) -> None:
        if transport.worker_count < 1:
            raise ValueError(f"Need at least one worker, group size is {transport.size}")
        self.transport = transport
        self.search_config = search_config
        self.codec = codec if codec is not None else KeyspaceCodec(search_config.charset)
        self.start_time = start_time if start_time is not None else time.time()
        self.progress_every_chunks = max(1, progress_every_chunks)
        self.dispatcher = ChunkDispatcher(search_config.chunk_size)
        self.search_state = GlobalSearchState()
        self.state = CoordinatorState.DISTRIBUTING

    def _elapsed(self) -> float:
        return time.time() - self.start_time

    def _worker_ranks(self) -> range:
        return range(Rank.FIRST_WORKER, self.transport.size)

    def run(self) -> SearchResult:
        """
        Search every configured length until a match is found or all are exhausted.

        Returns:
            SearchResult with the matched candidate (if any) and dispatch totals.
        """
        lengths_searched = []
        chunks_dispatched = 0
        candidates_dispatched = 0

        for length in self.search_config.lengths():
            cursor = self._search_length(length)
            lengths_searched.append(length)
            chunks_dispatched += cursor.chunks_dispatched
            candidates_dispatched += cursor.candidates_dispatched

            self.transport.barrier()
            if self.state == CoordinatorState.GLOBAL_STOP:
                break

        result = SearchResult(
            found=self.search_state.found,
            candidate=self.search_state.matched_candidate or None,
            finder_rank=self.search_state.finder_rank,
            elapsed_seconds=self._elapsed(),
            lengths_searched=lengths_searched,
            chunks_dispatched=chunks_dispatched,
            candidates_dispatched=candidates_dispatched,
        )
        logger.info(
            f"Search for hash {self.search_config.target_hash[:HashDisplay.PREFIX_LENGTH]}... "
            f"finished: found={result.found}, {result.chunks_dispatched} chunks, "
            f"{result.candidates_dispatched} candidates dispatched"
        )
        return result

    def _search_length(self, length: int) -> DistributionCursor:
        """Run the distribute/drain protocol for one length."""
        total = self.codec.combination_count(length)
        cursor = self.dispatcher.open_cursor(length, total)
        worker_count = self.transport.worker_count

        logger.info(
            f"Trying length {length} ({total} combinations, "
            f"{self.dispatcher.expected_chunks(total)} chunks)..."
        )

        self.state = CoordinatorState.DISTRIBUTING
        for rank in self._worker_ranks():
            self._assign_next(cursor, rank)

        self.state = CoordinatorState.DRAINING
        while cursor.workers_finished < worker_count:
            message = self.transport.recv_any()

            if message.kind == MessageKind.WORK_REQUEST:
                logger.debug(
                    f"[{self._elapsed():.4f}s] Work request from worker {message.source}"
                )
                self._assign_next(cursor, message.source)
            elif message.kind == MessageKind.FOUND:
                self._handle_found(cursor, message)
            else:
                logger.warning(
                    f"Ignoring unexpected {message.kind.name} from rank {message.source}"
                )

        if self.state != CoordinatorState.GLOBAL_STOP:
            self.state = CoordinatorState.LENGTH_DONE
            logger.info(
                f"Length {length} exhausted: {cursor.candidates_dispatched} candidates "
                f"in {cursor.chunks_dispatched} chunks, not found"
            )
        return cursor

    def _assign_next(self, cursor: DistributionCursor, rank: int) -> None:
        """Send the next chunk to ``rank``, or retire it for this length."""
        chunk = self.dispatcher.next_chunk(cursor)
        if chunk is None:
            self.transport.send(rank, MessageKind.NO_MORE_WORK)
            self.dispatcher.retire_worker(cursor)
            logger.debug(
                f"Length {cursor.length}: worker {rank} retired "
                f"({cursor.workers_finished}/{self.transport.worker_count})"
            )
            return

        self.transport.send(rank, MessageKind.WORK_ASSIGNMENT, chunk.start_index)
        if cursor.chunks_dispatched % self.progress_every_chunks == 0:
            logger.info(
                f"Length {cursor.length}: progress "
                f"{self.dispatcher.progress_percent(cursor):.2f}% dispatched"
            )

    def _handle_found(self, cursor: DistributionCursor, message: Message) -> None:
        """
        Commit the first found report and stop every worker.

        Later reports are ignored: no second broadcast, no result change.
        """
        candidate = str(message.payload)
        if not self.search_state.commit(candidate, message.source):
            logger.warning(
                f"Ignoring duplicate FOUND from worker {message.source} "
                f"(already found by worker {self.search_state.finder_rank})"
            )
            return

        self.state = CoordinatorState.GLOBAL_STOP
        logger.info(
            f"[{self._elapsed():.4f}s] Worker {message.source} found a match "
            f"at length {cursor.length}; broadcasting global stop"
        )
        for rank in self._worker_ranks():
            self.transport.send(rank, MessageKind.GLOBAL_STOP)
        cursor.workers_finished = self.transport.worker_count
