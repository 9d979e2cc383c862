"""Worker loop: pull chunks, scan them, report matches, honor the global stop."""

import logging
import time
from typing import Optional
from shared.config.log_setup import configure_logging
from shared.domain.consts import MessageKind, Rank, ScanStatus, HashDisplay
from shared.domain.models import SearchConfiguration, WorkChunk, WorkerStats
from shared.domain.status import WorkerState
from shared.factories.verifier_factory import create_verifier
from shared.interfaces.hash_verifier import HashVerifier
from shared.interfaces.transport import Transport
from shared.keyspace import KeyspaceCodec
from worker.infrastructure.stop_signal import StopSignal

logger = logging.getLogger(__name__)


class Worker:
    """
    One worker rank of the search.

    Per length: AWAITING_ASSIGNMENT -> SCANNING -> (AWAITING_ASSIGNMENT | STOPPED).

    - NO_MORE_WORK ends the length; the worker meets the group at the barrier.
    - GLOBAL_STOP, a local match, or a stop seen while scanning ends the run.
      The worker still meets the group at the barrier of the current length,
      unless the stop was the first message of a new length: the coordinator
      only sends it there after it has already left the group.
    - After a stop has been observed the worker sends nothing further.
    """

    def __init__(
        self,
        transport: Transport,
        search_config: SearchConfiguration,
        verifier: HashVerifier,
        codec: Optional[KeyspaceCodec] = None,
        start_time: Optional[float] = None,
    ) -> None:
        self.transport = transport
        self.search_config = search_config
        self.verifier = verifier
        self.codec = codec if codec is not None else KeyspaceCodec(search_config.charset)
        self.start_time = start_time if start_time is not None else time.time()
        self.stop_signal = StopSignal(transport)
        self.state = WorkerState.AWAITING_ASSIGNMENT
        self.stats = WorkerStats(rank=transport.rank)

    def _elapsed(self) -> float:
        return time.time() - self.start_time

    def run(self) -> WorkerStats:
        """Take part in every length until the keyspace or the run is over."""
        for length in self.search_config.lengths():
            if self._run_length(length):
                break

        logger.info(
            f"[{self._elapsed():.4f}s] Worker {self.stats.rank} done: "
            f"{self.stats.chunks_scanned} chunks, "
            f"{self.stats.candidates_checked} candidates checked "
            f"(found={self.stats.found}, stopped_by_signal={self.stats.stopped_by_signal})"
        )
        return self.stats

    def _run_length(self, length: int) -> bool:
        """
        Process assignments for one length.

        Returns:
            True if the run is over for this worker, False to continue with
            the next length.
        """
        total = self.codec.combination_count(length)
        rank = self.transport.rank
        messages_received = 0
        self.state = WorkerState.AWAITING_ASSIGNMENT

        while True:
            message = self.transport.recv_from_coordinator()
            messages_received += 1

            if message.kind == MessageKind.NO_MORE_WORK:
                logger.debug(
                    f"[{self._elapsed():.4f}s] Worker {rank}: no more work for length {length}"
                )
                break

            if message.kind == MessageKind.GLOBAL_STOP:
                logger.info(f"[{self._elapsed():.4f}s] Worker {rank}: received global stop")
                self.stop_signal.set()
                self.stats.stopped_by_signal = True
                self.state = WorkerState.STOPPED
                if messages_received == 1:
                    # Leftover from a length the coordinator already closed
                    return True
                break

            if message.kind != MessageKind.WORK_ASSIGNMENT:
                logger.warning(
                    f"Worker {rank}: ignoring unexpected {message.kind.name} "
                    f"from rank {message.source}"
                )
                continue

            chunk = WorkChunk(
                start_index=int(message.payload),
                length=length,
                chunk_size=self.search_config.chunk_size,
                total_combinations=total,
            )
            status = self._scan_chunk(chunk)
            if status != ScanStatus.NOT_FOUND:
                break

            logger.debug(
                f"[{self._elapsed():.4f}s] Worker {rank}: finished chunk "
                f"[{chunk.start_index}, {chunk.end_index}), requesting next"
            )
            self.transport.send(Rank.COORDINATOR, MessageKind.WORK_REQUEST)
            self.state = WorkerState.AWAITING_ASSIGNMENT

        self.transport.barrier()
        if self.state == WorkerState.STOPPED:
            return True
        self.stats.lengths_completed.append(length)
        return False

    def _scan_chunk(self, chunk: WorkChunk) -> ScanStatus:
        """
        Scan one chunk in increasing index order.

        Probes for the global stop at every multiple of ``stop_check_every``
        after the chunk's first index.
        Stops at the first match and reports it to the coordinator.

        Returns:
            ScanStatus.FOUND, ScanStatus.STOPPED or ScanStatus.NOT_FOUND.
        """
        self.state = WorkerState.SCANNING
        rank = self.transport.rank
        check_interval = self.search_config.stop_check_every
        decode = self.codec.decode_candidate
        matches = self.verifier.matches
        length = chunk.length
        start = chunk.start_index

        logger.debug(
            f"[{self._elapsed():.4f}s] Worker {rank}: scanning length {length} "
            f"[{chunk.start_index}, {chunk.end_index})"
        )

        for i in range(start, chunk.end_index):
            # Check the stop signal every check_interval iterations past the first index
            if i > start and i % check_interval == 0 and self.stop_signal.poll():
                self.stats.candidates_checked += i - start
                self.stats.stopped_by_signal = True
                self.state = WorkerState.STOPPED
                logger.info(
                    f"[{self._elapsed():.4f}s] Worker {rank}: stopped at index {i} "
                    f"(chunk [{chunk.start_index}, {chunk.end_index}), length {length})"
                )
                return ScanStatus.STOPPED

            candidate = decode(i, length)
            if matches(candidate):
                self.stats.candidates_checked += i - start + 1
                self.stats.found = True
                self.state = WorkerState.STOPPED
                logger.info(
                    f"[{self._elapsed():.4f}s] Worker {rank}: match for hash "
                    f"{self.verifier.target_hash[:HashDisplay.PREFIX_LENGTH]}... "
                    f"at index {i} of length {length}: {candidate}"
                )
                self.transport.send(Rank.COORDINATOR, MessageKind.FOUND, candidate)
                return ScanStatus.FOUND

        self.stats.candidates_checked += len(chunk)
        self.stats.chunks_scanned += 1
        return ScanStatus.NOT_FOUND


def run_worker_process(
    transport: Transport,
    search_config: SearchConfiguration,
    start_time: float,
    log_level: str = "INFO",
) -> WorkerStats:
    """Entry point of a worker process started by the process group."""
    configure_logging(log_level)
    verifier = create_verifier(search_config.target_hash, search_config.hash_scheme)
    worker = Worker(transport, search_config, verifier, start_time=start_time)
    return worker.run()
