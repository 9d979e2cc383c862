"""Local process group bootstrap built on multiprocessing."""

import logging
import multiprocessing
from typing import Any, Callable, List, Optional
from shared.implementations.transports import QueueTransport
from shared.domain.consts import Rank

logger = logging.getLogger(__name__)


class LocalProcessGroup:
    """
    Coordinator plus ``num_workers`` worker processes on this host.

    The calling process takes rank 0 (coordinator). Every rank gets an
    inbox queue; all ranks share one barrier sized to the whole group.
    Workers are daemonic so they cannot outlive a coordinator that dies.
    """

    def __init__(self, num_workers: int, context: Optional[Any] = None) -> None:
        if num_workers < 1:
            raise ValueError(f"Need at least one worker, got {num_workers}")
        self._ctx = context if context is not None else multiprocessing.get_context()
        self.num_workers = num_workers
        self._inboxes = [self._ctx.Queue() for _ in range(num_workers + 1)]
        self._barrier = self._ctx.Barrier(num_workers + 1)
        self._processes: List[Any] = []

    @property
    def size(self) -> int:
        return self.num_workers + 1

    def transport_for(self, rank: int) -> QueueTransport:
        """Build the transport endpoint for ``rank``."""
        return QueueTransport(rank, self._inboxes, self._barrier)

    def coordinator_transport(self) -> QueueTransport:
        return self.transport_for(Rank.COORDINATOR)

    def start(self, target: Callable[..., Any], *args: Any) -> None:
        """
        Start one process per worker rank.

        Each process runs ``target(transport, *args)``; ``target`` must be a
        module-level function so it can be pickled by spawn/forkserver.
        """
        for rank in range(Rank.FIRST_WORKER, self.size):
            process = self._ctx.Process(
                target=target,
                args=(self.transport_for(rank), *args),
                name=f"worker-{rank}",
                daemon=True,
            )
            process.start()
            self._processes.append(process)
        logger.info(f"Started {len(self._processes)} worker processes")

    def join(self, timeout: Optional[float] = None) -> List[Optional[int]]:
        """
        Wait for every worker process to exit.

        Returns:
            Exit codes in rank order (None for a process still running).
        """
        for process in self._processes:
            process.join(timeout)
        exit_codes = [process.exitcode for process in self._processes]
        for rank, code in enumerate(exit_codes, start=Rank.FIRST_WORKER):
            if code != 0:
                logger.error(f"Worker {rank} exited with status {code}")
        return exit_codes

    def terminate(self) -> None:
        """Kill any worker process still alive."""
        for process in self._processes:
            if process.is_alive():
                process.terminate()
