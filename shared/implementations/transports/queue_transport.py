"""Queue-backed transport for a process group on one host."""

import logging
import queue
from collections import deque
from typing import Any, Deque, Optional, Sequence, Union
from shared.interfaces.transport import Transport
from shared.domain.consts import MessageKind
from shared.domain.models import Message

logger = logging.getLogger(__name__)


class QueueTransport(Transport):
    """
    Transport over one inbox queue per rank and a shared barrier.

    Works with ``multiprocessing`` queues and barrier (one OS process per
    rank) as well as ``queue.Queue`` and ``threading.Barrier`` (one thread
    per rank), since both expose ``put``/``get``/``get_nowait`` and ``wait``.

    Each rank reads only its own inbox. Messages pulled off the inbox by
    ``probe`` that are not of the probed kind are kept in a local buffer
    and handed out first by the blocking receives, so probing never
    reorders or drops them.
    """

    def __init__(self, rank: int, inboxes: Sequence[Any], barrier: Any) -> None:
        if not 0 <= rank < len(inboxes):
            raise ValueError(f"Rank {rank} outside group of size {len(inboxes)}")
        self._rank = rank
        self._inboxes = list(inboxes)
        self._barrier = barrier
        self._pending: Deque[Message] = deque()

    @property
    def rank(self) -> int:
        return self._rank

    @property
    def size(self) -> int:
        return len(self._inboxes)

    def send(
        self,
        dest: int,
        kind: MessageKind,
        payload: Optional[Union[int, str]] = None,
    ) -> None:
        self._inboxes[dest].put(Message(kind=kind, source=self._rank, payload=payload))

    def recv_any(self) -> Message:
        if self._pending:
            return self._pending.popleft()
        return self._inboxes[self._rank].get()

    def recv_from_coordinator(self) -> Message:
        # Workers are only ever addressed by the coordinator
        return self.recv_any()

    def probe(self, kind: MessageKind) -> bool:
        for message in self._pending:
            if message.kind == kind:
                self._pending.remove(message)
                return True

        inbox = self._inboxes[self._rank]
        while True:
            try:
                message = inbox.get_nowait()
            except queue.Empty:
                return False
            if message.kind == kind:
                return True
            self._pending.append(message)

    def barrier(self) -> None:
        self._barrier.wait()
