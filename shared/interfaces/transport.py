"""Abstract message transport between the coordinator and workers."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from shared.domain.consts import MessageKind
from shared.domain.models import Message


class Transport(ABC):
    """Point-to-point messaging plus a group barrier.

    One instance per process. ``rank`` 0 is the coordinator, ``1..size-1``
    are workers. Messages from one sender to one receiver are delivered in
    the order they were sent; there is no ordering across senders.
    """

    @property
    @abstractmethod
    def rank(self) -> int:
        """This process's identity."""
        pass

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of processes in the group, coordinator included."""
        pass

    @abstractmethod
    def send(
        self,
        dest: int,
        kind: MessageKind,
        payload: Optional[Union[int, str]] = None,
    ) -> None:
        """Send one message to ``dest``. Does not wait for the receiver."""
        pass

    @abstractmethod
    def recv_any(self) -> Message:
        """Block until a message from any sender arrives (coordinator side)."""
        pass

    @abstractmethod
    def recv_from_coordinator(self) -> Message:
        """Block until the next message from the coordinator arrives (worker side)."""
        pass

    @abstractmethod
    def probe(self, kind: MessageKind) -> bool:
        """
        Check without blocking for a pending message of ``kind``.

        A message found this way is consumed. Pending messages of other
        kinds stay available to the blocking receives.
        """
        pass

    @abstractmethod
    def barrier(self) -> None:
        """Block until every process in the group has called barrier."""
        pass

    @property
    def worker_count(self) -> int:
        return self.size - 1
