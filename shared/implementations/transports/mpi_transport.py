"""MPI-backed transport (run the program under ``mpiexec``)."""

from typing import Any, Optional, Union
from mpi4py import MPI
from shared.interfaces.transport import Transport
from shared.domain.consts import MessageKind, Rank
from shared.domain.models import Message


class MpiTransport(Transport):
    """
    Transport over an mpi4py communicator.

    Message kinds are used as MPI tags and payloads travel through the
    pickle-based lowercase ``send``/``recv`` API.
    """

    def __init__(self, comm: Any = None) -> None:
        self._comm = comm if comm is not None else MPI.COMM_WORLD

    @property
    def rank(self) -> int:
        return self._comm.Get_rank()

    @property
    def size(self) -> int:
        return self._comm.Get_size()

    def send(
        self,
        dest: int,
        kind: MessageKind,
        payload: Optional[Union[int, str]] = None,
    ) -> None:
        self._comm.send(payload, dest=dest, tag=int(kind))

    def _recv(self, source: int) -> Message:
        status = MPI.Status()
        payload = self._comm.recv(source=source, tag=MPI.ANY_TAG, status=status)
        return Message(
            kind=MessageKind(status.Get_tag()),
            source=status.Get_source(),
            payload=payload,
        )

    def recv_any(self) -> Message:
        return self._recv(MPI.ANY_SOURCE)

    def recv_from_coordinator(self) -> Message:
        return self._recv(Rank.COORDINATOR)

    def probe(self, kind: MessageKind) -> bool:
        if not self._comm.iprobe(source=MPI.ANY_SOURCE, tag=int(kind)):
            return False
        # Consume it so it cannot be mistaken for a reply later
        self._comm.recv(source=MPI.ANY_SOURCE, tag=int(kind))
        return True

    def barrier(self) -> None:
        self._comm.Barrier()

    def bcast(self, obj: Any, root: int = Rank.COORDINATOR) -> Any:
        """Broadcast ``obj`` from ``root`` to every rank."""
        return self._comm.bcast(obj, root=root)

    def abort(self, errorcode: int) -> None:
        """Abort every process in the communicator."""
        self._comm.Abort(errorcode)
