"""Tests for the MPI transport against a mock communicator."""

from unittest.mock import MagicMock
import pytest

MPI = pytest.importorskip("mpi4py.MPI")

from shared.implementations.transports.mpi_transport import MpiTransport  # noqa: E402
from shared.domain.consts import MessageKind  # noqa: E402


def _comm_delivering(source_rank, kind, payload):
    comm = MagicMock()

    def fake_recv(source=None, tag=None, status=None):
        if status is not None:
            status.Set_source(source_rank)
            status.Set_tag(int(kind))
        return payload

    comm.recv.side_effect = fake_recv
    return comm


class TestMpiTransport:
    """Tests for MpiTransport."""

    def test_rank_and_size(self):
        """Test that identity comes from the communicator."""
        comm = MagicMock()
        comm.Get_rank.return_value = 0
        comm.Get_size.return_value = 5
        transport = MpiTransport(comm)

        assert transport.rank == 0
        assert transport.worker_count == 4

    def test_send_uses_kind_as_tag(self):
        """Test that the message kind travels as the MPI tag."""
        comm = MagicMock()
        MpiTransport(comm).send(3, MessageKind.WORK_ASSIGNMENT, 40000)

        comm.send.assert_called_once_with(40000, dest=3, tag=int(MessageKind.WORK_ASSIGNMENT))

    def test_recv_any_builds_message(self):
        """Test that source and kind are read from the status."""
        comm = _comm_delivering(2, MessageKind.FOUND, "ab3xyz")

        message = MpiTransport(comm).recv_any()

        assert message.kind == MessageKind.FOUND
        assert message.source == 2
        assert message.payload == "ab3xyz"
        assert comm.recv.call_args.kwargs["source"] == MPI.ANY_SOURCE

    def test_recv_from_coordinator(self):
        """Test that workers receive from rank 0 only."""
        comm = _comm_delivering(0, MessageKind.NO_MORE_WORK, None)

        message = MpiTransport(comm).recv_from_coordinator()

        assert message.kind == MessageKind.NO_MORE_WORK
        assert comm.recv.call_args.kwargs["source"] == 0

    def test_probe_nothing_pending(self):
        """Test that a failed iprobe receives nothing."""
        comm = MagicMock()
        comm.iprobe.return_value = False

        assert MpiTransport(comm).probe(MessageKind.GLOBAL_STOP) is False
        comm.recv.assert_not_called()

    def test_probe_consumes_match(self):
        """Test that a pending stop is received after a successful iprobe."""
        comm = MagicMock()
        comm.iprobe.return_value = True

        assert MpiTransport(comm).probe(MessageKind.GLOBAL_STOP) is True
        comm.recv.assert_called_once_with(source=MPI.ANY_SOURCE, tag=int(MessageKind.GLOBAL_STOP))

    def test_collectives(self):
        """Test barrier, broadcast and abort delegation."""
        comm = MagicMock()
        comm.bcast.return_value = {"k": 1}
        transport = MpiTransport(comm)

        transport.barrier()
        assert transport.bcast({"k": 1}) == {"k": 1}
        transport.abort(1)

        comm.Barrier.assert_called_once()
        comm.bcast.assert_called_once_with({"k": 1}, root=0)
        comm.Abort.assert_called_once_with(1)
