"""Tests for the worker-side stop latch."""

from worker.infrastructure.stop_signal import StopSignal
from shared.domain.consts import MessageKind


class TestStopSignal:
    """Tests for StopSignal."""

    def test_poll_without_pending_stop(self, scripted_transport):
        """Test that poll returns False when nothing is pending."""
        transport = scripted_transport(rank=1, size=2)
        signal = StopSignal(transport)

        assert signal.poll() is False
        assert signal.is_set is False
        assert transport.probe_calls == 1

    def test_poll_consumes_pending_stop(self, scripted_transport, msg):
        """Test that a pending GLOBAL_STOP sets the latch."""
        transport = scripted_transport(
            rank=1, size=2, inbound=[msg(MessageKind.GLOBAL_STOP, 0)]
        )
        signal = StopSignal(transport)

        assert signal.poll() is True
        assert signal.is_set is True
        assert len(transport.inbound) == 0

    def test_latched_signal_never_reprobes(self, scripted_transport):
        """Test that once set, poll no longer touches the transport."""
        transport = scripted_transport(rank=1, size=2, stop_after_probes=0)
        signal = StopSignal(transport)

        assert signal.poll() is True
        assert signal.poll() is True
        assert signal.poll() is True
        assert transport.probe_calls == 1

    def test_set_without_probe(self, scripted_transport):
        """Test that set() latches without probing."""
        transport = scripted_transport(rank=1, size=2)
        signal = StopSignal(transport)

        signal.set()
        signal.set()

        assert signal.poll() is True
        assert transport.probe_calls == 0

    def test_other_kinds_left_in_place(self, scripted_transport, msg):
        """Test that probing for the stop leaves other messages queued."""
        assignment = msg(MessageKind.WORK_ASSIGNMENT, 0, 10)
        transport = scripted_transport(rank=1, size=2, inbound=[assignment])
        signal = StopSignal(transport)

        assert signal.poll() is False
        assert list(transport.inbound) == [assignment]
