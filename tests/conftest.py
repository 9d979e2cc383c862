"""Pytest configuration and fixtures."""

import hashlib
import queue
import threading
from collections import deque
import pytest
from shared.interfaces.transport import Transport
from shared.domain.consts import MessageKind
from shared.domain.models import Message, SearchConfiguration
from shared.implementations.transports import QueueTransport


def md5_hex(text: str) -> str:
    return hashlib.md5(text.encode()).hexdigest()


class ScriptedTransport(Transport):
    """
    Mock peer for testing one role in isolation.

    ``inbound`` is the scripted sequence of messages this rank will receive.
    Every send is recorded in ``sent`` as (dest, kind, payload). Receiving
    past the end of the script fails the test instead of blocking.
    """

    def __init__(self, rank, size, inbound=(), stop_after_probes=None):
        self._rank = rank
        self._size = size
        self.inbound = deque(inbound)
        self.sent = []
        self.barrier_calls = 0
        self.probe_calls = 0
        self.stop_after_probes = stop_after_probes

    @property
    def rank(self):
        return self._rank

    @property
    def size(self):
        return self._size

    def send(self, dest, kind, payload=None):
        self.sent.append((dest, kind, payload))

    def recv_any(self):
        if not self.inbound:
            raise AssertionError("Scripted transport ran out of messages")
        return self.inbound.popleft()

    def recv_from_coordinator(self):
        return self.recv_any()

    def probe(self, kind):
        self.probe_calls += 1
        if (
            kind == MessageKind.GLOBAL_STOP
            and self.stop_after_probes is not None
            and self.probe_calls > self.stop_after_probes
        ):
            return True
        for message in self.inbound:
            if message.kind == kind:
                self.inbound.remove(message)
                return True
        return False

    def barrier(self):
        self.barrier_calls += 1

    def kinds_sent(self):
        return [kind for _, kind, _ in self.sent]


@pytest.fixture
def msg():
    """Build a protocol message: msg(kind, source, payload=None)."""
    def _build(kind, source, payload=None):
        return Message(kind=kind, source=source, payload=payload)
    return _build


@pytest.fixture
def scripted_transport():
    """Factory for ScriptedTransport instances."""
    return ScriptedTransport


@pytest.fixture
def make_search_config():
    """Factory for small SearchConfiguration instances with an md5 target."""
    def _build(password="ab", **overrides):
        params = {
            "target_hash": md5_hex(password),
            "charset": "abc",
            "min_length": 1,
            "max_length": 3,
            "chunk_size": 4,
            "stop_check_every": 1,
        }
        params.update(overrides)
        return SearchConfiguration(**params)
    return _build


@pytest.fixture
def thread_group():
    """
    Build an in-process group: thread_group(num_workers) -> list of QueueTransport.

    Index 0 is the coordinator's endpoint. The barrier times out so a
    protocol bug fails the test instead of hanging it.
    """
    def _build(num_workers):
        size = num_workers + 1
        inboxes = [queue.Queue() for _ in range(size)]
        barrier = threading.Barrier(size, timeout=30)
        return [QueueTransport(rank, inboxes, barrier) for rank in range(size)]
    return _build
