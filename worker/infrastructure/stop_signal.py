"""Worker-side global stop latch."""

import logging
from shared.interfaces.transport import Transport
from shared.domain.consts import MessageKind

logger = logging.getLogger(__name__)


class StopSignal:
    """
    Edge-triggered view of the coordinator's GLOBAL_STOP broadcast.

    ``poll()`` performs one non-blocking probe of the transport. Once a
    stop has been seen, either by polling or because a blocking receive
    delivered it (``set()``), the latch stays set and the transport is
    never probed again.

    Example:
        signal = StopSignal(transport)
        if signal.poll():
            ...  # abandon the current chunk
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._is_set = False

    @property
    def is_set(self) -> bool:
        return self._is_set

    def set(self) -> None:
        """
        Mark the stop as observed.

        Idempotent: calling multiple times has no additional effect.
        """
        if not self._is_set:
            self._is_set = True
            logger.debug(f"Worker {self._transport.rank}: global stop observed")

    def poll(self) -> bool:
        """
        Check for a pending stop without blocking.

        Returns:
            True if a stop has been observed (now or earlier), False otherwise.
        """
        if self._is_set:
            return True
        if self._transport.probe(MessageKind.GLOBAL_STOP):
            self.set()
        return self._is_set
