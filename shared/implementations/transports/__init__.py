"""Transport implementations.

``MpiTransport`` lives in ``shared.implementations.transports.mpi_transport``
and is imported only when the MPI backend is selected, since importing
mpi4py initializes MPI.
"""

from shared.implementations.transports.queue_transport import QueueTransport

__all__ = ["QueueTransport"]
