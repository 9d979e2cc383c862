"""State enums for the coordinator and worker state machines."""

from enum import Enum


class CoordinatorState(str, Enum):
    """Coordinator states for one candidate length."""
    DISTRIBUTING = "DISTRIBUTING"
    DRAINING = "DRAINING"
    LENGTH_DONE = "LENGTH_DONE"
    GLOBAL_STOP = "GLOBAL_STOP"


class WorkerState(str, Enum):
    """Worker states for one candidate length."""
    AWAITING_ASSIGNMENT = "AWAITING_ASSIGNMENT"
    SCANNING = "SCANNING"
    STOPPED = "STOPPED"
