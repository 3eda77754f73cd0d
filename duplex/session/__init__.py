"""Session core: heartbeat, request correlation, listeners."""

from .listeners import ListenerRegistry
from .heartbeat import HeartbeatMonitor
from .correlation import PendingRequest, CorrelationTable
from .session import Session, ErrorListener, StateListener, MessageListener

__all__ = [
    "CorrelationTable",
    "ErrorListener",
    "HeartbeatMonitor",
    "ListenerRegistry",
    "MessageListener",
    "PendingRequest",
    "Session",
    "StateListener",
]
