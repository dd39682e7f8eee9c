from .messages import AUTHORITY, INFINITY, NONE, Kind, Message, ProtocolError
from .algorithms.dvr import DistanceVector, RoutingTable
from .config import RouterConfig
from .router import Router, SessionState
from .transport import TransportError

__all__ = [
    "AUTHORITY", "INFINITY", "NONE", "Kind", "Message", "ProtocolError",
    "DistanceVector", "RoutingTable", "RouterConfig", "Router", "SessionState", "TransportError",
]
__version__ = "0.1.0"
