"""
Connection status tracking for voice sessions.

Pure data owned by SessionGateway. Outbound delivery is a no-op unless the
status is UP.
"""
from enum import Enum


class ConnectionStatus(Enum):
    """
    Connection lifecycle status.

    Independent of the processor stage: a pass may still be running after
    the connection goes DOWN.
    """
    DOWN = "DOWN"      # Not yet connected, or disconnected
    UP = "UP"          # Active WebSocket connection
