"""Protocol module for beacon frames and link-layer roles."""

from .constants import (
    ETHERTYPE_BEACON, LENGTH_XOR_MASK, LENGTH_FIELD_BYTES, MAX_MESSAGE_LENGTH,
    MAX_PAYLOAD_LENGTH, MIN_FRAME_PAYLOAD, BROADCAST_ADDRESS, IFNAMSIZ,
    DEFAULT_MESSAGE, DEFAULT_PERIOD_S, DEFAULT_TIMEOUT_S, DEFAULT_PATTERN
)
from .errors import (
    BeaconError, MessageTooLongError, InterfaceError, PatternError,
    ShortFrameError, TransportError, MalformedFrameError
)
from .frame_parser import BeaconFrame, FrameParser
from .broadcast_handler import Broadcaster, BroadcasterState
from .listen_handler import Listener, ListenerState, ListenOutcome

__all__ = [
    "ETHERTYPE_BEACON", "LENGTH_XOR_MASK", "LENGTH_FIELD_BYTES", "MAX_MESSAGE_LENGTH",
    "MAX_PAYLOAD_LENGTH", "MIN_FRAME_PAYLOAD", "BROADCAST_ADDRESS", "IFNAMSIZ",
    "DEFAULT_MESSAGE", "DEFAULT_PERIOD_S", "DEFAULT_TIMEOUT_S", "DEFAULT_PATTERN",
    "BeaconError", "MessageTooLongError", "InterfaceError", "PatternError",
    "ShortFrameError", "TransportError", "MalformedFrameError",
    "BeaconFrame", "FrameParser", "Broadcaster", "BroadcasterState",
    "Listener", "ListenerState", "ListenOutcome"
]
