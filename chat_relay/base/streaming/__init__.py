"""Streaming package for the relay.

Exposes framing, the streaming session state machine, and the session
registry under a single namespace.
"""

from .framing import FrameDecoder
from .session import SessionState, StreamingSession
from .registry import SessionRegistry

__all__ = [
    "FrameDecoder",
    "SessionState",
    "StreamingSession",
    "SessionRegistry",
]
