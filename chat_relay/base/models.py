"""
Relay domain models public surface.

Re-exports the one-class-per-file implementations under
``chat_relay.base.models_parts``.
"""

from .models_parts.outbound_request import OutboundRequest
from .models_parts.result import Result

__all__ = ["OutboundRequest", "Result"]
