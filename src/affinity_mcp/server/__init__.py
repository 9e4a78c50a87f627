"""JSON-RPC server surface: envelopes, dispatcher and line transport."""

from .dispatcher import RequestDispatcher
from .protocol import PROTOCOL_VERSION, InitializeParams, CallToolParams, Request
from .transport import LineTransport

__all__ = [
    "RequestDispatcher",
    "PROTOCOL_VERSION",
    "InitializeParams",
    "CallToolParams",
    "Request",
    "LineTransport",
]
