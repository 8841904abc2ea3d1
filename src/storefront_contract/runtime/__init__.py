"""
Runtime module - encoding, transport, dispatch and fault normalization.
"""

from __future__ import annotations

from .dispatcher import Dispatcher
from .normalizer import DispatchResult, fault_from_response, normalize_fault, parse_error_payload
from .transport import EncodedRequest, HttpxTransport, Transport, TransportResponse

__all__ = [
    "Dispatcher",
    "DispatchResult",
    "normalize_fault",
    "fault_from_response",
    "parse_error_payload",
    "EncodedRequest",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
]
