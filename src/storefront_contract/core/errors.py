"""
Custom exceptions for the storefront contract layer.

Every failure that can come out of a dispatch is a ``Fault`` subclass with a
stable ``kind`` so callers can branch on it without string matching.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from ..schemas.base import ApiErrorDetail


class FaultKind(str, Enum):
    """Classification of a dispatch failure."""
    UNKNOWN_OPERATION = "unknown_operation"
    MALFORMED_REQUEST = "malformed_request"
    TRANSPORT = "transport"
    STRUCTURED_API = "structured_api"
    PROTOCOL = "protocol"


class StorefrontContractError(Exception):
    """Base exception for all storefront contract errors."""
    pass


class CatalogError(StorefrontContractError):
    """Raised when an operation key or contract definition is invalid."""
    pass


class RefinementError(StorefrontContractError):
    """Raised when a refinement set is inconsistent."""

    def __init__(self, message: str, entity: Optional[str] = None, field: Optional[str] = None):
        self.entity = entity
        self.field = field
        location = ".".join(part for part in (entity, field) if part)
        super().__init__(f"[{location}] {message}" if location else message)


class ConfigurationError(StorefrontContractError):
    """Raised when client configuration is missing or invalid."""
    pass


class Fault(StorefrontContractError):
    """Base class for classified dispatch failures."""

    kind: FaultKind

    def __init__(self, message: str, operation: Optional[str] = None):
        self.operation = operation
        super().__init__(f"{operation}: {message}" if operation else message)


class UnknownOperation(Fault):
    """Raised when the catalog has no contract for the requested key."""

    kind = FaultKind.UNKNOWN_OPERATION

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown operation '{key}'")


class MalformedRequest(Fault):
    """Raised when parameters cannot be encoded against the contract."""

    kind = FaultKind.MALFORMED_REQUEST

    def __init__(self, message: str, operation: Optional[str] = None, errors: Optional[list[str]] = None):
        self.errors = errors or []
        super().__init__(message, operation=operation)


class TransportFault(Fault):
    """Raised when the request did not produce a response (connectivity, timeout)."""

    kind = FaultKind.TRANSPORT

    def __init__(self, message: str, operation: Optional[str] = None, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message, operation=operation)


class StructuredApiFault(Fault):
    """Raised when the platform answered with a non-2xx error payload."""

    kind = FaultKind.STRUCTURED_API

    def __init__(
        self,
        status_code: int,
        errors: list[ApiErrorDetail],
        payload: Any = None,
        operation: Optional[str] = None,
    ):
        self.status_code = status_code
        self.errors = errors
        self.payload = payload
        summary = "; ".join(e.summary() for e in errors) or "no details"
        super().__init__(f"API returned {status_code}: {summary}", operation=operation)

    @property
    def message_keys(self) -> list[str]:
        """Platform message keys carried by the error details, in order."""
        return [e.message_key for e in self.errors if e.message_key]

    @property
    def codes(self) -> list[str]:
        return [e.code for e in self.errors if e.code]


class ProtocolFault(Fault):
    """Raised when a response was received but does not match the contract."""

    kind = FaultKind.PROTOCOL

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        raw_body: bytes = b"",
        operation: Optional[str] = None,
    ):
        self.status_code = status_code
        self.raw_body = raw_body
        super().__init__(message, operation=operation)


class UnexpectedStatus(ProtocolFault):
    """Raised when no response schema is registered for the returned status."""

    def __init__(self, status_code: int, raw_body: bytes = b"", operation: Optional[str] = None):
        super().__init__(
            f"No response schema registered for status {status_code}",
            status_code=status_code,
            raw_body=raw_body,
            operation=operation,
        )
