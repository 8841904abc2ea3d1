"""
Error normalizer - classify dispatch failures and wrap outcomes.

Every failure ends up as exactly one Fault kind:
- StructuredApiFault: non-2xx with a platform error payload
- TransportFault: no response received (connectivity, timeout, unknown)
- ProtocolFault: response received but not decodable against the contract
UnknownOperation and MalformedRequest pass through unchanged.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import httpx
from pydantic import ValidationError

from ..core.errors import (
    Fault,
    FaultKind,
    ProtocolFault,
    StructuredApiFault,
    TransportFault,
)
from ..schemas.base import ApiErrorDetail
from .transport import TransportResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_error_payload(body: bytes) -> Optional[tuple[Any, list[ApiErrorDetail]]]:
    """
    Parse a platform error payload.

    Accepts ``{"errors": [...]}`` and the cart variant ``{"errors": {id: {...}}}``.

    Returns:
        (payload, details) or None if the body is not platform-shaped
    """
    try:
        payload = json.loads(body)
    except ValueError:
        return None

    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if isinstance(errors, dict):
        errors = list(errors.values())
    if not isinstance(errors, list) or not all(isinstance(e, dict) for e in errors):
        return None

    try:
        details = [ApiErrorDetail.model_validate(e) for e in errors]
    except ValidationError:
        return None
    return payload, details


def fault_from_response(response: TransportResponse, operation: Optional[str] = None) -> Fault:
    """Classify a non-2xx response."""
    parsed = parse_error_payload(response.body)
    if parsed is None:
        return ProtocolFault(
            f"Unstructured error response with status {response.status_code}",
            status_code=response.status_code,
            raw_body=response.body,
            operation=operation,
        )
    payload, details = parsed
    return StructuredApiFault(
        status_code=response.status_code,
        errors=details,
        payload=payload,
        operation=operation,
    )


def normalize_fault(exc: BaseException, operation: Optional[str] = None) -> Fault:
    """
    Map any exception raised during dispatch to a Fault.

    Never retries and never merges kinds: an existing Fault is returned as is.
    """
    if isinstance(exc, Fault):
        return exc
    if isinstance(exc, (httpx.HTTPError, OSError, TimeoutError)):
        return TransportFault(str(exc) or type(exc).__name__, operation=operation, cause=exc)
    if isinstance(exc, (ValidationError, ValueError)):
        return ProtocolFault(f"Could not decode response: {exc}", operation=operation)
    return TransportFault(f"{type(exc).__name__}: {exc}", operation=operation, cause=exc)


@dataclass(frozen=True)
class DispatchResult(Generic[T]):
    """
    Tagged outcome of a dispatch: either a value or a fault.

    ``value`` may legitimately be None (e.g. 204 responses); check ``ok``.
    """
    value: Optional[T] = None
    fault: Optional[Fault] = None

    @property
    def ok(self) -> bool:
        return self.fault is None

    @property
    def kind(self) -> Optional[FaultKind]:
        return self.fault.kind if self.fault else None

    def unwrap(self) -> Optional[T]:
        """Return the value or raise the fault."""
        if self.fault is not None:
            raise self.fault
        return self.value

    @classmethod
    def success(cls, value: Optional[T]) -> "DispatchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, fault: Fault) -> "DispatchResult[T]":
        logger.debug(f"Dispatch failed with {fault.kind.value}: {fault}")
        return cls(fault=fault)
