"""Shared fixtures: client config, an in-memory recording transport and a dispatcher over it."""

from __future__ import annotations

import json
from typing import Any, Optional

import pytest

from storefront_contract.catalog import STORE_API_CATALOG
from storefront_contract.config import ClientConfig
from storefront_contract.runtime.dispatcher import Dispatcher
from storefront_contract.runtime.transport import EncodedRequest, TransportResponse


class RecordingTransport:
    """Transport that records requests and replays queued responses in order."""

    def __init__(self):
        self.requests: list[EncodedRequest] = []
        self._responses: list[Any] = []
        self.closed = False

    def queue(self, status_code: int = 200, body: Any = None, headers: Optional[dict[str, str]] = None):
        if body is None:
            raw = b""
        elif isinstance(body, bytes):
            raw = body
        else:
            raw = json.dumps(body).encode()
        self._responses.append(TransportResponse(status_code=status_code, body=raw, headers=headers or {}))
        return self

    def fail(self, exc: BaseException):
        self._responses.append(exc)
        return self

    @property
    def last(self) -> EncodedRequest:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.body)

    async def send(self, request: EncodedRequest) -> TransportResponse:
        self.requests.append(request)
        if not self._responses:
            return TransportResponse(status_code=200, body=b"{}")
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self):
        self.closed = True


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(store_domain="shop.example", access_token="SWSCTESTKEY")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def dispatcher(config, transport) -> Dispatcher:
    return Dispatcher(STORE_API_CATALOG, transport, config)
