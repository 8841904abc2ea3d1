"""
Dispatcher - invoke catalog operations by key.

Turns an operation key and flat parameters into an encoded request, sends it
through the transport and decodes the response against the contract:

    dispatcher = Dispatcher(STORE_API_CATALOG, HttpxTransport(), config)
    category = await dispatcher.invoke(
        "readCategory post /category/{navigationId}?slots",
        {"navigationId": "abc", "limit": 10},
    )

Parameters are split by the contract: path, query and header parameters by
name, everything else goes to the request body and is validated against the
body schema (unknown fields are rejected).
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from typing import Any, Mapping, Optional
from urllib.parse import quote

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..config import ClientConfig
from ..core.catalog import OperationCatalog
from ..core.defs import OperationContract, ParameterDef
from ..core.errors import Fault, MalformedRequest, ProtocolFault, UnexpectedStatus
from ..core.utils import format_scalar
from .normalizer import DispatchResult, fault_from_response, normalize_fault
from .transport import EncodedRequest, Transport, TransportResponse

logger = logging.getLogger(__name__)

# Characters left unescaped in query values: '|' separates multi-values
_QUERY_SAFE = "|,:"


@lru_cache(maxsize=None)
def _adapter(schema: Any) -> TypeAdapter:
    """Cached TypeAdapter per schema (schemas are hashable types)."""
    return TypeAdapter(schema)


def _validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


class Dispatcher:
    """
    Stateless dispatcher over an immutable catalog.

    Holds no per-call state, so one instance can serve any number of
    concurrent ``invoke`` calls.
    """

    def __init__(self, catalog: OperationCatalog, transport: Transport, config: ClientConfig):
        """
        Initialize dispatcher.

        Args:
            catalog: Composed operation catalog
            transport: Transport used to send encoded requests
            config: Base url, access token and optional context token
        """
        self.catalog = catalog
        self.transport = transport
        self.config = config

    def with_context_token(self, context_token: Optional[str]) -> "Dispatcher":
        """Dispatcher for another session, sharing catalog and transport."""
        return Dispatcher(self.catalog, self.transport, self.config.with_context_token(context_token))

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def invoke(self, key: str, params: Mapping[str, Any] | BaseModel | None = None) -> Any:
        """
        Invoke an operation.

        Args:
            key: Operation name or full raw key
            params: Flat parameters (path, query, header and body fields)

        Returns:
            Response decoded with the schema registered for the returned status

        Raises:
            UnknownOperation: Key not in catalog
            MalformedRequest: Parameters do not fit the contract
            TransportFault: No response received
            StructuredApiFault: Platform returned an error payload
            ProtocolFault: Response does not match the contract
        """
        contract = self.catalog.resolve(key)
        request = self._encode(contract, params)

        logger.debug(f"Dispatching {contract.name}: {request.method.upper()} {request.path}")
        try:
            response = await self.transport.send(request)
        except Fault:
            raise
        except Exception as e:
            raise normalize_fault(e, operation=contract.name) from e

        return self.decode(contract, response)

    async def invoke_result(
        self,
        key: str,
        params: Mapping[str, Any] | BaseModel | None = None,
    ) -> DispatchResult[Any]:
        """Like ``invoke`` but returns a DispatchResult instead of raising."""
        try:
            return DispatchResult.success(await self.invoke(key, params))
        except Exception as e:
            name = key.split()[0] if isinstance(key, str) and key.strip() else None
            return DispatchResult.failure(normalize_fault(e, operation=name))

    def encode(self, key: str, params: Mapping[str, Any] | BaseModel | None = None) -> EncodedRequest:
        """Encode a request without sending it."""
        return self._encode(self.catalog.resolve(key), params)

    def decode(self, contract: OperationContract, response: TransportResponse) -> Any:
        """
        Decode a response against a contract.

        Raises:
            StructuredApiFault / ProtocolFault: See ``invoke``
        """
        if not response.is_success:
            raise fault_from_response(response, operation=contract.name)

        response_def = contract.response(response.status_code)
        if response_def is None:
            raise UnexpectedStatus(response.status_code, raw_body=response.body, operation=contract.name)

        if response_def.schema is None:
            return None

        try:
            return _adapter(response_def.schema).validate_json(response.body)
        except ValidationError as e:
            raise ProtocolFault(
                f"Response does not match schema: {'; '.join(_validation_messages(e))}",
                status_code=response.status_code,
                raw_body=response.body,
                operation=contract.name,
            ) from e

    # -------------------------------------------------------------------------
    # Encoding
    # -------------------------------------------------------------------------

    def _encode(self, contract: OperationContract, params: Mapping[str, Any] | BaseModel | None) -> EncodedRequest:
        """Split params per contract and build the request."""
        remaining = self._params_to_dict(contract, params)
        values: dict[str, Any] = {}

        for param in contract.parameters:
            for name in dict.fromkeys((param.name, param.wire)):
                if name in remaining:
                    value = remaining.pop(name)
                    if value is not None:
                        values[param.name] = self._validate_param(contract, param, value)

        path = self._render_path(contract, values)
        query = self._render_query(contract, values)
        if query:
            path = f"{path}?{query}"

        headers = {"Accept": "application/json", **self.config.auth_headers()}
        for param in contract.params_in("header"):
            if param.name in values:
                headers[param.wire] = format_scalar(values[param.name])
            elif param.required:
                raise MalformedRequest(f"Missing required header '{param.wire}'", operation=contract.name)

        body = self._encode_body(contract, remaining)
        if body is not None:
            headers["Content-Type"] = contract.request_body.content_type

        return EncodedRequest(
            operation=contract.name,
            method=contract.key.method,
            url=f"{self.config.base_url}{path}",
            path=path,
            headers=headers,
            body=body,
        )

    @staticmethod
    def _params_to_dict(contract: OperationContract, params: Mapping[str, Any] | BaseModel | None) -> dict[str, Any]:
        if params is None:
            return {}
        if isinstance(params, BaseModel):
            return params.model_dump(by_alias=True, exclude_unset=True)
        if not isinstance(params, Mapping):
            raise MalformedRequest(
                f"Parameters must be a mapping or model, got {type(params).__name__}",
                operation=contract.name,
            )
        return dict(params)

    @staticmethod
    def _validate_param(contract: OperationContract, param: ParameterDef, value: Any) -> Any:
        try:
            return _adapter(param.schema).validate_python(value)
        except ValidationError as e:
            raise MalformedRequest(
                f"Invalid {param.location} parameter '{param.name}'",
                operation=contract.name,
                errors=_validation_messages(e),
            ) from e

    @staticmethod
    def _render_path(contract: OperationContract, values: dict[str, Any]) -> str:
        path = contract.key.path_template
        for name in contract.key.path_params():
            if name not in values or values[name] == "":
                raise MalformedRequest(f"Missing required path parameter '{name}'", operation=contract.name)
            path = path.replace(f"{{{name}}}", quote(format_scalar(values[name]), safe=""))
        return path

    @staticmethod
    def _query_pairs(wire: str, value: Any, explode: bool) -> list[str]:
        name = quote(wire, safe="[]")
        if isinstance(value, (list, tuple)):
            items = [quote(format_scalar(v), safe=_QUERY_SAFE) for v in value]
            if explode:
                return [f"{name}={item}" for item in items]
            return [f"{name}={'|'.join(items)}"]
        return [f"{name}={quote(format_scalar(value), safe=_QUERY_SAFE)}"]

    def _render_query(self, contract: OperationContract, values: dict[str, Any]) -> str:
        """
        Render the query string.

        Template items come first, in template order. A bare item (``?slots``)
        stays bare when no value is given; a placeholder item
        (``id[]={ids}``) is omitted unless required.
        """
        parts: list[str] = []
        rendered: set[str] = set()

        for item in contract.key.query_items():
            param = contract.param(item.param)
            rendered.add(item.param)
            if item.param in values:
                explode = item.placeholder or (param is not None and param.explode)
                parts.extend(self._query_pairs(item.wire, values[item.param], explode))
            elif param is not None and param.required:
                raise MalformedRequest(f"Missing required query parameter '{item.param}'", operation=contract.name)
            elif not item.placeholder:
                parts.append(quote(item.wire, safe="[]"))

        for param in contract.params_in("query"):
            if param.name in rendered:
                continue
            if param.name in values:
                parts.extend(self._query_pairs(param.wire, values[param.name], param.explode))
            elif param.required:
                raise MalformedRequest(f"Missing required query parameter '{param.name}'", operation=contract.name)

        return "&".join(parts)

    @staticmethod
    def _encode_body(contract: OperationContract, remaining: dict[str, Any]) -> Optional[bytes]:
        body_def = contract.request_body
        if body_def is None:
            if remaining:
                raise MalformedRequest(
                    f"Unknown parameters {sorted(remaining)}; operation takes no request body",
                    operation=contract.name,
                )
            return None

        if not remaining and not body_def.required:
            return None

        try:
            payload = _adapter(body_def.schema).validate_python(remaining)
        except ValidationError as e:
            raise MalformedRequest(
                "Request body does not match schema",
                operation=contract.name,
                errors=_validation_messages(e),
            ) from e

        if isinstance(payload, BaseModel):
            data = payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
        else:
            data = _adapter(body_def.schema).dump_python(payload, mode="json", by_alias=True)
        return json.dumps(data).encode()
