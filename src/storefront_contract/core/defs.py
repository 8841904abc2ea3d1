"""
Core dataclass definitions for the contract layer.

These define the structure of operations: the key that addresses them, their
parameters, request body and per-status responses.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional

from .errors import CatalogError

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

ParameterLocation = Literal["path", "query", "header"]

_PLACEHOLDER_PATTERN = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True)
class TemplateQueryItem:
    """
    One ``&``-separated item of a key's query template.

    ``slots``        -> wire="slots", param="slots", placeholder=False
    ``id[]={ids}``   -> wire="id[]", param="ids", placeholder=True
    """
    wire: str
    param: str
    placeholder: bool


@dataclass(frozen=True)
class OperationKey:
    """
    Unique identifier of an operation.

    Raw form: ``"<name> <method> <path>[?query] [header ...]"``, e.g.
    ``readCategory post /category/{navigationId}?slots``.
    """
    name: str
    method: str
    path: str
    headers: tuple[str, ...] = ()

    @classmethod
    def parse(cls, raw: str) -> "OperationKey":
        """Parse a raw key string."""
        tokens = raw.split()
        if len(tokens) < 3:
            raise CatalogError(f"Operation key '{raw}' must have name, method and path")

        name, method, path, *headers = tokens
        method = method.lower()
        if method not in HTTP_METHODS:
            raise CatalogError(f"Operation key '{raw}' has unknown method '{method}'")
        if not path.startswith("/"):
            raise CatalogError(f"Operation key '{raw}' path must start with '/'")

        return cls(name=name, method=method, path=path, headers=tuple(headers))

    def __str__(self) -> str:
        return " ".join((self.name, self.method, self.path, *self.headers))

    @property
    def path_template(self) -> str:
        """Path part of the template, without the query."""
        return self.path.split("?", 1)[0]

    @property
    def query_template(self) -> str:
        parts = self.path.split("?", 1)
        return parts[1] if len(parts) > 1 else ""

    def path_params(self) -> list[str]:
        """Placeholder names in the path part, in order."""
        return _PLACEHOLDER_PATTERN.findall(self.path_template)

    def query_items(self) -> list[TemplateQueryItem]:
        """Parse the query template into items."""
        items = []
        for raw_item in self.query_template.split("&"):
            if not raw_item:
                continue
            if "=" in raw_item:
                wire, value = raw_item.split("=", 1)
                match = _PLACEHOLDER_PATTERN.fullmatch(value)
                if not match:
                    raise CatalogError(
                        f"Query item '{raw_item}' in '{self}' must use a {{placeholder}} value"
                    )
                items.append(TemplateQueryItem(wire=wire, param=match.group(1), placeholder=True))
            else:
                items.append(TemplateQueryItem(wire=raw_item, param=raw_item, placeholder=False))
        return items


@dataclass(frozen=True)
class ParameterDef:
    """Definition of a path, query or header parameter."""
    name: str
    location: ParameterLocation
    schema: Any = str  # python type validated with a pydantic TypeAdapter
    required: bool = False
    explode: bool = False  # lists become repeated pairs instead of a '|' join
    wire_name: Optional[str] = None  # name on the wire if it differs from `name`
    description: str = ""

    @property
    def wire(self) -> str:
        return self.wire_name or self.name


@dataclass(frozen=True)
class RequestBodyDef:
    """Definition of a request body."""
    schema: Any  # pydantic request model
    content_type: str = "application/json"
    required: bool = False
    description: str = ""


@dataclass(frozen=True)
class ResponseDef:
    """Definition of the response registered for one status code."""
    schema: Any = None  # None = no body
    description: str = ""
    content_type: str = "application/json"


@dataclass(frozen=True)
class OperationContract:
    """
    Complete contract of one operation.

    Immutable: ``parameters`` is stored as a tuple and ``responses`` as a
    read-only mapping.
    """
    key: OperationKey
    responses: Mapping[int, ResponseDef]
    parameters: tuple[ParameterDef, ...] = ()
    request_body: Optional[RequestBodyDef] = None
    summary: str = ""
    _by_name: Mapping[str, ParameterDef] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if isinstance(self.key, str):
            object.__setattr__(self, "key", OperationKey.parse(self.key))
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "responses", MappingProxyType(dict(self.responses)))

        by_name: dict[str, ParameterDef] = {}
        for param in self.parameters:
            if param.name in by_name:
                raise CatalogError(f"Duplicate parameter '{param.name}' in '{self.key}'")
            by_name[param.name] = param
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))

        self._validate_template()

    def _validate_template(self):
        """Every placeholder and header in the key must be a declared parameter."""
        path_params = self.key.path_params()
        for name in path_params:
            param = self._by_name.get(name)
            if param is None or param.location != "path":
                raise CatalogError(f"Path placeholder '{{{name}}}' of '{self.key}' is not a declared path parameter")
        for param in self.params_in("path"):
            if param.name not in path_params:
                raise CatalogError(f"Path parameter '{param.name}' does not appear in '{self.key}'")
            if not param.required:
                raise CatalogError(f"Path parameter '{param.name}' of '{self.key}' must be required")

        for item in self.key.query_items():
            param = self._by_name.get(item.param)
            if item.placeholder and (param is None or param.location != "query"):
                raise CatalogError(f"Query placeholder '{{{item.param}}}' of '{self.key}' is not a declared query parameter")

        for header in self.key.headers:
            param = self._by_name.get(header)
            if param is None or param.location != "header":
                raise CatalogError(f"Header '{header}' of '{self.key}' is not a declared header parameter")

    @property
    def name(self) -> str:
        return self.key.name

    def param(self, name: str) -> Optional[ParameterDef]:
        """Get parameter definition by name."""
        return self._by_name.get(name)

    def params_in(self, location: ParameterLocation) -> list[ParameterDef]:
        return [p for p in self.parameters if p.location == location]

    def response(self, status_code: int) -> Optional[ResponseDef]:
        return self.responses.get(status_code)
