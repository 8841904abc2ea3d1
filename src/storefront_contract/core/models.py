"""
Pydantic base classes for every schema in the contract layer.

Attribute names are snake_case; the wire uses camelCase aliases generated from
them. Hyphenated wire names (``min-price``) are declared with explicit aliases.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from .utils import to_camel_case


class ContractModel(BaseModel):
    """Root of all contract schemas."""

    model_config = ConfigDict(
        alias_generator=to_camel_case,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump to the JSON-compatible wire shape, omitting unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


class EntityModel(ContractModel):
    """
    Platform entity as returned by the API.

    Unknown fields are kept so decoding never drops data the schema does not
    declare.
    """

    model_config = ConfigDict(extra="allow")


class RequestModel(ContractModel):
    """Request payload. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")


SCHEMA_ROOTS: tuple[type[ContractModel], ...] = (EntityModel, RequestModel, ContractModel)


def schema_root(model: type[BaseModel]) -> type[ContractModel]:
    """Nearest schema root class of a model, used as base for refinements."""
    for cls in model.__mro__:
        if cls in SCHEMA_ROOTS:
            return cls
    raise TypeError(f"{model.__name__} does not derive from ContractModel")
