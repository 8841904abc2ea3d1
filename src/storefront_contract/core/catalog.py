"""
Operation catalog - an immutable registry of operation contracts.

Catalogs are collected with ``OperationRegistry`` and combined with
``compose``: an override replaces the whole contract of its operation, no
field-level merge.

Usage:
    from storefront_contract.core.catalog import OperationRegistry, compose

    base = OperationRegistry()
    base.register(OperationContract(key="readContext get /context", responses={...}))

    overrides = OperationRegistry()
    overrides.register(...)

    catalog = compose(base.build(), overrides.build())
    contract = catalog.resolve("readCategory post /category/{navigationId}?slots")
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from .defs import OperationContract
from .errors import CatalogError, UnknownOperation

logger = logging.getLogger(__name__)


class OperationCatalog(Mapping[str, OperationContract]):
    """
    Read-only mapping of operation name -> contract.

    Safe to share between any number of concurrent dispatches.
    """

    def __init__(
        self,
        contracts: Mapping[str, OperationContract],
        overridden: frozenset[str] = frozenset(),
        added: frozenset[str] = frozenset(),
    ):
        self._contracts = MappingProxyType(dict(contracts))
        self.overridden = overridden
        self.added = added

    def __getitem__(self, name: str) -> OperationContract:
        return self._contracts[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._contracts)

    def __len__(self) -> int:
        return len(self._contracts)

    def __repr__(self) -> str:
        return f"OperationCatalog({len(self)} operations)"

    def resolve(self, key: str) -> OperationContract:
        """
        Look up a contract by operation name or full raw key.

        A raw key must match the registered key exactly; a stale key (e.g. the
        base variant of an overridden operation) is unknown.

        Raises:
            UnknownOperation: If no matching contract is registered
        """
        name = key.split(None, 1)[0] if key.strip() else key
        contract = self._contracts.get(name)
        if contract is None:
            raise UnknownOperation(key)
        if name != key.strip() and str(contract.key) != " ".join(key.split()):
            raise UnknownOperation(key)
        return contract

    def get_contract(self, key: str) -> Optional[OperationContract]:
        """Like ``resolve`` but returns None for unknown keys."""
        try:
            return self.resolve(key)
        except UnknownOperation:
            return None

    def keys_raw(self) -> list[str]:
        """All operation keys in raw form, sorted by name."""
        return [str(self._contracts[name].key) for name in sorted(self._contracts)]


class OperationRegistry:
    """
    Collects operation contracts and builds a catalog from them.

    Example:
        registry = OperationRegistry()
        registry.register(contract)
        catalog = registry.build()
    """

    def __init__(self):
        self._contracts: dict[str, OperationContract] = {}

    def register(self, contract: OperationContract) -> OperationContract:
        """
        Register a contract.

        Raises:
            CatalogError: If an operation with the same name is already registered
        """
        if contract.name in self._contracts:
            raise CatalogError(f"Operation '{contract.name}' is already registered")
        self._contracts[contract.name] = contract
        return contract

    def __contains__(self, name: str) -> bool:
        return name in self._contracts

    def __len__(self) -> int:
        return len(self._contracts)

    def build(self) -> OperationCatalog:
        """Build an immutable catalog from registered contracts."""
        return OperationCatalog(self._contracts)


def compose(base: Mapping[str, OperationContract], overrides: Mapping[str, OperationContract]) -> OperationCatalog:
    """
    Combine a base catalog with an override set.

    ``catalog[k] = overrides[k]`` if ``k`` is overridden, else ``base[k]``.
    Overrides for names the base does not have are added as new operations.

    Args:
        base: Generic catalog
        overrides: Operations whose contracts replace (or extend) the base

    Returns:
        Composed OperationCatalog
    """
    contracts = dict(base)
    overridden = frozenset(name for name in overrides if name in base)
    added = frozenset(name for name in overrides if name not in base)

    contracts.update(overrides)

    logger.debug(
        f"Composed catalog: {len(contracts)} operations "
        f"({len(overridden)} overridden, {len(added)} added)"
    )
    return OperationCatalog(contracts, overridden=overridden, added=added)
