"""
Storefront facade - one coroutine per storefront use case.

Each method fixes an operation key, shapes its arguments and delegates to the
dispatcher. Failures are raised as classified faults by default; with
``ErrorPolicy.LOG`` remote failures are logged and ``None`` is returned, which
suits best-effort page rendering.

Usage:
    async with StorefrontApi.from_env() as api:
        menu = await api.request_navigation(StoreNavigationType.MAIN, depth=2)
        listing = await api.request_search_collection_products({"query": "shoe", "limit": 10})
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from .catalog import STORE_API_CATALOG
from .config import ClientConfig
from .core.catalog import OperationCatalog
from .core.errors import Fault, MalformedRequest, StructuredApiFault, UnknownOperation
from .runtime.dispatcher import Dispatcher
from .runtime.transport import HttpxTransport, Transport

logger = logging.getLogger(__name__)

Criteria = Optional[Union[Mapping[str, Any], BaseModel]]


class ErrorPolicy(str, Enum):
    """What the facade does with remote failures."""
    RAISE = "raise"
    LOG = "log"


class StoreNavigationType(str, Enum):
    MAIN = "main-navigation"
    FOOTER = "footer-navigation"
    SERVICE = "service-navigation"


class RouteName(str, Enum):
    NAVIGATION_PAGE = "frontend.navigation.page"
    DETAIL_PAGE = "frontend.detail.page"
    LANDING_PAGE = "frontend.landing.page"


def _criteria_dict(criteria: Criteria) -> dict[str, Any]:
    if criteria is None:
        return {}
    if isinstance(criteria, BaseModel):
        return criteria.model_dump(by_alias=True, exclude_unset=True)
    return dict(criteria)


class StorefrontApi:
    """Facade over a Dispatcher for the storefront's use cases."""

    def __init__(self, dispatcher: Dispatcher, error_policy: ErrorPolicy = ErrorPolicy.RAISE):
        self.dispatcher = dispatcher
        self.error_policy = ErrorPolicy(error_policy)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[Transport] = None,
        catalog: OperationCatalog = STORE_API_CATALOG,
        error_policy: ErrorPolicy = ErrorPolicy.RAISE,
    ) -> "StorefrontApi":
        transport = transport or HttpxTransport(timeout=config.timeout)
        return cls(Dispatcher(catalog, transport, config), error_policy=error_policy)

    @classmethod
    def from_env(cls, error_policy: ErrorPolicy = ErrorPolicy.RAISE) -> "StorefrontApi":
        return cls.from_config(ClientConfig.from_env(), error_policy=error_policy)

    async def close(self):
        close = getattr(self.dispatcher.transport, "close", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "StorefrontApi":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _call(
        self,
        key: str,
        params: Mapping[str, Any],
        context_token: Optional[str] = None,
    ) -> Any:
        dispatcher = self.dispatcher
        if context_token is not None:
            dispatcher = dispatcher.with_context_token(context_token)

        if self.error_policy is ErrorPolicy.RAISE:
            return await dispatcher.invoke(key, params)

        result = await dispatcher.invoke_result(key, params)
        if result.ok:
            return result.value
        # UnknownOperation and MalformedRequest always raise
        if isinstance(result.fault, (UnknownOperation, MalformedRequest)):
            raise result.fault
        self._log_fault(result.fault)
        return None

    @staticmethod
    def _log_fault(fault: Fault) -> None:
        logger.error(f"{fault.kind.value}: {fault}")
        if isinstance(fault, StructuredApiFault):
            logger.error(f"Details: {[e.model_dump(exclude_none=True) for e in fault.errors]}")

    # -------------------------------------------------------------------------
    # Navigation & categories
    # -------------------------------------------------------------------------

    async def request_navigation(self, type: StoreNavigationType | str, depth: int) -> Any:
        """Category tree of a navigation menu, with SEO urls."""
        navigation = StoreNavigationType(type).value
        return await self._call(
            "readNavigation post /navigation/{activeId}/{rootId} sw-include-seo-urls",
            {
                "activeId": navigation,
                "rootId": navigation,
                "depth": depth,
                "sw-include-seo-urls": True,
            },
        )

    async def request_category(self, category_id: str, criteria: Criteria = None) -> Any:
        return await self._call(
            "readCategory post /category/{navigationId}?slots",
            {"navigationId": category_id, **_criteria_dict(criteria)},
        )

    async def request_category_list(self, criteria: Criteria = None) -> Any:
        return await self._call("readCategoryList post /category", _criteria_dict(criteria))

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    async def request_products_collection(self, criteria: Criteria = None) -> Any:
        return await self._call("readProduct post /product", _criteria_dict(criteria))

    async def request_category_products_collection(self, category_id: str, criteria: Criteria = None) -> Any:
        return await self._call(
            "readProductListing post /product-listing/{categoryId}",
            {**_criteria_dict(criteria), "categoryId": category_id},
        )

    async def request_search_collection_products(self, criteria: Criteria = None) -> Any:
        """
        Full text product search.

        A string ``query`` in the criteria is sent as the ``search`` term.
        """
        params = _criteria_dict(criteria)
        query = params.get("query")
        if isinstance(query, str) or query is None:
            params.pop("query", None)
            params.setdefault("search", query or "")
        return await self._call("searchPage post /search", params)

    async def request_cross_sell(self, product_id: str, criteria: Criteria = None) -> Any:
        return await self._call(
            "readProductCrossSellings post /product/{productId}/cross-selling",
            {"productId": product_id, **_criteria_dict(criteria)},
        )

    # -------------------------------------------------------------------------
    # SEO
    # -------------------------------------------------------------------------

    async def request_seo_urls(self, route_name: RouteName | str, page: int = 1, limit: int = 100) -> Any:
        """All SEO urls of one route, paginated."""
        return await self._call(
            "readSeoUrl post /seo-url",
            {
                "page": page,
                "limit": limit,
                "filter": [
                    {"type": "equals", "field": "routeName", "value": RouteName(route_name).value},
                ],
            },
        )

    async def request_seo_url(self, criteria: Criteria = None) -> Any:
        return await self._call("readSeoUrl post /seo-url", _criteria_dict(criteria))

    # -------------------------------------------------------------------------
    # Context & cart
    # -------------------------------------------------------------------------

    async def request_context(self, cart_id: Optional[str] = None) -> Any:
        return await self._call("readContext get /context", {}, context_token=cart_id)

    async def request_cart(self, cart_id: Optional[str] = None, name: Optional[str] = None) -> Any:
        return await self._call("readCart get /checkout/cart?name", {"name": name}, context_token=cart_id)

    async def add_to_cart(self, cart_id: str, items: Sequence[Mapping[str, Any] | BaseModel]) -> Any:
        return await self._call(
            "addLineItem post /checkout/cart/line-item",
            {"items": [_criteria_dict(item) for item in items]},
            context_token=cart_id,
        )

    async def remove_from_cart(self, cart_id: str, ids: Sequence[str]) -> Any:
        return await self._call(
            "deleteLineItem delete /checkout/cart/line-item?id[]={ids}",
            {"ids": list(ids)},
            context_token=cart_id,
        )
