"""
Operation overrides - storefront contracts replacing generic ones.

Each override restates its whole contract: composition replaces the base
contract of the same name, nothing of the base version survives. ``searchPage``
is not part of the base catalog and is added by composition.
"""

from __future__ import annotations

from typing import List

from ..core.catalog import OperationRegistry
from ..core.defs import OperationContract, ParameterDef, ResponseDef
from ..schemas.base import ErrorResponse
from ..schemas.extended import (
    CartItemsRequest,
    CategorySearchResult,
    ExtendedCart,
    ExtendedCategory,
    ExtendedCriteria,
    ExtendedCrossSellingElementCollection,
    ExtendedProductCriteria,
    ExtendedProductListingResult,
    NavigationCriteria,
    ProductSearchResult,
    SearchPageCriteria,
    SeoUrlSearchResult,
)
from .base import NOT_FOUND, json_body, ok, path_param

_registry = OperationRegistry()

_registry.register(OperationContract(
    key="addLineItem post /checkout/cart/line-item",
    summary="Add items to the cart",
    request_body=json_body(CartItemsRequest),
    responses=ok(ExtendedCart, "The updated cart."),
))

_registry.register(OperationContract(
    key="deleteLineItem delete /checkout/cart/line-item?id[]={ids}",
    summary="Remove items from the cart",
    parameters=(
        ParameterDef(
            name="ids",
            location="query",
            schema=List[str],
            required=True,
            explode=True,
            description="A list of product identifiers.",
        ),
    ),
    responses=ok(ExtendedCart, "The updated cart."),
))

_registry.register(OperationContract(
    key="readCart get /checkout/cart?name",
    summary="Fetch or create a cart",
    parameters=(
        ParameterDef(
            name="name",
            location="query",
            description="The name of the new cart. Only used when creating a new cart.",
        ),
    ),
    responses=ok(ExtendedCart, "Cart"),
))

_registry.register(OperationContract(
    key="readCategory post /category/{navigationId}?slots",
    summary="Fetch a single category",
    parameters=(
        ParameterDef(
            name="slots",
            location="query",
            description="Resolves only the given slot identifiers, separated by '|'.",
        ),
        path_param("navigationId", "Identifier of the category to be fetched"),
    ),
    request_body=json_body(ExtendedProductCriteria),
    responses=ok(ExtendedCategory, "The loaded category with cms page"),
))

_registry.register(OperationContract(
    key="readCategoryList post /category",
    summary="Fetch a list of categories",
    request_body=json_body(ExtendedCriteria),
    responses=ok(CategorySearchResult, "Entity search result containing categories."),
))

_registry.register(OperationContract(
    key="readNavigation post /navigation/{activeId}/{rootId} sw-include-seo-urls",
    summary="Fetch a navigation menu",
    parameters=(
        ParameterDef(
            name="sw-include-seo-urls",
            location="header",
            schema=bool,
            description="Instructs the platform to try and resolve SEO URLs for the navigation items.",
        ),
        path_param(
            "activeId",
            "Identifier of the active category in the navigation tree (if not used, set to the rootId).",
        ),
        path_param("rootId", "Identifier of the root category for your desired navigation tree."),
    ),
    request_body=json_body(NavigationCriteria, required=True),
    responses=ok(List[ExtendedCategory], "All available navigations"),
))

_registry.register(OperationContract(
    key="readProduct post /product",
    summary="Fetch a list of products",
    request_body=json_body(ExtendedCriteria),
    responses=ok(ProductSearchResult, "Entity search result containing products"),
))

_registry.register(OperationContract(
    key="readProductCrossSellings post /product/{productId}/cross-selling",
    summary="Fetch cross-selling groups of a product",
    parameters=(path_param("productId", "Product ID"),),
    request_body=json_body(ExtendedProductCriteria),
    responses=ok(ExtendedCrossSellingElementCollection, "Found cross sellings"),
))

_registry.register(OperationContract(
    key="readProductListing post /product-listing/{categoryId}",
    summary="Fetch a product listing by category",
    parameters=(path_param("categoryId", "Identifier of a category."),),
    request_body=json_body(ExtendedProductCriteria),
    responses=ok(ExtendedProductListingResult, "Returns a product listing containing all products."),
))

_registry.register(OperationContract(
    key="readSeoUrl post /seo-url",
    summary="Fetch SEO routes",
    request_body=json_body(ExtendedCriteria),
    responses={
        200: ResponseDef(schema=SeoUrlSearchResult, description="Entity search result containing seo urls."),
        404: NOT_FOUND,
    },
))

_registry.register(OperationContract(
    key="searchPage post /search",
    summary="Search for products",
    request_body=json_body(SearchPageCriteria, required=True),
    responses={
        200: ResponseDef(
            schema=ExtendedProductListingResult,
            description="Returns a product listing containing all products.",
        ),
        400: ResponseDef(schema=ErrorResponse, description="Bad Request"),
    },
))

OVERRIDE_CATALOG = _registry.build()
