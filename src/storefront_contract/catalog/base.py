"""
Base operation catalog - the Store API operations as the platform publishes them.

Responses use the generic schemas: associations are loose dicts and
listings carry base entities.
"""

from __future__ import annotations

from typing import Any, Dict, List

from ..core.catalog import OperationRegistry
from ..core.defs import OperationContract, ParameterDef, RequestBodyDef, ResponseDef
from ..schemas.base import (
    Cart,
    Category,
    CategorySearchResultBase,
    ContextTokenResponse,
    ContextUpdateRequest,
    Criteria,
    CrossSellingElement,
    EntitySearchResult,
    ErrorResponse,
    LineItemIdsRequest,
    LineItemsRequest,
    LoginRequest,
    NavigationRequest,
    ProductListingRequest,
    ProductListingResult,
    ProductSearchResultBase,
    SalesChannelContext,
    SearchSuggestRequest,
)


def path_param(name: str, description: str = "") -> ParameterDef:
    return ParameterDef(name=name, location="path", required=True, description=description)


def json_body(schema: Any, required: bool = False) -> RequestBodyDef:
    return RequestBodyDef(schema=schema, required=required)


def ok(schema: Any, description: str = "") -> dict[int, ResponseDef]:
    return {200: ResponseDef(schema=schema, description=description)}


NOT_FOUND = ResponseDef(schema=ErrorResponse, description="Not Found")

_registry = OperationRegistry()

# --- Context -----------------------------------------------------------------

_registry.register(OperationContract(
    key="readContext get /context",
    summary="Fetch the current context",
    responses=ok(SalesChannelContext, "Returns the current context."),
))
_registry.register(OperationContract(
    key="updateContext patch /context",
    summary="Modify the current context",
    request_body=json_body(ContextUpdateRequest),
    responses=ok(ContextTokenResponse, "Returns the context token."),
))

# --- Navigation / categories -------------------------------------------------

_registry.register(OperationContract(
    key="readNavigation post /navigation/{activeId}/{rootId} sw-include-seo-urls",
    summary="Fetch a navigation menu",
    parameters=(
        path_param("activeId", "Identifier of the active category in the navigation tree."),
        path_param("rootId", "Identifier of the root category for your desired navigation tree."),
        ParameterDef(
            name="sw-include-seo-urls",
            location="header",
            schema=bool,
            description="Instructs the platform to try and resolve SEO URLs for the navigation items.",
        ),
    ),
    request_body=json_body(NavigationRequest, required=True),
    responses=ok(List[Category], "All available navigations"),
))
_registry.register(OperationContract(
    key="readCategory post /category/{navigationId}",
    summary="Fetch a single category",
    parameters=(path_param("navigationId", "Identifier of the category to be fetched"),),
    request_body=json_body(ProductListingRequest),
    responses=ok(Category, "The loaded category with cms page"),
))
_registry.register(OperationContract(
    key="readCategoryList post /category",
    summary="Fetch a list of categories",
    request_body=json_body(Criteria),
    responses=ok(CategorySearchResultBase, "Entity search result containing categories."),
))

# --- Products ----------------------------------------------------------------

_registry.register(OperationContract(
    key="readProduct post /product",
    summary="Fetch a list of products",
    request_body=json_body(Criteria),
    responses=ok(ProductSearchResultBase, "Entity search result containing products"),
))
_registry.register(OperationContract(
    key="readProductDetail post /product/{productId}",
    summary="Fetch a single product",
    parameters=(path_param("productId", "Product ID"),),
    request_body=json_body(Criteria),
    responses=ok(Dict[str, Any], "Product information along with variant groups and options"),
))
_registry.register(OperationContract(
    key="readProductListing post /product-listing/{categoryId}",
    summary="Fetch a product listing by category",
    parameters=(path_param("categoryId", "Identifier of a category."),),
    request_body=json_body(ProductListingRequest),
    responses=ok(ProductListingResult, "Returns a product listing containing all products."),
))
_registry.register(OperationContract(
    key="readProductCrossSellings post /product/{productId}/cross-selling",
    summary="Fetch cross-selling groups of a product",
    parameters=(path_param("productId", "Product ID"),),
    responses=ok(List[CrossSellingElement], "Found cross sellings"),
))
_registry.register(OperationContract(
    key="searchSuggest post /search-suggest",
    summary="Search for suggested products",
    request_body=json_body(SearchSuggestRequest, required=True),
    responses=ok(ProductListingResult, "Returns a product listing containing all products."),
))

# --- SEO ---------------------------------------------------------------------

_registry.register(OperationContract(
    key="readSeoUrl post /seo-url",
    summary="Fetch SEO routes",
    request_body=json_body(Criteria),
    responses=ok(EntitySearchResult, "Entity search result containing seo urls."),
))

# --- CMS ---------------------------------------------------------------------

_registry.register(OperationContract(
    key="readCms post /cms/{id}",
    summary="Fetch and resolve a CMS page",
    parameters=(path_param("id", "Identifier of the CMS page to be resolved"),),
    request_body=json_body(ProductListingRequest),
    responses={200: ResponseDef(schema=Dict[str, Any], description="The loaded cms page"), 404: NOT_FOUND},
))

# --- Cart --------------------------------------------------------------------

_registry.register(OperationContract(
    key="readCart get /checkout/cart",
    summary="Fetch or create a cart",
    responses=ok(Cart, "Cart"),
))
_registry.register(OperationContract(
    key="deleteCart delete /checkout/cart",
    summary="Delete a cart",
    responses={204: ResponseDef(schema=None, description="Successfully deleted the cart")},
))
_registry.register(OperationContract(
    key="addLineItem post /checkout/cart/line-item",
    summary="Add items to the cart",
    request_body=json_body(LineItemsRequest),
    responses=ok(Cart, "The updated cart."),
))
_registry.register(OperationContract(
    key="updateLineItem patch /checkout/cart/line-item",
    summary="Update items in the cart",
    request_body=json_body(LineItemsRequest),
    responses=ok(Cart, "The updated cart."),
))
_registry.register(OperationContract(
    key="deleteLineItem delete /checkout/cart/line-item",
    summary="Remove items from the cart",
    request_body=json_body(LineItemIdsRequest, required=True),
    responses=ok(Cart, "The updated cart."),
))

# --- Generic entity listings -------------------------------------------------

for _key, _summary in (
    ("readCurrency post /currency", "Fetch currencies"),
    ("readLanguages post /language", "Fetch languages"),
    ("readCountry post /country", "Fetch countries"),
    ("readSalutation post /salutation", "Fetch salutations"),
    ("readPaymentMethod post /payment-method", "Fetch payment methods"),
    ("readShippingMethod post /shipping-method", "Fetch shipping methods"),
):
    _registry.register(OperationContract(
        key=_key,
        summary=_summary,
        request_body=json_body(Criteria),
        responses=ok(EntitySearchResult),
    ))

# --- Account -----------------------------------------------------------------

_registry.register(OperationContract(
    key="readCustomer post /account/customer",
    summary="Get information about the current customer",
    request_body=json_body(Criteria),
    responses={
        200: ResponseDef(schema=Dict[str, Any], description="Returns the logged in customer"),
        403: ResponseDef(schema=ErrorResponse, description="Forbidden"),
    },
))
_registry.register(OperationContract(
    key="loginCustomer post /account/login",
    summary="Log in a customer",
    request_body=json_body(LoginRequest, required=True),
    responses=ok(ContextTokenResponse, "A successful login returns a context token."),
))
_registry.register(OperationContract(
    key="logoutCustomer post /account/logout",
    summary="Log out a customer",
    responses=ok(ContextTokenResponse, "A successful logout returns a context token."),
))

BASE_CATALOG = _registry.build()
