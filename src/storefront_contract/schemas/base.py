"""
Generic platform schemas.

These mirror the Store API's published contract: every field optional,
associations of other entities typed loosely as plain dicts. The storefront
refinements in ``extended`` narrow them.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import ConfigDict, Field

from ..core.models import ContractModel, EntityModel, RequestModel


# =============================================================================
# Errors
# =============================================================================


class ApiErrorDetail(ContractModel):
    """
    One entry of a platform error payload.

    {"status": "400", "code": "CHECKOUT__CART_LINE_ITEM_NOT_FOUND",
     "title": "Bad Request", "detail": "...", "meta": {...}}
    """
    model_config = ConfigDict(extra="allow")

    status: Optional[Union[str, int]] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
    message_key: Optional[str] = None
    message: Optional[str] = None

    def summary(self) -> str:
        text = self.detail or self.message or self.title or ""
        label = self.message_key or self.code
        return f"{label}: {text}" if label and text else (label or text)


class ErrorResponse(ContractModel):
    """Platform error payload: {"errors": [...]}."""
    model_config = ConfigDict(extra="allow")

    errors: List[ApiErrorDetail] = Field(default_factory=list)


# =============================================================================
# Entities
# =============================================================================


class Entity(EntityModel):
    """Fields shared by every platform entity."""
    id: Optional[str] = None
    api_alias: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    translated: Optional[Dict[str, Any]] = None
    custom_fields: Optional[Dict[str, Any]] = None


class SeoUrl(Entity):
    sales_channel_id: Optional[str] = None
    language_id: Optional[str] = None
    foreign_key: Optional[str] = None
    route_name: Optional[str] = None
    path_info: Optional[str] = None
    seo_path_info: Optional[str] = None
    is_canonical: Optional[bool] = None
    is_modified: Optional[bool] = None
    is_deleted: Optional[bool] = None
    url: Optional[str] = None
    error: Optional[str] = None


class Media(Entity):
    user_id: Optional[str] = None
    media_folder_id: Optional[str] = None
    mime_type: Optional[str] = None
    file_extension: Optional[str] = None
    file_size: Optional[int] = None
    file_name: Optional[str] = None
    title: Optional[str] = None
    alt: Optional[str] = None
    url: Optional[str] = None
    has_file: Optional[bool] = None
    private: Optional[bool] = None
    meta_data: Optional[Dict[str, Any]] = None
    thumbnails: Optional[List[Dict[str, Any]]] = None


class ProductMedia(Entity):
    product_id: Optional[str] = None
    media_id: Optional[str] = None
    position: Optional[int] = None
    media: Optional[Media] = None


class PropertyGroupOption(Entity):
    group_id: Optional[str] = None
    name: Optional[str] = None
    position: Optional[int] = None
    color_hex_code: Optional[str] = None
    media_id: Optional[str] = None
    group: Optional[Dict[str, Any]] = None


class CmsSlot(Entity):
    version_id: Optional[str] = None
    block_id: Optional[str] = None
    type: Optional[str] = None
    slot: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    field_config: Optional[Dict[str, Any]] = None
    data: Optional[Any] = None


class CmsBlock(Entity):
    section_id: Optional[str] = None
    position: Optional[int] = None
    section_position: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    css_class: Optional[str] = None
    background_color: Optional[str] = None
    slots: Optional[List[CmsSlot]] = None


class CmsSection(Entity):
    page_id: Optional[str] = None
    position: Optional[int] = None
    type: Optional[str] = None
    name: Optional[str] = None
    sizing_mode: Optional[str] = None
    css_class: Optional[str] = None
    background_color: Optional[str] = None
    blocks: Optional[List[CmsBlock]] = None


class CmsPage(Entity):
    name: Optional[str] = None
    type: Optional[str] = None
    entity: Optional[str] = None
    css_class: Optional[str] = None
    config: Optional[Dict[str, Any]] = None
    sections: Optional[List[CmsSection]] = None


class Category(Entity):
    parent_id: Optional[str] = None
    after_category_id: Optional[str] = None
    media_id: Optional[str] = None
    cms_page_id: Optional[str] = None
    name: Optional[str] = None
    breadcrumb: Optional[List[str]] = None
    path: Optional[str] = None
    level: Optional[int] = None
    child_count: Optional[int] = None
    active: Optional[bool] = None
    visible: Optional[bool] = None
    type: Optional[str] = None
    link_type: Optional[str] = None
    external_link: Optional[str] = None
    link_new_tab: Optional[bool] = None
    description: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    media: Optional[Media] = None
    cms_page: Optional[CmsPage] = None
    children: Optional[List[Category]] = None
    seo_urls: Optional[List[Dict[str, Any]]] = None


class Product(Entity):
    parent_id: Optional[str] = None
    manufacturer_id: Optional[str] = None
    product_number: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    ean: Optional[str] = None
    stock: Optional[int] = None
    available_stock: Optional[int] = None
    available: Optional[bool] = None
    is_closeout: Optional[bool] = None
    min_purchase: Optional[int] = None
    max_purchase: Optional[int] = None
    purchase_steps: Optional[int] = None
    child_count: Optional[int] = None
    rating_average: Optional[float] = None
    option_ids: Optional[List[str]] = None
    property_ids: Optional[List[str]] = None
    calculated_price: Optional[Dict[str, Any]] = None
    calculated_prices: Optional[List[Dict[str, Any]]] = None
    calculated_cheapest_price: Optional[Dict[str, Any]] = None
    variant_listing_config: Optional[Dict[str, Any]] = None
    manufacturer: Optional[Dict[str, Any]] = None
    properties: Optional[List[Dict[str, Any]]] = None
    cover: Optional[ProductMedia] = None
    children: Optional[List[Product]] = None
    seo_urls: Optional[List[Dict[str, Any]]] = None
    options: Optional[List[Dict[str, Any]]] = None
    media: Optional[List[Dict[str, Any]]] = None


class ProductCrossSelling(Entity):
    name: Optional[str] = None
    position: Optional[int] = None
    type: Optional[str] = None
    active: Optional[bool] = None
    limit: Optional[int] = None
    sort_by: Optional[str] = None
    sort_direction: Optional[str] = None


class CrossSellingElement(EntityModel):
    """One cross selling group together with its products."""
    cross_selling: Optional[ProductCrossSelling] = None
    products: Optional[List[Product]] = None
    total: Optional[int] = None
    stream_id: Optional[str] = None
    api_alias: Optional[str] = None


class LineItem(EntityModel):
    id: Optional[str] = None
    referenced_id: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    quantity: Optional[int] = None
    type: Optional[str] = None
    good: Optional[bool] = None
    removable: Optional[bool] = None
    stackable: Optional[bool] = None
    modified: Optional[bool] = None
    cover: Optional[Dict[str, Any]] = None
    price: Optional[Dict[str, Any]] = None
    price_definition: Optional[Dict[str, Any]] = None
    payload: Optional[Dict[str, Any]] = None
    quantity_information: Optional[Dict[str, Any]] = None
    states: Optional[List[str]] = None
    children: Optional[List[LineItem]] = None
    api_alias: Optional[str] = None


class Cart(EntityModel):
    name: Optional[str] = None
    token: Optional[str] = None
    price: Optional[Dict[str, Any]] = None
    line_items: Optional[List[LineItem]] = None
    errors: Optional[Union[List[Dict[str, Any]], Dict[str, Any]]] = None
    deliveries: Optional[List[Dict[str, Any]]] = None
    transactions: Optional[List[Dict[str, Any]]] = None
    modified: Optional[bool] = None
    customer_comment: Optional[str] = None
    affiliate_code: Optional[str] = None
    campaign_code: Optional[str] = None
    api_alias: Optional[str] = None


class SalesChannelContext(EntityModel):
    token: Optional[str] = None
    current_customer_group: Optional[Dict[str, Any]] = None
    currency: Optional[Dict[str, Any]] = None
    sales_channel: Optional[Dict[str, Any]] = None
    tax_rules: Optional[List[Dict[str, Any]]] = None
    customer: Optional[Dict[str, Any]] = None
    payment_method: Optional[Dict[str, Any]] = None
    shipping_method: Optional[Dict[str, Any]] = None
    shipping_location: Optional[Dict[str, Any]] = None
    context: Optional[Dict[str, Any]] = None
    item_rounding: Optional[Dict[str, Any]] = None
    total_rounding: Optional[Dict[str, Any]] = None
    api_alias: Optional[str] = None


class ContextTokenResponse(EntityModel):
    """Answer of context mutating routes, carrying the (new) context token."""
    context_token: Optional[str] = None
    redirect_url: Optional[str] = None


# =============================================================================
# Result envelopes
# =============================================================================


class EntitySearchResult(EntityModel):
    """Generic search result: total count, aggregations, pagination and elements."""
    entity: Optional[str] = None
    total: Optional[int] = None
    aggregations: Optional[Dict[str, Any]] = None
    page: Optional[int] = None
    limit: Optional[int] = None
    elements: Optional[List[Dict[str, Any]]] = None
    api_alias: Optional[str] = None


class ProductListingResult(EntitySearchResult):
    current_filters: Optional[Dict[str, Any]] = None
    available_sortings: Optional[List[Dict[str, Any]]] = None
    sorting: Optional[str] = None


class CategorySearchResultBase(EntitySearchResult):
    elements: Optional[List[Category]] = None


class ProductSearchResultBase(EntitySearchResult):
    elements: Optional[List[Product]] = None


# =============================================================================
# Requests
# =============================================================================


class Criteria(RequestModel):
    """Generic search criteria. Filters are loosely typed dicts."""
    page: Optional[int] = None
    limit: Optional[int] = None
    term: Optional[str] = None
    ids: Optional[List[str]] = None
    filter: Optional[List[Dict[str, Any]]] = None
    post_filter: Optional[List[Dict[str, Any]]] = Field(default=None, alias="post-filter")
    query: Optional[List[Dict[str, Any]]] = None
    sort: Optional[List[Dict[str, Any]]] = None
    aggregations: Optional[List[Dict[str, Any]]] = None
    associations: Optional[Dict[str, Any]] = None
    grouping: Optional[List[str]] = None
    fields: Optional[List[str]] = None
    includes: Optional[Dict[str, List[str]]] = None
    excludes: Optional[Dict[str, List[str]]] = None
    total_count_mode: Optional[Union[int, str]] = Field(default=None, alias="total-count-mode")


class ProductListingFlags(RequestModel):
    no_aggregations: Optional[str] = Field(default=None, alias="no-aggregations")
    only_aggregations: Optional[str] = Field(default=None, alias="only-aggregations")


class ProductListingCriteria(Criteria):
    """Criteria plus the listing-specific parameters."""
    order: Optional[str] = None
    p: Optional[int] = None
    manufacturer: Optional[str] = None
    min_price: Optional[float] = Field(default=None, alias="min-price")
    max_price: Optional[float] = Field(default=None, alias="max-price")
    rating: Optional[float] = None
    shipping_free: Optional[bool] = Field(default=None, alias="shipping-free")
    properties: Optional[str] = None
    manufacturer_filter: Optional[bool] = Field(default=None, alias="manufacturer-filter")
    price_filter: Optional[bool] = Field(default=None, alias="price-filter")
    rating_filter: Optional[bool] = Field(default=None, alias="rating-filter")
    shipping_free_filter: Optional[bool] = Field(default=None, alias="shipping-free-filter")
    property_filter: Optional[bool] = Field(default=None, alias="property-filter")
    property_whitelist: Optional[str] = Field(default=None, alias="property-whitelist")
    reduce_aggregations: Optional[str] = Field(default=None, alias="reduce-aggregations")


class ProductListingRequest(ProductListingCriteria, ProductListingFlags):
    pass


class NavigationRequest(Criteria):
    build_tree: Optional[Any] = None
    depth: Optional[Any] = None


class SearchSuggestRequest(ProductListingRequest):
    search: str


class LineItemsRequest(RequestModel):
    items: List[Dict[str, Any]]


class LineItemIdsRequest(RequestModel):
    ids: List[str]


class ContextUpdateRequest(RequestModel):
    currency_id: Optional[str] = None
    language_id: Optional[str] = None
    billing_address_id: Optional[str] = None
    shipping_address_id: Optional[str] = None
    payment_method_id: Optional[str] = None
    shipping_method_id: Optional[str] = None
    country_id: Optional[str] = None
    country_state_id: Optional[str] = None


class LoginRequest(RequestModel):
    username: str
    password: str
