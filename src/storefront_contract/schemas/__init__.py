"""
Schemas - generic platform entities and their storefront refinements.
"""

from __future__ import annotations

from .base import (
    ApiErrorDetail,
    Cart,
    Category,
    CmsBlock,
    CmsPage,
    CmsSection,
    CmsSlot,
    ContextTokenResponse,
    Criteria,
    CrossSellingElement,
    EntitySearchResult,
    ErrorResponse,
    LineItem,
    Media,
    Product,
    ProductListingCriteria,
    ProductListingFlags,
    ProductListingResult,
    ProductMedia,
    PropertyGroupOption,
    SalesChannelContext,
    SeoUrl,
)
from .extended import (
    CartError,
    CartItemsRequest,
    CategorySearchResult,
    CmsSlotConfig,
    CmsSlotContent,
    CriteriaFilter,
    ExtendedCart,
    ExtendedCategory,
    ExtendedCmsBlock,
    ExtendedCmsPage,
    ExtendedCmsSection,
    ExtendedCmsSlot,
    ExtendedCriteria,
    ExtendedCrossSellingElement,
    ExtendedCrossSellingElementCollection,
    ExtendedLineItem,
    ExtendedProduct,
    ExtendedProductCriteria,
    ExtendedProductListingResult,
    MessageKey,
    NavigationCriteria,
    ProductPrice,
    ProductSearchResult,
    SearchPageCriteria,
    SeoUrlSearchResult,
    refinements,
)

__all__ = [
    # Generic schemas
    "ApiErrorDetail",
    "ErrorResponse",
    "Cart",
    "Category",
    "CmsBlock",
    "CmsPage",
    "CmsSection",
    "CmsSlot",
    "ContextTokenResponse",
    "Criteria",
    "CrossSellingElement",
    "EntitySearchResult",
    "LineItem",
    "Media",
    "Product",
    "ProductListingCriteria",
    "ProductListingFlags",
    "ProductListingResult",
    "ProductMedia",
    "PropertyGroupOption",
    "SalesChannelContext",
    "SeoUrl",
    # Refinements
    "refinements",
    "MessageKey",
    "CartError",
    "CartItemsRequest",
    "CategorySearchResult",
    "CmsSlotConfig",
    "CmsSlotContent",
    "CriteriaFilter",
    "ExtendedCart",
    "ExtendedCategory",
    "ExtendedCmsBlock",
    "ExtendedCmsPage",
    "ExtendedCmsSection",
    "ExtendedCmsSlot",
    "ExtendedCriteria",
    "ExtendedCrossSellingElement",
    "ExtendedCrossSellingElementCollection",
    "ExtendedLineItem",
    "ExtendedProduct",
    "ExtendedProductCriteria",
    "ExtendedProductListingResult",
    "NavigationCriteria",
    "ProductPrice",
    "ProductSearchResult",
    "SearchPageCriteria",
    "SeoUrlSearchResult",
]
