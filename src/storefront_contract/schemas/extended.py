"""
Storefront refinements of the generic platform schemas.

Every tree-shaped entity is refined at each link: a refined category's
children are refined categories, its CMS page is a refined page whose sections,
blocks and slots are refined too. Associations to entities that are not
refined (SeoUrl, Media, ...) keep the base schema, typed instead of loose dicts.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from ..core.models import EntityModel, RequestModel
from ..core.refinement import RefinementSet
from .base import (
    Cart,
    Category,
    CmsBlock,
    CmsPage,
    CmsSection,
    CmsSlot,
    Criteria,
    CrossSellingElement,
    EntitySearchResult,
    LineItem,
    LineItemsRequest,
    Media,
    NavigationRequest,
    Product,
    ProductListingRequest,
    ProductListingResult,
    ProductMedia,
    PropertyGroupOption,
    SeoUrl,
)


class MessageKey(str, Enum):
    """Known cart/error message keys. The platform may send others."""
    PURCHASE_STEPS_QUANTITY = "purchase-steps-quantity"
    PRODUCT_STOCK_REACHED = "product-stock-reached"
    PRODUCT_OUT_OF_STOCK = "product-out-of-stock"
    PRODUCT_NOT_FOUND = "product-not-found"
    MIN_ORDER_QUANTITY = "min-order-quantity"


# =============================================================================
# Explicit building blocks used by the refinements
# =============================================================================


class CmsSlotContent(EntityModel):
    source: str
    value: Any = None


class CmsSlotConfig(EntityModel):
    content: CmsSlotContent


class CartError(EntityModel):
    key: Optional[str] = None
    level: Optional[Union[int, str]] = None
    message: Optional[str] = None
    message_key: Optional[str] = None

    @property
    def known_message_key(self) -> Optional[MessageKey]:
        """The message key as ``MessageKey`` if it is one of the known ones."""
        try:
            return MessageKey(self.message_key)
        except ValueError:
            return None


class CalculatedTax(EntityModel):
    tax: float
    tax_rate: float
    price: float
    api_alias: str


class TaxRule(EntityModel):
    tax_rate: float
    percentage: float
    api_alias: str


class ProductPrice(EntityModel):
    unit_price: float
    quantity: int
    total_price: float
    calculated_taxes: List[CalculatedTax]
    tax_rules: List[TaxRule]
    reference_price: Optional[Any] = None
    list_price: Optional[Any] = None
    regulation_price: Optional[Any] = None
    api_alias: str


class LineItemPayload(EntityModel):
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class CriteriaFilter(RequestModel):
    """
    Node of a criteria filter tree.

    ``queries`` nests further nodes (multi/not filters), to any depth.
    """
    type: str
    field: Optional[str] = None
    value: Optional[Union[str, bool, int, float]] = None
    operator: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None
    queries: Optional[List[CriteriaFilter]] = None


# =============================================================================
# Refinement set
# =============================================================================

refinements = RefinementSet(__name__)

# CMS chain, each link refined so the leaf config stays typed at any depth
refinements.add(
    "ExtendedCmsSlot", CmsSlot,
    exclude={"config"},
    replace={"config": Optional[CmsSlotConfig]},
)
refinements.add(
    "ExtendedCmsBlock", CmsBlock,
    exclude={"slots"},
    replace={"slots": Optional[List["ExtendedCmsSlot"]]},
)
refinements.add(
    "ExtendedCmsSection", CmsSection,
    exclude={"blocks"},
    replace={"blocks": Optional[List["ExtendedCmsBlock"]]},
)
refinements.add(
    "ExtendedCmsPage", CmsPage,
    exclude={"sections"},
    replace={"sections": Optional[List["ExtendedCmsSection"]]},
)

refinements.add(
    "ExtendedCategory", Category,
    exclude={"children", "seo_urls", "cms_page"},
    replace={
        "children": Optional[List["ExtendedCategory"]],
        "seo_urls": Optional[List[SeoUrl]],
        "cms_page": Optional["ExtendedCmsPage"],
    },
)

refinements.add(
    "ExtendedProduct", Product,
    exclude={"children", "seo_urls", "options", "media"},
    replace={
        "children": Optional[List["ExtendedProduct"]],
        "seo_urls": Optional[List[SeoUrl]],
        "options": Optional[List[PropertyGroupOption]],
        "media": Optional[List[ProductMedia]],
    },
)

refinements.add(
    "ExtendedLineItem", LineItem,
    exclude={"payload", "price", "cover", "children"},
    replace={
        "payload": Optional[LineItemPayload],
        "price": Optional[ProductPrice],
        "cover": Optional[Media],
        "children": Optional[List["ExtendedLineItem"]],
    },
)

refinements.add(
    "ExtendedCart", Cart,
    exclude={"line_items", "errors"},
    replace={
        "line_items": Optional[List["ExtendedLineItem"]],
        "errors": Optional[List[CartError]],
    },
)

refinements.add(
    "ExtendedCrossSellingElement", CrossSellingElement,
    exclude={"products"},
    replace={"products": Optional[List["ExtendedProduct"]]},
)

# Result envelopes, elements refined per operation
refinements.add(
    "ExtendedProductListingResult", ProductListingResult,
    exclude={"elements"},
    replace={"elements": Optional[List["ExtendedProduct"]]},
)
refinements.add(
    "CategorySearchResult", EntitySearchResult,
    exclude={"elements"},
    replace={"elements": Optional[List["ExtendedCategory"]]},
)
refinements.add(
    "ProductSearchResult", EntitySearchResult,
    exclude={"elements"},
    replace={"elements": Optional[List["ExtendedProduct"]]},
)
refinements.add(
    "SeoUrlSearchResult", EntitySearchResult,
    exclude={"elements"},
    replace={"elements": Optional[List[SeoUrl]]},
)

# Requests
refinements.add(
    "ExtendedCriteria", Criteria,
    exclude={"filter"},
    replace={"filter": Optional[List[CriteriaFilter]]},
)
refinements.add(
    "ExtendedProductCriteria", ProductListingRequest,
    exclude={"filter"},
    replace={"filter": Optional[List[CriteriaFilter]]},
)
refinements.add(
    "SearchPageCriteria", "ExtendedProductCriteria",
    replace={
        "search": (str, Field(description="Text searched on all records using the search ranking")),
    },
)
refinements.add(
    "NavigationCriteria", NavigationRequest,
    exclude={"filter"},
    replace={"filter": Optional[List[CriteriaFilter]]},
)
refinements.add(
    "CartItemsRequest", LineItemsRequest,
    exclude={"items"},
    replace={"items": (List["ExtendedLineItem"], ...)},
)

_models = refinements.build()

ExtendedCmsSlot = _models["ExtendedCmsSlot"]
ExtendedCmsBlock = _models["ExtendedCmsBlock"]
ExtendedCmsSection = _models["ExtendedCmsSection"]
ExtendedCmsPage = _models["ExtendedCmsPage"]
ExtendedCategory = _models["ExtendedCategory"]
ExtendedProduct = _models["ExtendedProduct"]
ExtendedLineItem = _models["ExtendedLineItem"]
ExtendedCart = _models["ExtendedCart"]
ExtendedCrossSellingElement = _models["ExtendedCrossSellingElement"]
ExtendedProductListingResult = _models["ExtendedProductListingResult"]
CategorySearchResult = _models["CategorySearchResult"]
ProductSearchResult = _models["ProductSearchResult"]
SeoUrlSearchResult = _models["SeoUrlSearchResult"]
ExtendedCriteria = _models["ExtendedCriteria"]
ExtendedProductCriteria = _models["ExtendedProductCriteria"]
SearchPageCriteria = _models["SearchPageCriteria"]
NavigationCriteria = _models["NavigationCriteria"]
CartItemsRequest = _models["CartItemsRequest"]

ExtendedCrossSellingElementCollection = List[ExtendedCrossSellingElement]

refinements.finalize()
