"""Tests for request encoding, response decoding and failure classification in the dispatcher."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from storefront_contract.core.errors import (
    FaultKind,
    MalformedRequest,
    ProtocolFault,
    StructuredApiFault,
    TransportFault,
    UnexpectedStatus,
    UnknownOperation,
)
from storefront_contract.schemas.base import SalesChannelContext, SeoUrl
from storefront_contract.schemas.extended import (
    ExtendedCart,
    ExtendedCategory,
    ExtendedCriteria,
    ExtendedCrossSellingElement,
    ExtendedProduct,
    ExtendedProductListingResult,
)

CATEGORY_BODY = {
    "id": "c0",
    "name": "Root",
    "apiAlias": "category",
    "translated": {"name": "Root"},
    "children": [
        {
            "id": "c1",
            "name": "Shoes",
            "childCount": 1,
            "children": [{"id": "c2", "name": "Sneakers", "children": [{"id": "c3", "active": True}]}],
        },
    ],
    "seoUrls": [{"id": "s1", "seoPathInfo": "root/", "isCanonical": True}],
    "customPluginField": {"x": 1},
}


# ── Encoding ────────────────────────────────────────────────────


class TestEncodePath:
    def test_path_placeholder_and_bare_query_item(self, dispatcher):
        request = dispatcher.encode("readCategory", {"navigationId": "abc"})

        assert request.method == "post"
        assert request.path == "/category/abc?slots"
        assert request.url == "https://shop.example/store-api/category/abc?slots"
        assert request.body is None

    def test_bare_query_item_with_value(self, dispatcher):
        request = dispatcher.encode("readCategory", {"navigationId": "abc", "slots": "s1|s2"})
        assert request.path == "/category/abc?slots=s1|s2"

    def test_path_values_are_escaped(self, dispatcher):
        request = dispatcher.encode("readCategory", {"navigationId": "a/b c"})
        assert request.path == "/category/a%2Fb%20c?slots"

    def test_missing_path_parameter(self, dispatcher):
        with pytest.raises(MalformedRequest, match="navigationId") as exc_info:
            dispatcher.encode("readCategory", {"limit": 10})
        assert exc_info.value.kind is FaultKind.MALFORMED_REQUEST

    def test_empty_path_parameter(self, dispatcher):
        with pytest.raises(MalformedRequest):
            dispatcher.encode("readCategory", {"navigationId": ""})

    def test_unknown_operation(self, dispatcher):
        with pytest.raises(UnknownOperation):
            dispatcher.encode("readWishlist", {})


class TestEncodeQuery:
    def test_bracket_array_explodes(self, dispatcher):
        request = dispatcher.encode("deleteLineItem", {"ids": ["a", "b"]})

        assert request.method == "delete"
        assert request.path == "/checkout/cart/line-item?id[]=a&id[]=b"
        assert request.body is None

    def test_required_bracket_array_missing(self, dispatcher):
        with pytest.raises(MalformedRequest, match="ids"):
            dispatcher.encode("deleteLineItem", {})

    def test_query_parameter_type_checked(self, dispatcher):
        with pytest.raises(MalformedRequest) as exc_info:
            dispatcher.encode("deleteLineItem", {"ids": "a"})
        assert exc_info.value.errors

    def test_query_value_rendered(self, dispatcher):
        assert dispatcher.encode("readCart", {"name": "wish list"}).path == "/checkout/cart?name=wish%20list"

    def test_none_values_are_dropped(self, dispatcher):
        assert dispatcher.encode("readCart", {"name": None}).path == "/checkout/cart?name"


class TestEncodeHeaders:
    def test_auth_headers(self, dispatcher):
        request = dispatcher.encode("readContext")

        assert request.headers["sw-access-key"] == "SWSCTESTKEY"
        assert request.headers["Accept"] == "application/json"
        assert "sw-context-token" not in request.headers

    def test_context_token(self, dispatcher):
        request = dispatcher.with_context_token("ctx-123").encode("readContext")
        assert request.headers["sw-context-token"] == "ctx-123"
        assert "sw-context-token" not in dispatcher.encode("readContext").headers

    def test_header_parameter(self, dispatcher):
        request = dispatcher.encode("readNavigation", {
            "activeId": "main-navigation",
            "rootId": "main-navigation",
            "sw-include-seo-urls": True,
            "depth": 2,
        })

        assert request.path == "/navigation/main-navigation/main-navigation"
        assert request.headers["sw-include-seo-urls"] == "true"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.body) == {"depth": 2}


class TestEncodeBody:
    def test_search_body_unmodified(self, dispatcher):
        request = dispatcher.encode("searchPage", {"search": "shoe", "limit": 10})

        assert request.path == "/search"
        assert json.loads(request.body) == {"search": "shoe", "limit": 10}

    def test_search_requires_term(self, dispatcher):
        with pytest.raises(MalformedRequest, match="body"):
            dispatcher.encode("searchPage", {"limit": 10})

    def test_unknown_body_fields_rejected(self, dispatcher):
        with pytest.raises(MalformedRequest) as exc_info:
            dispatcher.encode("searchPage", {"search": "shoe", "limitt": 10})
        assert any("limitt" in error for error in exc_info.value.errors)

    def test_params_without_body_rejected(self, dispatcher):
        with pytest.raises(MalformedRequest, match="no request body"):
            dispatcher.encode("readContext", {"limit": 1})

    def test_typed_filters_are_encoded(self, dispatcher):
        criteria = ExtendedCriteria(filter=[{"type": "equals", "field": "routeName", "value": "frontend.detail.page"}])

        request = dispatcher.encode("readSeoUrl", criteria)

        assert json.loads(request.body) == {
            "filter": [{"type": "equals", "field": "routeName", "value": "frontend.detail.page"}],
        }

    def test_malformed_filter_rejected(self, dispatcher):
        with pytest.raises(MalformedRequest):
            dispatcher.encode("readSeoUrl", {"filter": [{"field": "routeName"}]})

    def test_hyphenated_wire_names(self, dispatcher):
        request = dispatcher.encode("readProductListing", {"categoryId": "c1", "min-price": 5, "order": "price-asc"})

        assert request.path == "/product-listing/c1"
        assert json.loads(request.body) == {"min-price": 5.0, "order": "price-asc"}

    def test_non_mapping_params(self, dispatcher):
        with pytest.raises(MalformedRequest):
            dispatcher.encode("readContext", ["a"])


# ── Decoding ────────────────────────────────────────────────────


class TestDecode:
    async def test_category_round_trip_is_lossless(self, dispatcher, transport):
        transport.queue(200, CATEGORY_BODY)

        category = await dispatcher.invoke("readCategory", {"navigationId": "c0"})

        assert isinstance(category, ExtendedCategory)
        assert isinstance(category.children[0].children[0].children[0], ExtendedCategory)
        assert isinstance(category.seo_urls[0], SeoUrl)
        assert category.to_wire() == CATEGORY_BODY

    async def test_search_elements_are_refined_products(self, dispatcher, transport):
        transport.queue(200, {
            "total": 1,
            "elements": [{"id": "p1", "name": "Shoe", "children": [{"id": "p1-red"}]}],
            "apiAlias": "product_listing",
        })

        listing = await dispatcher.invoke("searchPage", {"search": "shoe", "limit": 10})

        assert json.loads(transport.last.body) == {"search": "shoe", "limit": 10}
        assert isinstance(listing, ExtendedProductListingResult)
        assert isinstance(listing.elements[0], ExtendedProduct)
        assert isinstance(listing.elements[0].children[0], ExtendedProduct)

    async def test_list_response(self, dispatcher, transport):
        transport.queue(200, [{"crossSelling": {"name": "Similar"}, "products": [{"id": "p2"}], "total": 1}])

        elements = await dispatcher.invoke("readProductCrossSellings", {"productId": "p1"})

        assert isinstance(elements[0], ExtendedCrossSellingElement)
        assert isinstance(elements[0].products[0], ExtendedProduct)

    async def test_no_content(self, dispatcher, transport):
        transport.queue(204)
        assert await dispatcher.invoke("deleteCart") is None

    async def test_base_operation_decodes_generic_schema(self, dispatcher, transport):
        transport.queue(200, {"token": "ctx", "currency": {"isoCode": "EUR"}})

        context = await dispatcher.invoke("readContext get /context")

        assert isinstance(context, SalesChannelContext)
        assert context.currency == {"isoCode": "EUR"}

    async def test_unregistered_status(self, dispatcher, transport):
        transport.queue(201, CATEGORY_BODY)

        with pytest.raises(UnexpectedStatus) as exc_info:
            await dispatcher.invoke("readCategory", {"navigationId": "c0"})

        assert isinstance(exc_info.value, ProtocolFault)
        assert exc_info.value.status_code == 201

    async def test_body_not_matching_schema(self, dispatcher, transport):
        transport.queue(200, {"children": "not-a-list"})

        with pytest.raises(ProtocolFault) as exc_info:
            await dispatcher.invoke("readCategory", {"navigationId": "c0"})
        assert exc_info.value.kind is FaultKind.PROTOCOL

    async def test_body_not_json(self, dispatcher, transport):
        transport.queue(200, b"<html>maintenance</html>")

        with pytest.raises(ProtocolFault):
            await dispatcher.invoke("readContext")


class TestFailures:
    async def test_out_of_stock_is_structured(self, dispatcher, transport):
        transport.queue(400, {
            "errors": [{
                "status": "400",
                "code": "CHECKOUT__CART_INVALID_LINE_ITEM_QUANTITY",
                "title": "Bad Request",
                "detail": "The product is out of stock.",
                "messageKey": "product-out-of-stock",
            }],
        })

        with pytest.raises(StructuredApiFault) as exc_info:
            await dispatcher.invoke("addLineItem", {"items": [{"referencedId": "p1", "quantity": 1}]})

        fault = exc_info.value
        assert fault.status_code == 400
        assert fault.message_keys == ["product-out-of-stock"]
        assert fault.codes == ["CHECKOUT__CART_INVALID_LINE_ITEM_QUANTITY"]
        assert fault.operation == "addLineItem"

    async def test_registered_error_status_is_still_a_fault(self, dispatcher, transport):
        transport.queue(404, {"errors": [{"status": "404", "code": "FRAMEWORK__ROUTE_NOT_FOUND"}]})

        with pytest.raises(StructuredApiFault):
            await dispatcher.invoke("readSeoUrl")

    async def test_unstructured_error(self, dispatcher, transport):
        transport.queue(502, b"Bad Gateway")

        with pytest.raises(ProtocolFault) as exc_info:
            await dispatcher.invoke("readContext")
        assert exc_info.value.raw_body == b"Bad Gateway"

    async def test_transport_fault_propagates(self, dispatcher, transport):
        transport.fail(TransportFault("Request timed out", operation="readContext"))

        with pytest.raises(TransportFault):
            await dispatcher.invoke("readContext")

    async def test_raw_transport_error_is_classified(self, dispatcher, transport):
        transport.fail(ConnectionResetError("connection reset by peer"))

        with pytest.raises(TransportFault, match="connection reset") as exc_info:
            await dispatcher.invoke("readContext")

        assert exc_info.value.operation == "readContext"
        assert isinstance(exc_info.value.cause, ConnectionResetError)

    async def test_cancellation_propagates(self, dispatcher, transport):
        transport.fail(asyncio.CancelledError())

        with pytest.raises(asyncio.CancelledError):
            await dispatcher.invoke_result("readContext")


class TestInvokeResult:
    async def test_success(self, dispatcher, transport):
        transport.queue(200, {"lineItems": [{"id": "l1"}]})

        result = await dispatcher.invoke_result("readCart")

        assert result.ok
        assert result.kind is None
        assert isinstance(result.unwrap(), ExtendedCart)

    async def test_structured_failure(self, dispatcher, transport):
        transport.queue(400, {"errors": [{"messageKey": "product-not-found"}]})

        result = await dispatcher.invoke_result("readCart")

        assert not result.ok
        assert result.kind is FaultKind.STRUCTURED_API
        with pytest.raises(StructuredApiFault):
            result.unwrap()

    async def test_raw_transport_error_is_normalized(self, dispatcher, transport):
        transport.fail(httpx.ConnectError("connection refused"))

        result = await dispatcher.invoke_result("readContext")

        assert result.kind is FaultKind.TRANSPORT
        assert isinstance(result.fault.cause, httpx.ConnectError)
        assert result.fault.operation == "readContext"

    async def test_malformed_request_is_not_sent(self, dispatcher, transport):
        result = await dispatcher.invoke_result("readCategory", {})

        assert result.kind is FaultKind.MALFORMED_REQUEST
        assert transport.requests == []

    async def test_unknown_operation(self, dispatcher):
        result = await dispatcher.invoke_result("readWishlist")
        assert result.kind is FaultKind.UNKNOWN_OPERATION

    @pytest.mark.parametrize("key", ["", "   "])
    async def test_blank_key(self, dispatcher, key):
        result = await dispatcher.invoke_result(key)

        assert result.kind is FaultKind.UNKNOWN_OPERATION
        assert result.fault.operation is None

    async def test_concurrent_invocations(self, dispatcher, transport):
        for index in range(5):
            transport.queue(200, {"token": f"ctx-{index}"})

        results = await asyncio.gather(*(dispatcher.invoke_result("readContext") for _ in range(5)))

        assert all(result.ok for result in results)
        assert len(transport.requests) == 5
