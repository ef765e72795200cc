"""Tests de integración para los endpoints de catálogo y carrito."""

import pytest

from storefront.db.shopify_clients import ShopifyResponse
from storefront.utils.error_handler import StorefrontApplicationError, StorefrontTransportError
from tests.factories import HIDDEN_TAG, connection, make_cart, make_collection, make_product, ok

pytestmark = pytest.mark.integration


class TestRootEndpoints:
    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "tag_epochs" in response.json()["cache"]

    def test_ping_sets_request_headers(self, test_client):
        response = test_client.get("/ping", headers={"X-Request-ID": "abc123"})

        assert response.json()["message"] == "pong"
        assert response.headers["X-Request-ID"] == "abc123"
        assert "X-Process-Time" in response.headers


class TestCatalogEndpoints:
    def test_menu(self, test_client, transport):
        domain = transport.settings.SHOPIFY_STORE_DOMAIN
        transport._post.return_value = ok({"menu": {"items": [{"title": "Shirts", "url": f"{domain}/collections/shirts"}]}})

        response = test_client.get("/api/v1/menu/main-menu")

        assert response.json() == {"items": [{"title": "Shirts", "path": "/search/shirts"}]}

    def test_search_products(self, test_client, transport):
        transport._post.return_value = ok(
            {"products": connection(make_product(handle="a"), make_product(handle="b", tags=[HIDDEN_TAG]))}
        )

        response = test_client.get("/api/v1/products", params={"q": "shirt", "sort": "price-desc"})

        body = response.json()
        assert response.status_code == 200
        assert body["count"] == 1
        assert body["products"][0]["handle"] == "a"
        assert body["products"][0]["featuredImage"]["altText"] == "Shirt - a"
        assert transport._post.await_args.args[1] == {"query": "shirt", "reverse": True, "sortKey": "PRICE"}

    def test_product_by_handle(self, test_client, transport):
        transport._post.return_value = ok({"product": make_product(handle="secret", tags=[HIDDEN_TAG])})

        response = test_client.get("/api/v1/products/secret")

        assert response.status_code == 200
        assert response.json()["product"]["handle"] == "secret"

    def test_product_not_found(self, test_client, transport):
        transport._post.return_value = ok({"product": None})

        response = test_client.get("/api/v1/products/missing")

        assert response.status_code == 404
        assert response.json()["error"] is True

    def test_recommendations(self, test_client, transport):
        transport._post.return_value = ok({"productRecommendations": [make_product(handle="x")]})

        response = test_client.get("/api/v1/recommendations", params={"product_id": "gid://shopify/Product/1"})

        assert [product["handle"] for product in response.json()["products"]] == ["x"]

    def test_recommendations_require_product_id(self, test_client):
        response = test_client.get("/api/v1/recommendations")

        assert response.status_code == 422
        assert response.json()["error_type"] == "validation_error"

    def test_collections(self, test_client, transport):
        transport._post.return_value = ok(
            {"collections": connection(make_collection("shirts"), make_collection("hidden-featured"))}
        )

        response = test_client.get("/api/v1/collections")

        assert [c["handle"] for c in response.json()["collections"]] == ["", "shirts"]

    def test_collection_not_found(self, test_client, transport):
        transport._post.return_value = ok({"collection": None})

        assert test_client.get("/api/v1/collections/missing").status_code == 404

    def test_collection_products_with_sort(self, test_client, transport):
        transport._post.return_value = ok({"collection": {"products": connection(make_product())}})

        response = test_client.get("/api/v1/collections/shirts/products", params={"sort": "latest-desc"})

        assert response.json()["count"] == 1
        assert transport._post.await_args.args[1] == {"handle": "shirts", "reverse": True, "sortKey": "CREATED"}

    def test_missing_collection_products_is_empty(self, test_client, transport):
        transport._post.return_value = ok({"collection": None})

        response = test_client.get("/api/v1/collections/missing/products")

        assert response.status_code == 200
        assert response.json() == {"products": [], "count": 0}

    def test_sorting_options(self, test_client):
        sorting = test_client.get("/api/v1/sorting").json()["sorting"]

        assert [item["slug"] for item in sorting] == [None, "trending-desc", "latest-desc", "price-asc", "price-desc"]
        assert sorting[2]["sortKey"] == "CREATED_AT"


class TestStorefrontFailures:
    def test_application_error_maps_to_502(self, test_client, transport):
        transport._post.side_effect = StorefrontApplicationError("Access denied", query="query")

        response = test_client.get("/api/v1/products")

        assert response.status_code == 502
        assert response.json()["error_type"] == "storefront_application_error"
        assert "query" not in response.json()

    def test_transport_error_keeps_status(self, test_client, transport):
        transport._post.side_effect = StorefrontTransportError(cause="HTTP 503", status=503, query="query")

        response = test_client.get("/api/v1/collections")

        assert response.status_code == 503
        assert response.json()["error_type"] == "storefront_transport_error"

    def test_rejected_cart_mutation_maps_to_502(self, test_client, transport):
        transport._post.return_value = ok(
            {"cartLinesAdd": {"cart": None, "userErrors": [{"field": ["cartId"], "message": "The specified cart does not exist."}]}}
        )

        response = test_client.post(
            "/api/v1/cart/lines",
            json={"cartId": "gid://shopify/Cart/gone", "lines": [{"merchandiseId": "v1", "quantity": 1}]},
        )

        assert response.status_code == 502
        assert response.json()["error_type"] == "storefront_application_error"
        assert response.json()["message"] == "The specified cart does not exist."


class TestCartEndpoints:
    def test_get_cart_without_id(self, test_client, transport):
        response = test_client.get("/api/v1/cart")

        assert response.json() == {"cart": None}
        transport._post.assert_not_awaited()

    def test_get_cart(self, test_client, transport):
        transport._post.return_value = ok({"cart": make_cart()})

        response = test_client.get("/api/v1/cart", params={"cart_id": "gid://shopify/Cart/abc123?key=xyz"})

        cart = response.json()["cart"]
        assert cart["totalQuantity"] == 3
        assert cart["cost"]["totalTaxAmount"] == {"amount": "0.0", "currencyCode": "USD"}

    def test_create_cart(self, test_client, transport):
        transport._post.return_value = ok({"cartCreate": {"cart": make_cart(lines=[])}})

        response = test_client.post("/api/v1/cart")

        assert response.status_code == 201
        assert response.json()["cart"]["lines"] == []

    def test_add_to_cart(self, test_client, transport):
        transport._post.return_value = ok({"cartLinesAdd": {"cart": make_cart()}})

        response = test_client.post(
            "/api/v1/cart/lines",
            json={"cartId": "cart-1", "lines": [{"merchandiseId": "gid://shopify/ProductVariant/shirt-s", "quantity": 3}]},
        )

        assert response.status_code == 200
        assert transport._post.await_args.args[1] == {
            "cartId": "cart-1",
            "lines": [{"merchandiseId": "gid://shopify/ProductVariant/shirt-s", "quantity": 3}],
        }

    def test_add_to_cart_rejects_empty_lines(self, test_client, transport):
        response = test_client.post("/api/v1/cart/lines", json={"cartId": "cart-1", "lines": []})

        assert response.status_code == 422
        transport._post.assert_not_awaited()

    def test_update_cart(self, test_client, transport):
        transport._post.return_value = ok({"cartLinesUpdate": {"cart": make_cart()}})

        response = test_client.put(
            "/api/v1/cart/lines",
            json={"cart_id": "cart-1", "lines": [{"id": "gid://shopify/CartLine/1", "quantity": 0}]},
        )

        assert response.status_code == 200
        assert transport._post.await_args.args[1] == {
            "cartId": "cart-1",
            "lines": [{"id": "gid://shopify/CartLine/1", "quantity": 0}],
        }

    def test_remove_from_cart(self, test_client, transport):
        transport._post.return_value = ShopifyResponse(200, {"data": {"cartLinesRemove": {"cart": make_cart(lines=[])}}})

        response = test_client.post(
            "/api/v1/cart/lines/remove", json={"cartId": "cart-1", "lineIds": ["gid://shopify/CartLine/1"]}
        )

        assert response.json()["cart"]["totalQuantity"] == 0
        assert transport._post.await_args.args[1] == {"cartId": "cart-1", "lineIds": ["gid://shopify/CartLine/1"]}
