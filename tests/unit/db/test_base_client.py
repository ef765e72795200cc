"""Tests unitarios para el transporte de la Storefront API."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from storefront.core.cache_manager import CacheTag
from storefront.db.shopify_clients import CachePolicy, ShopifyResponse, StorefrontTransport
from storefront.utils.error_handler import ErrorKind, StorefrontApplicationError, StorefrontTransportError

QUERY = "query getShop { shop { name } }"


def mock_session(status=200, body=None, json_error=None, post_error=None):
    """Sesión aiohttp simulada cuyo POST devuelve status y body dados."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body, side_effect=json_error)

    session = MagicMock()
    if post_error is not None:
        session.post.side_effect = post_error
    else:
        session.post.return_value.__aenter__ = AsyncMock(return_value=response)
        session.post.return_value.__aexit__ = AsyncMock(return_value=False)
    session.close = AsyncMock()
    return session


class TestStorefrontTransportCache:
    """Tests para las políticas de cache del transporte."""

    @pytest.mark.asyncio
    async def test_force_cache_reuses_response(self, transport):
        """Debe hacer un solo POST para dos envíos idénticos con FORCE_CACHE."""
        transport._post.return_value = ShopifyResponse(200, {"data": {"shop": {"name": "A"}}})

        first = await transport.send(QUERY, tags=[CacheTag.PRODUCTS])
        second = await transport.send(QUERY, tags=[CacheTag.PRODUCTS])

        assert transport._post.await_count == 1
        assert first == second

    @pytest.mark.asyncio
    async def test_different_variables_are_cached_separately(self, transport):
        transport._post.return_value = ShopifyResponse(200, {"data": {}})

        await transport.send(QUERY, variables={"handle": "a"})
        await transport.send(QUERY, variables={"handle": "b"})

        assert transport._post.await_count == 2

    @pytest.mark.asyncio
    async def test_invalidated_tag_forces_refetch(self, transport, cache_store):
        """Debe volver a pedir la respuesta después de invalidar su tag."""
        transport._post.side_effect = [
            ShopifyResponse(200, {"data": {"version": 1}}),
            ShopifyResponse(200, {"data": {"version": 2}}),
        ]

        await transport.send(QUERY, tags=[CacheTag.PRODUCTS])
        cache_store.invalidate_tag(CacheTag.PRODUCTS)
        response = await transport.send(QUERY, tags=[CacheTag.PRODUCTS])

        assert transport._post.await_count == 2
        assert response.body["data"]["version"] == 2

    @pytest.mark.asyncio
    async def test_invalidation_during_fetch_discards_response(self, transport, cache_store):
        """Un webhook que llega durante el POST no debe dejar la respuesta vieja en cache."""

        calls = []

        async def fake_post(query, variables):
            calls.append(query)
            if len(calls) == 1:
                cache_store.invalidate_tag(CacheTag.PRODUCTS)
                return ShopifyResponse(200, {"data": {"version": "stale"}})
            return ShopifyResponse(200, {"data": {"version": "fresh"}})

        transport._post.side_effect = fake_post

        first = await transport.send(QUERY, tags=[CacheTag.PRODUCTS])
        second = await transport.send(QUERY, tags=[CacheTag.PRODUCTS])

        assert first.body["data"]["version"] == "stale"
        assert second.body["data"]["version"] == "fresh"
        assert transport._post.await_count == 2

    @pytest.mark.asyncio
    async def test_no_cache_always_fetches_but_stores(self, transport):
        """NO_CACHE siempre consulta, pero deja la respuesta para FORCE_CACHE."""
        transport._post.return_value = ShopifyResponse(200, {"data": {}})

        await transport.send(QUERY, cache=CachePolicy.NO_CACHE)
        await transport.send(QUERY, cache=CachePolicy.NO_CACHE)
        await transport.send(QUERY)

        assert transport._post.await_count == 2

    @pytest.mark.asyncio
    async def test_no_store_never_touches_cache(self, transport, cache_store):
        transport._post.return_value = ShopifyResponse(200, {"data": {}})

        await transport.send(QUERY, cache=CachePolicy.NO_STORE)
        await transport.send(QUERY)

        assert transport._post.await_count == 2
        assert cache_store.get_stats()["total_keys"] == 1

    @pytest.mark.asyncio
    async def test_errors_are_not_cached(self, transport):
        """Un fallo no debe quedar guardado en el cache."""
        transport._post.side_effect = [
            StorefrontTransportError(cause="boom", query=QUERY),
            ShopifyResponse(200, {"data": {"ok": True}}),
        ]

        with pytest.raises(StorefrontTransportError):
            await transport.send(QUERY)
        response = await transport.send(QUERY)

        assert response.body["data"]["ok"] is True


class TestStorefrontTransportErrors:
    """Tests para la clasificación de errores del POST HTTP."""

    @pytest.fixture
    def make_transport(self, settings, cache_store):
        def _make(**session_kwargs):
            return StorefrontTransport(settings=settings, cache_store=cache_store, session=mock_session(**session_kwargs))

        return _make

    @pytest.mark.asyncio
    async def test_success_returns_status_and_body(self, make_transport):
        transport = make_transport(body={"data": {"shop": {"name": "Store"}}})

        response = await transport.send(QUERY)

        assert response.status == 200
        assert response.body == {"data": {"shop": {"name": "Store"}}}

    @pytest.mark.asyncio
    async def test_posts_query_and_variables_with_token(self, make_transport, settings):
        transport = make_transport(body={"data": {}})

        await transport.send(QUERY, variables={"handle": "shirt"})

        args, kwargs = transport.session.post.call_args
        assert args[0] == settings.shopify_graphql_url
        assert kwargs["json"] == {"query": QUERY, "variables": {"handle": "shirt"}}
        assert kwargs["headers"]["X-Shopify-Storefront-Access-Token"] == "test-storefront-token"

    @pytest.mark.asyncio
    async def test_errors_payload_raises_application_error(self, make_transport):
        """Debe lanzar StorefrontApplicationError con el primer mensaje de error."""
        transport = make_transport(
            body={"errors": [{"message": "Field 'foo' doesn't exist"}, {"message": "second"}]}
        )

        with pytest.raises(StorefrontApplicationError) as exc_info:
            await transport.send(QUERY)

        assert exc_info.value.kind == ErrorKind.APPLICATION
        assert exc_info.value.message == "Field 'foo' doesn't exist"
        assert exc_info.value.query == QUERY

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error_with_default_status(self, make_transport):
        """Sin respuesta HTTP el status debe ser 500."""
        transport = make_transport(post_error=aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(StorefrontTransportError) as exc_info:
            await transport.send(QUERY)

        assert exc_info.value.kind == ErrorKind.TRANSPORT
        assert exc_info.value.status == 500
        assert "connection refused" in exc_info.value.cause
        assert exc_info.value.query == QUERY

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self, make_transport):
        transport = make_transport(post_error=asyncio.TimeoutError())

        with pytest.raises(StorefrontTransportError) as exc_info:
            await transport.send(QUERY)

        assert "timed out" in exc_info.value.cause
        assert exc_info.value.status == 500

    @pytest.mark.asyncio
    async def test_malformed_json_keeps_http_status(self, make_transport):
        """Un body no parseable es un error de transporte con el status recibido."""
        transport = make_transport(status=502, json_error=json.JSONDecodeError("Expecting value", "<html>", 0))

        with pytest.raises(StorefrontTransportError) as exc_info:
            await transport.send(QUERY)

        assert exc_info.value.status == 502

    @pytest.mark.asyncio
    async def test_non_object_body_raises_transport_error(self, make_transport):
        transport = make_transport(body=["unexpected"])

        with pytest.raises(StorefrontTransportError):
            await transport.send(QUERY)

    @pytest.mark.asyncio
    async def test_http_error_without_errors_payload(self, make_transport):
        transport = make_transport(status=401, body={"message": "Unauthorized"})

        with pytest.raises(StorefrontTransportError) as exc_info:
            await transport.send(QUERY)

        assert exc_info.value.status == 401
        assert exc_info.value.status_code == 401


class TestStorefrontTransportSession:
    @pytest.mark.asyncio
    async def test_external_session_is_not_closed(self, settings):
        """No debe cerrar una sesión que no creó."""
        session = mock_session(body={"data": {}})
        transport = StorefrontTransport(settings=settings, session=session)

        await transport.close()

        session.close.assert_not_awaited()

    def test_timeout_from_settings(self, settings):
        transport = StorefrontTransport(settings=settings)

        assert transport.timeout.total == 10.0
        assert transport.timeout.connect == 5.0
