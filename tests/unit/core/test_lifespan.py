"""Tests unitarios para la inicialización de servicios."""

from fastapi import FastAPI

from storefront.core.cache_manager import CacheTagStore
from storefront.core.lifespan import startup_initialize_services
from storefront.db.shopify_clients import StorefrontClient


class TestStartupInitializeServices:
    def test_preset_client_store_is_shared(self, client):
        """El store del webhook debe ser el del cliente ya inyectado."""
        app = FastAPI()
        app.state.storefront_client = client

        startup_initialize_services(app)

        assert app.state.storefront_client is client
        assert app.state.cache_store is client.cache_store

    def test_preset_store_is_used_by_new_client(self):
        app = FastAPI()
        store = CacheTagStore()
        app.state.cache_store = store

        startup_initialize_services(app)

        assert isinstance(app.state.storefront_client, StorefrontClient)
        assert app.state.storefront_client.cache_store is store

    def test_nothing_preset_creates_bounded_store(self, settings):
        app = FastAPI()

        startup_initialize_services(app)

        assert app.state.storefront_client.cache_store is app.state.cache_store
        assert app.state.cache_store.max_entries == settings.CACHE_MAX_ENTRIES
