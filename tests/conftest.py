"""
Fixtures compartidas para los tests.

Las variables de entorno obligatorias se definen antes de importar
cualquier módulo de la aplicación.
"""

import os

os.environ.setdefault("SHOPIFY_STORE_DOMAIN", "test-store.myshopify.com")
os.environ.setdefault("SHOPIFY_STOREFRONT_ACCESS_TOKEN", "test-storefront-token")
os.environ.setdefault("SHOPIFY_REVALIDATION_SECRET", "test-revalidation-secret")
os.environ.setdefault("ENVIRONMENT", "testing")

from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402

from storefront.core.cache_manager import CacheTagStore  # noqa: E402
from storefront.core.config import get_settings, reload_settings  # noqa: E402
from storefront.db.shopify_clients import StorefrontClient, StorefrontTransport  # noqa: E402


@pytest.fixture
def settings():
    return reload_settings()


@pytest.fixture
def cache_store():
    return CacheTagStore()


@pytest.fixture
def transport(settings, cache_store):
    """Transporte real con el POST HTTP reemplazado por un AsyncMock."""
    transport = StorefrontTransport(settings=settings, cache_store=cache_store)
    transport._post = AsyncMock()
    return transport


@pytest.fixture
def client(transport):
    return StorefrontClient(transport=transport)


@pytest.fixture
def app(client, cache_store):
    """Aplicación FastAPI con el cliente y el store de cache inyectados."""
    from storefront.main import create_application

    application = create_application()
    application.state.cache_store = cache_store
    application.state.storefront_client = client
    return application


@pytest.fixture
def test_client(app):
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    yield
    get_settings.cache_clear()
