"""
Dependencias compartidas por los endpoints de la API v1.

El cliente y el store de cache viven en ``app.state``; los crea el
lifespan de la aplicación.
"""

from fastapi import Depends, Request

from storefront.core.cache_manager import CacheTagStore
from storefront.core.config import Settings, get_settings
from storefront.db.shopify_clients import StorefrontClient
from storefront.services.webhook_handler import RevalidationHandler


def get_storefront_client(request: Request) -> StorefrontClient:
    return request.app.state.storefront_client


def get_cache_store(request: Request) -> CacheTagStore:
    return request.app.state.cache_store


def get_revalidation_handler(
    settings: Settings = Depends(get_settings),
    cache_store: CacheTagStore = Depends(get_cache_store),
) -> RevalidationHandler:
    return RevalidationHandler(secret=settings.SHOPIFY_REVALIDATION_SECRET, cache_store=cache_store)
