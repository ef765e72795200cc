"""
Unified Storefront client that combines all specialized clients.

This module provides a single interface over one shared transport, so every
operation uses the same HTTP session and cache-tag store.
"""

import logging
from typing import Any, Dict, List, Optional

from storefront.core.cache_manager import CacheTagStore
from storefront.core.config import Settings
from storefront.domain.models import Cart, Collection, MenuItem, Product, resolve_sort

from .base_client import StorefrontTransport
from .cart_client import ShopifyCartClient
from .collection_client import ShopifyCollectionClient
from .menu_client import ShopifyMenuClient
from .product_client import ShopifyProductClient

logger = logging.getLogger(__name__)


class StorefrontClient:
    """
    Unified Storefront client.

    Usage:
        async with StorefrontClient() as client:
            products = await client.get_products(query="shirt")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache_store: Optional[CacheTagStore] = None,
        transport: Optional[StorefrontTransport] = None,
    ):
        self.transport = transport or StorefrontTransport(settings=settings, cache_store=cache_store)

        self.menus = ShopifyMenuClient(self.transport)
        self.products = ShopifyProductClient(self.transport)
        self.collections = ShopifyCollectionClient(self.transport)
        self.carts = ShopifyCartClient(self.transport)

    @property
    def cache_store(self) -> CacheTagStore:
        return self.transport.cache_store

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    async def close(self):
        await self.transport.close()

    # =============================================================================
    # MENU OPERATIONS
    # =============================================================================

    async def get_menu(self, handle: str) -> List[MenuItem]:
        return await self.menus.get_menu(handle)

    # =============================================================================
    # PRODUCT OPERATIONS
    # =============================================================================

    async def get_products(
        self, query: Optional[str] = None, reverse: bool = False, sort_key: Optional[str] = None
    ) -> List[Product]:
        return await self.products.get_products(query=query, reverse=reverse, sort_key=sort_key)

    async def get_product(self, handle: str) -> Optional[Product]:
        return await self.products.get_product(handle)

    async def get_product_recommendations(self, product_id: str) -> List[Product]:
        return await self.products.get_product_recommendations(product_id)

    async def search(self, query: Optional[str] = None, sort: Optional[str] = None) -> List[Product]:
        """Search products using a sort slug from the UI (e.g., "price-asc")."""
        sort_option = resolve_sort(sort)
        return await self.get_products(query=query, reverse=sort_option.reverse, sort_key=sort_option.sort_key)

    # =============================================================================
    # COLLECTION OPERATIONS
    # =============================================================================

    async def get_collection(self, handle: str) -> Optional[Collection]:
        return await self.collections.get_collection(handle)

    async def get_collections(self) -> List[Collection]:
        return await self.collections.get_collections()

    async def get_collection_products(
        self, collection: str, reverse: bool = False, sort_key: Optional[str] = None
    ) -> List[Product]:
        return await self.collections.get_collection_products(collection, reverse=reverse, sort_key=sort_key)

    # =============================================================================
    # CART OPERATIONS
    # =============================================================================

    async def create_cart(self) -> Cart:
        return await self.carts.create_cart()

    async def get_cart(self, cart_id: Optional[str]) -> Optional[Cart]:
        return await self.carts.get_cart(cart_id)

    async def add_to_cart(self, cart_id: str, lines: List[Dict[str, Any]]) -> Cart:
        return await self.carts.add_to_cart(cart_id, lines)

    async def remove_from_cart(self, cart_id: str, line_ids: List[str]) -> Cart:
        return await self.carts.remove_from_cart(cart_id, line_ids)

    async def update_cart(self, cart_id: str, lines: List[Dict[str, Any]]) -> Cart:
        return await self.carts.update_cart(cart_id, lines)

    def __repr__(self):
        return f"StorefrontClient(transport={self.transport!r})"
