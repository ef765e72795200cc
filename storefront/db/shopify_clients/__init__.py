"""
Storefront GraphQL clients organized by responsibility.

This module contains the shared transport and specialized clients for
menus, products, collections and carts.
"""

from .base_client import CachePolicy, ShopifyResponse, StorefrontTransport
from .cart_client import ShopifyCartClient
from .collection_client import ShopifyCollectionClient
from .menu_client import ShopifyMenuClient
from .product_client import ShopifyProductClient
from .unified_client import StorefrontClient

__all__ = [
    "CachePolicy",
    "ShopifyResponse",
    "StorefrontTransport",
    "ShopifyCartClient",
    "ShopifyCollectionClient",
    "ShopifyMenuClient",
    "ShopifyProductClient",
    "StorefrontClient",
]
