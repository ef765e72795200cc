"""
GraphQL documents for the Shopify Storefront API, organized by domain.

Structure:
- fragments: shared fragments (image, seo, product, collection, cart)
- products: product listing, single product and recommendations
- collections: collection listing, single collection and its products
- menu: navigation menu
- cart: cart query and mutations
"""

from .cart import *  # noqa: F403
from .collections import *  # noqa: F403
from .menu import *  # noqa: F403
from .products import *  # noqa: F403

__all__ = [
    # Product queries
    "PRODUCTS_QUERY",  # noqa: F405
    "PRODUCT_QUERY",  # noqa: F405
    "PRODUCT_RECOMMENDATIONS_QUERY",  # noqa: F405
    # Collection queries
    "COLLECTION_QUERY",  # noqa: F405
    "COLLECTIONS_QUERY",  # noqa: F405
    "COLLECTION_PRODUCTS_QUERY",  # noqa: F405
    # Menu queries
    "MENU_QUERY",  # noqa: F405
    # Cart operations
    "CART_QUERY",  # noqa: F405
    "CREATE_CART_MUTATION",  # noqa: F405
    "ADD_TO_CART_MUTATION",  # noqa: F405
    "EDIT_CART_ITEMS_MUTATION",  # noqa: F405
    "REMOVE_FROM_CART_MUTATION",  # noqa: F405
]
