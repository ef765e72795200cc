"""
Storefront client for product operations.

This module handles product listings, single product lookups by handle and
product recommendations.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError

from storefront.core.cache_manager import CacheTag
from storefront.db.queries import PRODUCT_QUERY, PRODUCT_RECOMMENDATIONS_QUERY, PRODUCTS_QUERY
from storefront.domain.models import Product
from storefront.services.reshapers import remove_edges_and_nodes, reshape_product, reshape_products

from .base_client import StorefrontTransport

logger = logging.getLogger(__name__)


def to_products(payloads) -> List[Product]:
    """Validate reshaped product payloads, skipping any that do not fit the model."""
    products = []
    for payload in payloads:
        try:
            products.append(Product.model_validate(payload))
        except ValidationError as e:
            logger.warning(f"Skipping malformed product '{payload.get('handle', 'unknown')}': {e}")
    return products


class ShopifyProductClient:
    """
    Specialized client for product operations.

    Listings hide products tagged with the hidden tag; a product fetched
    directly by handle is returned even when hidden.
    """

    def __init__(self, transport: StorefrontTransport):
        self.transport = transport

    async def get_products(
        self, query: Optional[str] = None, reverse: bool = False, sort_key: Optional[str] = None
    ) -> List[Product]:
        """
        Fetch the first 100 products matching a search query.

        Args:
            query: Shopify search syntax (None for all products)
            reverse: Reverse the sort order
            sort_key: ProductSortKeys value

        Returns:
            List of visible products
        """
        res = await self.transport.send(
            PRODUCTS_QUERY,
            variables={"query": query, "reverse": reverse, "sortKey": sort_key},
            tags=[CacheTag.PRODUCTS],
        )

        hidden_tag = self.transport.settings.HIDDEN_PRODUCT_TAG
        return to_products(reshape_products(remove_edges_and_nodes(res.body["data"]["products"]), hidden_tag))

    async def get_product(self, handle: str) -> Optional[Product]:
        """
        Fetch a product by its handle.

        Args:
            handle: Product handle

        Returns:
            Product or None if not found
        """
        res = await self.transport.send(PRODUCT_QUERY, variables={"handle": handle}, tags=[CacheTag.PRODUCTS])

        product = reshape_product(res.body["data"].get("product"), filter_hidden=False)
        if not product:
            logger.info(f"No product found with handle: {handle}")
            return None

        return Product.model_validate(product)

    async def get_product_recommendations(self, product_id: str) -> List[Product]:
        """
        Fetch products recommended for a product.

        productRecommendations is a plain list upstream, so there is no
        edge/node flattening here.
        """
        res = await self.transport.send(
            PRODUCT_RECOMMENDATIONS_QUERY, variables={"productId": product_id}, tags=[CacheTag.PRODUCTS]
        )

        hidden_tag = self.transport.settings.HIDDEN_PRODUCT_TAG
        return to_products(reshape_products(res.body["data"].get("productRecommendations") or [], hidden_tag))
