"""
Storefront client for collection operations.

This module handles collection listings, single collections and the
products of a collection.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from storefront.core.cache_manager import CacheTag
from storefront.db.queries import COLLECTION_PRODUCTS_QUERY, COLLECTION_QUERY, COLLECTIONS_QUERY
from storefront.domain.models import Collection, Product, Seo
from storefront.services.reshapers import (
    remove_edges_and_nodes,
    reshape_collection,
    reshape_collections,
    reshape_products,
)

from .base_client import StorefrontTransport
from .product_client import to_products

logger = logging.getLogger(__name__)


def all_products_collection() -> Collection:
    """Synthetic collection that lists every product."""
    return Collection(
        handle="",
        title="All",
        description="All products",
        seo=Seo(title="All", description="All products"),
        path="/search",
        updated_at=datetime.now(timezone.utc).isoformat(),
    )


class ShopifyCollectionClient:
    """
    Specialized client for collection operations.
    """

    def __init__(self, transport: StorefrontTransport):
        self.transport = transport

    async def get_collection(self, handle: str) -> Optional[Collection]:
        """
        Fetch a collection by its handle.

        Args:
            handle: Collection handle to fetch

        Returns:
            Collection or None if not found
        """
        res = await self.transport.send(COLLECTION_QUERY, variables={"handle": handle}, tags=[CacheTag.COLLECTIONS])

        collection = reshape_collection(res.body["data"].get("collection"))
        if not collection:
            logger.info(f"No collection found with handle: {handle}")
            return None

        return Collection.model_validate(collection)

    async def get_collections(self) -> List[Collection]:
        """
        Fetch the collection listing.

        The synthetic "All" collection always comes first, and collections
        whose handle starts with the hidden prefix are left out.
        """
        res = await self.transport.send(COLLECTIONS_QUERY, tags=[CacheTag.COLLECTIONS])

        hidden_prefix = self.transport.settings.HIDDEN_COLLECTION_PREFIX
        shopify_collections = remove_edges_and_nodes(res.body["data"].get("collections"))

        return [all_products_collection()] + [
            Collection.model_validate(collection)
            for collection in reshape_collections(shopify_collections)
            if not collection["handle"].startswith(hidden_prefix)
        ]

    async def get_collection_products(
        self, collection: str, reverse: bool = False, sort_key: Optional[str] = None
    ) -> List[Product]:
        """
        Fetch the first 100 products of a collection.

        Args:
            collection: Collection handle
            reverse: Reverse the sort order
            sort_key: Public sort key; CREATED_AT is sent as CREATED

        Returns:
            List of visible products, empty if the collection does not exist
        """
        res = await self.transport.send(
            COLLECTION_PRODUCTS_QUERY,
            variables={
                "handle": collection,
                "reverse": reverse,
                # ProductCollectionSortKeys names it CREATED
                "sortKey": "CREATED" if sort_key == "CREATED_AT" else sort_key,
            },
            tags=[CacheTag.COLLECTIONS, CacheTag.PRODUCTS],
        )

        shopify_collection = res.body["data"].get("collection")
        if not shopify_collection:
            logger.info(f"No collection found for `{collection}`")
            return []

        hidden_tag = self.transport.settings.HIDDEN_PRODUCT_TAG
        return to_products(reshape_products(remove_edges_and_nodes(shopify_collection.get("products")), hidden_tag))
