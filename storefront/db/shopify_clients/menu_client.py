"""
Storefront client for navigation menus.
"""

import logging
from typing import List

from storefront.core.cache_manager import CacheTag
from storefront.db.queries import MENU_QUERY
from storefront.domain.models import MenuItem
from storefront.services.reshapers import reshape_menu_items

from .base_client import StorefrontTransport

logger = logging.getLogger(__name__)


class ShopifyMenuClient:
    def __init__(self, transport: StorefrontTransport):
        self.transport = transport

    async def get_menu(self, handle: str) -> List[MenuItem]:
        """
        Fetch a navigation menu with its URLs rewritten to local paths.

        Args:
            handle: Menu handle (e.g., "main-menu")

        Returns:
            List of menu items, empty if the menu does not exist
        """
        res = await self.transport.send(MENU_QUERY, variables={"handle": handle}, tags=[CacheTag.COLLECTIONS])

        menu = (res.body.get("data") or {}).get("menu")
        if not menu:
            logger.info(f"No menu found with handle: {handle}")
            return []

        items = reshape_menu_items(menu.get("items"), self.transport.settings.SHOPIFY_STORE_DOMAIN)
        return [MenuItem.model_validate(item) for item in items]
