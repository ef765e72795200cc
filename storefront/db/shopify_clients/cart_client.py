"""
Storefront client for cart operations.

Mutations never go through the response cache, and each successful
mutation invalidates the cart tag so the next read refetches.
"""

import logging
from typing import Any, Dict, List, Optional

from storefront.core.cache_manager import CacheTag
from storefront.db.queries import (
    ADD_TO_CART_MUTATION,
    CART_QUERY,
    CREATE_CART_MUTATION,
    EDIT_CART_ITEMS_MUTATION,
    REMOVE_FROM_CART_MUTATION,
)
from storefront.domain.models import Cart
from storefront.services.reshapers import reshape_cart
from storefront.utils.error_handler import StorefrontApplicationError

from .base_client import CachePolicy, StorefrontTransport

logger = logging.getLogger(__name__)


class ShopifyCartClient:
    """
    Specialized client for cart operations.

    An absent cart is a normal outcome: Shopify nulls a cart once its
    checkout completes, and callers are expected to create a new one.
    """

    def __init__(self, transport: StorefrontTransport):
        self.transport = transport

    async def _mutate(self, mutation: str, root_field: str, variables: Optional[Dict[str, Any]] = None) -> Cart:
        res = await self.transport.send(mutation, variables=variables, cache=CachePolicy.NO_STORE)

        # Also invalidated when the mutation is rejected
        self.transport.cache_store.invalidate_tag(CacheTag.CART)

        payload = (res.body.get("data") or {}).get(root_field) or {}
        user_errors = payload.get("userErrors") or []
        cart = payload.get("cart")

        # Unknown or checked-out carts come back as null with userErrors
        if not cart:
            message = user_errors[0].get("message") if user_errors else None
            logger.error(f"{root_field} returned no cart: {message or 'no userErrors'}")
            raise StorefrontApplicationError(message or f"{root_field} returned no cart", query=mutation)

        if user_errors:
            logger.warning(f"{root_field} userErrors: {[error.get('message') for error in user_errors]}")

        return Cart.model_validate(reshape_cart(cart))

    async def create_cart(self) -> Cart:
        """Create an empty cart."""
        cart = await self._mutate(CREATE_CART_MUTATION, "cartCreate")
        logger.info(f"Created cart {cart.id}")
        return cart

    async def get_cart(self, cart_id: Optional[str]) -> Optional[Cart]:
        """
        Fetch a cart by ID.

        Args:
            cart_id: Cart ID (usually read from a cookie)

        Returns:
            Cart or None when there is no ID or the cart no longer exists
        """
        if not cart_id:
            return None

        res = await self.transport.send(CART_QUERY, variables={"cartId": cart_id}, tags=[CacheTag.CART])

        # Old carts become null after checkout
        cart = res.body["data"].get("cart")
        if not cart:
            logger.info(f"Cart {cart_id} no longer exists")
            return None

        return Cart.model_validate(reshape_cart(cart))

    async def add_to_cart(self, cart_id: str, lines: List[Dict[str, Any]]) -> Cart:
        """
        Add lines to a cart.

        Args:
            cart_id: Cart ID
            lines: CartLineInput dicts ({"merchandiseId": ..., "quantity": ...})
        """
        return await self._mutate(ADD_TO_CART_MUTATION, "cartLinesAdd", {"cartId": cart_id, "lines": lines})

    async def remove_from_cart(self, cart_id: str, line_ids: List[str]) -> Cart:
        return await self._mutate(
            REMOVE_FROM_CART_MUTATION, "cartLinesRemove", {"cartId": cart_id, "lineIds": line_ids}
        )

    async def update_cart(self, cart_id: str, lines: List[Dict[str, Any]]) -> Cart:
        """
        Update quantities of existing cart lines.

        Args:
            cart_id: Cart ID
            lines: CartLineUpdateInput dicts ({"id": ..., "merchandiseId": ..., "quantity": ...})
        """
        return await self._mutate(EDIT_CART_ITEMS_MUTATION, "cartLinesUpdate", {"cartId": cart_id, "lines": lines})
