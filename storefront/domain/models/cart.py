"""
Cart entities.

A cart's cost block is always complete: the reshaper defaults a missing
tax amount before these models are built.
"""

from typing import List, Optional

from pydantic import Field

from storefront.domain.value_objects import Money

from .base import StorefrontModel
from .product import Image, SelectedOption


class CartProduct(StorefrontModel):
    id: str
    handle: str
    title: str
    featured_image: Optional[Image] = None


class CartMerchandise(StorefrontModel):
    """Variante de producto referenciada por una línea del carrito."""

    id: str
    title: str
    selected_options: List[SelectedOption] = Field(default_factory=list)
    product: CartProduct


class CartLineCost(StorefrontModel):
    total_amount: Money


class CartLine(StorefrontModel):
    id: str
    quantity: int
    cost: CartLineCost
    merchandise: CartMerchandise


class CartCost(StorefrontModel):
    subtotal_amount: Money
    total_amount: Money
    total_tax_amount: Money


class Cart(StorefrontModel):
    id: str
    checkout_url: Optional[str] = None
    cost: CartCost
    lines: List[CartLine] = Field(default_factory=list)
    total_quantity: int = 0
