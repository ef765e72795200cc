"""
Storefront domain entities.

All models are frozen pydantic models with snake_case attributes and the
Storefront API's camelCase names as aliases.
"""

from .cart import Cart, CartCost, CartLine, CartLineCost, CartMerchandise, CartProduct
from .collection import Collection
from .menu import MenuItem
from .product import Image, PriceRange, Product, ProductOption, ProductVariant, SelectedOption, Seo
from .sorting import DEFAULT_SORT, SORTING, SortFilterItem, resolve_sort

__all__ = [
    "Cart",
    "CartCost",
    "CartLine",
    "CartLineCost",
    "CartMerchandise",
    "CartProduct",
    "Collection",
    "MenuItem",
    "Image",
    "PriceRange",
    "Product",
    "ProductOption",
    "ProductVariant",
    "SelectedOption",
    "Seo",
    "DEFAULT_SORT",
    "SORTING",
    "SortFilterItem",
    "resolve_sort",
]
