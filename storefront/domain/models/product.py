"""
Product entities.
"""

from typing import List, Optional

from pydantic import Field, field_validator

from storefront.domain.value_objects import Money

from .base import StorefrontModel


class Image(StorefrontModel):
    """Product image. ``alt_text`` is always filled in by the reshapers."""

    url: str
    alt_text: str
    width: Optional[int] = None
    height: Optional[int] = None

    @field_validator("alt_text")
    @classmethod
    def validate_alt_text(cls, v):
        if not v:
            raise ValueError("Image alt text cannot be empty")
        return v


class Seo(StorefrontModel):
    title: Optional[str] = None
    description: Optional[str] = None


class SelectedOption(StorefrontModel):
    """Opción seleccionada en una variante (ej: Color=Rojo)."""

    name: str
    value: str


class ProductOption(StorefrontModel):
    """Opción de producto con todos sus valores posibles."""

    id: Optional[str] = None
    name: str
    values: List[str] = Field(default_factory=list)


class ProductVariant(StorefrontModel):
    id: str
    title: str
    available_for_sale: bool = False
    selected_options: List[SelectedOption] = Field(default_factory=list)
    price: Money


class PriceRange(StorefrontModel):
    max_variant_price: Money
    min_variant_price: Money


class Product(StorefrontModel):
    """
    Producto de la tienda.

    ``images`` and ``variants`` are plain ordered lists; the edge/node
    wrappers of the upstream payload are removed before validation.
    """

    id: str
    handle: str
    available_for_sale: bool = False
    title: str
    description: str = ""
    description_html: str = ""
    options: List[ProductOption] = Field(default_factory=list)
    price_range: Optional[PriceRange] = None
    variants: List[ProductVariant] = Field(default_factory=list)
    featured_image: Optional[Image] = None
    images: List[Image] = Field(default_factory=list)
    seo: Optional[Seo] = None
    tags: List[str] = Field(default_factory=list)
    updated_at: Optional[str] = None

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags
