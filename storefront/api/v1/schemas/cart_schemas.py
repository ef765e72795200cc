"""
Modelos Pydantic para las requests de carrito.

Los campos se aceptan en snake_case o en el camelCase de la Storefront API.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CartRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class CartLineInput(CartRequestModel):
    """Línea nueva: variante y cantidad."""

    merchandise_id: str
    quantity: int = Field(default=1, ge=1)


class CartLineUpdateInput(CartRequestModel):
    """Actualización de una línea existente; cantidad 0 la elimina."""

    id: str
    merchandise_id: Optional[str] = None
    quantity: int = Field(ge=0)


class AddToCartRequest(CartRequestModel):
    cart_id: str
    lines: List[CartLineInput] = Field(min_length=1)


class UpdateCartRequest(CartRequestModel):
    cart_id: str
    lines: List[CartLineUpdateInput] = Field(min_length=1)


class RemoveFromCartRequest(CartRequestModel):
    cart_id: str
    line_ids: List[str] = Field(min_length=1)


def to_line_inputs(lines: List[CartRequestModel]) -> List[dict]:
    """Serializa las líneas con los nombres de la Storefront API."""
    return [line.model_dump(by_alias=True, exclude_none=True) for line in lines]
