"""
Endpoints de carrito.

Un carrito ausente es un resultado normal (p. ej. tras completar el
checkout): se responde ``{"cart": null}`` y el cliente debe crear otro.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from storefront.api.v1.dependencies import get_storefront_client
from storefront.api.v1.schemas.cart_schemas import (
    AddToCartRequest,
    RemoveFromCartRequest,
    UpdateCartRequest,
    to_line_inputs,
)
from storefront.db.shopify_clients import StorefrontClient

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def get_cart(
    cart_id: Optional[str] = Query(default=None),
    client: StorefrontClient = Depends(get_storefront_client),
):
    cart = await client.get_cart(cart_id)
    return {"cart": cart.to_api() if cart else None}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_cart(client: StorefrontClient = Depends(get_storefront_client)):
    cart = await client.create_cart()
    return {"cart": cart.to_api()}


@router.post("/lines")
async def add_to_cart(request: AddToCartRequest, client: StorefrontClient = Depends(get_storefront_client)):
    """Agrega líneas (variante + cantidad) al carrito."""
    cart = await client.add_to_cart(request.cart_id, to_line_inputs(request.lines))
    return {"cart": cart.to_api()}


@router.put("/lines")
async def update_cart(request: UpdateCartRequest, client: StorefrontClient = Depends(get_storefront_client)):
    """Actualiza cantidades de líneas existentes."""
    cart = await client.update_cart(request.cart_id, to_line_inputs(request.lines))
    return {"cart": cart.to_api()}


@router.post("/lines/remove")
async def remove_from_cart(
    request: RemoveFromCartRequest, client: StorefrontClient = Depends(get_storefront_client)
):
    cart = await client.remove_from_cart(request.cart_id, request.line_ids)
    return {"cart": cart.to_api()}
