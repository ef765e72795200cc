"""
Endpoints de catálogo: menús, productos y colecciones.

Cada endpoint delega en una operación del StorefrontClient y devuelve las
entidades con los nombres de campo de la Storefront API.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.api.v1.dependencies import get_storefront_client
from storefront.db.shopify_clients import StorefrontClient
from storefront.domain.models import SORTING, resolve_sort
from storefront.utils.error_handler import NotFoundException

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/menu/{handle}")
async def get_menu(handle: str, client: StorefrontClient = Depends(get_storefront_client)):
    """Menú de navegación con rutas locales."""
    items = await client.get_menu(handle)
    return {"items": [item.to_api() for item in items]}


@router.get("/sorting")
async def get_sorting():
    """Opciones de ordenamiento disponibles para los listados."""
    return {"sorting": [item.to_api() for item in SORTING]}


@router.get("/products")
async def search_products(
    q: Optional[str] = Query(default=None, description="Texto de búsqueda"),
    sort: Optional[str] = Query(default=None, description="Slug de ordenamiento (ej: price-asc)"),
    client: StorefrontClient = Depends(get_storefront_client),
):
    """
    Busca productos visibles.

    Args:
        q: Texto de búsqueda
        sort: Slug de ordenamiento

    Returns:
        Dict con productos y el conteo
    """
    products = await client.search(query=q, sort=sort)
    return {"products": [product.to_api() for product in products], "count": len(products)}


@router.get("/products/{handle}")
async def get_product(handle: str, client: StorefrontClient = Depends(get_storefront_client)):
    """Producto por handle, incluso si está oculto en los listados."""
    product = await client.get_product(handle)
    if product is None:
        raise NotFoundException("Product", handle)
    return {"product": product.to_api()}


@router.get("/recommendations")
async def get_product_recommendations(
    product_id: str = Query(..., description="ID del producto (gid://shopify/Product/...)"),
    client: StorefrontClient = Depends(get_storefront_client),
):
    products = await client.get_product_recommendations(product_id)
    return {"products": [product.to_api() for product in products]}


@router.get("/collections")
async def get_collections(client: StorefrontClient = Depends(get_storefront_client)):
    """Colecciones visibles, con la colección "All" primero."""
    collections = await client.get_collections()
    return {"collections": [collection.to_api() for collection in collections]}


@router.get("/collections/{handle}")
async def get_collection(handle: str, client: StorefrontClient = Depends(get_storefront_client)):
    collection = await client.get_collection(handle)
    if collection is None:
        raise NotFoundException("Collection", handle)
    return {"collection": collection.to_api()}


@router.get("/collections/{handle}/products")
async def get_collection_products(
    handle: str,
    sort: Optional[str] = Query(default=None, description="Slug de ordenamiento (ej: latest-desc)"),
    client: StorefrontClient = Depends(get_storefront_client),
):
    """
    Productos de una colección.

    Una colección inexistente devuelve una lista vacía, no un error.
    """
    sort_option = resolve_sort(sort)
    products = await client.get_collection_products(
        handle, reverse=sort_option.reverse, sort_key=sort_option.sort_key
    )
    return {"products": [product.to_api() for product in products], "count": len(products)}
