"""
Endpoint de revalidación para webhooks de Shopify.

Siempre responde 200; el campo ``revalidated`` del cuerpo indica si el
webhook fue aceptado.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse

from storefront.api.v1.dependencies import get_revalidation_handler
from storefront.services.webhook_handler import RevalidationHandler

logger = logging.getLogger(__name__)

# Crear router
router = APIRouter()


@router.post("/revalidate", status_code=status.HTTP_200_OK)
async def revalidate(
    secret: Optional[str] = Query(default=None),
    x_shopify_topic: Optional[str] = Header(default=None),
    handler: RevalidationHandler = Depends(get_revalidation_handler),
) -> JSONResponse:
    """
    Recibe webhooks de colecciones y productos e invalida el cache.

    Args:
        secret: Secreto de revalidación
        x_shopify_topic: Topic del webhook (ej: products/update)
        handler: Manejador de revalidación

    Returns:
        JSONResponse: Siempre status 200 para que Shopify no reintente
    """
    try:
        result = handler.revalidate(topic=x_shopify_topic, secret=secret)
    except Exception as e:
        logger.error(f"Error processing revalidation webhook: {e}")
        # Shopify espera 200 incluso en errores para evitar reintentos
        return JSONResponse(status_code=200, content={"status": 200})

    return JSONResponse(status_code=200, content=result.to_response())
