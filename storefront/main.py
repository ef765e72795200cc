"""
Shopify Storefront API - FastAPI Application Entry Point

Servicio que expone el catálogo y el carrito de una tienda Shopify a la capa
de UI, con cache por tags invalidado mediante webhooks de Shopify.
"""

import logging

import uvicorn
from fastapi import FastAPI

from storefront.core.config import get_settings
from storefront.core.exception_handlers import configure_exception_handlers
from storefront.core.lifespan import lifespan
from storefront.core.middleware import configure_all_middleware
from storefront.core.routers import configure_all_routers

logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        description="Catálogo y carrito sobre la Shopify Storefront API",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # 1. Middleware (orden inverso de ejecución)
    configure_all_middleware(app)

    # 2. Manejadores de excepciones
    configure_exception_handlers(app)

    # 3. Routers y endpoints
    configure_all_routers(app)

    return app


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "storefront.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
