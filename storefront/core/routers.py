"""
Configuración centralizada de routers para la aplicación FastAPI.

Este módulo registra los routers de la API y los endpoints base.
"""

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI

from storefront.api.v1.dependencies import get_cache_store
from storefront.api.v1.endpoints.cart import router as cart_router
from storefront.api.v1.endpoints.catalog import router as catalog_router
from storefront.api.v1.endpoints.webhooks import router as webhooks_router
from storefront.core.cache_manager import CacheTagStore
from storefront.core.config import get_environment_info, get_settings

logger = logging.getLogger(__name__)


def create_root_endpoints(app: FastAPI) -> None:
    """
    Crea endpoints raíz de la aplicación.

    Args:
        app: Instancia de FastAPI
    """

    @app.get("/", tags=["Root"], summary="API Info")
    async def root():
        """
        Endpoint raíz que proporciona información básica de la API.

        Returns:
            Dict con información de la API
        """
        settings = get_settings()
        return {
            "message": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "status": "running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "endpoints": {
                "health": "/health",
                "api_v1": "/api/v1",
                "revalidate": "/api/revalidate",
            },
        }

    @app.get("/ping", tags=["Root"], summary="Simple Ping")
    async def ping():
        return {"message": "pong", "timestamp": datetime.now(timezone.utc).isoformat()}

    @app.get("/health", tags=["Health"], summary="Health Check")
    async def health_check(cache_store: CacheTagStore = Depends(get_cache_store)):
        """
        Estado del servicio y estadísticas del cache.

        No consulta la Storefront API para que el check sea rápido.
        """
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "environment": get_environment_info(),
            "cache": cache_store.get_stats(),
        }


def configure_api_v1_routers(app: FastAPI) -> None:
    """
    Configura routers de la API v1.

    Args:
        app: Instancia de FastAPI
    """
    app.include_router(catalog_router, prefix="/api/v1", tags=["Catalog"])
    app.include_router(cart_router, prefix="/api/v1/cart", tags=["Cart"])

    # Ruta del webhook configurada en Shopify
    app.include_router(webhooks_router, prefix="/api", tags=["Webhooks"])


def configure_all_routers(app: FastAPI) -> None:
    """
    Configura todos los routers de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    create_root_endpoints(app)
    configure_api_v1_routers(app)

    logger.info("Routers configurados correctamente")
