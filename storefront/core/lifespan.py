"""
Gestión del ciclo de vida de la aplicación FastAPI.

Este módulo maneja los eventos de startup y shutdown: logging, creación del
store de cache compartido y del cliente de la Storefront API, y su cierre.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from storefront.core.cache_manager import create_cache_store
from storefront.core.config import get_settings
from storefront.core.logging_config import setup_logging
from storefront.db.shopify_clients import StorefrontClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestión del ciclo de vida de la aplicación.

    Un cliente o store ya presentes en ``app.state`` (p. ej. en tests) se
    respetan y no se reemplazan.

    Args:
        app: Instancia de FastAPI
    """
    # === STARTUP ===
    setup_logging()
    settings = get_settings()
    logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")

    startup_initialize_services(app)
    logger.info("Aplicación iniciada correctamente")

    # === YIELD (aplicación corriendo) ===
    yield

    # === SHUTDOWN ===
    logger.info(f"Cerrando {settings.APP_NAME}...")
    try:
        await shutdown_close_connections(app)
        logger.info("Aplicación cerrada correctamente")
    except Exception as e:
        logger.error(f"Error durante el shutdown: {e}")


def startup_initialize_services(app: FastAPI) -> None:
    """
    Crea el store de cache y el cliente de la Storefront API.

    El webhook y el cliente deben compartir el mismo store: si ya hay un
    cliente, ``app.state.cache_store`` pasa a ser el de su transporte.
    """
    client = getattr(app.state, "storefront_client", None)

    if client is not None:
        app.state.cache_store = client.cache_store
    else:
        cache_store = getattr(app.state, "cache_store", None)
        if cache_store is None:
            cache_store = create_cache_store(get_settings())
            app.state.cache_store = cache_store
        app.state.storefront_client = StorefrontClient(cache_store=cache_store)

    logger.info("Cliente de Storefront API inicializado")


async def shutdown_close_connections(app: FastAPI) -> None:
    """Cierra la sesión HTTP del cliente."""
    client = getattr(app.state, "storefront_client", None)
    if client is not None:
        await client.close()
