"""
Manejadores de excepciones centralizados para la aplicación FastAPI.

Este módulo define los manejadores de excepciones personalizados y globales,
proporcionando respuestas consistentes y logging apropiado para cada tipo de error.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.config import get_settings
from storefront.utils.error_handler import AppException, StorefrontAPIException, create_error_response, log_error

logger = logging.getLogger(__name__)


def _request_context(request: Request) -> dict:
    return {
        "path": str(request.url.path),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request.headers.get("X-Request-ID"),
    }


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    Manejador para excepciones personalizadas de la aplicación.

    Args:
        request: Request de FastAPI
        exc: Excepción personalizada de la app

    Returns:
        JSONResponse: Respuesta JSON con error formateado
    """
    logger.warning(f"App Exception: {exc.message} - Code: {exc.error_code.value} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content={**create_error_response(exc), "error_type": "application_error", **_request_context(request)},
    )


async def storefront_api_exception_handler(request: Request, exc: StorefrontAPIException) -> JSONResponse:
    """
    Manejador específico para fallos de la Storefront API.

    Args:
        request: Request de FastAPI
        exc: Error de transporte o de aplicación

    Returns:
        JSONResponse: Respuesta JSON con la variante del error
    """
    log_error(exc, context={"url": str(request.url)})
    logger.debug(f"Failed Storefront document: {exc.query}")

    content = {**create_error_response(exc), "error_type": f"storefront_{exc.kind.value}_error"}
    if not get_settings().DEBUG:
        content.pop("details", None)

    return JSONResponse(status_code=exc.status_code, content={**content, **_request_context(request)})


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Manejador para errores de validación de requests.

    Args:
        request: Request de FastAPI
        exc: Errores de validación de pydantic

    Returns:
        JSONResponse: Respuesta 422 con los errores
    """
    logger.warning(f"Request validation failed: {request.url} - {exc.errors()}")

    return JSONResponse(
        status_code=422,
        content={
            "error": True,
            "error_type": "validation_error",
            "message": "Request validation failed",
            "errors": [
                {"loc": list(error.get("loc", [])), "msg": error.get("msg"), "type": error.get("type")}
                for error in exc.errors()
            ],
            **_request_context(request),
        },
    )


async def starlette_http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Manejador para HTTPException de Starlette/FastAPI.

    Args:
        request: Request de FastAPI
        exc: StarletteHTTPException

    Returns:
        JSONResponse: Respuesta JSON estandarizada
    """
    logger.warning(f"HTTP Exception: {exc.status_code} - {exc.detail} - URL: {request.url}")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": True,
            "error_type": "http_error",
            "status_code": exc.status_code,
            "message": exc.detail,
            **_request_context(request),
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Manejador global para excepciones no capturadas.

    Args:
        request: Request de FastAPI
        exc: Excepción no manejada

    Returns:
        JSONResponse: Respuesta JSON de error interno
    """
    logger.exception(f"Unhandled Exception: {str(exc)} - Type: {type(exc).__name__} - URL: {request.url}")

    # Respuesta genérica (sin exponer detalles internos)
    error_message = "Internal server error occurred"
    if get_settings().DEBUG:
        error_message = f"{type(exc).__name__}: {str(exc)}"

    return JSONResponse(
        status_code=500,
        content={
            "error": True,
            "error_type": "internal_server_error",
            "message": error_message,
            **_request_context(request),
        },
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configura todos los manejadores de excepciones de la aplicación.

    Args:
        app: Instancia de FastAPI
    """
    # Manejadores específicos (orden de especificidad)
    app.add_exception_handler(StorefrontAPIException, storefront_api_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)

    # Manejadores HTTP estándar
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, starlette_http_exception_handler)

    # Manejador global (debe ser el último)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Manejadores de excepciones configurados correctamente")
