"""
Sistema de manejo de errores personalizado.

Este módulo define las excepciones de la aplicación. Los fallos de la
Storefront API se modelan como una variante etiquetada con dos casos
(transporte y aplicación), ambos con el documento GraphQL original.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """
    Códigos de error estandardizados para la aplicación.
    """

    UNKNOWN_ERROR = "UNKNOWN_ERROR"

    # Errores de la Storefront API
    SHOPIFY_TRANSPORT_ERROR = "SHOPIFY_TRANSPORT_ERROR"
    SHOPIFY_APPLICATION_ERROR = "SHOPIFY_APPLICATION_ERROR"

    # Errores de recursos
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"


class ErrorKind(str, Enum):
    """Variante de un error de la Storefront API."""

    TRANSPORT = "transport"
    APPLICATION = "application"


class AppException(Exception):
    """
    Excepción base para todas las excepciones personalizadas de la aplicación.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error
            error_code: Código de error estandardizado
            details: Información adicional del error
            status_code: Código HTTP asociado
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convierte la excepción a diccionario.

        Returns:
            Dict: Representación de la excepción
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code.value,
            "details": self.details,
            "status_code": self.status_code,
            "timestamp": self.timestamp.isoformat(),
        }

    def __str__(self) -> str:
        """String representation del error."""
        return f"{self.error_code.value}: {self.message}"


class NotFoundException(AppException):
    """
    Excepción para recursos inexistentes expuestos por la API HTTP.
    """

    def __init__(self, resource: str, identifier: str, **kwargs):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            error_code=ErrorCode.RESOURCE_NOT_FOUND,
            status_code=404,
            **kwargs,
        )
        self.details.update({"resource": resource, "identifier": identifier})


class StorefrontAPIException(AppException):
    """
    Excepción base para fallos de la Storefront API.

    ``kind`` indica la variante y ``query`` conserva el documento GraphQL
    que originó el fallo, para diagnóstico.
    """

    kind: ErrorKind

    def __init__(self, message: str, query: Optional[str] = None, **kwargs):
        super().__init__(message=message, **kwargs)
        self.query = query

        self.details.update({"kind": self.kind.value})

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["query"] = self.query
        return data


class StorefrontTransportError(StorefrontAPIException):
    """
    Fallo de conectividad, timeout o respuesta no parseable.

    Attributes:
        cause: Descripción de la causa original
        status: Código HTTP de la respuesta, 500 si no hubo respuesta
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, cause: str, status: Optional[int] = None, query: Optional[str] = None, **kwargs):
        self.cause = cause or "unknown"
        self.status = status or 500

        super().__init__(
            message=f"Storefront request failed: {self.cause}",
            query=query,
            error_code=ErrorCode.SHOPIFY_TRANSPORT_ERROR,
            status_code=self.status,
            **kwargs,
        )

        self.details.update({"cause": self.cause, "status": self.status})


class StorefrontApplicationError(StorefrontAPIException):
    """
    La Storefront API devolvió un payload ``errors`` bien formado.

    Solo se conserva el primer error reportado.
    """

    kind = ErrorKind.APPLICATION

    def __init__(self, message: str, query: Optional[str] = None, **kwargs):
        super().__init__(
            message=message,
            query=query,
            error_code=ErrorCode.SHOPIFY_APPLICATION_ERROR,
            status_code=502,
            **kwargs,
        )


def create_error_response(exception: Exception) -> Dict[str, Any]:
    """
    Crea respuesta de error estandardizada.

    Args:
        exception: Excepción a convertir

    Returns:
        Dict: Respuesta de error
    """
    if isinstance(exception, AppException):
        error_dict = exception.to_dict()
    else:
        error_dict = AppException(
            message=f"{type(exception).__name__}: {exception}",
            details={"original_exception": type(exception).__name__},
        ).to_dict()

    # El documento GraphQL es solo para logs
    error_dict.pop("query", None)

    return {"error": True, **error_dict}


def log_error(
    exception: Exception,
    context: Optional[Dict[str, Any]] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Loggea un error de manera consistente.

    Args:
        exception: Excepción a loggear
        context: Contexto adicional
        level: Nivel de logging
    """
    log_data = {
        "exception_type": type(exception).__name__,
        **(context or {}),
    }

    if isinstance(exception, AppException):
        message = f"{exception.error_code.value}: {exception.message}"
        log_data["error_code"] = exception.error_code.value
        if isinstance(exception, StorefrontAPIException):
            log_data["error_kind"] = exception.kind.value
    else:
        message = f"Unhandled exception: {type(exception).__name__}: {str(exception)}"

    logger.log(level, message, extra=log_data)
