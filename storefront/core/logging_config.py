"""
Configuración del sistema de logging.

Todos los handlers comparten un filtro que agrega el ``request_id`` de la
request en curso (lo fija el middleware de logging), así las líneas del
transporte y del webhook quedan correlacionadas con su request HTTP.
"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from storefront.core.config import get_settings

# ID de la request HTTP en curso ("-" fuera de una request)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Atributos propios de LogRecord; el resto son campos ``extra``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "request_id"}

_NOISY_LOGGERS = ("aiohttp.access", "aiohttp.client", "httpx", "asyncio")


class RequestIdFilter(logging.Filter):
    """Copia el request_id del contexto al record."""

    def filter(self, record):
        record.request_id = request_id_var.get()
        return True


class ColoredFormatter(logging.Formatter):
    """Colorea el nivel cuando la salida es una terminal."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.use_color = hasattr(sys.stdout, "isatty") and sys.stdout.isatty()

    def format(self, record):
        if not self.use_color:
            return super().format(record)

        color = self.LEVEL_COLORS.get(record.levelno, "")
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


class StructuredFormatter(logging.Formatter):
    """
    Una línea JSON por record, para archivos de log en producción.

    Incluye la tienda y el request_id para poder filtrar por ambos.
    """

    def format(self, record):
        settings = get_settings()

        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
            "service": settings.APP_NAME,
            "environment": settings.ENVIRONMENT,
            "store": settings.SHOPIFY_STORE_DOMAIN,
        }

        extra = {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}
        if extra:
            entry["extra"] = extra

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


def _console_handler(settings) -> Dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "level": settings.LOG_LEVEL,
        "formatter": "colored" if settings.DEBUG else "plain",
        "filters": ["request_id"],
        "stream": "ext://sys.stdout",
    }


def _file_handler(settings) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": settings.LOG_LEVEL,
        "formatter": "json" if settings.is_production else "plain",
        "filters": ["request_id"],
        "filename": settings.LOG_FILE_PATH,
        "maxBytes": settings.LOG_MAX_SIZE_MB * 1024 * 1024,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
    }


def get_logging_configuration() -> Dict[str, Any]:
    """
    Arma el diccionario para ``logging.config.dictConfig``.

    Consola siempre; archivo rotativo solo si LOG_FILE_PATH está definido.
    """
    settings = get_settings()

    handlers = {"console": _console_handler(settings)}
    if settings.LOG_FILE_PATH:
        handlers["file"] = _file_handler(settings)
    handler_names: List[str] = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {"request_id": {"()": RequestIdFilter}},
        "formatters": {
            "plain": {"format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            "colored": {"()": ColoredFormatter, "format": LOG_FORMAT, "datefmt": DATE_FORMAT},
            "json": {"()": StructuredFormatter},
        },
        "handlers": handlers,
        "loggers": {
            # El middleware ya loggea cada request
            "uvicorn.access": {"level": "WARNING", "handlers": handler_names, "propagate": False},
            "uvicorn.error": {"level": "INFO", "handlers": handler_names, "propagate": False},
        },
        "root": {"level": settings.LOG_LEVEL, "handlers": handler_names},
    }


def setup_logging() -> None:
    """Aplica la configuración de logging de la aplicación."""
    settings = get_settings()

    if settings.LOG_FILE_PATH:
        Path(settings.LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(get_logging_configuration())

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configurado - Nivel: {settings.LOG_LEVEL}")
    if settings.LOG_FILE_PATH:
        logger.info(f"Logs en archivo: {settings.LOG_FILE_PATH}")
