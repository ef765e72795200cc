"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
de la aplicación usando Pydantic Settings para validación automática.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

SHOPIFY_GRAPHQL_API_ENDPOINT = "/api/2025-01/graphql.json"
DEFAULT_HIDDEN_PRODUCT_TAG = "nextjs-frontend-hidden"


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Las credenciales de Shopify son obligatorias; el resto tiene
    valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Shopify Storefront API"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    LOG_LEVEL: str = Field(default="INFO")

    # === CONFIGURACIÓN DE SEGURIDAD ===
    # Lista separada por comas
    ALLOWED_ORIGINS: Optional[str] = Field(default=None)

    # === CONFIGURACIÓN DE SHOPIFY ===
    SHOPIFY_STORE_DOMAIN: str
    SHOPIFY_STOREFRONT_ACCESS_TOKEN: str
    SHOPIFY_REVALIDATION_SECRET: str
    # Segundos antes de abortar una request a la Storefront API
    SHOPIFY_REQUEST_TIMEOUT: float = Field(default=10.0)
    SHOPIFY_CONNECT_TIMEOUT: float = Field(default=5.0)
    HIDDEN_PRODUCT_TAG: str = Field(default=DEFAULT_HIDDEN_PRODUCT_TAG)
    HIDDEN_COLLECTION_PREFIX: str = Field(default="hidden")

    # === CONFIGURACIÓN DE CACHE ===
    # Respuestas guardadas antes de descartar la menos usada
    CACHE_MAX_ENTRIES: int = Field(default=1000)
    # Vida máxima de una respuesta en segundos (None: hasta invalidación o desalojo)
    CACHE_TTL_SECONDS: Optional[float] = Field(default=None)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default=None)
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    SLOW_REQUEST_THRESHOLD: float = Field(default=5.0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("SHOPIFY_STORE_DOMAIN")
    @classmethod
    def validate_store_domain(cls, v):
        """Antepone https:// al dominio si no trae esquema."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("SHOPIFY_STORE_DOMAIN no puede estar vacío")
        if not v.startswith("https://") and not v.startswith("http://"):
            v = f"https://{v}"
        return v

    @field_validator("SHOPIFY_STOREFRONT_ACCESS_TOKEN", "SHOPIFY_REVALIDATION_SECRET")
    @classmethod
    def validate_not_blank(cls, v):
        """Rechaza credenciales vacías."""
        if not v or not v.strip():
            raise ValueError("la credencial no puede estar vacía")
        return v

    @field_validator("SHOPIFY_REQUEST_TIMEOUT", "SHOPIFY_CONNECT_TIMEOUT")
    @classmethod
    def validate_timeout(cls, v):
        """Valida que el timeout sea positivo."""
        if v <= 0:
            raise ValueError("el timeout debe ser mayor que 0")
        return v

    @field_validator("CACHE_MAX_ENTRIES")
    @classmethod
    def validate_cache_max_entries(cls, v):
        """El cache debe poder guardar al menos una respuesta."""
        if v < 1:
            raise ValueError("CACHE_MAX_ENTRIES debe ser al menos 1")
        return v

    @field_validator("CACHE_TTL_SECONDS")
    @classmethod
    def validate_cache_ttl(cls, v):
        if v is not None and v <= 0:
            raise ValueError("CACHE_TTL_SECONDS debe ser mayor que 0")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT debe estar entre 1 y 65535")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"

    @property
    def allowed_origins(self) -> List[str]:
        """Parsea ALLOWED_ORIGINS como lista separada por comas."""
        if not self.ALLOWED_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    @property
    def shopify_graphql_url(self) -> str:
        """URL completa del endpoint GraphQL de la Storefront API."""
        return f"{self.SHOPIFY_STORE_DOMAIN}{SHOPIFY_GRAPHQL_API_ENDPOINT}"

    def get_shopify_headers(self) -> dict:
        """
        Obtiene headers para requests a la Storefront API.

        Returns:
            dict: Headers de autenticación
        """
        return {
            "Content-Type": "application/json",
            "X-Shopify-Storefront-Access-Token": self.SHOPIFY_STOREFRONT_ACCESS_TOKEN,
        }


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


def reload_settings() -> Settings:
    """
    Recarga la configuración (útil para testing).

    Returns:
        Settings: Nueva instancia de configuración
    """
    get_settings.cache_clear()
    return get_settings()


def get_environment_info() -> dict:
    """
    Obtiene información del entorno actual.

    Returns:
        dict: Información del entorno
    """
    settings = get_settings()

    return {
        "app_name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "debug": settings.DEBUG,
        "is_production": settings.is_production,
        "store_domain": settings.SHOPIFY_STORE_DOMAIN,
        "log_level": settings.LOG_LEVEL,
    }
