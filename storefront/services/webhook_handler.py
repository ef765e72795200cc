"""
Manejador de webhooks de Shopify para invalidación de cache.

Shopify reintenta indefinidamente cualquier webhook que no reciba un 200,
por lo que este manejador nunca falla: un secreto inválido o un topic
desconocido producen la misma respuesta que una invalidación ignorada.
"""

import hmac
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from storefront.core.cache_manager import CacheTag, CacheTagStore

logger = logging.getLogger(__name__)

COLLECTION_WEBHOOKS: FrozenSet[str] = frozenset(
    {
        "collections/create",
        "collections/delete",
        "collections/update",
    }
)
PRODUCT_WEBHOOKS: FrozenSet[str] = frozenset(
    {
        "products/create",
        "products/delete",
        "products/update",
    }
)


@dataclass(frozen=True)
class RevalidationResult:
    revalidated: bool
    now: Optional[int] = None

    def to_response(self) -> Dict[str, Any]:
        """Cuerpo JSON de la respuesta al webhook."""
        if not self.revalidated:
            return {"status": 200}
        return {"status": 200, "revalidated": True, "now": self.now}


class RevalidationHandler:
    """
    Valida webhooks de Shopify e invalida los tags de cache afectados.
    """

    def __init__(self, secret: str, cache_store: CacheTagStore):
        """
        Args:
            secret: Secreto de revalidación configurado
            cache_store: Store de tags compartido con el transporte
        """
        self.secret = secret
        self.cache_store = cache_store

    def is_valid_secret(self, secret: Optional[str]) -> bool:
        if not secret or not self.secret:
            return False
        # Comparación segura contra timing attacks
        return hmac.compare_digest(secret.encode("utf-8"), self.secret.encode("utf-8"))

    def revalidate(self, topic: Optional[str], secret: Optional[str]) -> RevalidationResult:
        """
        Procesa un webhook de revalidación.

        Args:
            topic: Header x-shopify-topic ("unknown" si falta)
            secret: Parámetro secret del query string

        Returns:
            RevalidationResult: Si se invalidó algún tag
        """
        topic = topic or "unknown"

        if not self.is_valid_secret(secret):
            logger.error("Invalid revalidation secret.")
            return RevalidationResult(revalidated=False)

        is_collection_update = topic in COLLECTION_WEBHOOKS
        is_product_update = topic in PRODUCT_WEBHOOKS

        if not is_collection_update and not is_product_update:
            # No hace falta invalidar nada para otros topics
            logger.info(f"Ignoring webhook topic: {topic}")
            return RevalidationResult(revalidated=False)

        if is_collection_update:
            self.cache_store.invalidate_tag(CacheTag.COLLECTIONS)

        if is_product_update:
            self.cache_store.invalidate_tag(CacheTag.PRODUCTS)

        logger.info(f"Revalidated cache for webhook topic: {topic}")
        return RevalidationResult(revalidated=True, now=int(time.time() * 1000))
