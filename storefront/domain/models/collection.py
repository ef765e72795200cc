"""
Collection entity.
"""

from typing import Optional

from .base import StorefrontModel
from .product import Seo


class Collection(StorefrontModel):
    """Colección de productos; ``path`` es siempre ``/search/{handle}``."""

    handle: str
    title: str
    description: str = ""
    seo: Optional[Seo] = None
    path: str
    updated_at: Optional[str] = None
