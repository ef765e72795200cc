"""
Navigation menu entity.
"""

from .base import StorefrontModel


class MenuItem(StorefrontModel):
    title: str
    path: str
