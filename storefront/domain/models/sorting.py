"""
Sort options offered to the UI layer for product listings.
"""

from typing import List, Optional

from .base import StorefrontModel


class SortFilterItem(StorefrontModel):
    title: str
    slug: Optional[str] = None
    sort_key: str
    reverse: bool = False


DEFAULT_SORT = SortFilterItem(title="Relevance", slug=None, sort_key="RELEVANCE", reverse=False)

SORTING: List[SortFilterItem] = [
    DEFAULT_SORT,
    SortFilterItem(title="Trending", slug="trending-desc", sort_key="BEST_SELLING", reverse=False),
    SortFilterItem(title="Latest arrivals", slug="latest-desc", sort_key="CREATED_AT", reverse=True),
    SortFilterItem(title="Price: Low to high", slug="price-asc", sort_key="PRICE", reverse=False),
    SortFilterItem(title="Price: High to low", slug="price-desc", sort_key="PRICE", reverse=True),
]


def resolve_sort(slug: Optional[str]) -> SortFilterItem:
    """Return the sort option for a slug, or the default one when unknown."""
    for item in SORTING:
        if item.slug == slug:
            return item
    return DEFAULT_SORT
