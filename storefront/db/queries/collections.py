"""
Collection-related GraphQL queries.
"""

from .fragments import COLLECTION_FRAGMENT, PRODUCT_FRAGMENT

COLLECTION_QUERY = (
    """
query getCollection($handle: String!) {
  collection(handle: $handle) {
    ...collection
  }
}
"""
    + COLLECTION_FRAGMENT
)

COLLECTIONS_QUERY = (
    """
query getCollections {
  collections(first: 100, sortKey: TITLE) {
    edges {
      node {
        ...collection
      }
    }
  }
}
"""
    + COLLECTION_FRAGMENT
)

COLLECTION_PRODUCTS_QUERY = (
    """
query getCollectionProducts($handle: String!, $sortKey: ProductCollectionSortKeys, $reverse: Boolean) {
  collection(handle: $handle) {
    products(sortKey: $sortKey, reverse: $reverse, first: 100) {
      edges {
        node {
          ...product
        }
      }
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

__all__ = ["COLLECTION_QUERY", "COLLECTIONS_QUERY", "COLLECTION_PRODUCTS_QUERY"]
