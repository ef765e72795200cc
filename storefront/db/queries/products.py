"""
Product-related GraphQL queries.
"""

from .fragments import PRODUCT_FRAGMENT

PRODUCTS_QUERY = (
    """
query getProducts($sortKey: ProductSortKeys, $reverse: Boolean, $query: String) {
  products(sortKey: $sortKey, reverse: $reverse, query: $query, first: 100) {
    edges {
      node {
        ...product
      }
    }
  }
}
"""
    + PRODUCT_FRAGMENT
)

PRODUCT_QUERY = (
    """
query getProduct($handle: String!) {
  product(handle: $handle) {
    ...product
  }
}
"""
    + PRODUCT_FRAGMENT
)

# productRecommendations is a plain list in the schema, not a connection
PRODUCT_RECOMMENDATIONS_QUERY = (
    """
query getProductRecommendations($productId: ID!) {
  productRecommendations(productId: $productId) {
    ...product
  }
}
"""
    + PRODUCT_FRAGMENT
)

__all__ = ["PRODUCTS_QUERY", "PRODUCT_QUERY", "PRODUCT_RECOMMENDATIONS_QUERY"]
