"""
Cart GraphQL query and mutations.

Every mutation returns the full cart and its userErrors, so callers get the
updated state or the reason it failed from a single round trip.
"""

from .fragments import CART_FRAGMENT

# =============================================
# CART QUERIES
# =============================================

CART_QUERY = (
    """
query getCart($cartId: ID!) {
  cart(id: $cartId) {
    ...cart
  }
}
"""
    + CART_FRAGMENT
)

# =============================================
# CART MUTATIONS
# =============================================

CREATE_CART_MUTATION = (
    """
mutation createCart($lineItems: [CartLineInput!]) {
  cartCreate(input: { lines: $lineItems }) {
    cart {
      ...cart
    }
    userErrors {
      field
      message
    }
  }
}
"""
    + CART_FRAGMENT
)

ADD_TO_CART_MUTATION = (
    """
mutation addToCart($cartId: ID!, $lines: [CartLineInput!]!) {
  cartLinesAdd(cartId: $cartId, lines: $lines) {
    cart {
      ...cart
    }
    userErrors {
      field
      message
    }
  }
}
"""
    + CART_FRAGMENT
)

EDIT_CART_ITEMS_MUTATION = (
    """
mutation editCartItems($cartId: ID!, $lines: [CartLineUpdateInput!]!) {
  cartLinesUpdate(cartId: $cartId, lines: $lines) {
    cart {
      ...cart
    }
    userErrors {
      field
      message
    }
  }
}
"""
    + CART_FRAGMENT
)

REMOVE_FROM_CART_MUTATION = (
    """
mutation removeFromCart($cartId: ID!, $lineIds: [ID!]!) {
  cartLinesRemove(cartId: $cartId, lineIds: $lineIds) {
    cart {
      ...cart
    }
    userErrors {
      field
      message
    }
  }
}
"""
    + CART_FRAGMENT
)

__all__ = [
    "CART_QUERY",
    "CREATE_CART_MUTATION",
    "ADD_TO_CART_MUTATION",
    "EDIT_CART_ITEMS_MUTATION",
    "REMOVE_FROM_CART_MUTATION",
]
