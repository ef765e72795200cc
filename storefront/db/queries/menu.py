"""
Navigation menu GraphQL query.
"""

MENU_QUERY = """
query getMenu($handle: String!) {
  menu(handle: $handle) {
    items {
      title
      url
    }
  }
}
"""

__all__ = ["MENU_QUERY"]
