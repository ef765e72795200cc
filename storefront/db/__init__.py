"""Data access layer: Storefront GraphQL documents and clients."""
