"""
Domain layer for the storefront.

This layer contains the immutable entities and value objects produced from
Storefront API responses.
"""
