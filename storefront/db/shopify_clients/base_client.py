"""
Base Storefront GraphQL transport with response caching.

This module provides the foundation for all Storefront clients: session
management, the request timeout, error classification and the tag-based
response cache.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional

import aiohttp
from aiohttp import ClientTimeout

from storefront.core.cache_manager import CacheTagStore, create_cache_store, make_cache_key
from storefront.core.config import Settings, get_settings
from storefront.utils.error_handler import StorefrontApplicationError, StorefrontTransportError

logger = logging.getLogger(__name__)


class CachePolicy(str, Enum):
    """How a request interacts with the response cache."""

    # Reuse a valid cached body, otherwise fetch and store it
    FORCE_CACHE = "force-cache"
    # Always fetch, but store the fresh body for later FORCE_CACHE reads
    NO_CACHE = "no-cache"
    # Never read or write the cache
    NO_STORE = "no-store"


@dataclass(frozen=True)
class ShopifyResponse:
    status: int
    body: Dict[str, Any]


def _first_error_message(errors: Any) -> str:
    if isinstance(errors, list) and errors:
        first = errors[0]
        if isinstance(first, dict):
            return first.get("message") or str(first)
        return str(first)
    return str(errors)


class StorefrontTransport:
    """
    Transport for the Shopify Storefront GraphQL API.

    Every call either returns a ``ShopifyResponse`` with a parsed JSON body
    or raises ``StorefrontTransportError`` / ``StorefrontApplicationError``.
    There are no automatic retries.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        cache_store: Optional[CacheTagStore] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize the transport.

        Args:
            settings: Application settings (defaults to the global settings)
            cache_store: Shared cache-tag store (a private one is created if omitted)
            session: Externally owned HTTP session
        """
        self.settings = settings or get_settings()
        self.cache_store = cache_store if cache_store is not None else create_cache_store(self.settings)
        self.graphql_url = self.settings.shopify_graphql_url
        self.timeout = ClientTimeout(
            total=self.settings.SHOPIFY_REQUEST_TIMEOUT,
            connect=self.settings.SHOPIFY_CONNECT_TIMEOUT,
        )

        self.session = session
        self._owns_session = session is None

        logger.info(f"Initialized Storefront transport for {self.settings.SHOPIFY_STORE_DOMAIN}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.close()

    def _get_session(self) -> aiohttp.ClientSession:
        if self.session is None or (self._owns_session and self.session.closed):
            self.session = aiohttp.ClientSession(
                timeout=self.timeout,
                headers=self.settings.get_shopify_headers(),
            )
            self._owns_session = True
        return self.session

    async def close(self):
        """Close the HTTP session if this transport created it."""
        if self.session and self._owns_session:
            await self.session.close()
            logger.info("Storefront transport closed")
        self.session = None

    async def send(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        tags: Optional[Iterable] = None,
        cache: CachePolicy = CachePolicy.FORCE_CACHE,
    ) -> ShopifyResponse:
        """
        Execute a GraphQL document, going through the response cache.

        Args:
            query: GraphQL query or mutation
            variables: Query variables
            tags: Cache tags the response belongs to
            cache: Cache policy for this request

        Returns:
            ShopifyResponse: HTTP status and parsed body

        Raises:
            StorefrontTransportError: Network, timeout or malformed response
            StorefrontApplicationError: The API answered with an ``errors`` payload
        """
        key = make_cache_key(query, variables)

        if cache == CachePolicy.FORCE_CACHE:
            cached = self.cache_store.get(key)
            if cached is not None:
                logger.debug("Storefront cache hit")
                return ShopifyResponse(status=cached["status"], body=cached["body"])

        # Epochs at request start; an invalidation during the POST discards the response
        tag_epochs = self.cache_store.current_epochs(tags or ())

        response = await self._post(query, variables)

        if cache != CachePolicy.NO_STORE:
            self.cache_store.set(key, {"status": response.status, "body": response.body}, tag_epochs=tag_epochs)

        return response

    async def _post(self, query: str, variables: Optional[Dict[str, Any]]) -> ShopifyResponse:
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        status = None
        try:
            async with self._get_session().post(
                self.graphql_url,
                json=payload,
                headers=self.settings.get_shopify_headers(),
                timeout=self.timeout,
            ) as response:
                status = response.status
                body = await response.json(content_type=None)

        except asyncio.TimeoutError as e:
            logger.error(f"Storefront request timed out after {self.timeout.total}s")
            raise StorefrontTransportError(
                cause=f"Request timed out after {self.timeout.total}s", status=status, query=query
            ) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error(f"Malformed Storefront response (HTTP {status}): {e}")
            raise StorefrontTransportError(cause=f"Malformed JSON response: {e}", status=status, query=query) from e
        except aiohttp.ClientError as e:
            logger.error(f"Storefront network error: {e}")
            raise StorefrontTransportError(cause=str(e) or type(e).__name__, status=status, query=query) from e

        if not isinstance(body, dict):
            raise StorefrontTransportError(
                cause=f"Unexpected response body type: {type(body).__name__}", status=status, query=query
            )

        if body.get("errors"):
            message = _first_error_message(body["errors"])
            logger.error(f"Storefront GraphQL error: {message}")
            raise StorefrontApplicationError(message, query=query)

        if status >= 400:
            logger.error(f"Storefront API Error {status}")
            raise StorefrontTransportError(cause=f"HTTP {status}", status=status, query=query)

        return ShopifyResponse(status=status, body=body)

    def __repr__(self):
        return f"StorefrontTransport(graphql_url='{self.graphql_url}', initialized={self.session is not None})"
