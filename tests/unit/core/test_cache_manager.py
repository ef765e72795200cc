"""Tests unitarios para el store de cache por tags."""

import threading
from unittest.mock import patch

import pytest

from storefront.core.cache_manager import CacheTag, CacheTagStore, create_cache_store, make_cache_key
from storefront.core.config import Settings


class TestMakeCacheKey:
    def test_variable_order_does_not_matter(self):
        """Debe generar la misma clave sin importar el orden de las variables."""
        assert make_cache_key("q", {"a": 1, "b": 2}) == make_cache_key("q", {"b": 2, "a": 1})

    def test_none_and_empty_variables_are_equal(self):
        assert make_cache_key("q", None) == make_cache_key("q", {})

    def test_different_variables_differ(self):
        assert make_cache_key("q", {"handle": "a"}) != make_cache_key("q", {"handle": "b"})


class TestCacheTagStore:
    def test_get_returns_stored_data(self):
        store = CacheTagStore()
        store.set("key", {"value": 1}, [CacheTag.PRODUCTS])

        assert store.get("key") == {"value": 1}

    def test_missing_key(self):
        assert CacheTagStore().get("missing") is None

    def test_invalidation_makes_entry_stale(self):
        """Debe descartar entradas guardadas bajo una época anterior del tag."""
        store = CacheTagStore()
        store.set("key", "data", [CacheTag.PRODUCTS])

        store.invalidate_tag(CacheTag.PRODUCTS)

        assert store.get("key") is None

    def test_invalidating_other_tag_keeps_entry(self):
        store = CacheTagStore()
        store.set("key", "data", [CacheTag.PRODUCTS])

        store.invalidate_tag(CacheTag.COLLECTIONS)

        assert store.get("key") == "data"

    def test_entry_with_several_tags_invalidated_by_any(self):
        """Una entrada con varios tags debe invalidarse con cualquiera de ellos."""
        store = CacheTagStore()
        store.set("key", "data", [CacheTag.COLLECTIONS, CacheTag.PRODUCTS])

        store.invalidate_tag("products")

        assert store.get("key") is None

    def test_entry_stored_after_invalidation_is_valid(self):
        store = CacheTagStore()
        store.invalidate_tag(CacheTag.CART)
        store.set("key", "fresh", [CacheTag.CART])

        assert store.get("key") == "fresh"

    def test_untagged_entry_survives_invalidation(self):
        store = CacheTagStore()
        store.set("key", "data", [])

        store.invalidate_tag(CacheTag.PRODUCTS)

        assert store.get("key") == "data"

    def test_invalidate_returns_new_epoch(self):
        store = CacheTagStore()

        assert store.invalidate_tag(CacheTag.PRODUCTS) == 1
        assert store.invalidate_tag(CacheTag.PRODUCTS) == 2
        assert store.get_epoch(CacheTag.PRODUCTS) == 2
        assert store.get_epoch(CacheTag.CART) == 0

    def test_concurrent_invalidations_are_not_lost(self):
        """Invalidaciones concurrentes deben incrementar la época sin perder ninguna."""
        store = CacheTagStore()

        def invalidate_many():
            for _ in range(200):
                store.invalidate_tag(CacheTag.PRODUCTS)

        threads = [threading.Thread(target=invalidate_many) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.get_epoch(CacheTag.PRODUCTS) == 1000

    def test_stats_and_clear(self):
        store = CacheTagStore()
        store.set("key", "data", [CacheTag.PRODUCTS])
        store.get("key")
        store.get("other")

        stats = store.get_stats()
        assert stats["total_keys"] == 1
        assert stats["hits"] == 1
        assert stats["misses"] == 1

        store.clear()
        assert store.get_stats()["total_keys"] == 0


class TestEpochSnapshots:
    """Tests para respuestas obtenidas mientras se invalida un tag."""

    def test_snapshot_taken_before_invalidation_is_discarded(self):
        """Una respuesta pedida antes de invalidar no debe guardarse."""
        store = CacheTagStore()
        snapshot = store.current_epochs([CacheTag.PRODUCTS])

        store.invalidate_tag(CacheTag.PRODUCTS)
        stored = store.set("key", "stale", tag_epochs=snapshot)

        assert stored is False
        assert store.get("key") is None

    def test_snapshot_of_unrelated_tag_is_kept(self):
        store = CacheTagStore()
        snapshot = store.current_epochs([CacheTag.COLLECTIONS])

        store.invalidate_tag(CacheTag.PRODUCTS)

        assert store.set("key", "data", tag_epochs=snapshot) is True
        assert store.get("key") == "data"

    def test_snapshot_orders_and_dedups_tags(self):
        store = CacheTagStore()
        store.invalidate_tag(CacheTag.PRODUCTS)

        assert store.current_epochs([CacheTag.PRODUCTS, "collections", "products"]) == (
            ("collections", 0),
            ("products", 1),
        )


class TestCacheBounds:
    """Tests para el límite de entradas, el TTL y la purga por tag."""

    def test_least_recently_used_entry_is_evicted(self):
        """Debe descartar la entrada menos usada al superar el límite."""
        store = CacheTagStore(max_entries=2)
        store.set("a", 1, [])
        store.set("b", 2, [])
        store.get("a")

        store.set("c", 3, [])

        assert store.get("b") is None
        assert store.get("a") == 1
        assert store.get("c") == 3
        assert store.get_stats()["total_keys"] == 2
        assert store.get_stats()["evictions"] == 1

    def test_many_distinct_keys_stay_bounded(self):
        store = CacheTagStore(max_entries=10)

        for i in range(100):
            store.set(f"search-{i}", i, [CacheTag.PRODUCTS])

        assert store.get_stats()["total_keys"] == 10
        assert store.get("search-99") == 99
        assert store.get("search-0") is None

    def test_invalidation_purges_tagged_entries(self):
        """Invalidar un tag debe liberar sus entradas sin esperar una lectura."""
        store = CacheTagStore()
        store.set("p1", 1, [CacheTag.PRODUCTS])
        store.set("p2", 2, [CacheTag.PRODUCTS, CacheTag.COLLECTIONS])
        store.set("c1", 3, [CacheTag.COLLECTIONS])

        store.invalidate_tag(CacheTag.PRODUCTS)

        assert store.get_stats()["total_keys"] == 1
        assert store.get("c1") == 3

    def test_expired_entry_is_a_miss(self):
        store = CacheTagStore(ttl_seconds=60)
        with patch("storefront.core.cache_manager.time.time", return_value=1000.0):
            store.set("key", "data", [])
        with patch("storefront.core.cache_manager.time.time", return_value=1059.0):
            assert store.get("key") == "data"
        with patch("storefront.core.cache_manager.time.time", return_value=1061.0):
            assert store.get("key") is None

    def test_invalid_max_entries(self):
        with pytest.raises(ValueError):
            CacheTagStore(max_entries=0)

    def test_store_built_from_settings(self):
        settings = Settings(
            SHOPIFY_STORE_DOMAIN="shop.myshopify.com",
            SHOPIFY_STOREFRONT_ACCESS_TOKEN="token",
            SHOPIFY_REVALIDATION_SECRET="secret",
            CACHE_MAX_ENTRIES=5,
            CACHE_TTL_SECONDS=30,
        )

        store = create_cache_store(settings)

        assert store.max_entries == 5
        assert store.ttl_seconds == 30
