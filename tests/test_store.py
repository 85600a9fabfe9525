"""
==============================================================================
Product Store Tests
==============================================================================

Tests for seed data, id counters and category lookup.

==============================================================================
"""

import pytest

from pizzaria.catalog.models import Category, Product
from pizzaria.catalog.store import CatalogStore, get_store, init_store


class TestCategory:
    """Tests for the Category lookup table."""

    @pytest.mark.parametrize("token,expected", [
        ("pizzas", Category.PIZZA),
        ("bebidas", Category.BEBIDA),
    ])
    def test_known_tokens(self, token, expected):
        assert Category.from_token(token) is expected
        assert expected.token == token

    @pytest.mark.parametrize("token", ["pizza", "tacos", "Pizzas", "", "bebidass"])
    def test_unknown_tokens(self, token):
        assert Category.from_token(token) is None


class TestCatalogStore:
    """Tests for CatalogStore."""

    def test_seed_records(self, store: CatalogStore):
        assert [p.id for p in store.get(Category.PIZZA)] == ["1", "2"]
        assert [p.id for p in store.get(Category.BEBIDA)] == ["101", "102"]

    def test_unseeded_store_is_empty(self):
        store = CatalogStore(seed=False)
        assert store.stats() == {"pizzas": 0, "bebidas": 0}
        assert store.next_id(Category.PIZZA) == "3"

    def test_counters_start_after_seeds(self, store: CatalogStore):
        assert store.next_id(Category.PIZZA) == "3"
        assert store.next_id(Category.PIZZA) == "4"
        assert store.next_id(Category.BEBIDA) == "103"

    def test_get_returns_copy(self, store: CatalogStore):
        products = store.get(Category.PIZZA)
        products.pop()
        assert len(store.get(Category.PIZZA)) == 2

    def test_replace_swaps_collection(self, store: CatalogStore):
        product = Product(id="9", nome="Única", preco=1.0, imagem="x")
        store.replace(Category.BEBIDA, [product])
        assert store.get(Category.BEBIDA) == [product]
        assert store.stats() == {"pizzas": 2, "bebidas": 1}

    def test_images_span_categories(self, store: CatalogStore):
        assert set(store.images()) == {
            "/uploads/placeholder-pizza.png",
            "/uploads/placeholder-bebida.png",
        }

    def test_lock_is_per_category(self, store: CatalogStore):
        assert store.lock(Category.PIZZA) is store.lock(Category.PIZZA)
        assert store.lock(Category.PIZZA) is not store.lock(Category.BEBIDA)


class TestStoreSingleton:
    """Tests for the process-wide store."""

    def test_init_store_replaces_instance(self):
        first = init_store()
        first.next_id(Category.PIZZA)
        second = init_store()
        assert get_store() is second
        assert second.next_id(Category.PIZZA) == "3"
