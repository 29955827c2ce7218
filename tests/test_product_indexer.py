"""Tests for deriving tokens from product records."""

import pytest

from src.data_layer.models import ProductRecord
from src.matching.product_indexer import (
    flat_ingredient_tokens,
    grain_status_tokens,
    ordered_ingredients,
    product_token_set,
)


@pytest.fixture
def product():
    """Grain-free chicken product used across tests."""
    return ProductRecord(
        id="p1",
        name="Chicken Recipe",
        brand="Acme",
        contains_grain=False,
        protein_sources=["chicken"],
        ingredients_list="chicken;peas;chicken_meal",
    )


class TestProductTokenSet:
    """Tests for product_token_set."""

    def test_full_token_set(self, product):
        assert product_token_set(product) == {
            "p1", "chicken", "recipe", "acme",
            "peas", "chicken_meal",
            "grain_free", "no_grain", "no_grains", "grainfree",
            "has_protein", "protein",
        }

    def test_ingredient_roots(self):
        """Test that compound ingredients contribute their root."""
        product = ProductRecord(ingredients_list="Salmon Meal; brown rice")
        tokens = product_token_set(product)
        assert {"salmon_meal", "salmon", "brown_rice", "brown"} <= tokens

    def test_contains_grain_tokens(self):
        tokens = product_token_set(ProductRecord(contains_grain=True))
        assert {"contains_grain", "grain", "grains", "with_grains"} <= tokens
        assert "grain_free" not in tokens

    def test_unknown_grain_adds_nothing(self):
        tokens = product_token_set(ProductRecord(contains_grain=None, protein_sources=["beef"]))
        assert tokens == {"beef", "has_protein", "protein"}

    def test_empty_product(self):
        """Test that a bare record only gets the no-protein token."""
        assert product_token_set(ProductRecord()) == {"no_protein"}


class TestOrderedIngredients:
    """Tests for ordered_ingredients."""

    def test_ingredients_then_protein_sources(self, product):
        assert ordered_ingredients(product) == ["chicken", "peas", "chicken_meal", "chicken"]

    def test_mixed_separators(self):
        """Test splitting on semicolons, commas and newlines."""
        product = ProductRecord(ingredients_list="Chicken, Brown Rice\nPeas;;oatmeal")
        assert ordered_ingredients(product) == ["chicken", "brown_rice", "peas", "oatmeal"]

    def test_no_status_tokens(self):
        product = ProductRecord(contains_grain=True)
        assert ordered_ingredients(product) == []


class TestFlatIngredientTokens:
    def test_keeps_repeats_and_roots(self):
        assert flat_ingredient_tokens(["chicken", "chicken_meal"]) == [
            "chicken", "chicken_meal", "chicken"
        ]


class TestGrainStatusTokens:
    """Tests for grain_status_tokens."""

    def test_grain_free(self, product):
        assert grain_status_tokens(product) == {"grain_free", "no_grain", "no_grains", "grainfree"}

    def test_contains_grain(self):
        tokens = grain_status_tokens(ProductRecord(contains_grain=True))
        assert tokens == {"contains_grain", "grain", "grains", "with_grains"}

    def test_name_words_ignored(self):
        """Test that "Grain" in the name adds no status token."""
        product = ProductRecord(name="Grain Free Salmon", contains_grain=None)
        assert grain_status_tokens(product) == frozenset()
        assert "grain" in product_token_set(product)
