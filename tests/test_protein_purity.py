"""Tests for protein source parsing and purity classification."""

import pytest

from src.data_layer.models import ProteinParse, ProteinPurity
from src.scoring.protein_purity import (
    evaluate_protein_purity,
    parse_protein_source,
    strip_descriptor_prefixes,
)


class TestParseProteinSource:
    """Tests for parse_protein_source."""

    def test_plain_name_is_pure(self):
        assert parse_protein_source("Chicken") == ProteinParse(base="chicken", form="pure", mixed=False)

    def test_descriptor_removed(self):
        assert parse_protein_source("Deboned Chicken").base == "chicken"

    def test_stacked_descriptors(self):
        """Test that descriptors are stripped repeatedly."""
        parsed = parse_protein_source("freeze dried raw chicken")
        assert parsed.base == "chicken"
        assert parsed.form == "pure"

    def test_meal_suffix(self):
        parsed = parse_protein_source("chicken meal")
        assert (parsed.base, parsed.form) == ("chicken", "meal")

    def test_oil_is_fat(self):
        parsed = parse_protein_source("Salmon Oil")
        assert (parsed.base, parsed.form) == ("salmon", "fat")

    def test_organ_is_other(self):
        parsed = parse_protein_source("chicken liver")
        assert (parsed.base, parsed.form) == ("chicken", "other")

    def test_mixed_infix(self):
        parsed = parse_protein_source("chicken_and_rice")
        assert parsed.mixed is True
        assert parsed.base == "chicken_and_rice"

    def test_suffix_word_alone_kept(self):
        """Test that a bare suffix word is treated as the base."""
        parsed = parse_protein_source("meal")
        assert (parsed.base, parsed.form) == ("meal", "pure")

    @pytest.mark.parametrize("raw", ["", "   ", None, "!!"])
    def test_empty_input(self, raw):
        assert parse_protein_source(raw) is None

    def test_strip_descriptor_prefixes(self):
        assert strip_descriptor_prefixes("real_fresh_deboned_lamb") == "lamb"


class TestEvaluateProteinPurity:
    """Tests for evaluate_protein_purity decision table."""

    def test_pure(self):
        assert evaluate_protein_purity(["chicken"]) == ProteinPurity(percent=100, tier="pure")

    def test_meal(self):
        assert evaluate_protein_purity(["chicken_meal"]) == ProteinPurity(percent=93, tier="meal")

    def test_fat(self):
        assert evaluate_protein_purity(["chicken_fat"]) == ProteinPurity(percent=85, tier="fat")

    def test_mixed(self):
        assert evaluate_protein_purity(["chicken_and_rice"]) == ProteinPurity(percent=75, tier="mixed")

    def test_empty(self):
        assert evaluate_protein_purity([]) == ProteinPurity(percent=0, tier="none")
        assert evaluate_protein_purity(None) == ProteinPurity(percent=0, tier="none")

    def test_pure_and_meal_same_base(self):
        assert evaluate_protein_purity(["Deboned Chicken", "chicken meal"]).tier == "meal"

    def test_pure_and_fat_same_base(self):
        assert evaluate_protein_purity(["chicken", "chicken fat"]).tier == "fat"

    def test_other_base_fat_only(self):
        """Test that a second base contributing only fat stays in fat tier."""
        result = evaluate_protein_purity(["chicken", "chicken_meal", "beef_fat"])
        assert result == ProteinPurity(percent=85, tier="fat")

    def test_two_real_proteins_are_mixed(self):
        assert evaluate_protein_purity(["chicken", "beef"]).tier == "mixed"

    def test_tie_break_keeps_first_seen_base(self):
        """Test that equal-count bases rank in first-seen order."""
        assert evaluate_protein_purity(["chicken", "salmon_oil"]).tier == "fat"
        assert evaluate_protein_purity(["salmon_oil", "chicken"]).tier == "mixed"
