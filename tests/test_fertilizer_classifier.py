"""
Unit tests for fertilizer price classification
"""

import pytest

from app.models.financial_analysis import DEFAULT_PRICE_TABLE
from app.services.fertilizer_classifier import (
    FertilizerCategory,
    classify_fertilizer,
    cost_per_hectare,
    price_per_ton,
)


class TestClassifyFertilizer:
    """Test cases for keyword-based classification."""

    @pytest.mark.parametrize(
        "name,category",
        [
            ("NPK 10-20-10", FertilizerCategory.NPK),
            ("Compound D", FertilizerCategory.NPK),
            ("Urea 46%", FertilizerCategory.UREA),
            ("Nitrogen top dressing", FertilizerCategory.UREA),
            ("DAP", FertilizerCategory.DAP),
            ("Triple superphosphate", FertilizerCategory.DAP),
            ("Potassium chloride", FertilizerCategory.POTASSIUM),
            ("Ammonium Sulfate", FertilizerCategory.POTASSIUM),
            ("Micronutrient mix", FertilizerCategory.MICRONUTRIENT),
            ("Zinc oxide", FertilizerCategory.MICRONUTRIENT),
            ("Boron foliar spray", FertilizerCategory.MICRONUTRIENT),
        ],
    )
    def test_keyword_categories(self, name, category):
        assert classify_fertilizer(name) == category

    def test_unknown_defaults_to_npk(self):
        assert classify_fertilizer("Rhizobium Inoculant") == FertilizerCategory.NPK
        assert classify_fertilizer("") == FertilizerCategory.NPK

    def test_earliest_rule_wins_on_overlap(self):
        # "npk" and "phosph" both match, NPK is listed first.
        assert classify_fertilizer("NPK with rock phosphate") == FertilizerCategory.NPK
        # "urea" and "sulfate" both match, urea is listed first.
        assert classify_fertilizer("Urea sulfate blend") == FertilizerCategory.UREA

    def test_case_insensitive(self):
        assert classify_fertilizer("UREA") == FertilizerCategory.UREA


class TestCostPerHectare:
    """Test cases for the kg/ha to $/ha conversion."""

    def test_conversion_uses_metric_ton(self):
        assert cost_per_hectare(150, 600) == pytest.approx(90.0)

    def test_price_lookup_by_category(self):
        assert price_per_ton(FertilizerCategory.DAP, DEFAULT_PRICE_TABLE) == 650.0
        assert price_per_ton(FertilizerCategory.MICRONUTRIENT, DEFAULT_PRICE_TABLE) == 800.0
