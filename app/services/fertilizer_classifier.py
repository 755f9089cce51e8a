from enum import Enum
from typing import Callable, Tuple

from app.models.financial_analysis import PriceTable


class FertilizerCategory(str, Enum):
    NPK = "npk"
    UREA = "urea"
    DAP = "dap"
    POTASSIUM = "potassium"
    MICRONUTRIENT = "micronutrient"


def _contains_any(*keywords: str) -> Callable[[str], bool]:
    return lambda name: any(keyword in name for keyword in keywords)


# Evaluated top to bottom, first match wins. Names overlap
# ("NPK with phosphate"), so this has to stay ordered.
CLASSIFICATION_RULES: Tuple[Tuple[Callable[[str], bool], FertilizerCategory], ...] = (
    (_contains_any("npk", "compound"), FertilizerCategory.NPK),
    (_contains_any("urea", "nitrogen"), FertilizerCategory.UREA),
    (_contains_any("dap", "phosph"), FertilizerCategory.DAP),
    (_contains_any("potassium", "sulfate"), FertilizerCategory.POTASSIUM),
    (_contains_any("micro", "zinc", "boron"), FertilizerCategory.MICRONUTRIENT),
)

# Unknown fertilizers are priced as compound fertilizer.
DEFAULT_CATEGORY = FertilizerCategory.NPK


def classify_fertilizer(name: str) -> FertilizerCategory:
    folded = (name or "").casefold()
    for matches, category in CLASSIFICATION_RULES:
        if matches(folded):
            return category
    return DEFAULT_CATEGORY


def price_per_ton(category: FertilizerCategory, prices: PriceTable) -> float:
    return getattr(prices, category.value)


def cost_per_hectare(amount_kg_per_ha: float, price_per_metric_ton: float) -> float:
    """kg/ha at a $/ton price, 1 ton = 1000 kg."""
    return (amount_kg_per_ha / 1000) * price_per_metric_ton
