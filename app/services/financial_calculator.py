"""
Financial projection for a soybean farm.

Turns an AI recommendation into costs, revenue and profitability. Text is
parsed once by `recommendation_parser`; everything here works on the
extracted numbers only, so the arithmetic can be tested on its own.
"""

import logging
from typing import Optional

from app.models.financial_analysis import (
    DEFAULT_PRICE_TABLE,
    CostBreakdown,
    Costs,
    FertilizerCostDetail,
    FinancialReport,
    FixedCostDetail,
    MarketPrices,
    PriceTable,
    Profitability,
    Revenue,
    WateringCostDetail,
)
from app.models.recommendation import Recommendation
from app.services.fertilizer_classifier import (
    classify_fertilizer,
    cost_per_hectare,
    price_per_ton,
)
from app.services.recommendation_parser import (
    ExtractedRecommendation,
    extract_recommendation,
)

logger = logging.getLogger(__name__)

LABOR_DESCRIPTION = "Field preparation, planting, maintenance, harvesting"
SEEDS_DESCRIPTION = "Certified soybean seeds"


def _money(value: float) -> float:
    return round(value, 2)


def _ratio(numerator: float, denominator: float) -> Optional[float]:
    if denominator == 0:
        return None
    return numerator / denominator


def calculate_financials(
    extracted: ExtractedRecommendation,
    farm_size: float,
    prices: PriceTable = DEFAULT_PRICE_TABLE,
) -> FinancialReport:
    """
    Builds the full report for `farm_size` hectares.

    Farm size is not validated here. Ratios that would divide by zero
    (ROI with zero total cost, per-hectare figures with zero farm size)
    come back as None.
    """
    fertilizer_costs = 0.0
    fertilizer_details = []
    for dose in extracted.fertilizer_doses:
        category = classify_fertilizer(dose.type)
        per_ha = cost_per_hectare(dose.amount_per_ha, price_per_ton(category, prices))
        total = per_ha * farm_size
        fertilizer_costs += total
        fertilizer_details.append(
            FertilizerCostDetail(
                type=dose.type,
                category=category.value,
                amount_per_ha=f"{dose.amount_per_ha:.0f} kg/ha",
                total_amount=f"{dose.amount_per_ha * farm_size:.0f} kg",
                cost_per_ha=_money(per_ha),
                total_cost=_money(total),
                schedule=dose.schedule,
            )
        )

    irrigation_costs = 0.0
    watering_details = []
    if extracted.has_watering:
        irrigation_costs = prices.irrigation_per_ha * farm_size
        watering_details.append(
            WateringCostDetail(
                events=extracted.watering_events,
                cost_per_ha=_money(prices.irrigation_per_ha),
                total_cost=_money(irrigation_costs),
            )
        )

    labor_costs = prices.labor_per_ha * farm_size
    seed_costs = prices.seeds_per_ha * farm_size
    total_costs = fertilizer_costs + irrigation_costs + labor_costs + seed_costs

    total_yield = extracted.yield_per_ha * farm_size
    revenue = total_yield * prices.soybeans

    profit = revenue - total_costs
    roi = _ratio(profit, total_costs)
    break_even_yield = _ratio(total_costs, prices.soybeans)
    break_even_per_ha = (
        _ratio(break_even_yield, farm_size) if break_even_yield is not None else None
    )
    profit_per_ha = _ratio(profit, farm_size)

    if roi is None:
        logger.warning("Total costs are zero for farm size %s, ROI is undefined", farm_size)

    return FinancialReport(
        farm_size=farm_size,
        costs=Costs(
            fertilizers=_money(fertilizer_costs),
            irrigation=_money(irrigation_costs),
            labor=_money(labor_costs),
            seeds=_money(seed_costs),
            total=_money(total_costs),
            breakdown=CostBreakdown(
                fertilizer_details=fertilizer_details,
                watering_details=watering_details,
                labor=FixedCostDetail(
                    description=LABOR_DESCRIPTION,
                    cost_per_ha=_money(prices.labor_per_ha),
                    total_cost=_money(labor_costs),
                ),
                seeds=FixedCostDetail(
                    description=SEEDS_DESCRIPTION,
                    cost_per_ha=_money(prices.seeds_per_ha),
                    total_cost=_money(seed_costs),
                ),
            ),
        ),
        revenue=Revenue(
            yield_per_ha=_money(extracted.yield_per_ha),
            total_yield=_money(total_yield),
            price_per_ton=prices.soybeans,
            total_revenue=_money(revenue),
        ),
        profitability=Profitability(
            gross_profit=_money(profit),
            roi=round(roi * 100, 1) if roi is not None else None,
            break_even_yield=_money(break_even_yield) if break_even_yield is not None else None,
            break_even_per_ha=_money(break_even_per_ha) if break_even_per_ha is not None else None,
            profit_per_ha=_money(profit_per_ha) if profit_per_ha is not None else None,
        ),
        market_prices=MarketPrices(
            soybeans=f"${prices.soybeans:g}/ton",
            npk=f"${prices.npk:g}/ton",
            last_updated=prices.last_updated,
        ),
    )


def analyze_recommendation(
    recommendation: Optional[Recommendation],
    farm_size: float,
    prices: PriceTable = DEFAULT_PRICE_TABLE,
) -> FinancialReport:
    """Parses the recommendation text and prices it."""
    extracted = extract_recommendation(recommendation)
    logger.debug(
        "Extracted %d priced fertilizer doses, watering=%s, yield=%.2f t/ha",
        len(extracted.fertilizer_doses),
        extracted.has_watering,
        extracted.yield_per_ha,
    )
    return calculate_financials(extracted, farm_size, prices)
