from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceTable(CamelModel):
    """Static market prices used for one calculation. Never mutated."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    # Fertilizers, $/ton
    npk: float = Field(default=600.0, description="NPK compound fertilizer")
    urea: float = Field(default=450.0, description="Urea (nitrogen)")
    dap: float = Field(default=650.0, description="DAP (phosphorus)")
    potassium: float = Field(default=550.0, description="Potassium sulfate")
    micronutrient: float = Field(default=800.0, description="Micronutrient mix")

    soybeans: float = Field(default=450.0, description="Soybean market price, $/ton")

    # $/hectare
    irrigation_per_ha: float = Field(default=150.0)
    labor_per_ha: float = Field(default=80.0)
    seeds_per_ha: float = Field(default=60.0)

    last_updated: str = Field(default="2024 Market Average")


DEFAULT_PRICE_TABLE = PriceTable()


class FertilizerCostDetail(CamelModel):
    type: str
    category: str = Field(description="Price category the fertilizer was billed as")
    amount_per_ha: str = Field(description="e.g. '150 kg/ha'")
    total_amount: str = Field(description="e.g. '15000 kg'")
    cost_per_ha: float
    total_cost: float
    schedule: Optional[str] = None


class WateringCostDetail(CamelModel):
    description: str = "Irrigation system operation"
    events: int = Field(description="Watering events read from the schedule, display only")
    cost_per_ha: float
    total_cost: float


class FixedCostDetail(CamelModel):
    description: str
    cost_per_ha: float
    total_cost: float


class CostBreakdown(CamelModel):
    fertilizer_details: List[FertilizerCostDetail] = Field(default_factory=list)
    watering_details: List[WateringCostDetail] = Field(default_factory=list)
    labor: FixedCostDetail
    seeds: FixedCostDetail


class Costs(CamelModel):
    fertilizers: float
    irrigation: float
    labor: float
    seeds: float
    total: float
    breakdown: CostBreakdown


class Revenue(CamelModel):
    yield_per_ha: float = Field(description="tons/hectare")
    total_yield: float = Field(description="tons")
    price_per_ton: float
    total_revenue: float


class Profitability(CamelModel):
    gross_profit: float
    roi: Optional[float] = Field(
        description="Percentage, null when total costs are zero"
    )
    break_even_yield: Optional[float] = Field(description="tons")
    break_even_per_ha: Optional[float] = Field(
        description="tons/hectare, null when farm size is zero"
    )
    profit_per_ha: Optional[float] = Field(
        description="null when farm size is zero"
    )


class MarketPrices(CamelModel):
    soybeans: str = Field(description="e.g. '$450/ton'")
    npk: str
    last_updated: str


class FinancialReport(CamelModel):
    """Cost, revenue and profitability projection for one farm."""

    farm_size: float = Field(description="hectares")
    currency: str = "USD"
    costs: Costs
    revenue: Revenue
    profitability: Profitability
    market_prices: MarketPrices


class FinancialAnalysisRequest(CamelModel):
    recommendations: Any = Field(
        default=None, description="Recommendation object, anything else is read as empty"
    )
    farm_size: Any = Field(default=100, description="hectares")


class FinancialAnalysisResponse(FinancialReport):
    success: bool = True


class FinancialAnalysisError(CamelModel):
    success: bool = False
    error: str
    message: str
