import logging
import math
from numbers import Real

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.models.financial_analysis import (
    FinancialAnalysisError,
    FinancialAnalysisRequest,
    FinancialAnalysisResponse,
    FinancialReport,
)
from app.models.recommendation import Recommendation
from app.services.financial_calculator import analyze_recommendation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Financial Analysis"])

INVALID_FARM_SIZE = "Invalid farm size"


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=FinancialAnalysisError(error=error, message=message).model_dump(),
    )


def _is_valid_farm_size(farm_size) -> bool:
    if isinstance(farm_size, bool) or not isinstance(farm_size, Real):
        return False
    return math.isfinite(farm_size) and farm_size > 0


def _has_finite_totals(report: FinancialReport) -> bool:
    return all(
        math.isfinite(value)
        for value in (
            report.costs.total,
            report.revenue.total_yield,
            report.revenue.total_revenue,
            report.profitability.gross_profit,
        )
    )


@router.post(
    "/financial-analysis",
    response_model=FinancialAnalysisResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": FinancialAnalysisError},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": FinancialAnalysisError},
    },
)
async def financial_analysis(request: FinancialAnalysisRequest):
    """
    Project costs, revenue and profitability of the recommended plan.
    """
    farm_size = request.farm_size
    if not _is_valid_farm_size(farm_size):
        return _error(
            status.HTTP_400_BAD_REQUEST,
            INVALID_FARM_SIZE,
            f"farmSize must be a positive, finite number of hectares, got {farm_size!r}",
        )

    # Anything other than an object carries no readable sections.
    recommendations = request.recommendations
    if not isinstance(recommendations, dict):
        recommendations = None

    try:
        recommendation = (
            Recommendation.model_validate(recommendations)
            if recommendations is not None
            else None
        )
        report = analyze_recommendation(recommendation, float(farm_size))
    except Exception as e:
        logger.exception("Financial analysis error")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to calculate financial analysis",
            str(e),
        )

    if not _has_finite_totals(report):
        return _error(
            status.HTTP_400_BAD_REQUEST,
            INVALID_FARM_SIZE,
            f"farmSize {farm_size!r} is too large to price",
        )

    return FinancialAnalysisResponse(**report.model_dump())
