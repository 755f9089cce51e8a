from fastapi import APIRouter

from app.models.analysis import AnalysisRequest, AnalysisResponse
from app.services.analysis_service import analyze_farm_data

router = APIRouter(prefix="/api", tags=["Analysis"])


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    response_model_exclude_none=True,
)
async def analyze(request: AnalysisRequest):
    """
    Get watering and fertilization recommendations from the knowledge base,
    weather history and NDVI data.
    """
    return await analyze_farm_data(request)
