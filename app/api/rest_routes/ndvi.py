from fastapi import APIRouter

from app.models.ndvi import NDVIHistoryRequest, NDVIHistoryResponse, NDVIInfoResponse
from app.services.ndvi_service import get_ndvi_history, get_ndvi_info

router = APIRouter(prefix="/api", tags=["NDVI"])


@router.get("/ndvi-info", response_model=NDVIInfoResponse)
async def ndvi_info():
    """
    Get the Sentinel Hub tile service details used to draw NDVI layers.
    """
    return await get_ndvi_info()


@router.post(
    "/ndvi-history",
    response_model=NDVIHistoryResponse,
    response_model_exclude_none=True,
)
async def ndvi_history(request: NDVIHistoryRequest):
    """
    Request historical NDVI imagery. Falls back to demo data when
    Sentinel Hub is unavailable.
    """
    return await get_ndvi_history(request)
