from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from app.models.weather import WeatherHistoryResponse
from app.services.weather_service import get_weather_history

router = APIRouter(prefix="/api", tags=["Weather"])


@router.get(
    "/weather-history",
    response_model=WeatherHistoryResponse,
    response_model_exclude_none=True,
)
async def get_weather_history_data(
    lat: Optional[float] = Query(None, description="Latitude"),
    lon: Optional[float] = Query(None, description="Longitude"),
    start_year: Optional[int] = Query(None, alias="startYear", description="First year"),
    end_year: Optional[int] = Query(None, alias="endYear", description="Last year"),
):
    """
    Get daily temperature, rainfall and evapotranspiration history for a location.
    """
    history = await get_weather_history(lat, lon, start_year, end_year)
    if history is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch weather data",
        )
    return history
