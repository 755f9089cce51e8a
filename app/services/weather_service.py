import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from app.core.config import settings
from app.models.weather import WeatherHistoryResponse

logger = logging.getLogger(__name__)

ARCHIVE_URL = "https://archive-api.open-meteo.com/v1/archive"
DAILY_VARIABLES = "temperature_2m_mean,precipitation_sum,et0_fao_evapotranspiration"
TIMEZONE = "Africa/Dar_es_Salaam"

DEFAULT_START_YEAR = 2019
DEFAULT_END_YEAR = 2023


async def get_weather_history(
    lat: Optional[float] = None,
    lon: Optional[float] = None,
    start_year: Optional[int] = None,
    end_year: Optional[int] = None,
) -> Optional[WeatherHistoryResponse]:
    """
    Fetches daily temperature, precipitation and evapotranspiration history
    from the Open-Meteo archive.

    Args:
        lat: Latitude, defaults to the configured farm region.
        lon: Longitude, defaults to the configured farm region.
        start_year: First year, inclusive.
        end_year: Last year, inclusive.

    Returns:
        A WeatherHistoryResponse object or None if the request fails.
    """
    params = {
        "latitude": lat if lat is not None else settings.DEFAULT_LAT,
        "longitude": lon if lon is not None else settings.DEFAULT_LON,
        "start_date": f"{start_year or DEFAULT_START_YEAR}-01-01",
        "end_date": f"{end_year or DEFAULT_END_YEAR}-12-31",
        "daily": DAILY_VARIABLES,
        "timezone": TIMEZONE,
    }

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        try:
            response = await client.get(ARCHIVE_URL, params=params)
            response.raise_for_status()
            return WeatherHistoryResponse.model_validate(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(
                "Weather API error: %s - %s", e.response.status_code, e.response.text
            )
        except httpx.RequestError as e:
            logger.error("Weather API request error: %s", e)
        except ValidationError as e:
            logger.error("Unexpected weather archive payload: %s", e)
    return None
