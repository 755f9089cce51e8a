from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Open-Meteo Archive API Models ---


class DailyWeatherSeries(BaseModel):
    """Parallel daily series, one entry per date. Missing readings are null."""

    model_config = ConfigDict(extra="allow")

    time: List[str] = Field(default_factory=list, description="ISO dates, YYYY-MM-DD")
    temperature_2m_mean: List[Optional[float]] = Field(
        default_factory=list, description="Mean air temperature, °C"
    )
    precipitation_sum: List[Optional[float]] = Field(
        default_factory=list, description="Daily precipitation, mm"
    )
    et0_fao_evapotranspiration: Optional[List[Optional[float]]] = Field(
        default=None, description="Reference evapotranspiration, mm/day"
    )


class DailyUnits(BaseModel):
    model_config = ConfigDict(extra="allow")

    time: Optional[str] = None
    temperature_2m_mean: Optional[str] = None
    precipitation_sum: Optional[str] = None
    et0_fao_evapotranspiration: Optional[str] = None


class WeatherHistoryResponse(BaseModel):
    """Response of the Open-Meteo historical weather archive."""

    model_config = ConfigDict(extra="allow")

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    elevation: Optional[float] = None
    timezone: Optional[str] = None
    daily_units: Optional[DailyUnits] = None
    daily: Optional[DailyWeatherSeries] = None
