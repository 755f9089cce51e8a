from typing import Dict, List, Optional

from app.models.weather import WeatherHistoryResponse

WEATHER_NOT_AVAILABLE = "Weather data not available"


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def summarize_weather_data(weather_data: Optional[WeatherHistoryResponse]) -> str:
    """
    Reduces a daily weather series to one line per calendar year, keeping
    the prompt small.

    Args:
        weather_data: Open-Meteo archive response, or None.

    Returns:
        Lines like "2019: Avg Temp 22.4°C, Total Rainfall 612mm, Avg ET0 4.12mm/day",
        in the order the years first appear.
    """
    if weather_data is None or weather_data.daily is None:
        return WEATHER_NOT_AVAILABLE

    daily = weather_data.daily
    et0_series = daily.et0_fao_evapotranspiration
    yearly: Dict[str, Dict[str, List[float]]] = {}

    for idx, day in enumerate(daily.time):
        stats = yearly.setdefault(day[:4], {"temps": [], "precip": [], "et0": []})
        if idx < len(daily.temperature_2m_mean) and daily.temperature_2m_mean[idx] is not None:
            stats["temps"].append(daily.temperature_2m_mean[idx])
        if idx < len(daily.precipitation_sum) and daily.precipitation_sum[idx] is not None:
            stats["precip"].append(daily.precipitation_sum[idx])
        if et0_series and idx < len(et0_series) and et0_series[idx] is not None:
            stats["et0"].append(et0_series[idx])

    lines = []
    for year, stats in yearly.items():
        avg_temp = _mean(stats["temps"])
        avg_et0 = _mean(stats["et0"])
        temp_text = "N/A" if avg_temp is None else f"{avg_temp:.1f}"
        et0_text = "N/A" if avg_et0 is None else f"{avg_et0:.2f}"
        total_precip = sum(stats["precip"])
        lines.append(
            f"{year}: Avg Temp {temp_text}°C, Total Rainfall {total_precip:.0f}mm, "
            f"Avg ET0 {et0_text}mm/day"
        )
    return "\n".join(lines)
