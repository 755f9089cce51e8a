import re
from dataclasses import dataclass, field
from typing import List, Optional

from app.models.recommendation import Recommendation

DEFAULT_YIELD_PER_HA = 2.5
DEFAULT_WATERING_EVENTS = 4

_FERTILIZER_RATE_PATTERN = re.compile(r"(\d+)\s*kg/ha", re.IGNORECASE)
_YIELD_PATTERN = re.compile(r"(\d+\.?\d*)")


@dataclass(frozen=True)
class FertilizerDose:
    type: str
    amount_per_ha: float
    schedule: Optional[str] = None


@dataclass(frozen=True)
class ExtractedRecommendation:
    """Numbers read out of a recommendation, the only input the calculator needs."""

    fertilizer_doses: List[FertilizerDose] = field(default_factory=list)
    has_watering: bool = False
    watering_events: int = DEFAULT_WATERING_EVENTS
    yield_per_ha: float = DEFAULT_YIELD_PER_HA


def extract_fertilizer_rate(schedule: Optional[str]) -> Optional[float]:
    """Returns the first '<integer> kg/ha' quantity in the text, or None."""
    if not schedule:
        return None
    match = _FERTILIZER_RATE_PATTERN.search(schedule)
    if match is None:
        return None
    return float(match.group(1))


def extract_yield_estimate(text: Optional[str]) -> Optional[float]:
    """Returns the first number in the text (tons/hectare), or None."""
    if not text:
        return None
    match = _YIELD_PATTERN.search(text)
    if match is None:
        return None
    return float(match.group(1))


def count_watering_events(schedule: Optional[str]) -> int:
    """
    Counts events in a watering schedule by its comma separated segments,
    then by semicolons. A trailing separator still counts as a segment.
    Display only, never affects cost.
    """
    if not schedule:
        return DEFAULT_WATERING_EVENTS
    for separator in (",", ";"):
        segments = schedule.split(separator)
        if len(segments) > 1:
            return len(segments)
    return 1


def _watering_schedule(recommendation: Recommendation) -> Optional[str]:
    watering = recommendation.watering
    if isinstance(watering, str):
        return watering
    if watering is not None:
        return watering.schedule
    return None


def extract_recommendation(recommendation: Optional[Recommendation]) -> ExtractedRecommendation:
    """Applies every extraction rule, falling back to defaults where text is missing."""
    if recommendation is None:
        return ExtractedRecommendation()

    doses = []
    for entry in recommendation.fertilization:
        amount = extract_fertilizer_rate(entry.schedule)
        if amount is None:
            continue
        doses.append(
            FertilizerDose(type=entry.type, amount_per_ha=amount, schedule=entry.schedule)
        )

    # An empty watering string counts as no watering advice.
    has_watering = bool(recommendation.watering is not None and recommendation.watering != "")
    watering_events = (
        count_watering_events(_watering_schedule(recommendation))
        if has_watering
        else DEFAULT_WATERING_EVENTS
    )

    yield_per_ha = None
    if recommendation.predictions is not None:
        yield_per_ha = extract_yield_estimate(recommendation.predictions.yield_estimate)

    return ExtractedRecommendation(
        fertilizer_doses=doses,
        has_watering=has_watering,
        watering_events=watering_events,
        yield_per_ha=DEFAULT_YIELD_PER_HA if yield_per_ha is None else yield_per_ha,
    )
