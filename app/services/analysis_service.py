import json
import logging
import re
from typing import Any, Dict, Optional

from langchain_core.prompts import ChatPromptTemplate

from app.core.config import settings
from app.core.genai_client import get_chat_model
from app.models.analysis import AnalysisRequest, AnalysisResponse
from app.models.weather import WeatherHistoryResponse
from app.prompts.soybean_analysis_system_prompt import (
    SOYBEAN_ANALYSIS_PROMPT_TEMPLATE,
    SOYBEAN_ANALYSIS_SYSTEM_PROMPT,
)
from app.services.weather_summarizer import summarize_weather_data

logger = logging.getLogger(__name__)

NDVI_PENDING = "NDVI data integration pending"
NDVI_SUMMARY_MAX_CHARS = 500
DEFAULT_WEATHER_PERIOD = "2019-2023"

_JSON_BLOCK_PATTERN = re.compile(r"\{[\s\S]*\}")

DEMO_RECOMMENDATION: Dict[str, Any] = {
    "watering": {
        "schedule": (
            "Week 1-2: Daily irrigation (25mm/day), Week 3-8: Every 2-3 days (20mm), "
            "Week 9-12: Reduce to 15mm every 3 days"
        ),
        "description": "Soybean water requirements peak during flowering and pod development",
        "imagePrompt": "Calendar showing watering schedule with water droplets for a soybean field",
    },
    "fertilization": [
        {
            "type": "NPK 10-20-10",
            "schedule": "Apply 150 kg/ha at planting",
            "description": "Phosphorus critical for root development and nodulation",
            "imagePrompt": "Diagram showing NPK fertilizer application at field preparation",
        },
        {
            "type": "Rhizobium Inoculant",
            "schedule": "Seed treatment before planting",
            "description": "Enhances nitrogen fixation in root nodules",
            "imagePrompt": "Seeds being treated with bacterial inoculant",
        },
        {
            "type": "Potassium Sulfate",
            "schedule": "75 kg/ha at flowering stage (week 6)",
            "description": "Supports pod filling and grain quality",
            "imagePrompt": "Foliar application during soybean flowering",
        },
    ],
    "predictions": {
        "peakGreenMass": "Week 8-9 (full flowering to early pod development)",
        "yieldEstimate": "2.5-3.0 tons/hectare based on optimal conditions",
        "confidence": "High - based on 5 years of historical data",
    },
}

DEMO_MESSAGE = "Using demo data. Configure GEMINI_API_KEY for AI analysis."


def summarize_ndvi_data(ndvi_data: Any) -> str:
    if isinstance(ndvi_data, (dict, list)):
        return json.dumps(ndvi_data)[:NDVI_SUMMARY_MAX_CHARS]
    return NDVI_PENDING


def _weather_period(weather_data: Optional[WeatherHistoryResponse]) -> str:
    if weather_data is None or weather_data.daily is None or not weather_data.daily.time:
        return DEFAULT_WEATHER_PERIOD
    first, last = weather_data.daily.time[0][:4], weather_data.daily.time[-1][:4]
    return first if first == last else f"{first}-{last}"


def build_analysis_prompt(request: AnalysisRequest) -> str:
    return SOYBEAN_ANALYSIS_PROMPT_TEMPLATE.format(
        farm_size=f"{request.farm_size:g}",
        knowledge_base=request.knowledge_base,
        weather_period=_weather_period(request.weather_data),
        weather_summary=summarize_weather_data(request.weather_data),
        ndvi_summary=summarize_ndvi_data(request.ndvi_data),
    )


def parse_model_reply(reply: str) -> Dict[str, Any]:
    """Returns the first {...} block of the reply as JSON, or {"raw": reply}."""
    match = _JSON_BLOCK_PATTERN.search(reply)
    if match is None:
        return {"raw": reply}
    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError:
        return {"raw": reply}
    if not isinstance(parsed, dict):
        return {"raw": reply}
    return parsed


def _reply_text(content: Any) -> str:
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(
            part if isinstance(part, str) else part.get("text", "")
            for part in content
            if isinstance(part, (str, dict))
        )
    return str(content)


async def analyze_farm_data(request: AnalysisRequest) -> AnalysisResponse:
    """
    Asks the model for watering and fertilization advice.

    Any failure of the model call, missing credentials included, falls back
    to the canned demo recommendation so the dashboard stays usable.
    """
    prompt = build_analysis_prompt(request)
    try:
        model = get_chat_model(
            temperature=settings.LLM_TEMPERATURE,
            max_output_tokens=settings.LLM_MAX_OUTPUT_TOKENS,
        )
        chain = (
            ChatPromptTemplate.from_messages(
                [("system", "{system_prompt}"), ("human", "{analysis_prompt}")]
            )
            | model
        )
        reply = await chain.ainvoke(
            {
                "system_prompt": SOYBEAN_ANALYSIS_SYSTEM_PROMPT,
                "analysis_prompt": prompt,
            }
        )
    except Exception as e:
        logger.error("AI Analysis error: %s", e)
        return AnalysisResponse(
            analysis=DEMO_RECOMMENDATION,
            demo=True,
            message=DEMO_MESSAGE,
        )

    usage = getattr(reply, "usage_metadata", None)
    return AnalysisResponse(
        analysis=parse_model_reply(_reply_text(reply.content)),
        usage=dict(usage) if usage else None,
    )
