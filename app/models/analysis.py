from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .weather import WeatherHistoryResponse


class AnalysisRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    knowledge_base: str = Field(default="", description="Historical cultivation records")
    weather_data: Optional[WeatherHistoryResponse] = None
    ndvi_data: Any = None
    farm_size: float = Field(default=100, gt=0, description="hectares")


class AnalysisResponse(BaseModel):
    """
    The model's recommendation. `analysis` follows the Recommendation shape
    when the reply held parseable JSON, otherwise it is {"raw": <reply>}.
    """

    success: bool = True
    analysis: Dict[str, Any]
    usage: Optional[Dict[str, Any]] = None
    demo: bool = False
    message: Optional[str] = None


class KnowledgeBaseUploadResponse(BaseModel):
    success: bool = True
    filename: str
    content: str
    message: str = "Knowledge base uploaded successfully"
