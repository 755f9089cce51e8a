from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GrowingSeasonNDVI(_CamelModel):
    early: float
    mid: float
    late: float


class YearlyNDVI(_CamelModel):
    year: int
    growing_season: GrowingSeasonNDVI
    average_ndvi: float = Field(alias="averageNDVI")
    peak_ndvi: float = Field(alias="peakNDVI")
    peak_date: str


class NDVIHistoryRequest(_CamelModel):
    bbox: Optional[List[float]] = Field(
        default=None, description="lon_min, lat_min, lon_max, lat_max"
    )
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class NDVIHistoryResponse(_CamelModel):
    success: bool
    demo: bool = False
    message: str
    data: Optional[List[YearlyNDVI]] = None
    data_size: Optional[int] = None


class NDVIInfoResponse(_CamelModel):
    tile_url: str
    attribution: str = "Sentinel Hub"
    layers: List[str]
    default_layer: str = "3_NDVI"
    account_id: Optional[str] = None
    instance_id: Optional[str] = None
    configured: bool
    config_details: Optional[Dict[str, Any]] = None
    has_wms: bool = Field(alias="hasWMS")
    note: str
    alternative_tile_url: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    fallback_message: str = (
        "Using demo visualization. Configure Sentinel Hub Instance ID for real NDVI data."
    )
