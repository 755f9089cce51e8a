import logging
import random
import time
from typing import List, Optional

import httpx

from app.core.config import settings
from app.models.ndvi import (
    GrowingSeasonNDVI,
    NDVIHistoryRequest,
    NDVIHistoryResponse,
    NDVIInfoResponse,
    YearlyNDVI,
)

logger = logging.getLogger(__name__)

SENTINEL_BASE_URL = "https://services.sentinel-hub.com"
TOKEN_URL = f"{SENTINEL_BASE_URL}/oauth/token"
PROCESS_URL = f"{SENTINEL_BASE_URL}/api/v1/process"

# Dodoma agriculture region, lon_min, lat_min, lon_max, lat_max
DEFAULT_BBOX = [34.8, -6.4, 34.95, -6.3]
DEFAULT_START_DATE = "2019-01-01T00:00:00Z"
DEFAULT_END_DATE = "2023-12-31T23:59:59Z"
DEMO_YEARS = [2019, 2020, 2021, 2022, 2023]

NDVI_EVALSCRIPT = """
//VERSION=3
function setup() {
  return {
    input: [{ bands: ["B04", "B08"] }],
    output: { bands: 1, sampleType: "FLOAT32" }
  };
}
function evaluatePixel(sample) {
  let ndvi = (sample.B08 - sample.B04) / (sample.B08 + sample.B04);
  return [ndvi];
}
"""

_sentinel_token: Optional[str] = None
_token_expiry: float = 0.0


def _has_credentials() -> bool:
    client_id = settings.SENTINEL_CLIENT_ID
    return bool(
        client_id
        and settings.SENTINEL_CLIENT_SECRET
        and "your_client" not in client_id
    )


def is_sentinel_configured() -> bool:
    instance_id = settings.SENTINEL_INSTANCE_ID
    return bool(
        _has_credentials() and instance_id and "your_instance" not in instance_id
    )


async def get_sentinel_token() -> Optional[str]:
    """
    Returns a cached Sentinel Hub OAuth token, refreshing it one minute
    before expiry. None when credentials are missing or auth fails.
    """
    global _sentinel_token, _token_expiry
    if _sentinel_token and time.time() < _token_expiry:
        return _sentinel_token

    if not _has_credentials():
        return None

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        try:
            response = await client.post(
                TOKEN_URL,
                data={
                    "grant_type": "client_credentials",
                    "client_id": settings.SENTINEL_CLIENT_ID,
                    "client_secret": settings.SENTINEL_CLIENT_SECRET,
                },
            )
            response.raise_for_status()
            payload = response.json()
            token = payload["access_token"]
        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error("Sentinel Hub auth error: %s", e)
            return None

    _sentinel_token = token
    _token_expiry = time.time() + payload.get("expires_in", 0) - 60
    return _sentinel_token


def reset_token_cache() -> None:
    global _sentinel_token, _token_expiry
    _sentinel_token = None
    _token_expiry = 0.0


async def get_ndvi_info() -> NDVIInfoResponse:
    """Describes the WMS tile service the map view should use for NDVI layers."""
    instance_id = settings.SENTINEL_INSTANCE_ID
    configured = is_sentinel_configured()
    layer_info = None
    has_wms = False

    if configured:
        token = await get_sentinel_token()
        if token:
            headers = {"Authorization": f"Bearer {token}"}
            async with httpx.AsyncClient(
                timeout=settings.HTTP_TIMEOUT_SECONDS, headers=headers
            ) as client:
                try:
                    response = await client.get(
                        f"{SENTINEL_BASE_URL}/configuration/v1/wms/instances/{instance_id}"
                    )
                    response.raise_for_status()
                    layer_info = response.json()
                    logger.info(
                        "Sentinel Hub configuration retrieved: %s", layer_info.get("name")
                    )
                except (httpx.HTTPError, ValueError) as e:
                    logger.error("Error fetching Sentinel config: %s", e)

                try:
                    caps = await client.get(
                        f"{SENTINEL_BASE_URL}/ogc/wms/{instance_id}",
                        params={"REQUEST": "GetCapabilities", "SERVICE": "WMS"},
                    )
                    has_wms = caps.status_code == 200
                except httpx.HTTPError as e:
                    logger.info("Could not fetch WMS capabilities: %s", e)

    layers = ["3_NDVI", "default"]
    if isinstance(layer_info, dict) and isinstance(layer_info.get("layers"), list):
        layers = [
            layer["id"]
            for layer in layer_info["layers"]
            if isinstance(layer, dict) and layer.get("id")
        ]

    return NDVIInfoResponse(
        tile_url=f"{SENTINEL_BASE_URL}/ogc/wms/{instance_id}",
        layers=layers,
        account_id=settings.SENTINEL_ACCOUNT_ID or None,
        instance_id=instance_id or None,
        configured=configured,
        config_details=layer_info,
        has_wms=has_wms,
        note=(
            "Sentinel Hub configured and ready"
            if configured
            else "Create Configuration Instance at https://apps.sentinel-hub.com/dashboard/#/configurations"
        ),
    )


def generate_demo_ndvi(rng: Optional[random.Random] = None) -> List[YearlyNDVI]:
    """Plausible soybean-season NDVI values for the map view when no imagery is available."""
    rng = rng or random.Random()
    return [
        YearlyNDVI(
            year=year,
            growing_season=GrowingSeasonNDVI(
                early=0.35 + rng.random() * 0.1,
                mid=0.65 + rng.random() * 0.15,
                late=0.45 + rng.random() * 0.1,
            ),
            average_ndvi=0.55 + rng.random() * 0.1,
            peak_ndvi=0.75 + rng.random() * 0.1,
            peak_date=f"{year}-{rng.randint(3, 4):02d}-15",
        )
        for year in DEMO_YEARS
    ]


async def get_ndvi_history(request: NDVIHistoryRequest) -> NDVIHistoryResponse:
    token = await get_sentinel_token()
    if not token:
        return NDVIHistoryResponse(
            success=False,
            demo=True,
            message="Sentinel Hub not configured. Using demo NDVI data.",
            data=generate_demo_ndvi(),
        )

    body = {
        "input": {
            "bounds": {
                "bbox": request.bbox or DEFAULT_BBOX,
                "properties": {"crs": "http://www.opengis.net/def/crs/EPSG/0/4326"},
            },
            "data": [
                {
                    "type": "sentinel-2-l2a",
                    "dataFilter": {
                        "timeRange": {
                            "from": request.start_date or DEFAULT_START_DATE,
                            "to": request.end_date or DEFAULT_END_DATE,
                        }
                    },
                }
            ],
        },
        "output": {
            "width": 512,
            "height": 512,
            "responses": [{"identifier": "default", "format": {"type": "image/tiff"}}],
        },
        "evalscript": NDVI_EVALSCRIPT,
    }

    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        try:
            response = await client.post(
                PROCESS_URL,
                json=body,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("NDVI fetch error: %s", e)
            return NDVIHistoryResponse(
                success=False,
                demo=True,
                message="Using demo NDVI data",
                data=generate_demo_ndvi(),
            )

    return NDVIHistoryResponse(
        success=True,
        message="NDVI data retrieved successfully",
        data_size=len(response.content),
    )
