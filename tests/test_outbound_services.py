"""
Tests for the Open-Meteo and Sentinel Hub clients against a mocked transport
"""

import asyncio

import httpx
import pytest

from app.core.config import settings
from app.models.ndvi import NDVIHistoryRequest
from app.services import ndvi_service
from app.services.weather_service import get_weather_history

_RealAsyncClient = httpx.AsyncClient

ARCHIVE_PAYLOAD = {
    "latitude": -6.37,
    "longitude": 34.89,
    "timezone": "Africa/Dar_es_Salaam",
    "daily": {
        "time": ["2019-01-01", "2019-01-02"],
        "temperature_2m_mean": [23.0, 24.0],
        "precipitation_sum": [1.0, None],
        "et0_fao_evapotranspiration": [4.1, 4.3],
    },
}


def _use_transport(monkeypatch, handler):
    def client_factory(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(handler)
        return _RealAsyncClient(*args, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)


class TestWeatherService:
    """Test cases for get_weather_history."""

    def test_defaults_to_dodoma_2019_2023(self, monkeypatch):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=ARCHIVE_PAYLOAD)

        _use_transport(monkeypatch, handler)

        history = asyncio.run(get_weather_history())

        assert history.daily.temperature_2m_mean == [23.0, 24.0]
        [request] = requests
        assert request.url.host == "archive-api.open-meteo.com"
        params = request.url.params
        assert params["latitude"] == str(settings.DEFAULT_LAT)
        assert params["longitude"] == str(settings.DEFAULT_LON)
        assert params["start_date"] == "2019-01-01"
        assert params["end_date"] == "2023-12-31"
        assert params["daily"] == (
            "temperature_2m_mean,precipitation_sum,et0_fao_evapotranspiration"
        )
        assert params["timezone"] == "Africa/Dar_es_Salaam"

    def test_explicit_location_and_years(self, monkeypatch):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=ARCHIVE_PAYLOAD)

        _use_transport(monkeypatch, handler)

        asyncio.run(get_weather_history(-3.4, 36.7, 2020, 2021))

        params = requests[0].url.params
        assert params["latitude"] == "-3.4"
        assert params["longitude"] == "36.7"
        assert params["start_date"] == "2020-01-01"
        assert params["end_date"] == "2021-12-31"

    def test_server_error_returns_none(self, monkeypatch):
        _use_transport(monkeypatch, lambda request: httpx.Response(500, text="down"))

        assert asyncio.run(get_weather_history()) is None

    def test_connection_error_returns_none(self, monkeypatch):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        _use_transport(monkeypatch, handler)

        assert asyncio.run(get_weather_history()) is None

    def test_unexpected_payload_returns_none(self, monkeypatch):
        _use_transport(
            monkeypatch, lambda request: httpx.Response(200, json={"daily": "none"})
        )

        assert asyncio.run(get_weather_history()) is None


class TestSentinelToken:
    """Test cases for the cached Sentinel Hub OAuth token."""

    @pytest.fixture(autouse=True)
    def _credentials(self, monkeypatch):
        monkeypatch.setattr(settings, "SENTINEL_CLIENT_ID", "client-id")
        monkeypatch.setattr(settings, "SENTINEL_CLIENT_SECRET", "client-secret")
        ndvi_service.reset_token_cache()
        yield
        ndvi_service.reset_token_cache()

    def _token_handler(self, token_posts, expires_in=3600, status_code=200):
        def handler(request):
            token_posts.append(request)
            return httpx.Response(
                status_code, json={"access_token": "tok-1", "expires_in": expires_in}
            )

        return handler

    def test_token_is_cached_until_expiry(self, monkeypatch):
        token_posts = []
        _use_transport(monkeypatch, self._token_handler(token_posts))

        first = asyncio.run(ndvi_service.get_sentinel_token())
        second = asyncio.run(ndvi_service.get_sentinel_token())

        assert first == second == "tok-1"
        assert len(token_posts) == 1
        body = token_posts[0].content.decode()
        assert "grant_type=client_credentials" in body
        assert "client_id=client-id" in body

    def test_token_refreshed_one_minute_early(self, monkeypatch):
        token_posts = []
        _use_transport(monkeypatch, self._token_handler(token_posts, expires_in=30))

        asyncio.run(ndvi_service.get_sentinel_token())
        asyncio.run(ndvi_service.get_sentinel_token())

        assert len(token_posts) == 2

    def test_reset_forces_new_token(self, monkeypatch):
        token_posts = []
        _use_transport(monkeypatch, self._token_handler(token_posts))

        asyncio.run(ndvi_service.get_sentinel_token())
        ndvi_service.reset_token_cache()
        asyncio.run(ndvi_service.get_sentinel_token())

        assert len(token_posts) == 2

    def test_auth_failure_returns_none(self, monkeypatch):
        token_posts = []
        _use_transport(monkeypatch, self._token_handler(token_posts, status_code=401))

        assert asyncio.run(ndvi_service.get_sentinel_token()) is None
        asyncio.run(ndvi_service.get_sentinel_token())
        assert len(token_posts) == 2


class TestSentinelRequests:
    """Test cases for NDVI info and history with a working token."""

    @pytest.fixture(autouse=True)
    def _configured(self, monkeypatch):
        monkeypatch.setattr(settings, "SENTINEL_CLIENT_ID", "client-id")
        monkeypatch.setattr(settings, "SENTINEL_CLIENT_SECRET", "client-secret")
        monkeypatch.setattr(settings, "SENTINEL_INSTANCE_ID", "instance-1")
        ndvi_service.reset_token_cache()
        yield
        ndvi_service.reset_token_cache()

    def test_info_skips_malformed_layers(self, monkeypatch):
        def handler(request):
            if request.url.path == "/oauth/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
            if request.url.path.startswith("/configuration/"):
                return httpx.Response(
                    200,
                    json={
                        "name": "Farm NDVI",
                        "layers": ["broken", {"title": "no id"}, {"id": "3_NDVI"}],
                    },
                )
            return httpx.Response(200, text="<WMS_Capabilities/>")

        _use_transport(monkeypatch, handler)

        info = asyncio.run(ndvi_service.get_ndvi_info())

        assert info.configured is True
        assert info.layers == ["3_NDVI"]
        assert info.has_wms is True
        assert info.tile_url.endswith("/ogc/wms/instance-1")

    def test_history_reports_image_size(self, monkeypatch):
        process_requests = []

        def handler(request):
            if request.url.path == "/oauth/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
            process_requests.append(request)
            return httpx.Response(200, content=b"TIFFDATA")

        _use_transport(monkeypatch, handler)

        result = asyncio.run(
            ndvi_service.get_ndvi_history(NDVIHistoryRequest(bbox=[34.0, -6.5, 34.2, -6.3]))
        )

        assert result.success is True
        assert result.data_size == 8
        [request] = process_requests
        assert request.headers["Authorization"] == "Bearer tok"
        assert b'"bbox":[34.0,-6.5,34.2,-6.3]' in request.content.replace(b" ", b"")

    def test_history_failure_falls_back_to_demo(self, monkeypatch):
        def handler(request):
            if request.url.path == "/oauth/token":
                return httpx.Response(200, json={"access_token": "tok", "expires_in": 3600})
            return httpx.Response(400, json={"error": "bad request"})

        _use_transport(monkeypatch, handler)

        result = asyncio.run(ndvi_service.get_ndvi_history(NDVIHistoryRequest()))

        assert result.success is False
        assert result.demo is True
        assert len(result.data) == len(ndvi_service.DEMO_YEARS)
