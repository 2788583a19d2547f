import httpx
import pytest

from roof_estimator.core.config import GOOGLE_SOLAR_URL, Settings
from roof_estimator.core.errors import ConfigurationError, DataUnavailableError, UpstreamError
from roof_estimator.data.solar_client import GoogleSolar, MockSolar, solar_client


def _transport(payload=None, status=200, seen=None):
    def handler(request):
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=payload if payload is not None else {})

    return httpx.MockTransport(handler)


def _insights(total=50.0, segments=(20.0, 30.0)):
    potential = {"wholeRoofStats": {"areaMeters2": total}}
    if segments is not None:
        potential["roofSegmentStats"] = [{"stats": {"areaMeters2": a}} for a in segments]
    return {"name": "buildings/abc", "solarPotential": potential}


class TestGoogleSolar:
    @pytest.mark.asyncio
    async def test_extracts_roof_and_segment_areas(self):
        seen = []
        solar = GoogleSolar("k", GOOGLE_SOLAR_URL, transport=_transport(_insights(), seen=seen))

        roof = await solar.fetch_roof_insight(34.05, -118.25)

        assert roof.total_area_m2 == 50.0
        assert roof.total_area_ft2 == 538
        assert roof.segment_areas_m2 == [20.0, 30.0]

    @pytest.mark.asyncio
    async def test_requests_highest_quality_only(self):
        seen = []
        solar = GoogleSolar("k", GOOGLE_SOLAR_URL, transport=_transport(_insights(), seen=seen))

        await solar.fetch_roof_insight(34.05, -118.25)

        params = seen[0].url.params
        assert params["requiredQuality"] == "HIGH"
        assert params["location.latitude"] == "34.05"
        assert params["location.longitude"] == "-118.25"
        assert params["key"] == "k"

    @pytest.mark.asyncio
    async def test_no_segments_gives_empty_list(self):
        solar = GoogleSolar("k", GOOGLE_SOLAR_URL, transport=_transport(_insights(100.0, segments=None)))
        roof = await solar.fetch_roof_insight(1.0, 2.0)
        assert roof.total_area_ft2 == 1076
        assert roof.segment_areas_m2 == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"solarPotential": {}},
            {"solarPotential": {"wholeRoofStats": {}}},
        ],
    )
    async def test_missing_roof_stats_is_data_unavailable(self, payload):
        solar = GoogleSolar("k", GOOGLE_SOLAR_URL, transport=_transport(payload))
        with pytest.raises(DataUnavailableError):
            await solar.fetch_roof_insight(1.0, 2.0)

    @pytest.mark.asyncio
    async def test_http_failure_is_upstream_error(self):
        payload = {"error": {"code": 404, "status": "NOT_FOUND"}}
        solar = GoogleSolar("k", GOOGLE_SOLAR_URL, transport=_transport(payload, status=404))
        with pytest.raises(UpstreamError):
            await solar.fetch_roof_insight(1.0, 2.0)

    @pytest.mark.asyncio
    async def test_malformed_segment_is_upstream_error(self):
        payload = _insights()
        payload["solarPotential"]["roofSegmentStats"].append({"pitchDegrees": 12})
        solar = GoogleSolar("k", GOOGLE_SOLAR_URL, transport=_transport(payload))
        with pytest.raises(UpstreamError):
            await solar.fetch_roof_insight(1.0, 2.0)

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_any_request(self):
        seen = []
        solar = GoogleSolar("", GOOGLE_SOLAR_URL, transport=_transport(_insights(), seen=seen))
        with pytest.raises(ConfigurationError):
            await solar.fetch_roof_insight(1.0, 2.0)
        assert seen == []


class TestMockSolar:
    @pytest.mark.asyncio
    async def test_segments_sum_to_total(self):
        roof = await MockSolar().fetch_roof_insight(34.05, -118.25)
        assert 1 <= len(roof.segment_areas_m2) <= 4
        assert sum(roof.segment_areas_m2) == pytest.approx(roof.total_area_m2, abs=0.05)
        assert roof.total_area_ft2 == round(roof.total_area_m2 * 10.7639)


class TestFactory:
    def test_defaults_to_google(self):
        assert isinstance(solar_client(Settings(GOOGLE_MAPS_KEY="k")), GoogleSolar)

    def test_mock_provider(self):
        assert isinstance(solar_client(Settings(SOLAR_PROVIDER="mock")), MockSolar)
