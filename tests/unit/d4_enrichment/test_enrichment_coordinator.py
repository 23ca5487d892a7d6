"""
Test Enrichment Coordinator

Stage ordering, partial failure merging and the no-parcel short circuit.
"""
import asyncio
from unittest.mock import MagicMock

import httpx
import pytest

from d0_gateway.exceptions import APIProviderError, ProviderNotConfiguredError
from d0_gateway.providers.lightbox import LightBoxClient
from d0_gateway.types import UpstreamResponse
from d4_enrichment.coordinator import EnrichmentCoordinator, describe_failure
from d4_enrichment.models import EnrichmentRequest

PARCEL_PATH = "/v1/parcels/us/geometry"
ZONING_PATH = "/v1/zoning/_on/parcel/us/ABC123"
ASSESSMENT_PATH = "/v1/assessments/_on/parcel/us/ABC123"

PARCEL_BODY = {"parcels": [{"id": "ABC123", "address": "1 Main St"}]}
ZONING_BODY = {"zonings": [{"code": "R-1"}]}
ASSESSMENT_BODY = {"assessments": [{"id": "Z9", "owner": "Jane Doe"}]}


@pytest.fixture
def lightbox(http_client, settings):
    return LightBoxClient(http_client=http_client, api_key="lb-test-key", settings=settings)


@pytest.fixture
def coordinator(lightbox):
    return EnrichmentCoordinator(lightbox)


@pytest.fixture
def point():
    return EnrichmentRequest(lat=36.1, lon=-115.2)


class TestEnrichmentCoordinator:
    @pytest.mark.asyncio
    async def test_all_stages_succeed(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, json=PARCEL_BODY)
        upstream.add("GET", ZONING_PATH, json=ZONING_BODY)
        upstream.add("GET", ASSESSMENT_PATH, json=ASSESSMENT_BODY)

        result = await coordinator.enrich(point)

        assert result.is_complete
        assert result.to_dict() == {
            "parcel": PARCEL_BODY,
            "zoning": ZONING_BODY,
            "assessment": ASSESSMENT_BODY,
            "lightboxParcelId": "ABC123",
            "lightboxAssessmentId": "Z9",
            "errors": {},
        }
        assert upstream.call_count == 3
        assert upstream.requests[0].url.raw_path.startswith(PARCEL_PATH.encode())

    @pytest.mark.asyncio
    async def test_no_parcel_skips_later_stages(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, json={"parcels": []})

        result = await coordinator.enrich(point)

        assert result.parcel == {"parcels": []}
        assert result.lightbox_parcel_id is None
        assert result.to_dict()["errors"] == {
            "zoning": "No LightBox parcel ID, cannot fetch zoning",
            "assessment": "No LightBox parcel ID, cannot fetch assessment",
        }
        assert upstream.call_count == 1

    @pytest.mark.asyncio
    async def test_parcel_http_error(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, status_code=401, json={"message": "bad key"})

        result = await coordinator.enrich(point)
        errors = result.to_dict()["errors"]

        assert result.parcel is None
        assert errors["parcel"] == "HTTP 401"
        assert errors["zoning"].startswith("No LightBox parcel ID")
        assert errors["assessment"].startswith("No LightBox parcel ID")
        assert upstream.call_count == 1

    @pytest.mark.asyncio
    async def test_parcel_transport_error(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, error=httpx.ConnectError("connection refused"))

        result = await coordinator.enrich(point)
        errors = result.to_dict()["errors"]

        assert errors["parcel"] == "lightbox: connection refused"
        assert "zoning" in errors
        assert "general" not in errors

    @pytest.mark.asyncio
    async def test_zoning_failure_keeps_assessment(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, json=PARCEL_BODY)
        upstream.add("GET", ZONING_PATH, status_code=500, json={"message": "boom"})
        upstream.add("GET", ASSESSMENT_PATH, json=ASSESSMENT_BODY)

        result = await coordinator.enrich(point)

        assert result.zoning is None
        assert result.assessment == ASSESSMENT_BODY
        assert result.lightbox_assessment_id == "Z9"
        assert result.to_dict()["errors"] == {"zoning": "HTTP 500"}
        assert upstream.call_count == 3

    @pytest.mark.asyncio
    async def test_assessment_transport_failure_keeps_zoning(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, json=PARCEL_BODY)
        upstream.add("GET", ZONING_PATH, json=ZONING_BODY)
        upstream.add("GET", ASSESSMENT_PATH, error=httpx.ReadTimeout("timed out"))

        result = await coordinator.enrich(point)

        assert result.zoning == ZONING_BODY
        assert result.assessment is None
        assert result.lightbox_assessment_id is None
        assert result.to_dict()["errors"] == {"assessment": "lightbox: timed out"}

    @pytest.mark.asyncio
    async def test_invalid_stage_body_recorded_on_that_stage(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, json=PARCEL_BODY)
        upstream.add("GET", ZONING_PATH, content=b"not json")
        upstream.add("GET", ASSESSMENT_PATH, json=ASSESSMENT_BODY)

        result = await coordinator.enrich(point)

        assert "Invalid response format" in result.to_dict()["errors"]["zoning"]
        assert result.assessment == ASSESSMENT_BODY

    @pytest.mark.asyncio
    async def test_invalid_parcel_body_is_general_error(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, content=b"<html>")

        result = await coordinator.enrich(point)
        errors = result.to_dict()["errors"]

        assert "Invalid response format" in errors["general"]
        assert upstream.call_count == 1

    @pytest.mark.asyncio
    async def test_ref_only_parcel(self, coordinator, upstream, point):
        upstream.add("GET", PARCEL_PATH, json={"parcels": [{"$ref": "/v1/parcels/us/ABC123"}]})
        upstream.add("GET", ZONING_PATH, json=ZONING_BODY)
        upstream.add("GET", ASSESSMENT_PATH, json={"assessments": [{"$ref": "/v1/assessments/us/Z9"}]})

        result = await coordinator.enrich(point)

        assert result.lightbox_parcel_id == "ABC123"
        assert result.lightbox_assessment_id == "Z9"

    @pytest.mark.asyncio
    async def test_not_configured_raises_before_any_call(self, http_client, settings, upstream, point):
        lightbox = LightBoxClient(http_client=http_client, api_key=None, settings=settings)

        with pytest.raises(ProviderNotConfiguredError):
            await EnrichmentCoordinator(lightbox).enrich(point)

        assert upstream.call_count == 0

    @pytest.mark.asyncio
    async def test_zoning_and_assessment_run_concurrently(self, point):
        started = []
        both_started = asyncio.Event()

        def ok(body):
            return UpstreamResponse(provider="lightbox", status_code=200, content=body)

        async def stage(name, body):
            started.append(name)
            if len(started) == 2:
                both_started.set()
            await asyncio.wait_for(both_started.wait(), timeout=1)
            return ok(body)

        async def zoning(parcel_id):
            return await stage("zoning", b"{}")

        async def assessment(parcel_id):
            return await stage("assessment", b'{"assessments": []}')

        # async methods of a spec'd MagicMock are AsyncMocks
        lightbox = MagicMock(spec=LightBoxClient)
        lightbox.parcels_by_point.return_value = ok(b'{"parcels": [{"id": "ABC123"}]}')
        lightbox.zoning_by_parcel.side_effect = zoning
        lightbox.assessment_by_parcel.side_effect = assessment

        result = await EnrichmentCoordinator(lightbox).enrich(point)

        assert sorted(started) == ["assessment", "zoning"]
        assert result.is_complete
        lightbox.zoning_by_parcel.assert_awaited_once_with("ABC123")
        lightbox.assessment_by_parcel.assert_awaited_once_with("ABC123")


def test_describe_failure():
    assert describe_failure(UpstreamResponse(provider="lightbox", status_code=404, content=b"")) == "HTTP 404"
    assert describe_failure(APIProviderError("lightbox", "boom")) == "lightbox: boom"
    assert describe_failure(RuntimeError()) == "RuntimeError"
