"""
Integration tests for the combined enrichment endpoint
"""
import pytest

from tests.helpers import MockUpstream, relay_client

PARCEL_PATH = "/v1/parcels/us/geometry"
ZONING_PATH = "/v1/zoning/_on/parcel/us/ABC123"
ASSESSMENT_PATH = "/v1/assessments/_on/parcel/us/ABC123"


def test_enrich_end_to_end(client, upstream):
    upstream.add("GET", PARCEL_PATH, json={"parcels": [{"id": "ABC123"}]})
    upstream.add("GET", ZONING_PATH, json={"zonings": [{"code": "R-1"}]})
    upstream.add("GET", ASSESSMENT_PATH, json={"assessments": [{"id": "Z9"}]})

    response = client.get("/api/enrich", params={"lat": "32.77", "lon": "-96.79"})

    assert response.status_code == 200
    data = response.json()
    assert data["lightboxParcelId"] == "ABC123"
    assert data["lightboxAssessmentId"] == "Z9"
    assert data["zoning"] == {"zonings": [{"code": "R-1"}]}
    assert data["errors"] == {}
    assert upstream.call_count == 3
    assert upstream.requests[0].url.params["wkt"] == "POINT(-96.79 32.77)"


def test_enrich_partial_failure_is_still_200(client, upstream):
    upstream.add("GET", PARCEL_PATH, json={"parcels": [{"id": "ABC123"}]})
    upstream.add("GET", ZONING_PATH, status_code=503, json={"message": "down"})
    upstream.add("GET", ASSESSMENT_PATH, json={"assessments": [{"id": "Z9"}]})

    response = client.get("/api/enrich", params={"lat": "36.1", "lon": "-115.2"})

    assert response.status_code == 200
    assert response.json()["errors"] == {"zoning": "HTTP 503"}
    assert response.json()["assessment"] == {"assessments": [{"id": "Z9"}]}


def test_enrich_no_parcel(client, upstream):
    upstream.add("GET", PARCEL_PATH, json={"parcels": []})

    data = client.get("/api/enrich", params={"lat": "0", "lon": "0"}).json()

    assert data["lightboxParcelId"] is None
    assert set(data["errors"]) == {"zoning", "assessment"}
    assert upstream.call_count == 1


@pytest.mark.parametrize("params", [{}, {"lat": "36.1"}, {"lon": "-115.2"}])
def test_enrich_requires_coordinates(client, upstream, params):
    response = client.get("/api/enrich", params=params)

    assert response.status_code == 400
    assert response.json()["error"] == "lat and lon required"
    assert upstream.call_count == 0


def test_enrich_not_configured():
    upstream = MockUpstream()
    with relay_client(upstream, lightbox_key=None) as client:
        response = client.get("/api/enrich", params={"lat": "36.1", "lon": "-115.2"})

    assert response.status_code == 503
    assert upstream.call_count == 0
